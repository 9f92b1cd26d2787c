# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ...core.calculations import ZERO, divide
from ...core.dates import add_months, month_start
from ..lookup import RateKind
from ..models import CalculationResult, PolicyContext, RateCalculationInput
from ..rate_type import RateType
from ..registry import register_strategy
from .base import RateStrategy

logger = logging.getLogger(__name__)

TRAILING_MONTHS = 12


@register_strategy(RateType.AVG_DECLARED_RATE)
class TrailingAverageRateStrategy(RateStrategy):
    """
    Average declared rate over the 12 months before the end month.

    Only interest-sensitive policies (sub-classification ``I`` by default)
    qualify; any other or unknown classification yields the zero result.
    The declared rates are averaged as read, without markdown or discount.
    """

    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        marker = self.settings.trailing_average_marker
        if self._sub_classification(context) != marker:
            logger.debug(
                f"12-month average requires sub-classification {marker!r}, returning zero"
            )
            return CalculationResult.zero()

        anchor = month_start(request.end_date)
        total = ZERO
        for offset in range(1, TRAILING_MONTHS + 1):
            found = self.lookup.lookup(request, RateKind.DECLARED, add_months(anchor, -offset))
            total += found.original_rate

        average = divide(total, TRAILING_MONTHS, self.settings.rate_scale)
        logger.debug(f"12-month declared average: total={total}, average={average}")
        return CalculationResult(actual_rate=average, interest_amount=Decimal("0"))
