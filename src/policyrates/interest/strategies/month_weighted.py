# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Month-weighted dividend rate."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ...core.calculations import ZERO, divide
from ...core.dates import add_months, month_start, months_between
from ..lookup import RateKind
from ..models import CalculationResult, PolicyContext, RateCalculationInput
from ..rate_type import RateType
from ..registry import register_strategy
from .base import RateStrategy

logger = logging.getLogger(__name__)


@register_strategy(RateType.DIVIDEND_RATE)
class MonthWeightedAverageStrategy(RateStrategy):
    """
    Unweighted mean of one rate per calendar month.

    One rate is read for each month from the begin month onwards, as many
    months as there are month boundaries between begin and end (at least
    one). No interest is computed and no monthly trail is produced.

    Policies with the declared-rate sub-classification (``G`` by default)
    read the declared-rate kind instead of the dividend kind.
    """

    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        rate_kind = (
            RateKind.DECLARED
            if self._sub_classification(context) == self.settings.dividend_declared_marker
            else RateKind.DIVIDEND
        )

        months = max(months_between(request.begin_date, request.end_date), 1)

        total = ZERO
        for offset in range(months):
            on_date = month_start(add_months(request.begin_date, offset))
            _, adjusted = self._read_rate(request, rate_kind, on_date)
            total += adjusted

        average = divide(total, months, self.settings.rate_scale)
        logger.debug(
            f"Month-weighted average: kind={rate_kind}, months={months}, "
            f"total={total}, average={average}"
        )
        return CalculationResult(actual_rate=average, interest_amount=Decimal("0"))
