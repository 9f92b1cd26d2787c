# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from typing import Optional

from ...core.calculations import round_amount, simple_interest
from ...core.dates import days_between, month_start, year_days
from ..lookup import RateKind
from ..models import CalculationResult, PolicyContext, RateCalculationInput
from ..rate_type import RateType
from ..registry import register_strategy
from .base import RateStrategy

logger = logging.getLogger(__name__)


@register_strategy(RateType.LOAN_RATE_LAST_MONTH)
class LastMonthRateStrategy(RateStrategy):
    """
    Loan rate of the final month.

    The rate is read once, for the month containing the end date, and
    interest accrues at that rate over the whole period (rounded once). No
    monthly trail is produced.
    """

    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        begin, end = request.begin_date, request.end_date
        total_days = days_between(begin, end)
        basis_days = year_days(begin)

        _, rate = self._read_rate(request, RateKind.LOAN, month_start(end))

        interest = round_amount(
            simple_interest(
                request.principal_amount,
                rate,
                total_days,
                basis_days,
                self.settings.rate_basis,
                self.settings.amount_scale,
            ),
            precision,
        )
        logger.debug(
            f"Last-month rate: days={total_days}, year_days={basis_days}, "
            f"rate={rate}, interest={interest}"
        )
        return CalculationResult(actual_rate=rate, interest_amount=interest)
