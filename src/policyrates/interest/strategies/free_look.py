# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from typing import List, Optional

from ...core.calculations import ZERO, divide, round_amount, simple_interest
from ...core.dates import month_segments, month_start, year_days
from ..lookup import RateKind
from ..models import (
    CalculationResult,
    MonthlyRateRecord,
    PolicyContext,
    RateCalculationInput,
)
from ..rate_type import RateType
from ..registry import register_strategy
from .base import RateStrategy

logger = logging.getLogger(__name__)


@register_strategy(RateType.FREE_LOOK_A, RateType.FREE_LOOK_B, RateType.FREE_LOOK_E)
class FreeLookRateStrategy(RateStrategy):
    """
    Interest refunded over a free-look period.

    The rate is evaluated once, at the start of the begin month, from the
    free-look kind (``A``/``B``) or the investment-yield kind (``E``), and
    applied to every month of the period. The plan code falls back to the
    policy's free-look rate code. A zero rate means there is nothing to
    refund and yields the zero result.

    Interest is computed from the day-weighted average rate over the total
    days and rounded once.
    """

    def _rate_kind(self, rate_type: Optional[RateType]) -> str:
        if rate_type is RateType.FREE_LOOK_E:
            return RateKind.INVESTMENT_YIELD
        return RateKind.FREE_LOOK

    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        plan_code = request.sub_account_plan_code or (
            context.free_look_rate_code if context is not None else None
        )
        if plan_code is None:
            logger.debug("No plan code or free-look rate code available, returning zero")
            return CalculationResult.zero()

        segments = month_segments(request.begin_date, request.end_date)
        if not segments:
            return CalculationResult.zero()

        rate_kind = self._rate_kind(request.rate_type)
        evaluation_date = month_start(request.begin_date)
        found = self.lookup.lookup(request, rate_kind, evaluation_date, plan_code=plan_code)
        if found.adjusted_rate == ZERO:
            logger.debug(
                f"No free-look rate: kind={rate_kind}, date={evaluation_date}, returning zero"
            )
            return CalculationResult.zero()

        records: List[MonthlyRateRecord] = []
        weighted_rate = ZERO
        total_days = 0
        for segment in segments:
            weighted_rate += found.adjusted_rate * segment.days
            total_days += segment.days
            records.append(
                MonthlyRateRecord(
                    period_start=segment.start,
                    period_end=segment.end,
                    month_label=segment.label,
                    days=segment.days,
                    original_rate=found.original_rate,
                    adjusted_rate=found.adjusted_rate,
                    principal_amount=request.principal_amount,
                )
            )

        average = divide(weighted_rate, total_days, self.settings.rate_scale)
        interest = round_amount(
            simple_interest(
                request.principal_amount,
                average,
                total_days,
                year_days(request.begin_date),
                self.settings.rate_basis,
                self.settings.amount_scale,
            ),
            precision,
        )
        logger.debug(
            f"Free-look interest: kind={rate_kind}, days={total_days}, "
            f"rate={average}, interest={interest}"
        )
        return CalculationResult(
            actual_rate=average,
            interest_amount=interest,
            monthly_records=tuple(records),
        )
