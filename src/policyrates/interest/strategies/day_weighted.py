# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Day-weighted rates with interest.

The period is split into calendar-month segments. Each segment reads its
month's rate, accrues simple interest on its own day count and year length,
and is written to the monthly trail. The reported rate is the day-weighted
average ``Σ(rate × days) / Σ days``.

Two rounding policies exist side by side because the legacy system used
both, depending on the rate type:

- ``RoundingTiming.ROUND_ONCE``: segment interest is summed unrounded and the
  total is rounded once (interest-calc and monthly loan rates).
- ``RoundingTiming.PER_SEGMENT``: each segment's interest is rounded to the
  caller's precision before summing (four-bank, deposit and annuity rates).
"""

from __future__ import annotations

import logging
from decimal import Decimal
from enum import Enum
from typing import ClassVar, List, Optional, Tuple

from ...core.calculations import ZERO, divide, quantize, round_amount, simple_interest
from ...core.dates import MonthSegment, month_segments
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


class RoundingTiming(str, Enum):
    """When segment interest is rounded to the caller's precision."""

    PER_SEGMENT = "per_segment"
    ROUND_ONCE = "round_once"


class DayWeightedStrategy(RateStrategy):
    """
    Shared day-weighted accrual.

    Subclasses pick a rounding policy by deriving from
    ``DayWeightedRoundOnceStrategy`` or ``DayWeightedPerSegmentStrategy`` and
    set the rate kind they read.
    """

    rounding_timing: ClassVar[RoundingTiming]
    rate_kind: ClassVar[str] = RateKind.DIVIDEND
    adjust_known_rate: ClassVar[bool] = False
    clamp_negative_rates: ClassVar[bool] = False
    note: ClassVar[Optional[str]] = None

    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        segments = month_segments(request.begin_date, request.end_date)
        return self._accrue(request, precision, segments)

    def _segment_rates(
        self, request: RateCalculationInput, segment: MonthSegment
    ) -> Tuple[Decimal, Decimal]:
        original, adjusted = self._read_rate(
            request, self.rate_kind, segment.month_start, self.adjust_known_rate
        )
        if self.clamp_negative_rates and adjusted < ZERO:
            adjusted = ZERO
        return original, adjusted

    def _accrue(
        self,
        request: RateCalculationInput,
        precision: int,
        segments: List[MonthSegment],
        accrual_rate: Optional[Decimal] = None,
    ) -> CalculationResult:
        """
        Accrue interest over ``segments``.

        Args:
            request: The calculation request
            precision: Fractional digits of the interest amount
            segments: Month segments to accrue over
            accrual_rate: Rate interest accrues at, when it differs from the
                rate being averaged (four-bank). The trail then shows it.
        """
        if not segments:
            return CalculationResult.zero()

        settings = self.settings
        records: List[MonthlyRateRecord] = []
        weighted_rate = ZERO
        total_days = 0
        total_interest = ZERO

        for segment in segments:
            original, adjusted = self._segment_rates(request, segment)
            days = segment.days
            rate_for_interest = adjusted if accrual_rate is None else accrual_rate

            interest = simple_interest(
                request.principal_amount,
                rate_for_interest,
                days,
                segment.year_days,
                settings.rate_basis,
                settings.amount_scale,
            )
            if self.rounding_timing is RoundingTiming.PER_SEGMENT:
                interest = round_amount(interest, precision)
            else:
                interest = quantize(interest, settings.amount_scale)
            total_interest += interest

            weighted_rate += adjusted * days
            total_days += days

            records.append(
                MonthlyRateRecord(
                    period_start=segment.start,
                    period_end=segment.end,
                    month_label=segment.label,
                    days=days,
                    original_rate=original if accrual_rate is None else accrual_rate,
                    adjusted_rate=adjusted if accrual_rate is None else accrual_rate,
                    interest_amount=interest,
                    principal_amount=request.principal_amount,
                    note=self.note,
                )
            )

        average = divide(weighted_rate, total_days, settings.rate_scale) if total_days else ZERO
        total_interest = round_amount(total_interest, precision)

        logger.debug(
            f"{type(self).__name__}: segments={len(segments)}, days={total_days}, "
            f"rounding={self.rounding_timing.value}, rate={average}, interest={total_interest}"
        )
        return CalculationResult(
            actual_rate=average,
            interest_amount=total_interest,
            monthly_records=tuple(records),
        )


class DayWeightedRoundOnceStrategy(DayWeightedStrategy):
    """Day-weighted accrual; the summed interest is rounded once at the end."""

    rounding_timing = RoundingTiming.ROUND_ONCE


class DayWeightedPerSegmentStrategy(DayWeightedStrategy):
    """Day-weighted accrual; each segment's interest is rounded before summing."""

    rounding_timing = RoundingTiming.PER_SEGMENT


@register_strategy(RateType.INTEREST_CALC_RATE)
class InterestCalcRateStrategy(DayWeightedRoundOnceStrategy):
    """Interest-calc rate: dividend-kind rates, day-weighted, rounded once."""

    rate_kind = RateKind.DIVIDEND


@register_strategy(RateType.LOAN_RATE_MONTHLY, RateType.LOAN_RATE_MONTHLY_V2)
class LoanRateStrategy(DayWeightedRoundOnceStrategy):
    """
    Monthly loan rate.

    Reads the loan kind, applies markdown and discount to known rates as
    well as looked-up ones, and floors negative adjusted rates at zero.
    """

    rate_kind = RateKind.LOAN
    adjust_known_rate = True
    clamp_negative_rates = True


@register_strategy(RateType.FOUR_BANK_RATE)
class FourBankRateStrategy(DayWeightedPerSegmentStrategy):
    """
    Four-bank rate.

    Interest accrues at the monthly loan rate (the known rate, or the loan
    strategy's result for the same period) while the reported rate is the
    day-weighted average of the four-bank (dividend-kind) rates. At most
    ``settings.max_segments`` months are accrued.
    """

    rate_kind = RateKind.DIVIDEND
    note = "Four-bank"

    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        if request.has_known_rate:
            loan_rate = request.actual_rate
        else:
            loan_request = request.model_copy(
                update={"rate_type": RateType.LOAN_RATE_MONTHLY}
            )
            loan_strategy = LoanRateStrategy(self.lookup, self.settings)
            loan_rate = loan_strategy.calculate(loan_request, precision, context).actual_rate

        segments = month_segments(request.begin_date, request.end_date)
        if len(segments) > self.settings.max_segments:
            logger.debug(
                f"Four-bank period spans {len(segments)} months, "
                f"truncating to {self.settings.max_segments}"
            )
            segments = segments[: self.settings.max_segments]

        return self._accrue(request, precision, segments, accrual_rate=loan_rate)
