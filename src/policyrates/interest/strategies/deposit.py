# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Cash-value rates for deposit and group-annuity products.

All three always read the rate table; a known rate on the request is
ignored.

- ``C`` (deposit): declared-kind rates, simple interest rounded per segment.
  Annuity policies (``G``/``H``) are calculated as ``D`` instead.
- ``D`` (annuity, linear): annuity-kind rates, simple interest rounded per
  segment.
- ``F`` (compound): declared-kind rates compounded month by month,
  ``principal × Π(1 + r/10000)^(days/year_days) − principal``, rounded once.
"""

from __future__ import annotations

import logging
from typing import List, Optional

from ...core.calculations import ONE, ZERO, growth_factor, quantize, round_amount
from ...core.dates import month_segments
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
from .day_weighted import DayWeightedPerSegmentStrategy

logger = logging.getLogger(__name__)


@register_strategy(RateType.ANNUITY_RATE_D)
class AnnuityRateStrategy(DayWeightedPerSegmentStrategy):
    """Group-annuity cash-value rate with linear (simple) accrual."""

    rate_kind = RateKind.ANNUITY
    uses_known_rate = False
    note = "Linear"


@register_strategy(RateType.DEPOSIT_RATE)
class DepositRateStrategy(DayWeightedPerSegmentStrategy):
    """Deposit cash-value rate; annuity policies use the annuity calculation."""

    rate_kind = RateKind.DECLARED
    uses_known_rate = False

    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        sub_classification = self._sub_classification(context)
        if sub_classification in self.settings.annuity_markers:
            logger.debug(
                f"Deposit rate for annuity policy ({sub_classification}), "
                "using the annuity calculation"
            )
            return AnnuityRateStrategy(self.lookup, self.settings).calculate(
                request, precision, context
            )
        return super()._calculate(request, precision, context)


@register_strategy(RateType.COMPOUND_RATE)
class CompoundRateStrategy(RateStrategy):
    """
    Compound accrual for group annuities.

    Each month contributes a growth factor computed on its own year length;
    the reported rate is the cumulative growth ``(Π − 1) × 10000`` rather
    than an average.
    """

    uses_known_rate = False
    note = "Compound"

    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        segments = month_segments(request.begin_date, request.end_date)
        if not segments:
            return CalculationResult.zero()

        settings = self.settings
        cumulative = ONE
        records: List[MonthlyRateRecord] = []
        for segment in segments:
            original, adjusted = self._read_rate(
                request, RateKind.DECLARED, segment.month_start
            )
            factor = growth_factor(
                adjusted,
                segment.days,
                segment.year_days,
                settings.rate_basis,
                settings.power_scale,
            )
            cumulative = quantize(cumulative * factor, settings.power_scale)
            records.append(
                MonthlyRateRecord(
                    period_start=segment.start,
                    period_end=segment.end,
                    month_label=segment.label,
                    days=segment.days,
                    original_rate=original,
                    adjusted_rate=adjusted,
                    interest_amount=ZERO,
                    principal_amount=request.principal_amount,
                    note=self.note,
                )
            )

        growth = cumulative - ONE
        interest = round_amount(request.principal_amount * growth, precision)
        compound_rate = quantize(growth * settings.rate_basis, settings.rate_scale)

        logger.debug(
            f"Compound accrual: segments={len(segments)}, factor={cumulative}, "
            f"rate={compound_rate}, interest={interest}"
        )
        return CalculationResult(
            actual_rate=compound_rate,
            interest_amount=interest,
            monthly_records=tuple(records),
        )
