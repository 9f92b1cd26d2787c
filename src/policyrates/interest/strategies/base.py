# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import ClassVar, FrozenSet, Optional, Tuple

from ...core.settings import DEFAULT_SETTINGS, CalculationSettings
from ..lookup import RateLookup
from ..models import CalculationResult, PolicyContext, RateCalculationInput
from ..rate_type import RateType

logger = logging.getLogger(__name__)


class RateStrategy(ABC):
    """
    Base class for rate calculation strategies.

    A strategy implements one algorithmic family and is registered for one
    or more rate types (see ``registry.register_strategy``). Strategies hold
    no per-call state, so one instance serves concurrent calls.

    Every strategy returns the zero result when a date is missing or the
    begin date is after the end date, before touching the rate table.
    """

    rate_types: ClassVar[FrozenSet[RateType]] = frozenset()
    uses_known_rate: ClassVar[bool] = True

    def __init__(
        self,
        lookup: RateLookup,
        settings: CalculationSettings = DEFAULT_SETTINGS,
    ):
        self.lookup = lookup
        self.settings = settings

    def calculate(
        self,
        request: RateCalculationInput,
        precision: int = 0,
        context: Optional[PolicyContext] = None,
    ) -> CalculationResult:
        """
        Calculate the rate (and interest, where the family computes one).

        Args:
            request: Period, rate type and adjustment parameters
            precision: Fractional digits of the interest amount (0 or 2)
            context: Policy attributes, when the caller knows them

        Returns:
            CalculationResult, the zero result for an empty or inverted period
        """
        if not request.has_period:
            logger.debug(
                f"{type(self).__name__}: no valid period "
                f"(begin={request.begin_date}, end={request.end_date}), returning zero"
            )
            return CalculationResult.zero()
        return self._calculate(request, precision, context)

    @abstractmethod
    def _calculate(
        self,
        request: RateCalculationInput,
        precision: int,
        context: Optional[PolicyContext],
    ) -> CalculationResult:
        """Run the calculation for a request with a valid period."""
        pass

    def _read_rate(
        self,
        request: RateCalculationInput,
        rate_kind: str,
        on_date: date,
        adjust_known_rate: bool = False,
    ) -> Tuple[Decimal, Decimal]:
        """
        Return ``(original, adjusted)`` rates for one month.

        A known rate on the request replaces the table read unless the
        strategy sets ``uses_known_rate = False``. It is only marked down and
        discounted when ``adjust_known_rate`` is set.
        """
        if self.uses_known_rate and request.has_known_rate:
            known = request.actual_rate
            if adjust_known_rate:
                adjusted = self.lookup.apply_adjustments(
                    known, request.markdown, request.discount_percent
                )
                return known, adjusted
            return known, known

        found = self.lookup.lookup(request, rate_kind, on_date)
        return found.original_rate, found.adjusted_rate

    @staticmethod
    def _sub_classification(context: Optional[PolicyContext]) -> Optional[str]:
        return context.sub_classification if context is not None else None
