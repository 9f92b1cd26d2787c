# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Interest rate service: the entry point for rate calculations.

Validates the request, applies the investment gate, dispatches to the rate
type's strategy and returns its result. Batch calculation isolates failures
per element.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from typing import List, Optional, Sequence, Tuple

from ..core.errors import InvalidInputError, UnsupportedRateTypeError
from ..core.settings import DEFAULT_SETTINGS, CalculationSettings
from .dispatcher import StrategyDispatcher
from .lookup import RateLookup, RateTableReader
from .models import CalculationResult, PolicyContext, RateCalculationInput
from .rate_type import RateType

logger = logging.getLogger(__name__)


class InterestRateService:
    """
    Calculates policy interest rates and amounts.

    Attributes:
        settings: Engine configuration shared with the strategies
        lookup: Rate table adapter (markdown/discount included)
        dispatcher: Rate type to strategy mapping

    Example:
        ```python
        service = InterestRateService(DataFrameRateTable(rates_frame))
        result = service.calculate(
            RateCalculationInput(
                begin_date=date(2024, 1, 1),
                end_date=date(2024, 12, 31),
                rate_type=RateType.LOAN_RATE_MONTHLY,
                principal_amount=Decimal("1000000"),
                sub_account_plan_code="LN001",
            ),
            precision=0,
        )
        print(result.actual_rate, result.interest_amount)
        ```
    """

    def __init__(
        self,
        reader: RateTableReader,
        settings: CalculationSettings = DEFAULT_SETTINGS,
        dispatcher: Optional[StrategyDispatcher] = None,
    ):
        self.settings = settings
        self.lookup = RateLookup(reader, settings)
        self.dispatcher = dispatcher or StrategyDispatcher(self.lookup, settings)

    def calculate(
        self,
        request: RateCalculationInput,
        precision: int = 0,
        context: Optional[PolicyContext] = None,
    ) -> CalculationResult:
        """
        Calculate the rate and interest for one request.

        Args:
            request: Period, rate type and adjustment parameters
            precision: Fractional digits of the interest amount
                (0 for whole units, 2 for foreign-currency amounts)
            context: Policy attributes; when omitted the investment gate
                is skipped

        Returns:
            CalculationResult; the zero result for an inverted period

        Raises:
            InvalidInputError: If the rate type is missing or precision is invalid
            UnsupportedRateTypeError: If no strategy handles the rate type
        """
        self._check_precision(precision)

        rate_type = request.rate_type
        if rate_type is None:
            raise InvalidInputError("rate_type is required")
        if not self.dispatcher.supports(rate_type):
            raise UnsupportedRateTypeError(rate_type.code, self._supported_codes())

        if (
            request.begin_date is not None
            and request.end_date is not None
            and request.begin_date > request.end_date
        ):
            logger.debug(
                f"Inverted period: begin={request.begin_date} > end={request.end_date}, "
                "returning zero"
            )
            return CalculationResult.zero()

        effective_type = self.resolve_rate_type(rate_type, context)
        if effective_type is not rate_type:
            request = request.model_copy(update={"rate_type": effective_type})

        logger.debug(
            f"Calculating rate: type={effective_type.code}, begin={request.begin_date}, "
            f"end={request.end_date}, precision={precision}"
        )
        strategy = self.dispatcher.dispatch(effective_type)
        result = strategy.calculate(request, precision, context)
        logger.debug(
            f"Calculation completed: rate={result.actual_rate}, "
            f"interest={result.interest_amount}, records={len(result.monthly_records)}"
        )
        return result

    def calculate_for_code(
        self,
        code: Optional[str],
        request: RateCalculationInput,
        precision: int = 0,
        context: Optional[PolicyContext] = None,
    ) -> CalculationResult:
        """
        Calculate with the rate type given as its one-character legacy code.

        Unknown codes are rejected before the rate table is read.

        Raises:
            InvalidInputError: If the code is missing
            UnsupportedRateTypeError: If the code is not a known rate type
        """
        if code is None:
            raise InvalidInputError("rate_type is required")
        rate_type = RateType.from_code(code)
        if rate_type is None:
            raise UnsupportedRateTypeError(code, self._supported_codes())
        return self.calculate(
            request.model_copy(update={"rate_type": rate_type}), precision, context
        )

    def calculate_batch(
        self,
        requests: Sequence[RateCalculationInput],
        precision: int = 0,
        context: Optional[PolicyContext] = None,
        max_workers: Optional[int] = None,
    ) -> List[CalculationResult]:
        """
        Calculate many requests; results are aligned with ``requests``.

        A request that fails resolves to the zero result without affecting
        the others. With ``max_workers`` above 1 the requests run on a thread
        pool; output order still matches input order.
        """
        logger.debug(f"Batch calculating {len(requests)} rates")

        def run(indexed: Tuple[int, RateCalculationInput]) -> CalculationResult:
            index, request = indexed
            try:
                return self.calculate(request, precision, context)
            except Exception:
                logger.warning(
                    f"Batch calculation failed for element {index}: {request!r}",
                    exc_info=True,
                )
                return CalculationResult.zero()

        indexed_requests = list(enumerate(requests))
        if max_workers is not None and max_workers > 1:
            with ThreadPoolExecutor(max_workers=max_workers) as pool:
                return list(pool.map(run, indexed_requests))
        return [run(item) for item in indexed_requests]

    def resolve_rate_type(
        self, rate_type: RateType, context: Optional[PolicyContext]
    ) -> RateType:
        """
        Apply the investment gate.

        Investment-only rate types fall back to the monthly loan rate for
        policies whose sub-classification is known and not investment-linked.
        Without a sub-classification the original rate type is kept.
        """
        if not rate_type.is_investment_only:
            return rate_type

        sub_classification = context.sub_classification if context is not None else None
        if sub_classification is None:
            logger.warning(
                f"Investment gate: no policy sub-classification for investment-only "
                f"rate type {rate_type.code}; keeping the original rate type"
            )
            return rate_type

        if sub_classification in self.settings.investment_markers:
            return rate_type

        logger.info(
            f"Investment gate: non-investment policy ({sub_classification}) with "
            f"investment-only rate type {rate_type.code}, using "
            f"{RateType.LOAN_RATE_MONTHLY.code} ({RateType.LOAN_RATE_MONTHLY.description})"
        )
        return RateType.LOAN_RATE_MONTHLY

    def supports(self, rate_type: Optional[RateType]) -> bool:
        return self.dispatcher.supports(rate_type)

    def supported_types(self) -> Tuple[RateType, ...]:
        return self.dispatcher.supported_types()

    def _supported_codes(self) -> List[str]:
        return [rate_type.code for rate_type in self.supported_types()]

    @staticmethod
    def _check_precision(precision: int) -> None:
        if isinstance(precision, bool) or not isinstance(precision, int) or precision < 0:
            raise InvalidInputError(
                f"precision must be a non-negative integer, got {precision!r}"
            )
