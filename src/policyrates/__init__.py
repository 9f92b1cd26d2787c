# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
policyrates - Interest and dividend rate engine for insurance policies

Resolves an effective rate (in basis units of 1/10000) and an accrued
interest amount for a computation period, with a month-by-month trail for
reconciliation against the legacy system.

Example Usage:
    ```python
    from datetime import date
    from decimal import Decimal

    from policyrates import (
        DataFrameRateTable,
        InterestRateService,
        RateCalculationInput,
        RateType,
    )

    service = InterestRateService(DataFrameRateTable(rates_frame))
    result = service.calculate(
        RateCalculationInput(
            begin_date=date(2024, 1, 1),
            end_date=date(2024, 12, 31),
            rate_type=RateType.LOAN_RATE_MONTHLY,
            principal_amount=Decimal("1000000"),
            sub_account_plan_code="LN001",
        )
    )
    print(result.actual_rate, result.interest_amount)
    ```
"""

import logging

# Libraries leave handler configuration to the application.
logging.getLogger(__name__).addHandler(logging.NullHandler())

from .core import (  # noqa: E402
    CalculationSettings,
    ConfigurationError,
    InvalidInputError,
    UnsupportedRateTypeError,
)
from .interest import (  # noqa: E402
    CalculationResult,
    DataFrameRateTable,
    InterestRateService,
    MonthlyRateRecord,
    PolicyContext,
    RateCalculationInput,
    RateLookup,
    RateLookupResult,
    RateTableReader,
    RateType,
    StrategyDispatcher,
)

__all__ = [
    "CalculationResult",
    "CalculationSettings",
    "ConfigurationError",
    "DataFrameRateTable",
    "InterestRateService",
    "InvalidInputError",
    "MonthlyRateRecord",
    "PolicyContext",
    "RateCalculationInput",
    "RateLookup",
    "RateLookupResult",
    "RateTableReader",
    "RateType",
    "StrategyDispatcher",
    "UnsupportedRateTypeError",
]
