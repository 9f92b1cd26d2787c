# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Interest and dividend rate calculation.

The ``InterestRateService`` is the entry point; strategies, the dispatcher
and the rate-table adapter are exported for callers that compose them
directly.
"""

from .dispatcher import StrategyDispatcher
from .lookup import DataFrameRateTable, RateKind, RateLookup, RateTableReader
from .models import (
    CalculationResult,
    MonthlyRateRecord,
    PolicyContext,
    RateCalculationInput,
    RateLookupResult,
)
from .rate_type import INVESTMENT_ONLY_TYPES, RateType, is_investment_only
from .registry import STRATEGY_REGISTRY, register_strategy
from .service import InterestRateService
from .strategies import RateStrategy, RoundingTiming

__all__ = [
    "CalculationResult",
    "DataFrameRateTable",
    "INVESTMENT_ONLY_TYPES",
    "InterestRateService",
    "MonthlyRateRecord",
    "PolicyContext",
    "RateCalculationInput",
    "RateKind",
    "RateLookup",
    "RateLookupResult",
    "RateStrategy",
    "RateTableReader",
    "RateType",
    "RoundingTiming",
    "STRATEGY_REGISTRY",
    "StrategyDispatcher",
    "is_investment_only",
    "register_strategy",
]
