# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Rate calculation strategies, one module per algorithmic family.

Importing this package registers every strategy with the strategy registry.
"""

from .base import RateStrategy
from .day_weighted import (
    DayWeightedPerSegmentStrategy,
    DayWeightedRoundOnceStrategy,
    DayWeightedStrategy,
    FourBankRateStrategy,
    InterestCalcRateStrategy,
    LoanRateStrategy,
    RoundingTiming,
)
from .deposit import AnnuityRateStrategy, CompoundRateStrategy, DepositRateStrategy
from .free_look import FreeLookRateStrategy
from .last_month import LastMonthRateStrategy
from .month_weighted import MonthWeightedAverageStrategy
from .trailing_average import TrailingAverageRateStrategy

__all__ = [
    "AnnuityRateStrategy",
    "CompoundRateStrategy",
    "DayWeightedPerSegmentStrategy",
    "DayWeightedRoundOnceStrategy",
    "DayWeightedStrategy",
    "DepositRateStrategy",
    "FourBankRateStrategy",
    "FreeLookRateStrategy",
    "InterestCalcRateStrategy",
    "LastMonthRateStrategy",
    "LoanRateStrategy",
    "MonthWeightedAverageStrategy",
    "RateStrategy",
    "RoundingTiming",
    "TrailingAverageRateStrategy",
]
