# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Optional, Tuple


class RateType(str, Enum):
    """
    Rate calculation types, keyed by their one-character legacy code.

    Each type selects one calculation strategy. Six of them (the free-look
    and deposit/annuity/compound families) are reserved for investment-linked
    policies; see ``is_investment_only``.

    Example:
        >>> RateType.from_code("2")
        <RateType.LOAN_RATE_MONTHLY: '2'>
        >>> RateType.from_code("Z") is None
        True
    """

    DIVIDEND_RATE = "0"  # Month-weighted dividend rate
    INTEREST_CALC_RATE = "1"  # Day-weighted rate with interest
    LOAN_RATE_MONTHLY = "2"  # Monthly loan rate
    LOAN_RATE_MONTHLY_V2 = "3"  # Monthly loan rate, variant
    LOAN_RATE_LAST_MONTH = "4"  # Loan rate of the final month
    FOUR_BANK_RATE = "5"  # Four-bank average rate
    AVG_DECLARED_RATE = "8"  # 12-month declared-rate average
    FREE_LOOK_A = "A"
    FREE_LOOK_B = "B"
    DEPOSIT_RATE = "C"  # Cash-value rate, deposit products
    ANNUITY_RATE_D = "D"  # Cash-value rate, group annuity
    FREE_LOOK_E = "E"  # Investment yield rate
    COMPOUND_RATE = "F"  # Compound accrual, group annuity

    @property
    def code(self) -> str:
        return self.value

    @property
    def description(self) -> str:
        return _DESCRIPTIONS[self]

    @property
    def is_investment_only(self) -> bool:
        return self in INVESTMENT_ONLY_TYPES

    @classmethod
    def from_code(cls, code: Optional[str]) -> Optional["RateType"]:
        """Return the rate type for ``code``, or None for unknown or missing codes."""
        if code is None:
            return None
        try:
            return cls(code)
        except ValueError:
            return None

    @classmethod
    def all_types(cls) -> Tuple["RateType", ...]:
        """All 13 rate types in declaration order."""
        return tuple(cls)

    @classmethod
    def free_look_types(cls) -> FrozenSet["RateType"]:
        return FREE_LOOK_TYPES


_DESCRIPTIONS = {
    RateType.DIVIDEND_RATE: "Dividend rate (month-weighted)",
    RateType.INTEREST_CALC_RATE: "Interest rate (day-weighted)",
    RateType.LOAN_RATE_MONTHLY: "Monthly loan rate",
    RateType.LOAN_RATE_MONTHLY_V2: "Monthly loan rate (variant)",
    RateType.LOAN_RATE_LAST_MONTH: "Loan rate (last month)",
    RateType.FOUR_BANK_RATE: "Four-bank rate",
    RateType.AVG_DECLARED_RATE: "Declared rate 12-month average",
    RateType.FREE_LOOK_A: "Free-look interest",
    RateType.FREE_LOOK_B: "Free-look interest (variant)",
    RateType.DEPOSIT_RATE: "Cash-value rate (deposit)",
    RateType.ANNUITY_RATE_D: "Cash-value rate (group annuity)",
    RateType.FREE_LOOK_E: "Investment yield rate",
    RateType.COMPOUND_RATE: "Compound accrual (group annuity)",
}

FREE_LOOK_TYPES: FrozenSet[RateType] = frozenset(
    {RateType.FREE_LOOK_A, RateType.FREE_LOOK_B, RateType.FREE_LOOK_E}
)

INVESTMENT_ONLY_TYPES: FrozenSet[RateType] = FREE_LOOK_TYPES | frozenset(
    {RateType.DEPOSIT_RATE, RateType.ANNUITY_RATE_D, RateType.COMPOUND_RATE}
)


def is_investment_only(rate_type: RateType) -> bool:
    return rate_type in INVESTMENT_ONLY_TYPES
