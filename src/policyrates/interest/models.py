# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Value types for rate calculations.

Rates are Decimals in basis units (1/10000): a declared rate of 2.5% is
``Decimal("250")``. Amounts are Decimals in the policy currency.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Tuple

from pydantic import Field

from ..core.model import Model
from .rate_type import RateType


class RateCalculationInput(Model):
    """
    Parameters of one rate calculation.

    Missing dates, or a begin date after the end date, are valid and simply
    produce a zero result. A non-zero ``actual_rate`` is treated as a known
    rate: strategies use it instead of reading the rate table.

    Example:
        >>> request = RateCalculationInput(
        ...     begin_date=date(2024, 1, 1),
        ...     end_date=date(2024, 12, 31),
        ...     rate_type=RateType.LOAN_RATE_MONTHLY,
        ...     principal_amount=Decimal("1000000"),
        ...     sub_account_plan_code="LN001",
        ... )
    """

    begin_date: Optional[date] = None
    end_date: Optional[date] = None
    rate_type: Optional[RateType] = None
    actual_rate: Decimal = Field(
        default=Decimal("0"),
        description="Known rate in basis units; 0 means look it up.",
    )
    discount_percent: Decimal = Field(
        default=Decimal("100"),
        description="Percentage applied after the markdown (100 = no discount, 90 = 10% off).",
    )
    markdown: Decimal = Field(
        default=Decimal("0"),
        description="Basis units subtracted from the looked-up rate before the discount.",
    )
    principal_amount: Decimal = Decimal("0")
    sub_account_plan_code: Optional[str] = Field(
        default=None, description="Plan code the rate table is keyed by."
    )
    investment_target_code: Optional[str] = None
    interest_amount: Decimal = Field(
        default=Decimal("0"), description="Output slot filled by with_result()."
    )

    @property
    def has_period(self) -> bool:
        """Both dates are present and in order."""
        return (
            self.begin_date is not None
            and self.end_date is not None
            and self.begin_date <= self.end_date
        )

    @property
    def has_known_rate(self) -> bool:
        return self.actual_rate != 0

    def with_result(self, result: "CalculationResult") -> "RateCalculationInput":
        """Copy of this input carrying the result's rate and interest amount."""
        return self.model_copy(
            update={
                "actual_rate": result.actual_rate,
                "interest_amount": result.interest_amount,
            }
        )


class MonthlyRateRecord(Model):
    """One line of the month-by-month computation trail."""

    period_start: Optional[date] = None
    period_end: Optional[date] = None
    month_label: Optional[str] = Field(default=None, description="Month as YYYY/MM.")
    days: int = Field(default=0, ge=0)
    original_rate: Decimal = Field(
        default=Decimal("0"), description="Rate before markdown and discount."
    )
    adjusted_rate: Decimal = Field(
        default=Decimal("0"), description="Rate after markdown and discount."
    )
    interest_amount: Decimal = Decimal("0")
    principal_amount: Decimal = Decimal("0")
    note: Optional[str] = None


class CalculationResult(Model):
    """
    Outcome of a rate calculation.

    ``monthly_records`` is only populated by day-weighted strategies.
    ``CalculationResult.zero()`` stands for "no computation performed".
    """

    actual_rate: Decimal = Decimal("0")
    interest_amount: Decimal = Decimal("0")
    monthly_records: Tuple[MonthlyRateRecord, ...] = ()

    @classmethod
    def zero(cls) -> "CalculationResult":
        return cls(actual_rate=Decimal("0"), interest_amount=Decimal("0"))

    @property
    def is_zero(self) -> bool:
        return (
            self.actual_rate == 0
            and self.interest_amount == 0
            and not self.monthly_records
        )

    @property
    def total_days(self) -> int:
        return sum(record.days for record in self.monthly_records)


class RateLookupResult(Model):
    """A rate read from the table, before and after markdown/discount."""

    original_rate: Decimal = Decimal("0")
    adjusted_rate: Decimal = Decimal("0")

    @classmethod
    def zero(cls) -> "RateLookupResult":
        return cls()


class PolicyContext(Model):
    """
    Policy attributes some calculations depend on.

    Attributes:
        sub_classification: Legacy policy sub-classification code. ``F``,
            ``G`` and ``H`` mark investment-linked policies (``G``/``H`` are
            annuities); ``I`` marks interest-sensitive life policies.
        free_look_rate_code: Plan code used for free-look rates when the
            input carries no sub-account plan code.
    """

    sub_classification: Optional[str] = None
    free_look_rate_code: Optional[str] = None
