# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Decimal arithmetic helpers shared by the rate strategies.

All rounding is ROUND_HALF_UP, matching the legacy system. Intermediate
rates and amounts are quantized to a fixed number of fractional digits
(see ``CalculationSettings``); only the final amount is rounded to the
caller's precision.
"""

from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Union

Number = Union[Decimal, int, str]

ZERO = Decimal("0")
ONE = Decimal("1")
HUNDRED = Decimal("100")


def to_decimal(value: Number) -> Decimal:
    """Coerce ints and strings to Decimal without going through float."""
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize(value: Decimal, places: int) -> Decimal:
    """Round ``value`` to ``places`` fractional digits, half up."""
    return value.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)


def divide(numerator: Number, denominator: Number, places: int) -> Decimal:
    """Divide and round the quotient to ``places`` fractional digits."""
    with localcontext() as ctx:
        ctx.prec = 50
        quotient = to_decimal(numerator) / to_decimal(denominator)
    return quantize(quotient, places)


def round_amount(value: Decimal, precision: int) -> Decimal:
    """Round a final amount to the caller's precision (0 = whole unit)."""
    return quantize(value, precision)


def simple_interest(
    principal: Decimal,
    rate: Decimal,
    days: int,
    year_days: int,
    rate_basis: int,
    amount_scale: int,
) -> Decimal:
    """
    Unrounded simple interest for one accrual segment.

    ``principal × (rate / rate_basis) × (days / year_days)`` with both ratios
    carried at ``amount_scale`` fractional digits.
    """
    if days <= 0 or principal == ZERO:
        return ZERO
    rate_ratio = divide(rate, rate_basis, amount_scale)
    day_ratio = divide(days, year_days, amount_scale)
    return principal * rate_ratio * day_ratio


def growth_factor(
    rate: Decimal,
    days: int,
    year_days: int,
    rate_basis: int,
    power_scale: int,
) -> Decimal:
    """Compound growth factor ``(1 + rate / rate_basis) ** (days / year_days)``."""
    if days <= 0:
        return ONE
    base = ONE + divide(rate, rate_basis, power_scale)
    exponent = divide(days, year_days, power_scale)
    with localcontext() as ctx:
        ctx.prec = power_scale + 20
        factor = base ** exponent
    return quantize(factor, power_scale)
