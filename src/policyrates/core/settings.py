# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import FrozenSet

from pydantic import Field, model_validator

from .model import Model


class CalculationSettings(Model):
    """
    Configuration for the rate calculation engine.

    Scale and classification constants live here instead of module globals so
    that strategies, the lookup adapter and the service all receive the same
    immutable values. The defaults reproduce the legacy system.

    Usage Examples:
        # Legacy defaults
        settings = CalculationSettings()

        # Wider intermediate precision for reconciliation runs
        settings = CalculationSettings(rate_scale=14, amount_scale=14)
    """

    rate_scale: int = Field(
        default=10,
        ge=10,
        description="Fractional digits kept on intermediate rates (adjusted and averaged).",
    )
    amount_scale: int = Field(
        default=10,
        ge=10,
        description="Fractional digits kept on intermediate amounts before final rounding.",
    )
    power_scale: int = Field(
        default=20,
        ge=10,
        description="Fractional digits kept on compound growth factors.",
    )
    rate_basis: int = Field(
        default=10000,
        gt=0,
        description="Rates are expressed in units of 1/rate_basis (10000 = basis units).",
    )
    max_segments: int = Field(
        default=120,
        gt=0,
        description="Upper bound on monthly segments for the four-bank calculation (10 years).",
    )
    investment_markers: FrozenSet[str] = Field(
        default=frozenset({"F", "G", "H"}),
        description="Policy sub-classifications that identify investment-linked policies.",
    )
    annuity_markers: FrozenSet[str] = Field(
        default=frozenset({"G", "H"}),
        description="Sub-classifications for which deposit rates follow the annuity calculation.",
    )
    dividend_declared_marker: str = Field(
        default="G",
        description="Sub-classification whose dividend average reads the declared-rate kind.",
    )
    trailing_average_marker: str = Field(
        default="I",
        description="Sub-classification required by the 12-month declared-rate average.",
    )

    @model_validator(mode="after")
    def check_annuity_markers(self) -> "CalculationSettings":
        """Annuity policies are a subset of investment-linked policies."""
        if not self.annuity_markers <= self.investment_markers:
            raise ValueError(
                "annuity_markers must be a subset of investment_markers"
            )
        return self


DEFAULT_SETTINGS = CalculationSettings()
