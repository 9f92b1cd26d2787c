# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Core building blocks: the immutable base model, engine settings, errors,
Decimal arithmetic and calendar helpers.
"""

from .errors import ConfigurationError, InvalidInputError, UnsupportedRateTypeError
from .model import Model
from .settings import DEFAULT_SETTINGS, CalculationSettings

__all__ = [
    "CalculationSettings",
    "ConfigurationError",
    "DEFAULT_SETTINGS",
    "InvalidInputError",
    "Model",
    "UnsupportedRateTypeError",
]
