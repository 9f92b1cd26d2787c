# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""Exceptions raised by the rate calculation engine."""

from __future__ import annotations

from typing import Optional, Sequence


class InvalidInputError(ValueError):
    """A calculation request is missing something it cannot run without."""


class UnsupportedRateTypeError(ValueError):
    """The requested rate type has no calculation strategy."""

    def __init__(self, code: Optional[str], supported_codes: Sequence[str]):
        self.code = code
        self.supported_codes = list(supported_codes)
        super().__init__(
            f"Unsupported rate type {code!r}. "
            f"Supported rate types: {self.supported_codes}"
        )


class ConfigurationError(RuntimeError):
    """Strategy registration is incomplete or inconsistent."""
