# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

from typing import TYPE_CHECKING, Callable, Dict, Type

from ..core.errors import ConfigurationError
from .rate_type import RateType

if TYPE_CHECKING:
    from .strategies.base import RateStrategy

STRATEGY_REGISTRY: Dict[RateType, Type["RateStrategy"]] = {}


def register_strategy(*rate_types: RateType) -> Callable:
    """
    A decorator to register a strategy class for one or more rate types.

    The rate types are also recorded on the class as ``rate_types``.
    """

    def decorator(strategy_cls: Type["RateStrategy"]) -> Type["RateStrategy"]:
        for rate_type in rate_types:
            registered = STRATEGY_REGISTRY.get(rate_type)
            if registered is not None and registered is not strategy_cls:
                raise ConfigurationError(
                    f"Rate type {rate_type.code} is already registered to "
                    f"{registered.__name__}."
                )
            STRATEGY_REGISTRY[rate_type] = strategy_cls
        strategy_cls.rate_types = frozenset(rate_types)
        return strategy_cls

    return decorator
