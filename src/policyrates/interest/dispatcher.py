# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

from __future__ import annotations

import logging
from typing import Dict, Mapping, Optional, Tuple, Type

from ..core.errors import ConfigurationError
from ..core.settings import DEFAULT_SETTINGS, CalculationSettings
from . import strategies  # noqa: F401 - registers the strategies
from .lookup import RateLookup
from .rate_type import RateType
from .registry import STRATEGY_REGISTRY
from .strategies.base import RateStrategy

logger = logging.getLogger(__name__)


class StrategyDispatcher:
    """
    Maps rate types to strategy instances.

    One instance is created per registered strategy class and shared by all
    the rate types it serves. Construction fails with ``ConfigurationError``
    unless every ``RateType`` has a strategy, so an incomplete registration
    is caught at startup rather than on the first call that needs it.

    Example:
        ```python
        dispatcher = StrategyDispatcher(RateLookup(rate_table))
        strategy = dispatcher.dispatch(RateType.LOAN_RATE_MONTHLY)
        result = strategy.calculate(request, precision=0)
        ```
    """

    def __init__(
        self,
        lookup: RateLookup,
        settings: CalculationSettings = DEFAULT_SETTINGS,
        registry: Optional[Mapping[RateType, Type[RateStrategy]]] = None,
    ):
        registry = STRATEGY_REGISTRY if registry is None else registry

        instances: Dict[Type[RateStrategy], RateStrategy] = {}
        strategy_map: Dict[RateType, RateStrategy] = {}
        for rate_type, strategy_cls in registry.items():
            if strategy_cls not in instances:
                instances[strategy_cls] = strategy_cls(lookup, settings)
            strategy_map[rate_type] = instances[strategy_cls]
        self._strategies = strategy_map

        self.verify_complete()
        logger.info(
            f"StrategyDispatcher initialized with {len(self._strategies)} rate types: "
            f"{[rate_type.code for rate_type in self.supported_types()]}"
        )

    def verify_complete(self) -> None:
        """
        Check that every rate type has a strategy.

        Raises:
            ConfigurationError: If any rate type is unregistered
        """
        missing = [rate_type.code for rate_type in RateType if rate_type not in self._strategies]
        if missing:
            raise ConfigurationError(f"No strategy registered for rate types: {missing}")

    def supports(self, rate_type: Optional[RateType]) -> bool:
        return rate_type in self._strategies

    def dispatch(self, rate_type: RateType) -> RateStrategy:
        """
        Return the strategy for a rate type.

        Raises:
            ConfigurationError: If the rate type has no strategy
        """
        strategy = self._strategies.get(rate_type)
        if strategy is None:
            raise ConfigurationError(
                f"No strategy registered for rate type {rate_type.code} ({rate_type.description})"
            )
        return strategy

    def supported_types(self) -> Tuple[RateType, ...]:
        """Supported rate types in declaration order."""
        return tuple(rate_type for rate_type in RateType if rate_type in self._strategies)
