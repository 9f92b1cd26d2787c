# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Rate table access and rate adjustments.

The rate table itself is owned elsewhere; this module only reads it through
the ``RateTableReader`` protocol. ``DataFrameRateTable`` is an in-memory
reader used for batch jobs and tests.
"""

from __future__ import annotations

import logging
import threading
from datetime import date
from decimal import Decimal
from typing import Iterable, Mapping, Optional, Protocol, runtime_checkable

import pandas as pd

from ..core.calculations import HUNDRED, ZERO, divide, to_decimal
from ..core.settings import DEFAULT_SETTINGS, CalculationSettings
from .models import RateCalculationInput, RateLookupResult

logger = logging.getLogger(__name__)


class RateKind:
    """Rate kind codes used as the second key of the rate table."""

    DIVIDEND = "0"  # Also the four-bank rate
    FREE_LOOK = "1"
    LOAN = "2"
    DECLARED = "5"
    ANNUITY = "8"
    INVESTMENT_YIELD = "9"


@runtime_checkable
class RateTableReader(Protocol):
    """Read-only access to the declared-rate table."""

    def lookup(self, plan_code: str, rate_kind: str, on_date: date) -> Optional[Decimal]:
        """Return the rate effective on ``on_date``, or None when no row matches."""
        ...


class DataFrameRateTable:
    """
    Rate table backed by a pandas DataFrame.

    Expected columns: ``plan_code``, ``rate_kind``, ``effective_from``,
    ``effective_to`` (inclusive, may be missing for open-ended rows) and
    ``rate`` (basis units). When several rows cover a date the one with the
    latest ``effective_from`` wins.

    Example:
        >>> table = DataFrameRateTable.from_records([
        ...     {"plan_code": "LN001", "rate_kind": "2",
        ...      "effective_from": date(2020, 1, 1), "rate": "250"},
        ... ])
        >>> table.lookup("LN001", "2", date(2024, 6, 1))
        Decimal('250')
    """

    REQUIRED_COLUMNS = ("plan_code", "rate_kind", "effective_from", "rate")

    def __init__(self, frame: pd.DataFrame):
        missing = [col for col in self.REQUIRED_COLUMNS if col not in frame.columns]
        if missing:
            raise ValueError(f"Rate table is missing columns: {missing}")

        table = frame.copy()
        if "effective_to" not in table.columns:
            table["effective_to"] = pd.NaT
        table["effective_from"] = pd.to_datetime(table["effective_from"])
        table["effective_to"] = pd.to_datetime(table["effective_to"])
        table["plan_code"] = table["plan_code"].astype(str)
        table["rate_kind"] = table["rate_kind"].astype(str)
        self._table = table.sort_values("effective_from", kind="stable").reset_index(drop=True)
        self._call_count = 0
        self._lock = threading.Lock()

    @classmethod
    def from_records(cls, records: Iterable[Mapping[str, object]]) -> "DataFrameRateTable":
        return cls(
            pd.DataFrame.from_records(
                list(records),
                columns=["plan_code", "rate_kind", "effective_from", "effective_to", "rate"],
            )
        )

    @property
    def call_count(self) -> int:
        """Number of lookups served so far."""
        return self._call_count

    def lookup(self, plan_code: str, rate_kind: str, on_date: date) -> Optional[Decimal]:
        with self._lock:
            self._call_count += 1
        table = self._table
        when = pd.Timestamp(on_date)
        mask = (
            (table["plan_code"] == plan_code)
            & (table["rate_kind"] == rate_kind)
            & (table["effective_from"] <= when)
            & (table["effective_to"].isna() | (table["effective_to"] >= when))
        )
        matches = table.loc[mask]
        if matches.empty:
            return None
        rate = matches["rate"].iloc[-1]
        if rate is None or pd.isna(rate):
            return None
        return to_decimal(rate)


class RateLookup:
    """
    Reads declared rates and applies the markdown and discount.

    Missing plan codes and missing table rows are not errors: both resolve
    to a zero ``RateLookupResult``.
    """

    def __init__(
        self,
        reader: RateTableReader,
        settings: CalculationSettings = DEFAULT_SETTINGS,
    ):
        self.reader = reader
        self.settings = settings

    def lookup(
        self,
        request: RateCalculationInput,
        rate_kind: str,
        on_date: date,
        plan_code: Optional[str] = None,
    ) -> RateLookupResult:
        """
        Read the rate for the request's plan code and adjust it.

        Args:
            request: Supplies the plan code, markdown and discount
            rate_kind: Rate kind code (see ``RateKind``)
            on_date: Date the rate must be effective on
            plan_code: Overrides ``request.sub_account_plan_code``

        Returns:
            Original and adjusted rate, or zeros when nothing matches
        """
        plan_code = plan_code or request.sub_account_plan_code
        if plan_code is None:
            return RateLookupResult.zero()

        original = self.reader.lookup(plan_code, rate_kind, on_date)
        if original is None:
            logger.debug(
                f"No rate found: plan={plan_code}, kind={rate_kind}, date={on_date}"
            )
            return RateLookupResult.zero()

        original = to_decimal(original)
        adjusted = self.apply_adjustments(
            original, request.markdown, request.discount_percent
        )
        return RateLookupResult(original_rate=original, adjusted_rate=adjusted)

    def apply_adjustments(
        self,
        original_rate: Decimal,
        markdown: Decimal,
        discount_percent: Decimal,
    ) -> Decimal:
        """
        Subtract the markdown, then scale by the discount percentage.

        The order is fixed: ``(rate - markdown) × discount / 100``. Markdown 0
        and discount 0 or 100 leave the rate untouched.

        Example:
            >>> RateLookup(reader=None).apply_adjustments(
            ...     Decimal("250"), Decimal("50"), Decimal("90"))
            Decimal('180.0000000000')
        """
        rate = original_rate
        if markdown != ZERO:
            rate = rate - markdown
        if discount_percent not in (ZERO, HUNDRED):
            rate = divide(rate * discount_percent, HUNDRED, self.settings.rate_scale)
        return rate
