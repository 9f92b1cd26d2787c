# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Calendar helpers for monthly accrual.

Accrual periods are half-open: a period ``[begin, end)`` counts the begin
date and excludes the end date, so a period's day count is always
``(end - begin).days`` and splitting it into calendar months never gains or
loses a day.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import List

import pandas as pd
from dateutil.relativedelta import relativedelta


@dataclass(frozen=True)
class MonthSegment:
    """One calendar-month slice of an accrual period."""

    start: date
    end: date

    @property
    def days(self) -> int:
        return (self.end - self.start).days

    @property
    def month_start(self) -> date:
        """First day of the segment's month; the rate table is read on this date."""
        return month_start(self.start)

    @property
    def label(self) -> str:
        return month_label(self.start)

    @property
    def year_days(self) -> int:
        return year_days(self.start)


def month_start(value: date) -> date:
    return value.replace(day=1)


def add_months(value: date, months: int) -> date:
    """Shift by whole months, clamping to the last day of shorter months."""
    return value + relativedelta(months=months)


def months_between(begin: date, end: date) -> int:
    """Number of month boundaries between two dates, ignoring the day of month."""
    begin_period = pd.Period(pd.Timestamp(begin), freq="M")
    end_period = pd.Period(pd.Timestamp(end), freq="M")
    return (end_period - begin_period).n


def year_days(value: date) -> int:
    """
    Length of the year starting at ``value``: 366 when the following twelve
    months contain a 29 February, otherwise 365.
    """
    return (value + relativedelta(years=1) - value).days


def days_between(begin: date, end: date) -> int:
    return (end - begin).days


def month_label(value: date) -> str:
    """Legacy month label, e.g. ``2025/01``."""
    return f"{value.year:04d}/{value.month:02d}"


def month_segments(begin: date, end: date) -> List[MonthSegment]:
    """
    Split ``[begin, end)`` into calendar-month segments.

    The first segment starts at ``begin`` and every later one on the first of
    its month; the last segment stops at ``end``. Empty segments are dropped,
    so ``begin >= end`` yields no segments.

    Example:
        >>> [s.days for s in month_segments(date(2024, 1, 15), date(2024, 3, 10))]
        [17, 29, 9]
    """
    if begin >= end:
        return []

    segments: List[MonthSegment] = []
    for period in pd.period_range(
        start=pd.Timestamp(begin), end=pd.Timestamp(end), freq="M"
    ):
        period_start = period.start_time.date()
        next_start = (period + 1).start_time.date()
        start = max(begin, period_start)
        stop = min(end, next_start)
        if start < stop:
            segments.append(MonthSegment(start=start, end=stop))
    return segments
