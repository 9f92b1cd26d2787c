# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Shared fixtures for the policyrates test suite.

Rate tables are built in memory with ``DataFrameRateTable.from_records``.
``flat_table`` covers every rate kind with one open-ended rate;
``monthly_rows`` builds one row per calendar month for varying rates.
"""

from datetime import date
from decimal import Decimal

import pandas as pd
import pytest

from policyrates import (
    CalculationSettings,
    DataFrameRateTable,
    InterestRateService,
    RateCalculationInput,
    RateType,
)
from policyrates.interest import RateKind

PLAN = "LN001"

ALL_KINDS = (
    RateKind.DIVIDEND,
    RateKind.FREE_LOOK,
    RateKind.LOAN,
    RateKind.DECLARED,
    RateKind.ANNUITY,
    RateKind.INVESTMENT_YIELD,
)


def flat_rows(rate="250", plan_code=PLAN, kinds=ALL_KINDS):
    """One open-ended row per rate kind, effective since 2000."""
    return [
        {
            "plan_code": plan_code,
            "rate_kind": kind,
            "effective_from": date(2000, 1, 1),
            "rate": rate,
        }
        for kind in kinds
    ]


def monthly_rows(kind, rates_by_month, plan_code=PLAN):
    """
    One row per month, effective for that calendar month only.

    Args:
        kind: Rate kind code
        rates_by_month: Mapping of ``"YYYY-MM"`` to rate
    """
    rows = []
    for month, rate in rates_by_month.items():
        period = pd.Period(month, freq="M")
        rows.append(
            {
                "plan_code": plan_code,
                "rate_kind": kind,
                "effective_from": period.start_time.date(),
                "effective_to": period.end_time.date(),
                "rate": rate,
            }
        )
    return rows


def make_request(rate_type, begin, end, **overrides):
    values = {
        "begin_date": begin,
        "end_date": end,
        "rate_type": rate_type,
        "principal_amount": Decimal("1000000"),
        "sub_account_plan_code": PLAN,
    }
    values.update(overrides)
    return RateCalculationInput(**values)


@pytest.fixture
def settings() -> CalculationSettings:
    return CalculationSettings()


@pytest.fixture
def flat_table() -> DataFrameRateTable:
    """Every rate kind at 250 (2.5%) for plan LN001."""
    return DataFrameRateTable.from_records(flat_rows())


@pytest.fixture
def service(flat_table: DataFrameRateTable) -> InterestRateService:
    return InterestRateService(flat_table)


@pytest.fixture
def loan_request() -> RateCalculationInput:
    """Full-year 2024 loan request on a principal of 1,000,000."""
    return make_request(
        RateType.LOAN_RATE_MONTHLY, date(2024, 1, 1), date(2024, 12, 31)
    )
