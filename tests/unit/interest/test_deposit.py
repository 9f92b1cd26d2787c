# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for deposit (C), annuity (D) and compound (F) cash-value rates.
"""

from datetime import date
from decimal import Decimal

import pytest

from policyrates import DataFrameRateTable, InterestRateService, PolicyContext, RateType
from policyrates.interest import RateKind
from tests.conftest import flat_rows, make_request


@pytest.fixture
def cash_value_table():
    """Declared kind at 100, annuity kind at 300."""
    return DataFrameRateTable.from_records(
        flat_rows("100", kinds=(RateKind.DECLARED,)) + flat_rows("300", kinds=(RateKind.ANNUITY,))
    )


class TestDepositRate:
    """Test the deposit cash-value rate."""

    def test_reads_declared_kind(self, cash_value_table):
        service = InterestRateService(cash_value_table)

        result = service.calculate(
            make_request(RateType.DEPOSIT_RATE, date(2024, 1, 1), date(2024, 4, 1)),
            context=PolicyContext(sub_classification="F"),
        )

        assert result.actual_rate == Decimal("100")
        assert len(result.monthly_records) == 3

    @pytest.mark.parametrize("sub_classification", ["G", "H"])
    def test_annuity_policies_use_annuity_calculation(
        self, cash_value_table, sub_classification
    ):
        """Test that annuity policies get the linear annuity result, not zero."""
        service = InterestRateService(cash_value_table)
        context = PolicyContext(sub_classification=sub_classification)
        begin, end = date(2024, 1, 1), date(2024, 4, 1)

        deposit = service.calculate(
            make_request(RateType.DEPOSIT_RATE, begin, end), context=context
        )
        annuity = service.calculate(
            make_request(RateType.ANNUITY_RATE_D, begin, end), context=context
        )

        assert deposit == annuity
        assert deposit.actual_rate == Decimal("300")
        assert not deposit.is_zero
        assert all(r.note == "Linear" for r in deposit.monthly_records)


class TestAnnuityRate:
    """Test the linear annuity cash-value rate."""

    def test_per_segment_interest(self, cash_value_table):
        service = InterestRateService(cash_value_table)

        result = service.calculate(
            make_request(RateType.ANNUITY_RATE_D, date(2024, 1, 1), date(2024, 4, 1)),
            context=PolicyContext(sub_classification="G"),
        )

        # 1,000,000 × 3% over 31/366, 29/366 and 31/365, each rounded
        assert [r.interest_amount for r in result.monthly_records] == [
            Decimal("2541"),
            Decimal("2377"),
            Decimal("2548"),
        ]
        assert result.interest_amount == Decimal("7466")
        assert result.actual_rate == Decimal("300")


class TestCompoundRate:
    """Test compound accrual."""

    def test_full_year(self, flat_table):
        """Test Π(1 + r)^(days/year_days) over 2023 with per-month year lengths."""
        service = InterestRateService(flat_table)

        result = service.calculate(
            make_request(RateType.COMPOUND_RATE, date(2023, 1, 1), date(2024, 1, 1)),
            context=PolicyContext(sub_classification="G"),
        )

        # Jan-Feb 2023 accrue on 365 days, Mar-Dec on 366
        growth = 1.025 ** (59 / 365 + 306 / 366) - 1
        assert abs(float(result.interest_amount) - 1_000_000 * growth) <= 1
        assert abs(float(result.actual_rate) - growth * 10000) < 1e-6
        assert len(result.monthly_records) == 12
        assert all(r.note == "Compound" for r in result.monthly_records)
        assert all(r.interest_amount == Decimal("0") for r in result.monthly_records)

    def test_compound_exceeds_simple_over_several_years(self, flat_table):
        service = InterestRateService(flat_table)
        context = PolicyContext(sub_classification="G")
        begin, end = date(2020, 1, 1), date(2025, 1, 1)

        compound = service.calculate(
            make_request(RateType.COMPOUND_RATE, begin, end), context=context
        )
        simple = service.calculate(
            make_request(RateType.ANNUITY_RATE_D, begin, end), context=context
        )

        assert compound.interest_amount > simple.interest_amount


class TestCashValueRatesReadTable:
    """Cash-value types always read declared rates, whatever the input carries."""

    CASH_VALUE_TYPES = [
        RateType.DEPOSIT_RATE,
        RateType.ANNUITY_RATE_D,
        RateType.COMPOUND_RATE,
    ]

    @pytest.fixture
    def table(self):
        return DataFrameRateTable.from_records(flat_rows("100"))

    @pytest.mark.parametrize("rate_type", CASH_VALUE_TYPES)
    def test_actual_rate_on_input_ignored(self, table, rate_type):
        service = InterestRateService(table)
        context = PolicyContext(sub_classification="F")
        begin, end = date(2024, 1, 1), date(2024, 4, 1)

        declared = service.calculate(make_request(rate_type, begin, end), context=context)
        reads = table.call_count
        with_rate = service.calculate(
            make_request(rate_type, begin, end, actual_rate=Decimal("500")),
            context=context,
        )

        assert with_rate == declared
        assert table.call_count == 2 * reads
        assert reads > 0
        if rate_type is not RateType.COMPOUND_RATE:
            assert with_rate.actual_rate == Decimal("100")

    @pytest.mark.parametrize("rate_type", CASH_VALUE_TYPES)
    def test_recalculating_from_previous_result(self, table, rate_type):
        """Test that copying a result onto the input does not freeze the rate."""
        service = InterestRateService(table)
        context = PolicyContext(sub_classification="F")
        request = make_request(rate_type, date(2024, 1, 1), date(2024, 4, 1))

        first = service.calculate(request, context=context)
        again = service.calculate(request.with_result(first), context=context)

        assert again == first
