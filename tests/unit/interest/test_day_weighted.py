# Copyright 2024-2025 David Gordon Nix
# SPDX-License-Identifier: Apache-2.0

"""
Unit tests for day-weighted strategies.

Covers interest-calc (1), loan (2/3) and four-bank (5) rates: the monthly
trail, the day-weighted average, both rounding policies and known-rate
handling.
"""

from datetime import date
from decimal import Decimal

import pytest

from policyrates import (
    CalculationSettings,
    DataFrameRateTable,
    InterestRateService,
    PolicyContext,
    RateType,
)
from policyrates.core.calculations import divide
from policyrates.interest import RateKind, RateLookup, RoundingTiming
from policyrates.interest.strategies import (
    AnnuityRateStrategy,
    DepositRateStrategy,
    FourBankRateStrategy,
    InterestCalcRateStrategy,
    LoanRateStrategy,
)
from tests.conftest import flat_rows, make_request, monthly_rows

INVESTMENT = PolicyContext(sub_classification="F")


class TestRoundingPolicies:
    """Test that each day-weighted type uses its declared rounding policy."""

    def test_policy_assignment(self):
        assert InterestCalcRateStrategy.rounding_timing is RoundingTiming.ROUND_ONCE
        assert LoanRateStrategy.rounding_timing is RoundingTiming.ROUND_ONCE
        assert FourBankRateStrategy.rounding_timing is RoundingTiming.PER_SEGMENT
        assert DepositRateStrategy.rounding_timing is RoundingTiming.PER_SEGMENT
        assert AnnuityRateStrategy.rounding_timing is RoundingTiming.PER_SEGMENT

    def test_round_once_and_per_segment_diverge(self, service):
        """
        Test the same inputs under both policies.

        On 1,000 at 2.5% each month accrues about 2.05-2.12; rounding each
        month down to 2 loses a whole unit over the year.
        """
        begin, end = date(2023, 1, 1), date(2024, 1, 1)
        principal = Decimal("1000")

        round_once = service.calculate(
            make_request(RateType.LOAN_RATE_MONTHLY, begin, end, principal_amount=principal)
        )
        per_segment = service.calculate(
            make_request(RateType.ANNUITY_RATE_D, begin, end, principal_amount=principal),
            context=INVESTMENT,
        )

        assert round_once.interest_amount == Decimal("25")
        assert per_segment.interest_amount == Decimal("24")
        assert all(r.interest_amount == Decimal("2") for r in per_segment.monthly_records)
        assert round_once.actual_rate == per_segment.actual_rate == Decimal("250")

    def test_interest_calc_rounds_once(self, service):
        begin, end = date(2023, 1, 1), date(2024, 1, 1)
        result = service.calculate(
            make_request(
                RateType.INTEREST_CALC_RATE, begin, end, principal_amount=Decimal("1000")
            )
        )

        assert result.interest_amount == Decimal("25")


class TestLoanRate:
    """Test the monthly loan rate (types 2 and 3)."""

    def test_full_year(self, service, loan_request):
        """Test a 2024 loan at a flat 2.5% on 1,000,000."""
        result = service.calculate(loan_request, precision=0)

        assert result.actual_rate == Decimal("250")
        assert len(result.monthly_records) == 12
        assert result.total_days == 365
        # Jan-Feb accrue on 366 days, Mar-Dec on 365
        assert result.interest_amount == Decimal("24989")
        assert result.monthly_records[0].month_label == "2024/01"
        assert result.monthly_records[-1].days == 30

    def test_variant_matches(self, service, loan_request):
        variant = loan_request.model_copy(update={"rate_type": RateType.LOAN_RATE_MONTHLY_V2})
        assert service.calculate(variant) == service.calculate(loan_request)

    def test_precision_two(self, service, loan_request):
        result = service.calculate(loan_request, precision=2)

        assert result.interest_amount.as_tuple().exponent == -2
        assert abs(result.interest_amount - Decimal("24988.77")) <= Decimal("0.01")

    def test_day_weighted_average(self):
        """Test Σ(rate × days) / Σ days with a different rate each month."""
        table = DataFrameRateTable.from_records(
            monthly_rows(RateKind.LOAN, {"2024-01": "200", "2024-02": "300", "2024-03": "400"})
        )
        service = InterestRateService(table)

        result = service.calculate(
            make_request(RateType.LOAN_RATE_MONTHLY, date(2024, 1, 15), date(2024, 3, 10))
        )

        assert [r.days for r in result.monthly_records] == [17, 29, 9]
        assert [r.adjusted_rate for r in result.monthly_records] == [
            Decimal("200"),
            Decimal("300"),
            Decimal("400"),
        ]
        assert result.actual_rate == Decimal("285.4545454545")

        weighted = sum(r.adjusted_rate * r.days for r in result.monthly_records)
        assert result.actual_rate == divide(weighted, result.total_days, 10)

    def test_markdown_and_discount(self, service):
        result = service.calculate(
            make_request(
                RateType.LOAN_RATE_MONTHLY,
                date(2024, 1, 1),
                date(2024, 2, 1),
                markdown=Decimal("50"),
                discount_percent=Decimal("90"),
            )
        )

        record = result.monthly_records[0]
        assert record.original_rate == Decimal("250")
        assert record.adjusted_rate == Decimal("180")
        assert result.actual_rate == Decimal("180")

    def test_negative_rate_clamped_to_zero(self, service):
        result = service.calculate(
            make_request(
                RateType.LOAN_RATE_MONTHLY,
                date(2024, 1, 1),
                date(2024, 3, 1),
                markdown=Decimal("300"),
            )
        )

        assert result.actual_rate == Decimal("0")
        assert result.interest_amount == Decimal("0")
        assert all(r.adjusted_rate == Decimal("0") for r in result.monthly_records)
        assert all(r.original_rate == Decimal("250") for r in result.monthly_records)

    def test_known_rate_is_adjusted_without_reading_table(self, flat_table, service):
        result = service.calculate(
            make_request(
                RateType.LOAN_RATE_MONTHLY,
                date(2024, 1, 1),
                date(2024, 4, 1),
                actual_rate=Decimal("300"),
                markdown=Decimal("50"),
                discount_percent=Decimal("90"),
            )
        )

        assert result.actual_rate == Decimal("225")
        assert flat_table.call_count == 0

    def test_same_day_period_is_zero(self, service):
        result = service.calculate(
            make_request(RateType.LOAN_RATE_MONTHLY, date(2024, 5, 1), date(2024, 5, 1))
        )
        assert result.is_zero


class TestInterestCalcRate:
    """Test the interest-calc rate (type 1)."""

    def test_reads_dividend_kind(self):
        table = DataFrameRateTable.from_records(
            flat_rows("180", kinds=(RateKind.DIVIDEND,)) + flat_rows("250", kinds=(RateKind.LOAN,))
        )
        result = InterestRateService(table).calculate(
            make_request(RateType.INTEREST_CALC_RATE, date(2024, 1, 1), date(2024, 7, 1))
        )

        assert result.actual_rate == Decimal("180")
        assert len(result.monthly_records) == 6

    def test_known_rate_is_not_adjusted(self, flat_table, service):
        result = service.calculate(
            make_request(
                RateType.INTEREST_CALC_RATE,
                date(2024, 1, 1),
                date(2024, 4, 1),
                actual_rate=Decimal("300"),
                markdown=Decimal("50"),
            )
        )

        assert result.actual_rate == Decimal("300")
        assert flat_table.call_count == 0


class TestFourBankRate:
    """Test the four-bank rate (type 5)."""

    @pytest.fixture
    def four_bank_table(self):
        return DataFrameRateTable.from_records(
            flat_rows("250", kinds=(RateKind.LOAN,)) + flat_rows("180", kinds=(RateKind.DIVIDEND,))
        )

    def test_interest_at_loan_rate_reported_rate_four_bank(self, four_bank_table):
        """Test interest accrues at the loan rate while the four-bank average is reported."""
        service = InterestRateService(four_bank_table)

        result = service.calculate(
            make_request(RateType.FOUR_BANK_RATE, date(2024, 1, 1), date(2024, 4, 1))
        )

        assert result.actual_rate == Decimal("180")
        # 2117 + 1981 + 2123, each month rounded
        assert result.interest_amount == Decimal("6221")
        assert [r.interest_amount for r in result.monthly_records] == [
            Decimal("2117"),
            Decimal("1981"),
            Decimal("2123"),
        ]
        assert all(r.adjusted_rate == Decimal("250") for r in result.monthly_records)
        assert all(r.note == "Four-bank" for r in result.monthly_records)

    def test_known_rate_replaces_reads(self, four_bank_table):
        service = InterestRateService(four_bank_table)

        result = service.calculate(
            make_request(
                RateType.FOUR_BANK_RATE,
                date(2024, 1, 1),
                date(2024, 4, 1),
                actual_rate=Decimal("300"),
            )
        )

        assert result.actual_rate == Decimal("300")
        assert four_bank_table.call_count == 0

    def test_segment_cap(self, four_bank_table):
        settings = CalculationSettings(max_segments=2)
        strategy = FourBankRateStrategy(RateLookup(four_bank_table, settings), settings)

        result = strategy.calculate(
            make_request(RateType.FOUR_BANK_RATE, date(2024, 1, 1), date(2024, 4, 1))
        )

        assert len(result.monthly_records) == 2
        assert result.interest_amount == Decimal("4098")

    def test_default_cap_is_ten_years(self, four_bank_table):
        service = InterestRateService(four_bank_table)

        result = service.calculate(
            make_request(RateType.FOUR_BANK_RATE, date(2010, 1, 1), date(2024, 1, 1))
        )

        assert len(result.monthly_records) == 120
