"""
Tests for the snowball and avalanche debt payoff simulator.
"""

import math

import numpy as np
import pytest
from pydantic import ValidationError

from webtools.models.debt_payoff import (
    Debt,
    DebtPayoffCalculator,
    PayoffStatus,
    PayoffStrategyMethod,
    create_sample_debts,
    format_months,
    simulate_payoff,
)

SEEDS = range(25)


def random_debts(seed, count=None):
    """Build a reproducible random set of one to four debts."""
    rng = np.random.default_rng(seed)
    count = count or int(rng.integers(1, 5))
    return [
        Debt(
            name=f"debt-{i}",
            balance=float(rng.uniform(0, 20000)),
            minimum_payment=float(rng.uniform(10, 500)),
            interest_rate=float(rng.uniform(0, 30)),
        )
        for i in range(count)
    ]


def two_zero_rate_debts():
    return [
        Debt(name="A", balance=1000, minimum_payment=50, interest_rate=0),
        Debt(name="B", balance=500, minimum_payment=25, interest_rate=0),
    ]


class TestPrioritization:
    """Test cases for strategy ordering."""

    def test_snowball_orders_by_balance(self):
        ordered = DebtPayoffCalculator.prioritize(
            create_sample_debts(), PayoffStrategyMethod.SNOWBALL
        )
        assert [d.name for d in ordered] == ["Credit Card 2", "Credit Card 1", "Student Loan"]

    def test_avalanche_orders_by_rate(self):
        ordered = DebtPayoffCalculator.prioritize(
            create_sample_debts(), PayoffStrategyMethod.AVALANCHE
        )
        assert [d.name for d in ordered] == ["Credit Card 1", "Credit Card 2", "Student Loan"]

    def test_ties_keep_input_order(self):
        debts = [
            Debt(name="first", balance=100, minimum_payment=10, interest_rate=5),
            Debt(name="second", balance=100, minimum_payment=10, interest_rate=5),
        ]
        for method in PayoffStrategyMethod:
            ordered = DebtPayoffCalculator.prioritize(debts, method)
            assert [d.name for d in ordered] == ["first", "second"]

    def test_method_accepts_string(self):
        ordered = DebtPayoffCalculator.prioritize(create_sample_debts(), "avalanche")
        assert ordered[0].name == "Credit Card 1"


class TestSimulation:
    """Test cases for the month-by-month simulation."""

    def test_snowball_two_debt_example(self):
        """Smaller debt is cleared first even though its minimum is lower."""
        result = simulate_payoff(two_zero_rate_debts(), 100, PayoffStrategyMethod.SNOWBALL)

        assert result.status == PayoffStatus.PAID_OFF
        assert result.is_paid_off
        assert result.total_months == 10
        assert result.total_interest == 0
        assert result.monthly_payment == 175

        month_four = result.schedule[3]
        b_entry = next(entry for entry in month_four.debts if entry.name == "B")
        assert b_entry.is_complete
        assert b_entry.balance == 0
        assert b_entry.payment == 125

        for month in result.schedule[:3]:
            assert not any(entry.is_complete for entry in month.debts)

    def test_first_month_payments(self):
        result = simulate_payoff(two_zero_rate_debts(), 100, "snowball")
        first = {entry.name: entry for entry in result.schedule[0].debts}
        assert first["B"].payment == 125
        assert first["B"].balance == 375
        assert first["A"].payment == 50
        assert first["A"].balance == 950

    def test_final_payment_capped_at_balance(self):
        debts = [Debt(name="Loan", balance=120, minimum_payment=50, interest_rate=0)]
        result = simulate_payoff(debts, 0, PayoffStrategyMethod.AVALANCHE)

        last = result.schedule[-1].debts[0]
        assert result.total_months == 3
        assert last.payment == pytest.approx(20)
        assert last.balance == 0
        assert last.is_complete

    def test_extra_leftover_is_not_passed_to_next_debt(self):
        """Extra beyond what the priority debt owes stays unspent that month."""
        debts = [
            Debt(name="A", balance=1000, minimum_payment=50, interest_rate=0),
            Debt(name="B", balance=60, minimum_payment=25, interest_rate=0),
        ]
        result = simulate_payoff(debts, 100, PayoffStrategyMethod.SNOWBALL)

        first = {entry.name: entry for entry in result.schedule[0].debts}
        assert first["B"].payment == pytest.approx(60)
        assert first["B"].balance == 0
        assert first["B"].is_complete
        assert first["A"].payment == 50
        assert first["A"].balance == 950

        second = {entry.name: entry for entry in result.schedule[1].debts}
        assert second["A"].payment == 150
        assert not second["B"].is_complete

    def test_zero_balance_debt_skipped_while_others_open(self):
        debts = [
            Debt(name="Cleared", balance=0, minimum_payment=25, interest_rate=18),
            Debt(name="Card", balance=1000, minimum_payment=100, interest_rate=12),
        ]
        result = simulate_payoff(debts, 50, PayoffStrategyMethod.AVALANCHE)

        assert result.total_months > 1
        for month in result.schedule:
            cleared = next(entry for entry in month.debts if entry.name == "Cleared")
            assert cleared.payment == 0
            assert cleared.balance == 0
            assert not cleared.is_complete

        first = result.schedule[0]
        assert first.interest_accrued == pytest.approx(10.0)
        card = next(entry for entry in first.debts if entry.name == "Card")
        assert card.payment == 150
        assert card.balance == pytest.approx(860.0)

    def test_interest_accrues_before_payment(self):
        debts = [Debt(name="Card", balance=1200, minimum_payment=100, interest_rate=12)]
        result = simulate_payoff(debts, 0, PayoffStrategyMethod.SNOWBALL)

        first = result.schedule[0]
        assert first.interest_accrued == pytest.approx(12.0)
        assert first.debts[0].balance == pytest.approx(1112.0)

    def test_schedule_truncated_but_interest_total_is_full(self):
        debts = create_sample_debts()
        result = simulate_payoff(debts, 200, PayoffStrategyMethod.AVALANCHE)
        full = simulate_payoff(
            debts, 200, PayoffStrategyMethod.AVALANCHE, display_months=None
        )

        assert len(result.schedule) == 12
        assert len(full.schedule) == full.total_months
        assert result.total_interest == pytest.approx(
            sum(month.interest_accrued for month in full.schedule)
        )

    def test_month_cap_reports_max_iterations(self):
        debts = [Debt(name="Stuck", balance=10000, minimum_payment=10, interest_rate=24)]
        result = simulate_payoff(debts, 0, PayoffStrategyMethod.SNOWBALL)

        assert result.status == PayoffStatus.MAX_ITERATIONS_EXCEEDED
        assert not result.is_paid_off
        assert result.total_months == 600

    def test_custom_month_cap(self):
        result = simulate_payoff(
            create_sample_debts(), 0, PayoffStrategyMethod.SNOWBALL, max_months=3
        )
        assert result.total_months == 3
        assert result.status == PayoffStatus.MAX_ITERATIONS_EXCEEDED

    def test_empty_debt_list(self):
        result = simulate_payoff([], 100, PayoffStrategyMethod.SNOWBALL)
        assert result.total_months == 0
        assert result.status == PayoffStatus.PAID_OFF
        assert result.schedule == []

    def test_zero_balance_debts_need_no_months(self):
        debts = [Debt(name="Done", balance=0, minimum_payment=25, interest_rate=10)]
        result = simulate_payoff(debts, 0, PayoffStrategyMethod.SNOWBALL)
        assert result.total_months == 0

    def test_negative_extra_payment_rejected(self):
        with pytest.raises(ValueError):
            simulate_payoff(create_sample_debts(), -1, PayoffStrategyMethod.SNOWBALL)

    def test_nan_extra_payment_rejected(self):
        with pytest.raises(ValueError):
            simulate_payoff(create_sample_debts(), math.nan, PayoffStrategyMethod.SNOWBALL)

    def test_nan_balance_rejected(self):
        with pytest.raises(ValidationError):
            Debt(name="Bad", balance=math.nan, minimum_payment=10, interest_rate=5)

    def test_simulation_is_repeatable(self):
        debts = create_sample_debts()
        first = simulate_payoff(debts, 150, PayoffStrategyMethod.AVALANCHE)
        second = simulate_payoff(debts, 150, PayoffStrategyMethod.AVALANCHE)
        assert first == second


class TestComparison:
    """Test cases for comparing both strategies."""

    def test_avalanche_never_costs_more_interest_on_sample(self):
        comparison = DebtPayoffCalculator.compare_strategies(create_sample_debts(), 200)

        assert comparison.snowball.method == PayoffStrategyMethod.SNOWBALL
        assert comparison.avalanche.method == PayoffStrategyMethod.AVALANCHE
        assert comparison.interest_saved_by_avalanche >= 0
        assert comparison.interest_saved_by_avalanche == pytest.approx(
            comparison.snowball.total_interest - comparison.avalanche.total_interest
        )


class TestSimulationProperties:
    """Invariant checks over seeded random debt sets."""

    @pytest.mark.parametrize("seed", SEEDS)
    @pytest.mark.parametrize("method", list(PayoffStrategyMethod))
    def test_schedule_invariants(self, seed, method):
        debts = random_debts(seed)
        extra = float(np.random.default_rng(seed + 1000).uniform(0, 500))
        result = simulate_payoff(debts, extra, method, display_months=None)

        assert result.total_months <= 600
        assert result.total_interest >= 0
        assert result.total_interest == pytest.approx(
            sum(month.interest_accrued for month in result.schedule)
        )

        rates = {debt.name: debt.interest_rate / 100 / 12 for debt in debts}
        previous = {debt.name: debt.balance for debt in debts}
        for month in result.schedule:
            for entry in month.debts:
                owed = previous[entry.name] * (1 + rates[entry.name])
                assert entry.balance >= 0
                assert entry.payment >= 0
                assert entry.payment <= owed + 1e-6
                if entry.is_complete:
                    assert entry.balance == 0
                previous[entry.name] = entry.balance

        if result.status == PayoffStatus.PAID_OFF and result.schedule:
            assert all(entry.balance == 0 for entry in result.schedule[-1].debts)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_snowball_clears_smallest_first(self, seed):
        rng = np.random.default_rng(seed)
        balances = rng.choice(np.arange(100, 5001), size=int(rng.integers(2, 5)), replace=False)
        debts = [
            Debt(name=f"d{i}", balance=float(b), minimum_payment=20, interest_rate=0)
            for i, b in enumerate(balances)
        ]
        result = simulate_payoff(debts, 200, PayoffStrategyMethod.SNOWBALL, display_months=None)

        completion = {}
        for month in result.schedule:
            for entry in month.debts:
                if entry.is_complete:
                    completion[entry.name] = month.month

        by_balance = sorted(debts, key=lambda d: d.balance)
        months = [completion[d.name] for d in by_balance]
        assert months == sorted(months)

    @pytest.mark.parametrize("seed", SEEDS)
    def test_avalanche_targets_highest_rate(self, seed):
        debts = random_debts(seed, count=3)
        result = simulate_payoff(debts, 300, PayoffStrategyMethod.AVALANCHE)

        highest = max(debts, key=lambda d: d.interest_rate)
        first = result.schedule[0].debts[0]
        assert first.name == highest.name


class TestFormatMonths:
    """Test cases for human readable durations."""

    @pytest.mark.parametrize(
        "months,expected",
        [
            (0, "0 months"),
            (1, "1 month"),
            (5, "5 months"),
            (12, "1 year 0 months"),
            (13, "1 year 1 month"),
            (27, "2 years 3 months"),
        ],
    )
    def test_format(self, months, expected):
        assert format_months(months) == expected
