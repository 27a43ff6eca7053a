"""
Debt payoff scheduling using the snowball and avalanche methods.

This module simulates a set of debts month by month: interest accrues on every
open balance, minimum payments are applied, and a fixed extra payment is
cascaded to the current priority debt until everything is paid off or the
month cap is reached.
"""

import logging
from enum import Enum
from typing import List, Optional, Sequence

from pydantic import BaseModel, ConfigDict, Field, computed_field

logger = logging.getLogger(__name__)

MAX_SIMULATION_MONTHS = 600
DISPLAY_MONTHS = 12


class PayoffStrategyMethod(str, Enum):
    """Ordering used to pick the debt that receives the extra payment."""

    SNOWBALL = "snowball"  # smallest balance first
    AVALANCHE = "avalanche"  # highest interest rate first


class PayoffStatus(str, Enum):
    """How a simulation run ended."""

    PAID_OFF = "paid_off"
    MAX_ITERATIONS_EXCEEDED = "max_iterations_exceeded"


class Debt(BaseModel):
    """A single debt entered by the user."""

    model_config = ConfigDict(frozen=True, allow_inf_nan=False)

    name: str = Field(..., min_length=1, description="Debt name")
    balance: float = Field(..., ge=0, description="Outstanding balance")
    minimum_payment: float = Field(..., ge=0, description="Required monthly payment")
    interest_rate: float = Field(
        ..., ge=0, description="Annual interest rate in percent (e.g. 18.99)"
    )


class DebtMonthEntry(BaseModel):
    """Payment applied to one debt during one simulated month."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., description="Debt name")
    payment: float = Field(..., ge=0, description="Amount paid this month")
    balance: float = Field(..., ge=0, description="Balance remaining after payment")
    is_complete: bool = Field(
        default=False, description="True in the month the debt is paid off"
    )


class SimulationMonth(BaseModel):
    """State of every debt at the end of a simulated month."""

    model_config = ConfigDict(frozen=True)

    month: int = Field(..., ge=1, description="Month number (1-based)")
    interest_accrued: float = Field(..., ge=0, description="Interest added this month")
    debts: List[DebtMonthEntry] = Field(
        ..., description="Per-debt entries in strategy priority order"
    )


class StrategyResult(BaseModel):
    """Outcome of simulating one payoff strategy."""

    model_config = ConfigDict(frozen=True)

    method: PayoffStrategyMethod = Field(..., description="Strategy simulated")
    status: PayoffStatus = Field(..., description="How the simulation ended")
    total_months: int = Field(..., ge=0, description="Months simulated")
    total_interest: float = Field(..., ge=0, description="Interest over the whole run")
    monthly_payment: float = Field(
        ..., ge=0, description="Sum of minimum payments plus the extra payment"
    )
    schedule: List[SimulationMonth] = Field(
        default_factory=list, description="Leading months of the schedule"
    )

    @computed_field  # type: ignore[misc]
    @property
    def is_paid_off(self) -> bool:
        return self.status == PayoffStatus.PAID_OFF


class StrategyComparison(BaseModel):
    """Side-by-side comparison of snowball and avalanche results."""

    snowball: StrategyResult
    avalanche: StrategyResult
    interest_saved_by_avalanche: float = Field(
        ..., description="Snowball interest minus avalanche interest"
    )
    months_saved_by_avalanche: int = Field(
        ..., description="Snowball months minus avalanche months"
    )


class _WorkingDebt:
    """Mutable copy of a debt used inside a single simulation run."""

    __slots__ = ("name", "balance", "minimum_payment", "monthly_rate")

    def __init__(self, debt: Debt):
        self.name = debt.name
        self.balance = debt.balance
        self.minimum_payment = debt.minimum_payment
        self.monthly_rate = debt.interest_rate / 100 / 12


class DebtPayoffCalculator:
    """Calculator for snowball and avalanche payoff schedules."""

    @staticmethod
    def prioritize(
        debts: Sequence[Debt], method: PayoffStrategyMethod
    ) -> List[Debt]:
        """
        Order debts by strategy priority.

        Snowball sorts ascending by balance, avalanche descending by interest
        rate. The sort is stable, so ties keep their input order.
        """
        method = PayoffStrategyMethod(method)
        if method == PayoffStrategyMethod.SNOWBALL:
            return sorted(debts, key=lambda d: d.balance)
        return sorted(debts, key=lambda d: d.interest_rate, reverse=True)

    @staticmethod
    def monthly_payment(debts: Sequence[Debt], extra_payment: float) -> float:
        """Total monthly outlay: every minimum payment plus the extra amount."""
        return sum(debt.minimum_payment for debt in debts) + extra_payment

    @staticmethod
    def simulate(
        debts: Sequence[Debt],
        extra_payment: float,
        method: PayoffStrategyMethod,
        max_months: int = MAX_SIMULATION_MONTHS,
        display_months: Optional[int] = DISPLAY_MONTHS,
    ) -> StrategyResult:
        """
        Simulate paying off debts month by month.

        Args:
            debts: Debts to pay off
            extra_payment: Amount paid each month on top of the minimums
            method: Ordering strategy for the extra payment
            max_months: Month cap; reaching it yields MAX_ITERATIONS_EXCEEDED
            display_months: Number of leading months kept in the schedule
                (None keeps all of them)

        Returns:
            StrategyResult for the run
        """
        if extra_payment < 0 or extra_payment != extra_payment:
            raise ValueError("extra_payment must be a non-negative number")
        if max_months < 1:
            raise ValueError("max_months must be at least 1")

        method = PayoffStrategyMethod(method)
        ordered = DebtPayoffCalculator.prioritize(debts, method)
        working = [_WorkingDebt(debt) for debt in ordered]

        schedule: List[SimulationMonth] = []
        total_interest = 0.0
        month = 0

        while any(debt.balance > 0 for debt in working) and month < max_months:
            month += 1
            month_interest = 0.0

            # Interest accrues before any payment is applied
            for debt in working:
                if debt.balance > 0:
                    interest = debt.balance * debt.monthly_rate
                    debt.balance += interest
                    month_interest += interest
            total_interest += month_interest

            open_at_start = [debt.balance > 0 for debt in working]
            payments = [0.0] * len(working)

            for idx, debt in enumerate(working):
                if open_at_start[idx]:
                    payments[idx] = debt.minimum_payment
                    debt.balance -= debt.minimum_payment

            # Whole extra pool goes to the first debt still carrying a balance
            if extra_payment > 0:
                target = next(
                    (idx for idx, debt in enumerate(working) if debt.balance > 0),
                    None,
                )
                if target is not None:
                    applied = min(extra_payment, working[target].balance)
                    payments[target] += applied
                    working[target].balance -= applied

            entries = []
            for idx, debt in enumerate(working):
                is_complete = False
                if open_at_start[idx] and debt.balance <= 0:
                    # Refund the overpayment so the shown payment equals what was owed
                    payments[idx] += debt.balance
                    debt.balance = 0.0
                    is_complete = True

                entries.append(
                    DebtMonthEntry(
                        name=debt.name,
                        payment=max(0.0, payments[idx]),
                        balance=max(0.0, debt.balance),
                        is_complete=is_complete,
                    )
                )

            if display_months is None or len(schedule) < display_months:
                schedule.append(
                    SimulationMonth(
                        month=month, interest_accrued=month_interest, debts=entries
                    )
                )

        if any(debt.balance > 0 for debt in working):
            status = PayoffStatus.MAX_ITERATIONS_EXCEEDED
            logger.warning(
                f"{method.value} payoff did not finish within {max_months} months"
            )
        else:
            status = PayoffStatus.PAID_OFF

        logger.debug(
            f"{method.value} payoff: {month} months, interest {total_interest:.2f}"
        )

        return StrategyResult(
            method=method,
            status=status,
            total_months=month,
            total_interest=total_interest,
            monthly_payment=DebtPayoffCalculator.monthly_payment(debts, extra_payment),
            schedule=schedule,
        )

    @staticmethod
    def compare_strategies(
        debts: Sequence[Debt],
        extra_payment: float,
        max_months: int = MAX_SIMULATION_MONTHS,
    ) -> StrategyComparison:
        """Run both strategies on the same debts and compare the outcomes."""
        snowball = DebtPayoffCalculator.simulate(
            debts, extra_payment, PayoffStrategyMethod.SNOWBALL, max_months
        )
        avalanche = DebtPayoffCalculator.simulate(
            debts, extra_payment, PayoffStrategyMethod.AVALANCHE, max_months
        )
        return StrategyComparison(
            snowball=snowball,
            avalanche=avalanche,
            interest_saved_by_avalanche=snowball.total_interest
            - avalanche.total_interest,
            months_saved_by_avalanche=snowball.total_months - avalanche.total_months,
        )


def simulate_payoff(
    debts: Sequence[Debt],
    extra_payment: float,
    method: PayoffStrategyMethod,
    max_months: int = MAX_SIMULATION_MONTHS,
    display_months: Optional[int] = DISPLAY_MONTHS,
) -> StrategyResult:
    """Simulate one payoff strategy. See DebtPayoffCalculator.simulate."""
    return DebtPayoffCalculator.simulate(
        debts, extra_payment, method, max_months, display_months
    )


def format_months(months: int) -> str:
    """Render a month count as e.g. '2 years 3 months' or '5 months'."""
    years, remaining = divmod(months, 12)
    if years > 0:
        year_label = "year" if years == 1 else "years"
        month_label = "month" if remaining == 1 else "months"
        return f"{years} {year_label} {remaining} {month_label}"
    return f"{months} month{'' if months == 1 else 's'}"


def create_sample_debts() -> List[Debt]:
    """Create a sample set of debts for testing purposes."""
    return [
        Debt(name="Credit Card 1", balance=5000, minimum_payment=150, interest_rate=18.99),
        Debt(name="Credit Card 2", balance=3000, minimum_payment=90, interest_rate=15.99),
        Debt(name="Student Loan", balance=15000, minimum_payment=200, interest_rate=6.8),
    ]
