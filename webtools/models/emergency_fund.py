"""
Emergency fund sizing and savings plan calculations.
"""

import math
from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

SCHEDULE_CAP_MONTHS = 60
DISPLAY_MONTHS = 12

JobSecurity = Literal["stable", "unstable", "very-unstable"]
RiskLevel = Literal["low", "medium", "high", "critical"]

RISK_DESCRIPTIONS = {
    "low": "Low Risk - You have adequate emergency savings",
    "medium": "Medium Risk - Build up your emergency fund further",
    "high": "High Risk - Priority: Increase emergency savings immediately",
    "critical": "Critical Risk - Emergency fund is insufficient for financial security",
}


class EmergencyFundInput(BaseModel):
    """Household figures used to size an emergency fund."""

    model_config = ConfigDict(allow_inf_nan=False)

    monthly_expenses: float = Field(..., gt=0, description="Essential monthly expenses")
    current_savings: float = Field(default=0, ge=0, description="Savings already set aside")
    monthly_savings: float = Field(default=0, ge=0, description="Planned monthly contribution")
    target_months: float = Field(
        default=6, ge=0, le=60, description="Months of expenses to cover"
    )
    savings_interest_rate: float = Field(
        default=0, ge=0, le=100, description="Annual savings rate in percent"
    )
    job_security: JobSecurity = Field(default="stable", description="Income stability")
    dependents: int = Field(default=0, ge=0, description="Number of dependents")


class SavingsMonth(BaseModel):
    """One month of the savings plan."""

    month: int = Field(..., ge=1)
    saved: float = Field(..., ge=0, description="Cumulative contributions")
    balance: float = Field(..., ge=0, description="Balance including interest")
    progress: float = Field(..., ge=0, le=100, description="Percent of goal reached")


class EmergencyFundPlan(BaseModel):
    """Recommended fund size and the plan to reach it."""

    recommended_months: float
    recommended_amount: float
    current_savings: float
    shortfall: float
    months_to_goal: int
    monthly_savings_needed: float
    total_with_interest: float
    months_covered: float
    risk_level: RiskLevel
    risk_description: str
    savings_schedule: List[SavingsMonth]


def recommended_months(data: EmergencyFundInput) -> float:
    """Adjust the target months for job security and household size."""
    months = data.target_months
    if data.job_security == "unstable":
        months += 2
    elif data.job_security == "very-unstable":
        months += 4
    if data.dependents > 2:
        months += 1
    if data.dependents > 4:
        months += 2
    return months


def assess_risk(months_covered: float, recommended: float) -> RiskLevel:
    """Classify how exposed the household is given the months already covered."""
    if months_covered < 1:
        return "critical"
    if months_covered < 3:
        return "high"
    if months_covered < recommended:
        return "medium"
    return "low"


def calculate_emergency_fund(data: EmergencyFundInput) -> EmergencyFundPlan:
    """
    Build an emergency fund plan.

    The months-to-goal figure ignores interest; the schedule compounds the
    balance monthly (contribution first, then interest) and stops early once
    the goal is reached or after SCHEDULE_CAP_MONTHS months.
    """
    months = recommended_months(data)
    recommended_amount = data.monthly_expenses * months
    shortfall = max(0.0, recommended_amount - data.current_savings)

    if data.monthly_savings > 0:
        months_to_goal = math.ceil(shortfall / data.monthly_savings)
    else:
        months_to_goal = 0

    monthly_rate = data.savings_interest_rate / 100 / 12
    balance = data.current_savings
    schedule: List[SavingsMonth] = []

    for month in range(1, min(months_to_goal, SCHEDULE_CAP_MONTHS) + 1):
        balance += data.monthly_savings
        balance *= 1 + monthly_rate
        progress = balance / recommended_amount * 100 if recommended_amount > 0 else 100.0
        schedule.append(
            SavingsMonth(
                month=month,
                saved=month * data.monthly_savings,
                balance=balance,
                progress=min(100.0, progress),
            )
        )
        if balance >= recommended_amount:
            break

    months_covered = data.current_savings / data.monthly_expenses
    risk = assess_risk(months_covered, months)

    return EmergencyFundPlan(
        recommended_months=months,
        recommended_amount=recommended_amount,
        current_savings=data.current_savings,
        shortfall=shortfall,
        months_to_goal=months_to_goal,
        monthly_savings_needed=shortfall / months_to_goal if months_to_goal else 0.0,
        total_with_interest=balance,
        months_covered=months_covered,
        risk_level=risk,
        risk_description=RISK_DESCRIPTIONS[risk],
        savings_schedule=schedule[:DISPLAY_MONTHS],
    )
