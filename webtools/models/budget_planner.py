"""
Monthly budget analysis against the 50/30/20 rule.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

CategoryType = Literal["needs", "wants", "savings"]
Recommendation = Literal["excellent", "good", "needs-adjustment", "concerning"]

RECOMMENDATION_DESCRIPTIONS = {
    "excellent": "Excellent Budget - Following the 50/30/20 rule perfectly",
    "good": "Good Budget - Close to ideal allocation with minor adjustments needed",
    "needs-adjustment": "Needs Adjustment - Some categories are off balance",
    "concerning": "Concerning - Major budget rebalancing required",
}


class BudgetCategory(BaseModel):
    """A single budget line."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(..., min_length=1, description="Category name")
    budgeted: float = Field(default=0, ge=0, description="Planned monthly amount")
    spent: float = Field(default=0, ge=0, description="Actual monthly spend")
    type: CategoryType = Field(..., description="needs, wants or savings")


class BudgetInput(BaseModel):
    """Income and budget lines to analyze."""

    model_config = ConfigDict(allow_inf_nan=False)

    monthly_income: float = Field(..., description="Monthly after-tax income")
    categories: List[BudgetCategory] = Field(default_factory=list)


class BudgetAnalysis(BaseModel):
    """Totals, allocation percentages and the 50/30/20 verdict."""

    total_income: float
    total_budgeted: float
    total_spent: float
    remaining: float
    needs_total: float
    wants_total: float
    savings_total: float
    needs_percentage: float
    wants_percentage: float
    savings_percentage: float
    recommendation: Recommendation
    recommendation_description: str
    over_budget: List[str] = Field(
        default_factory=list, description="Categories where spend exceeds budget"
    )


def recommend(needs_pct: float, wants_pct: float, savings_pct: float) -> Recommendation:
    """Grade an allocation against the 50/30/20 rule, worst band first."""
    if needs_pct > 60 or wants_pct > 40 or savings_pct < 10:
        return "concerning"
    if needs_pct > 55 or wants_pct > 35 or savings_pct < 15:
        return "needs-adjustment"
    if needs_pct > 50 or wants_pct > 30 or savings_pct < 20:
        return "good"
    return "excellent"


def analyze_budget(data: BudgetInput) -> BudgetAnalysis:
    """
    Analyze a monthly budget.

    Percentages are of income and use budgeted (not spent) amounts. Zero or
    negative income leaves percentages at zero and yields needs-adjustment.
    """
    income = data.monthly_income
    totals = {"needs": 0.0, "wants": 0.0, "savings": 0.0}
    for category in data.categories:
        totals[category.type] += category.budgeted

    total_budgeted = sum(c.budgeted for c in data.categories)
    total_spent = sum(c.spent for c in data.categories)

    if income > 0:
        needs_pct = totals["needs"] / income * 100
        wants_pct = totals["wants"] / income * 100
        savings_pct = totals["savings"] / income * 100
        recommendation = recommend(needs_pct, wants_pct, savings_pct)
    else:
        needs_pct = wants_pct = savings_pct = 0.0
        recommendation = "needs-adjustment"

    return BudgetAnalysis(
        total_income=income,
        total_budgeted=total_budgeted,
        total_spent=total_spent,
        remaining=income - total_spent,
        needs_total=totals["needs"],
        wants_total=totals["wants"],
        savings_total=totals["savings"],
        needs_percentage=needs_pct,
        wants_percentage=wants_pct,
        savings_percentage=savings_pct,
        recommendation=recommendation,
        recommendation_description=RECOMMENDATION_DESCRIPTIONS[recommendation],
        over_budget=[c.name for c in data.categories if c.spent > c.budgeted],
    )


def create_sample_budget() -> BudgetInput:
    """Create a sample budget for testing purposes."""
    return BudgetInput(
        monthly_income=5000,
        categories=[
            BudgetCategory(name="Housing", budgeted=1500, spent=1450, type="needs"),
            BudgetCategory(name="Food & Groceries", budgeted=600, spent=650, type="needs"),
            BudgetCategory(name="Transportation", budgeted=400, spent=380, type="needs"),
            BudgetCategory(name="Utilities", budgeted=200, spent=185, type="needs"),
            BudgetCategory(name="Entertainment", budgeted=300, spent=320, type="wants"),
            BudgetCategory(name="Dining Out", budgeted=250, spent=280, type="wants"),
            BudgetCategory(name="Shopping", budgeted=200, spent=150, type="wants"),
            BudgetCategory(name="Emergency Fund", budgeted=500, spent=500, type="savings"),
            BudgetCategory(name="Retirement", budgeted=400, spent=400, type="savings"),
            BudgetCategory(name="Investments", budgeted=200, spent=200, type="savings"),
        ],
    )
