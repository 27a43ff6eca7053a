"""
Salary offer comparison including benefits and total compensation.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field

CAREER_YEARS = 30

NegotiationPower = Literal["weak", "moderate", "strong", "excellent"]

POWER_DESCRIPTIONS = {
    "excellent": "Excellent Position - Strong case for negotiation",
    "strong": "Strong Position - Good leverage for increase",
    "moderate": "Moderate Position - Some negotiation opportunity",
    "weak": "Weak Position - Build more value before negotiating",
}


class Benefit(BaseModel):
    """A recurring non-salary benefit."""

    model_config = ConfigDict(allow_inf_nan=False)

    name: str = Field(..., min_length=1)
    monthly_value: float = Field(default=0, ge=0, description="Value per month")
    taxable: bool = Field(default=False)


class SalaryNegotiationInput(BaseModel):
    """Current package, proposed package and negotiating context."""

    model_config = ConfigDict(allow_inf_nan=False)

    current_salary: float = Field(..., gt=0, description="Current annual salary")
    proposed_salary: float = Field(..., ge=0, description="Proposed annual salary")
    tax_rate: float = Field(default=25, ge=0, le=100, description="Marginal tax rate %")
    years_at_company: int = Field(default=0, ge=0)
    market_research: float = Field(
        default=0, ge=0, description="Market salary from research (0 when unknown)"
    )
    current_benefits: List[Benefit] = Field(default_factory=list)
    proposed_benefits: List[Benefit] = Field(default_factory=list)


class SalaryAnalysis(BaseModel):
    """Breakdown of what the proposed package is worth."""

    salary_increase: float
    percentage_increase: float
    net_increase: float
    monthly_increase: float
    current_benefit_value: float
    proposed_benefit_value: float
    benefit_increase: float
    total_comp_increase: float
    lifetime_value: float
    negotiation_power: NegotiationPower
    negotiation_power_description: str


def annual_benefit_value(benefits: List[Benefit]) -> float:
    """Total annual value of a benefits list."""
    return sum(benefit.monthly_value * 12 for benefit in benefits)


def negotiation_power(market_research: float, years_at_company: int) -> NegotiationPower:
    """
    Score negotiating leverage.

    Tenure drives the score when no market figure was supplied; with a market
    figure, any tenure of a year or more counts as moderate.
    """
    if market_research == 0 and years_at_company >= 3:
        return "excellent"
    if market_research == 0 and years_at_company >= 2:
        return "strong"
    if market_research == 0 or years_at_company >= 1:
        return "moderate"
    return "weak"


def analyze_salary(data: SalaryNegotiationInput) -> SalaryAnalysis:
    """Compare the current and proposed compensation packages."""
    salary_increase = data.proposed_salary - data.current_salary
    net_increase = salary_increase * (1 - data.tax_rate / 100)

    current_benefits = annual_benefit_value(data.current_benefits)
    proposed_benefits = annual_benefit_value(data.proposed_benefits)

    total_comp_increase = (data.proposed_salary + proposed_benefits) - (
        data.current_salary + current_benefits
    )
    power = negotiation_power(data.market_research, data.years_at_company)

    return SalaryAnalysis(
        salary_increase=salary_increase,
        percentage_increase=salary_increase / data.current_salary * 100,
        net_increase=net_increase,
        monthly_increase=net_increase / 12,
        current_benefit_value=current_benefits,
        proposed_benefit_value=proposed_benefits,
        benefit_increase=proposed_benefits - current_benefits,
        total_comp_increase=total_comp_increase,
        lifetime_value=total_comp_increase * CAREER_YEARS,
        negotiation_power=power,
        negotiation_power_description=POWER_DESCRIPTIONS[power],
    )
