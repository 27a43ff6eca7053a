"""Tests for the salary negotiation calculator."""

import pytest
from pydantic import ValidationError

from webtools.models.salary_negotiation import (
    Benefit,
    SalaryNegotiationInput,
    analyze_salary,
    annual_benefit_value,
    negotiation_power,
)


class TestAnalyzeSalary:
    """Test cases for package comparison."""

    def test_raise_with_benefits(self):
        analysis = analyze_salary(
            SalaryNegotiationInput(
                current_salary=80000,
                proposed_salary=90000,
                tax_rate=25,
                current_benefits=[Benefit(name="Health", monthly_value=500)],
                proposed_benefits=[
                    Benefit(name="Health", monthly_value=500),
                    Benefit(name="Gym", monthly_value=50),
                ],
            )
        )

        assert analysis.salary_increase == 10000
        assert analysis.percentage_increase == pytest.approx(12.5)
        assert analysis.net_increase == pytest.approx(7500)
        assert analysis.monthly_increase == pytest.approx(625)
        assert analysis.current_benefit_value == 6000
        assert analysis.proposed_benefit_value == 6600
        assert analysis.benefit_increase == 600
        assert analysis.total_comp_increase == 10600
        assert analysis.lifetime_value == 318000
        assert analysis.negotiation_power == "moderate"

    def test_pay_cut(self):
        analysis = analyze_salary(
            SalaryNegotiationInput(current_salary=50000, proposed_salary=45000, tax_rate=0)
        )
        assert analysis.salary_increase == -5000
        assert analysis.percentage_increase == pytest.approx(-10)

    def test_zero_current_salary_rejected(self):
        with pytest.raises(ValidationError):
            SalaryNegotiationInput(current_salary=0, proposed_salary=1000)

    def test_annual_benefit_value(self):
        assert annual_benefit_value([]) == 0
        assert annual_benefit_value([Benefit(name="Transit", monthly_value=100)]) == 1200


class TestNegotiationPower:
    """Test cases for leverage scoring."""

    @pytest.mark.parametrize(
        "market,years,expected",
        [
            (0, 3, "excellent"),
            (0, 2, "strong"),
            (0, 0, "moderate"),
            (95000, 5, "moderate"),
            (95000, 0, "weak"),
        ],
    )
    def test_power(self, market, years, expected):
        assert negotiation_power(market, years) == expected
