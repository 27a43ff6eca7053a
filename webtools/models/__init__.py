"""Calculators and text utilities behind the catalog tools."""

from .debt_payoff import (
    Debt,
    DebtPayoffCalculator,
    PayoffStatus,
    PayoffStrategyMethod,
    StrategyComparison,
    StrategyResult,
    create_sample_debts,
    format_months,
    simulate_payoff,
)
from .budget_planner import BudgetInput, analyze_budget
from .emergency_fund import EmergencyFundInput, calculate_emergency_fund
from .salary_negotiation import SalaryNegotiationInput, analyze_salary
from .stock_valuation import StockData, value_stock
from .options_profit import MarketParameters, OptionLeg, analyze_strategy
from .unit_converter import convert, convert_all

__all__ = [
    "Debt",
    "DebtPayoffCalculator",
    "PayoffStatus",
    "PayoffStrategyMethod",
    "StrategyComparison",
    "StrategyResult",
    "create_sample_debts",
    "format_months",
    "simulate_payoff",
    "BudgetInput",
    "analyze_budget",
    "EmergencyFundInput",
    "calculate_emergency_fund",
    "SalaryNegotiationInput",
    "analyze_salary",
    "StockData",
    "value_stock",
    "MarketParameters",
    "OptionLeg",
    "analyze_strategy",
    "convert",
    "convert_all",
]
