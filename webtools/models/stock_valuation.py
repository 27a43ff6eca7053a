"""
Stock valuation using discounted cash flow and simple multiples.

This module provides a five-year DCF with a Gordon-growth terminal value,
P/E, P/B and dividend discount valuations, and a heuristic risk score.
"""

from typing import List, Literal

from pydantic import BaseModel, ConfigDict, Field, model_validator

PROJECTION_YEARS = 5

RiskLevel = Literal["Low", "Medium", "High"]


class StockData(BaseModel):
    """Fundamentals entered for a stock."""

    model_config = ConfigDict(allow_inf_nan=False)

    symbol: str = Field(default="", max_length=12)
    current_price: float = Field(..., gt=0, description="Current share price")
    eps: float = Field(default=0, description="Earnings per share")
    revenue: float = Field(default=0, ge=0, description="Annual revenue")
    growth_rate: float = Field(default=0, description="Expected growth in percent")
    dividend_yield: float = Field(default=0, ge=0, description="Dividend yield percent")
    pe_ratio: float = Field(default=0, ge=0, description="Price/earnings multiple")
    book_value: float = Field(default=0, description="Book value per share")
    free_cash_flow: float = Field(default=0, description="Annual free cash flow")
    discount_rate: float = Field(default=10, gt=0, description="Discount rate percent")
    terminal_growth_rate: float = Field(
        default=3, description="Perpetual growth rate percent"
    )
    shares_outstanding: float = Field(default=1e9, gt=0)
    pb_multiple: float = Field(default=2.5, ge=0, description="Target price/book")

    @model_validator(mode="after")
    def validate_terminal_growth(self):
        if self.discount_rate <= self.terminal_growth_rate:
            raise ValueError("discount_rate must exceed terminal_growth_rate")
        return self


class ProjectedCashFlow(BaseModel):
    year: int
    cash_flow: float
    present_value: float


class DCFResult(BaseModel):
    projected_cash_flows: List[ProjectedCashFlow]
    terminal_value: float
    terminal_present_value: float
    total_present_value: float
    intrinsic_value: float = Field(..., description="Per-share value")


class RiskMetrics(BaseModel):
    risk_score: float = Field(..., ge=0, le=100)
    risk_level: RiskLevel


class StockValuation(BaseModel):
    dcf: DCFResult
    pe_valuation: float
    pb_valuation: float
    dividend_discount: float
    average: float
    upside_percent: float
    risk: RiskMetrics


def discounted_cash_flow(data: StockData) -> DCFResult:
    """Project free cash flow and discount it back to a per-share value."""
    growth = data.growth_rate / 100
    discount = data.discount_rate / 100
    terminal_growth = data.terminal_growth_rate / 100

    flows: List[ProjectedCashFlow] = []
    cash_flow = data.free_cash_flow
    for year in range(1, PROJECTION_YEARS + 1):
        cash_flow *= 1 + growth
        flows.append(
            ProjectedCashFlow(
                year=year,
                cash_flow=cash_flow,
                present_value=cash_flow / (1 + discount) ** year,
            )
        )

    terminal_value = cash_flow * (1 + terminal_growth) / (discount - terminal_growth)
    terminal_pv = terminal_value / (1 + discount) ** PROJECTION_YEARS
    total_pv = sum(flow.present_value for flow in flows) + terminal_pv

    return DCFResult(
        projected_cash_flows=flows,
        terminal_value=terminal_value,
        terminal_present_value=terminal_pv,
        total_present_value=total_pv,
        intrinsic_value=total_pv / data.shares_outstanding,
    )


def risk_metrics(data: StockData) -> RiskMetrics:
    """Heuristic score: growth adds, a rich P/E subtracts. Higher is safer."""
    score = 50 + (data.growth_rate - 5) * 5 - (data.pe_ratio - 20) * 2
    score = max(0.0, min(100.0, score))
    if score > 70:
        level = "Low"
    elif score > 40:
        level = "Medium"
    else:
        level = "High"
    return RiskMetrics(risk_score=score, risk_level=level)


def value_stock(data: StockData) -> StockValuation:
    """Run every valuation method and summarize."""
    dcf = discounted_cash_flow(data)
    pe_valuation = data.eps * data.pe_ratio
    pb_valuation = data.book_value * data.pb_multiple
    dividend = data.current_price * data.dividend_yield / 100
    dividend_discount = dividend / (data.discount_rate / 100)

    average = (dcf.intrinsic_value + pe_valuation + pb_valuation + dividend_discount) / 4

    return StockValuation(
        dcf=dcf,
        pe_valuation=pe_valuation,
        pb_valuation=pb_valuation,
        dividend_discount=dividend_discount,
        average=average,
        upside_percent=(average - data.current_price) / data.current_price * 100,
        risk=risk_metrics(data),
    )
