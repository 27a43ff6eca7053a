"""
Option strategy profit/loss analysis.

This module prices option legs with Black-Scholes, sweeps the profit/loss of a
multi-leg position across a range of underlying prices, and aggregates the
position Greeks at the current underlying price.
"""

import logging
from typing import Dict, List, Literal, Optional, Tuple

import numpy as np
from numpy.typing import NDArray
from pydantic import BaseModel, ConfigDict, Field
from scipy.stats import norm

logger = logging.getLogger(__name__)

CONTRACT_MULTIPLIER = 100
SWEEP_POINTS = 101
SWEEP_LOW = 0.7
SWEEP_HIGH = 1.3
BREAKEVEN_TOLERANCE = 10.0
DAYS_PER_YEAR = 365

OptionType = Literal["call", "put"]
Position = Literal["long", "short"]


class OptionLeg(BaseModel):
    """One option contract line in a strategy."""

    model_config = ConfigDict(allow_inf_nan=False)

    type: OptionType = Field(..., description="call or put")
    position: Position = Field(..., description="long or short")
    strike: float = Field(..., gt=0)
    premium: float = Field(..., ge=0, description="Premium per share")
    quantity: int = Field(default=1, ge=1, description="Number of contracts")
    days_to_expiration: int = Field(default=30, ge=0)


class MarketParameters(BaseModel):
    """Market inputs shared by every leg."""

    model_config = ConfigDict(allow_inf_nan=False)

    underlying_price: float = Field(..., gt=0)
    volatility: float = Field(default=25, gt=0, le=500, description="Implied vol %")
    risk_free_rate: float = Field(default=5, ge=0, le=100, description="Rate %")


class ProfitLossPoint(BaseModel):
    price: float
    profit: float
    breakeven: bool


class Greeks(BaseModel):
    """Position Greeks (scaled by quantity, direction and multiplier)."""

    delta: float = 0.0
    gamma: float = 0.0
    theta: float = Field(default=0.0, description="Per calendar day")
    vega: float = Field(default=0.0, description="Per 1% change in volatility")
    rho: float = Field(default=0.0, description="Per 1% change in rates")


class StrategyAnalysis(BaseModel):
    curve: List[ProfitLossPoint]
    max_profit: float
    max_loss: float
    breakevens: List[float]
    current_profit: float
    greeks: Greeks


STRATEGY_PRESETS: Dict[str, List[dict]] = {
    "long-call": [
        {"type": "call", "position": "long", "strike": 105, "premium": 2.50},
    ],
    "long-put": [
        {"type": "put", "position": "long", "strike": 95, "premium": 2.00},
    ],
    "bull-call-spread": [
        {"type": "call", "position": "long", "strike": 100, "premium": 3.50},
        {"type": "call", "position": "short", "strike": 110, "premium": 1.50},
    ],
    "iron-condor": [
        {"type": "put", "position": "short", "strike": 90, "premium": 1.00},
        {"type": "put", "position": "long", "strike": 85, "premium": 0.50},
        {"type": "call", "position": "short", "strike": 110, "premium": 1.00},
        {"type": "call", "position": "long", "strike": 115, "premium": 0.50},
    ],
    "straddle": [
        {"type": "call", "position": "long", "strike": 100, "premium": 3.50},
        {"type": "put", "position": "long", "strike": 100, "premium": 3.00},
    ],
}


def load_strategy(name: str, days_to_expiration: int = 30) -> List[OptionLeg]:
    """Build the legs of a preset strategy."""
    if name not in STRATEGY_PRESETS:
        raise KeyError(f"Unknown strategy preset: {name}")
    return [
        OptionLeg(days_to_expiration=days_to_expiration, **leg)
        for leg in STRATEGY_PRESETS[name]
    ]


def _d1_d2(
    spot: NDArray[np.float64], strike: float, years: float, rate: float, sigma: float
) -> Tuple[NDArray[np.float64], NDArray[np.float64]]:
    sqrt_t = np.sqrt(years)
    d1 = (np.log(spot / strike) + (rate + 0.5 * sigma**2) * years) / (sigma * sqrt_t)
    return d1, d1 - sigma * sqrt_t


def black_scholes_price(
    spot, strike: float, years: float, rate: float, sigma: float, is_call: bool
):
    """
    Black-Scholes value of a European option.

    Args:
        spot: Underlying price (scalar or array)
        strike: Strike price
        years: Time to expiry in years; at or below zero the intrinsic value
        rate: Risk-free rate as a decimal
        sigma: Volatility as a decimal
        is_call: True for a call, False for a put

    Returns:
        Option value with the same shape as ``spot``
    """
    spot_arr = np.asarray(spot, dtype=np.float64)
    if years <= 0:
        value = (
            np.maximum(0.0, spot_arr - strike)
            if is_call
            else np.maximum(0.0, strike - spot_arr)
        )
    else:
        d1, d2 = _d1_d2(spot_arr, strike, years, rate, sigma)
        discounted_strike = strike * np.exp(-rate * years)
        if is_call:
            value = spot_arr * norm.cdf(d1) - discounted_strike * norm.cdf(d2)
        else:
            value = discounted_strike * norm.cdf(-d2) - spot_arr * norm.cdf(-d1)
    return float(value) if np.ndim(value) == 0 else value


def leg_greeks(leg: OptionLeg, market: MarketParameters) -> Greeks:
    """Per-share Greeks of a single long contract at the market price."""
    spot = market.underlying_price
    years = leg.days_to_expiration / DAYS_PER_YEAR
    rate = market.risk_free_rate / 100
    sigma = market.volatility / 100
    is_call = leg.type == "call"

    if years <= 0:
        in_the_money = spot > leg.strike if is_call else spot < leg.strike
        delta = (1.0 if is_call else -1.0) if in_the_money else 0.0
        return Greeks(delta=delta)

    d1, d2 = _d1_d2(np.float64(spot), leg.strike, years, rate, sigma)
    sqrt_t = np.sqrt(years)
    pdf_d1 = norm.pdf(d1)
    discounted_strike = leg.strike * np.exp(-rate * years)

    gamma = pdf_d1 / (spot * sigma * sqrt_t)
    vega = spot * pdf_d1 * sqrt_t / 100
    decay = -spot * pdf_d1 * sigma / (2 * sqrt_t)
    if is_call:
        delta = norm.cdf(d1)
        theta = (decay - rate * discounted_strike * norm.cdf(d2)) / DAYS_PER_YEAR
        rho = leg.strike * years * np.exp(-rate * years) * norm.cdf(d2) / 100
    else:
        delta = norm.cdf(d1) - 1
        theta = (decay + rate * discounted_strike * norm.cdf(-d2)) / DAYS_PER_YEAR
        rho = -leg.strike * years * np.exp(-rate * years) * norm.cdf(-d2) / 100

    return Greeks(
        delta=float(delta),
        gamma=float(gamma),
        theta=float(theta),
        vega=float(vega),
        rho=float(rho),
    )


def position_greeks(legs: List[OptionLeg], market: MarketParameters) -> Greeks:
    """Sum leg Greeks, signed by direction and scaled by contract size."""
    totals = {"delta": 0.0, "gamma": 0.0, "theta": 0.0, "vega": 0.0, "rho": 0.0}
    for leg in legs:
        scale = (1 if leg.position == "long" else -1) * leg.quantity * CONTRACT_MULTIPLIER
        greeks = leg_greeks(leg, market)
        for name in totals:
            totals[name] += getattr(greeks, name) * scale
    return Greeks(**totals)


def strategy_profit(
    legs: List[OptionLeg], market: MarketParameters, prices
) -> NDArray[np.float64]:
    """Profit/loss of the whole position at each underlying price."""
    prices = np.asarray(prices, dtype=np.float64)
    total = np.zeros_like(prices)
    rate = market.risk_free_rate / 100
    sigma = market.volatility / 100

    for leg in legs:
        value = black_scholes_price(
            prices,
            leg.strike,
            leg.days_to_expiration / DAYS_PER_YEAR,
            rate,
            sigma,
            leg.type == "call",
        )
        per_share = value - leg.premium if leg.position == "long" else leg.premium - value
        total += per_share * leg.quantity * CONTRACT_MULTIPLIER
    return total


def _interpolate_breakevens(
    prices: NDArray[np.float64], profits: NDArray[np.float64]
) -> List[float]:
    breakevens: List[float] = []
    for i in range(len(prices) - 1):
        p0, p1 = profits[i], profits[i + 1]
        if p0 == 0:
            breakevens.append(float(prices[i]))
        elif p0 * p1 < 0:
            weight = p0 / (p0 - p1)
            breakevens.append(float(prices[i] + weight * (prices[i + 1] - prices[i])))
    if len(profits) and profits[-1] == 0:
        breakevens.append(float(prices[-1]))
    return breakevens


def profit_loss_curve(
    legs: List[OptionLeg],
    market: MarketParameters,
    points: int = SWEEP_POINTS,
) -> List[ProfitLossPoint]:
    """Sweep P&L from 70% to 130% of the underlying price."""
    prices = np.linspace(
        market.underlying_price * SWEEP_LOW, market.underlying_price * SWEEP_HIGH, points
    )
    profits = strategy_profit(legs, market, prices)
    return [
        ProfitLossPoint(
            price=float(price),
            profit=float(profit),
            breakeven=bool(abs(profit) < BREAKEVEN_TOLERANCE),
        )
        for price, profit in zip(prices, profits)
    ]


def analyze_strategy(
    legs: List[OptionLeg],
    market: MarketParameters,
    points: Optional[int] = None,
) -> StrategyAnalysis:
    """Full analysis of an option strategy."""
    if not legs:
        raise ValueError("At least one option leg is required")

    curve = profit_loss_curve(legs, market, points or SWEEP_POINTS)
    prices = np.array([point.price for point in curve])
    profits = np.array([point.profit for point in curve])

    current = float(strategy_profit(legs, market, [market.underlying_price])[0])
    logger.debug(f"Analyzed {len(legs)}-leg strategy, current P&L {current:.2f}")

    return StrategyAnalysis(
        curve=curve,
        max_profit=float(profits.max()),
        max_loss=float(profits.min()),
        breakevens=_interpolate_breakevens(prices, profits),
        current_profit=current,
        greeks=position_greeks(legs, market),
    )
