"""Analytical option-pricing models."""

from .black_scholes import (
    DAYS_PER_YEAR,
    MIN_TIME_TO_EXPIRY,
    MIN_VOLATILITY,
    arbitrage_bounds,
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
    bs_vega_raw,
    expiry_delta,
    intrinsic_value,
    is_degenerate,
)

__all__ = [
    "DAYS_PER_YEAR",
    "MIN_TIME_TO_EXPIRY",
    "MIN_VOLATILITY",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_vega_raw",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
    "arbitrage_bounds",
    "expiry_delta",
    "intrinsic_value",
    "is_degenerate",
]
