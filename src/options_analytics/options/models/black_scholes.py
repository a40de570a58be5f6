"""Black-Scholes pricing and Greeks for European options.

Unit conventions (shared by every consumer of this module):
- `T` is in years (calendar days / 365).
- `bs_vega` and `bs_rho` are per one percentage point (raw value / 100).
- `bs_theta` is per calendar day (annual value / 365).
- `bs_vega_raw` is the unscaled dPrice/dSigma used by root finders.

Inputs with less than one hour to expiry, or a near-zero volatility, are
treated as expired: the price is the intrinsic value, delta is the exercise
indicator and the remaining sensitivities are zero.
"""

from __future__ import annotations

import numpy as np
from scipy.stats import norm

from options_analytics.options.types import (
    OptionType,
    OptionTypeInput,
    normalize_option_type,
)

DAYS_PER_YEAR = 365.0
MIN_TIME_TO_EXPIRY = 1.0 / (DAYS_PER_YEAR * 24.0)
MIN_VOLATILITY = 1e-8


def is_degenerate(T: float, sigma: float) -> bool:
    """Return True when closed-form Greeks would divide by ~zero."""
    return T < MIN_TIME_TO_EXPIRY or sigma <= MIN_VOLATILITY


def intrinsic_value(S: float, K: float, option_type: OptionTypeInput) -> float:
    """Exercise value of the option right now."""
    if normalize_option_type(option_type) == OptionType.CALL:
        return float(max(S - K, 0.0))
    return float(max(K - S, 0.0))


def expiry_delta(S: float, K: float, option_type: OptionTypeInput) -> float:
    """Delta of an expired option: 1/-1 ITM, 0 OTM, +/-0.5 at the money."""
    opt_type = normalize_option_type(option_type)
    if S == K:
        return 0.5 if opt_type == OptionType.CALL else -0.5
    if opt_type == OptionType.CALL:
        return 1.0 if S > K else 0.0
    return -1.0 if S < K else 0.0


def bs_d1_d2(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> tuple[float, float]:
    """Compute d1 and d2 for Black-Scholes without dividend yield."""
    if is_degenerate(T, sigma):
        raise ValueError("T and sigma must be above the degenerate thresholds")
    sqrt_T = np.sqrt(T)
    d1 = (np.log(S / K) + (r + 0.5 * sigma**2) * T) / (sigma * sqrt_T)
    d2 = d1 - sigma * sqrt_T
    return float(d1), float(d2)


def bs_price(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes price, floored at zero."""
    opt_type = normalize_option_type(option_type)
    if is_degenerate(T, sigma):
        return intrinsic_value(S, K, opt_type)

    d1, d2 = bs_d1_d2(S, K, T, sigma, r)
    discount = np.exp(-r * T)
    if opt_type == OptionType.CALL:
        price = S * norm.cdf(d1) - K * discount * norm.cdf(d2)
    else:
        price = K * discount * norm.cdf(-d2) - S * norm.cdf(-d1)
    return float(max(price, 0.0))


def bs_delta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes delta."""
    opt_type = normalize_option_type(option_type)
    if is_degenerate(T, sigma):
        return expiry_delta(S, K, opt_type)

    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    if opt_type == OptionType.CALL:
        return float(norm.cdf(d1))
    return float(norm.cdf(d1) - 1.0)


def bs_gamma(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> float:
    """Black-Scholes gamma (identical for calls and puts)."""
    if is_degenerate(T, sigma):
        return 0.0
    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    return float(norm.pdf(d1) / (S * sigma * np.sqrt(T)))


def bs_vega_raw(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> float:
    """Black-Scholes vega per +1.0 volatility."""
    if is_degenerate(T, sigma):
        return 0.0
    d1, _ = bs_d1_d2(S, K, T, sigma, r)
    return float(S * norm.pdf(d1) * np.sqrt(T))


def bs_vega(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
) -> float:
    """Black-Scholes vega per one volatility point."""
    return bs_vega_raw(S, K, T, sigma, r) / 100.0


def bs_theta(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes theta per calendar day."""
    opt_type = normalize_option_type(option_type)
    if is_degenerate(T, sigma):
        return 0.0
    d1, d2 = bs_d1_d2(S, K, T, sigma, r)
    decay = -(S * norm.pdf(d1) * sigma) / (2 * np.sqrt(T))

    if opt_type == OptionType.CALL:
        carry = -r * K * np.exp(-r * T) * norm.cdf(d2)
    else:
        carry = r * K * np.exp(-r * T) * norm.cdf(-d2)

    return float((decay + carry) / DAYS_PER_YEAR)


def bs_rho(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> float:
    """Black-Scholes rho per one rate point."""
    opt_type = normalize_option_type(option_type)
    if is_degenerate(T, sigma):
        return 0.0
    _, d2 = bs_d1_d2(S, K, T, sigma, r)
    if opt_type == OptionType.CALL:
        return float(K * T * np.exp(-r * T) * norm.cdf(d2) / 100.0)
    return float(-K * T * np.exp(-r * T) * norm.cdf(-d2) / 100.0)


def bs_greeks(
    S: float,
    K: float,
    T: float,
    sigma: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> dict[str, float]:
    """Return Black-Scholes price and Greeks for one option."""
    return {
        "price": bs_price(S, K, T, sigma, r, option_type),
        "delta": bs_delta(S, K, T, sigma, r, option_type),
        "gamma": bs_gamma(S, K, T, sigma, r),
        "vega": bs_vega(S, K, T, sigma, r),
        "theta": bs_theta(S, K, T, sigma, r, option_type),
        "rho": bs_rho(S, K, T, sigma, r, option_type),
    }


def arbitrage_bounds(
    S: float,
    K: float,
    T: float,
    r: float = 0.0,
    option_type: OptionTypeInput = "call",
) -> tuple[float, float]:
    """No-arbitrage (lower, upper) bounds on a European option premium."""
    discounted_strike = K * np.exp(-r * max(T, 0.0))
    if normalize_option_type(option_type) == OptionType.CALL:
        return float(max(S - discounted_strike, 0.0)), float(S)
    return float(max(discounted_strike - S, 0.0)), float(discounted_strike)
