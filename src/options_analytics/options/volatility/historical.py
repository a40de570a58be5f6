"""Close-to-close historical volatility from spot price history."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import pandas as pd

TRADING_DAYS_PER_YEAR = 252


def _usable_prices(prices: Sequence[float] | np.ndarray | pd.Series) -> np.ndarray:
    """Drop non-finite and non-positive observations, keeping order."""
    arr = np.asarray(prices, dtype=float).ravel()
    return arr[np.isfinite(arr) & (arr > 0)]


def historical_volatility(
    prices: Sequence[float] | np.ndarray | pd.Series,
    lookback: int | None = None,
    ann: int = TRADING_DAYS_PER_YEAR,
) -> float | None:
    """Annualized sample volatility of log returns.

    `prices` are ordered oldest to newest. When `lookback` is set only the last
    `lookback` usable prices are used. Returns None when fewer than two returns
    are available (sample dispersion is undefined) or when returns show no
    dispersion at all.
    """
    usable = _usable_prices(prices)
    if lookback is not None:
        usable = usable[-lookback:]
    if usable.size < 2:
        return None

    log_returns = np.diff(np.log(usable))
    if log_returns.size < 2:
        return None

    sigma_daily = float(np.std(log_returns, ddof=1))
    if not np.isfinite(sigma_daily) or sigma_daily <= 0.0:
        return None
    return sigma_daily * float(np.sqrt(ann))


@dataclass(frozen=True)
class HistoricalVolatilityEstimator:
    """Estimate annualized volatility from an ordered spot price history."""

    lookback: int | None = None
    periods_per_year: int = TRADING_DAYS_PER_YEAR

    def __post_init__(self) -> None:
        if self.lookback is not None and self.lookback < 3:
            raise ValueError("lookback must be >= 3 (two returns) or None")
        if self.periods_per_year <= 0:
            raise ValueError("periods_per_year must be > 0")

    def estimate(
        self, prices: Sequence[float] | np.ndarray | pd.Series | None
    ) -> float | None:
        if prices is None:
            return None
        return historical_volatility(
            prices, lookback=self.lookback, ann=self.periods_per_year
        )
