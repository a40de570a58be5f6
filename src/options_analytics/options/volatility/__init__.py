"""Historical and implied volatility estimation."""

from .historical import (
    TRADING_DAYS_PER_YEAR,
    HistoricalVolatilityEstimator,
    historical_volatility,
)
from .implied import (
    ImpliedVolatilitySolver,
    IVResult,
    IVSolverConfig,
    SolverMode,
    SolverState,
    advance,
    initial_state,
)

__all__ = [
    "TRADING_DAYS_PER_YEAR",
    "HistoricalVolatilityEstimator",
    "historical_volatility",
    "ImpliedVolatilitySolver",
    "IVResult",
    "IVSolverConfig",
    "SolverMode",
    "SolverState",
    "advance",
    "initial_state",
]
