"""Option pricing models, volatility estimation, risk and analytics facades."""

from .analytics import (
    CombinedLegResult,
    ContractInput,
    GreeksResult,
    MultiLegCombinator,
    SingleLegAnalyzer,
    StrategyKind,
    VolatilitySource,
    atm_strike,
    results_to_frame,
    strangle_strikes,
)
from .config import DEFAULT_ANALYTICS, AnalyticsConfig
from .engines import BlackScholesPricer, GreeksModel, PriceModel, VegaModel
from .errors import InvalidContractError
from .models.black_scholes import (
    bs_d1_d2,
    bs_delta,
    bs_gamma,
    bs_greeks,
    bs_price,
    bs_rho,
    bs_theta,
    bs_vega,
    bs_vega_raw,
)
from .risk import RiskClassifier, RiskLevel, RiskThresholds
from .types import (
    Greeks,
    MarketState,
    OptionSpec,
    OptionType,
    OptionTypeInput,
    PricingResult,
    normalize_option_type,
)
from .volatility import (
    HistoricalVolatilityEstimator,
    ImpliedVolatilitySolver,
    IVResult,
    IVSolverConfig,
    SolverMode,
    SolverState,
    historical_volatility,
)

__all__ = [
    "OptionType",
    "OptionTypeInput",
    "OptionSpec",
    "MarketState",
    "Greeks",
    "PricingResult",
    "normalize_option_type",
    "PriceModel",
    "VegaModel",
    "GreeksModel",
    "BlackScholesPricer",
    "bs_d1_d2",
    "bs_price",
    "bs_delta",
    "bs_gamma",
    "bs_vega",
    "bs_vega_raw",
    "bs_theta",
    "bs_rho",
    "bs_greeks",
    "HistoricalVolatilityEstimator",
    "historical_volatility",
    "ImpliedVolatilitySolver",
    "IVResult",
    "IVSolverConfig",
    "SolverMode",
    "SolverState",
    "RiskLevel",
    "RiskThresholds",
    "RiskClassifier",
    "AnalyticsConfig",
    "DEFAULT_ANALYTICS",
    "InvalidContractError",
    "ContractInput",
    "GreeksResult",
    "CombinedLegResult",
    "StrategyKind",
    "VolatilitySource",
    "SingleLegAnalyzer",
    "MultiLegCombinator",
    "results_to_frame",
    "atm_strike",
    "strangle_strikes",
]
