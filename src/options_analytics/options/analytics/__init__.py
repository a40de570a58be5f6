"""Single-leg and two-leg analytics facades."""

from .multi_leg import MultiLegCombinator
from .single_leg import SingleLegAnalyzer, VolatilityChoice
from .strikes import atm_strike, strangle_strikes
from .types import (
    CombinedLegResult,
    ContractInput,
    GreeksResult,
    StrategyKind,
    VolatilitySource,
    combine_results,
    results_to_frame,
)

__all__ = [
    "ContractInput",
    "GreeksResult",
    "CombinedLegResult",
    "StrategyKind",
    "VolatilitySource",
    "VolatilityChoice",
    "SingleLegAnalyzer",
    "MultiLegCombinator",
    "combine_results",
    "results_to_frame",
    "atm_strike",
    "strangle_strikes",
]
