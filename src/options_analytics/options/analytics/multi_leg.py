"""Two-leg (CE + PE) combination analytics."""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field

from options_analytics.options.analytics.single_leg import SingleLegAnalyzer
from options_analytics.options.analytics.strikes import atm_strike
from options_analytics.options.analytics.types import (
    CombinedLegResult,
    ContractInput,
    GreeksResult,
    StrategyKind,
    combine_results,
    require_option_type,
)
from options_analytics.options.types import OptionType


@dataclass(frozen=True)
class MultiLegCombinator:
    """Aggregate a call leg and a put leg into a straddle or strangle.

    Straddles and strangles differ only in the strikes the caller supplies;
    no strike relationship is enforced here, so a strangle may be built with
    any pair of strikes. Each leg must carry its own side (CE = call,
    PE = put).
    """

    analyzer: SingleLegAnalyzer = field(default_factory=SingleLegAnalyzer)

    def combine(
        self,
        ce: GreeksResult,
        pe: GreeksResult,
        strategy: StrategyKind = StrategyKind.STRADDLE,
    ) -> CombinedLegResult:
        """Aggregate already analysed legs."""
        return CombinedLegResult(
            strategy=StrategyKind(strategy),
            ce=ce,
            pe=pe,
            combined=combine_results(ce, pe),
        )

    def _analyze_pair(
        self,
        ce_input: ContractInput,
        pe_input: ContractInput,
        strategy: StrategyKind,
    ) -> CombinedLegResult:
        require_option_type(ce_input, OptionType.CALL, "CE")
        require_option_type(pe_input, OptionType.PUT, "PE")
        ce = self.analyzer.analyze(ce_input)
        pe = self.analyzer.analyze(pe_input)
        return self.combine(ce, pe, strategy)

    def straddle(
        self, ce_input: ContractInput, pe_input: ContractInput
    ) -> CombinedLegResult:
        return self._analyze_pair(ce_input, pe_input, StrategyKind.STRADDLE)

    def strangle(
        self, ce_input: ContractInput, pe_input: ContractInput
    ) -> CombinedLegResult:
        return self._analyze_pair(ce_input, pe_input, StrategyKind.STRANGLE)

    def atm_straddle(
        self,
        *,
        spot: float,
        ce_price: float,
        pe_price: float,
        days_to_expiry: float,
        risk_free_rate: float | None = None,
        strike_step: float = 100.0,
        use_implied_volatility: bool = True,
        historical_spot_prices: Sequence[float] | None = None,
    ) -> CombinedLegResult:
        """Straddle at the strike nearest to `spot`."""
        rate = (
            self.analyzer.config.default_risk_free_rate
            if risk_free_rate is None
            else risk_free_rate
        )
        strike = atm_strike(spot, strike_step)
        history = None if historical_spot_prices is None else tuple(historical_spot_prices)
        legs = {
            option_type: ContractInput(
                spot_price=spot,
                strike_price=strike,
                market_price=price,
                option_type=option_type,
                days_to_expiry=days_to_expiry,
                risk_free_rate=rate,
                use_implied_volatility=use_implied_volatility,
                historical_spot_prices=history,
            )
            for option_type, price in ((OptionType.CALL, ce_price), (OptionType.PUT, pe_price))
        }
        return self.straddle(legs[OptionType.CALL], legs[OptionType.PUT])
