"""Closed-form Black-Scholes engine over `OptionSpec` / `MarketState`."""

from __future__ import annotations

from options_analytics.options.models.black_scholes import (
    bs_greeks,
    bs_price,
    bs_vega_raw,
)
from options_analytics.options.types import MarketState, OptionSpec, PricingResult


def _inputs(
    spec: OptionSpec, state: MarketState
) -> tuple[float, float, float, float, float]:
    return (
        state.spot,
        spec.strike,
        spec.time_to_expiry,
        state.volatility,
        state.rate,
    )


class BlackScholesPricer:
    """Satisfies `PriceModel`, `VegaModel` and `GreeksModel`."""

    def price(self, spec: OptionSpec, state: MarketState) -> float:
        return bs_price(*_inputs(spec, state), spec.option_type)

    def vega_raw(self, spec: OptionSpec, state: MarketState) -> float:
        return bs_vega_raw(*_inputs(spec, state))

    def price_and_greeks(self, spec: OptionSpec, state: MarketState) -> PricingResult:
        return PricingResult.from_flat(
            bs_greeks(*_inputs(spec, state), spec.option_type)
        )
