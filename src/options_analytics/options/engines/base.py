"""Structural interfaces the analytics layer expects from a pricer.

Anything with the right methods qualifies; no base class is required.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from options_analytics.options.types import MarketState, OptionSpec, PricingResult


@runtime_checkable
class PriceModel(Protocol):
    def price(self, spec: OptionSpec, state: MarketState) -> float: ...


@runtime_checkable
class VegaModel(PriceModel, Protocol):
    """Price plus the raw volatility derivative used by Newton steps."""

    def vega_raw(self, spec: OptionSpec, state: MarketState) -> float: ...


@runtime_checkable
class GreeksModel(Protocol):
    """Full premium and sensitivity report for one contract."""

    def price_and_greeks(self, spec: OptionSpec, state: MarketState) -> PricingResult: ...
