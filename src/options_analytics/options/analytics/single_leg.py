"""Single-contract analytics facade.

Orchestration order for one contract:
1. historical volatility from the supplied spot history (if any),
2. implied volatility from the market premium (if enabled), seeded with HV,
3. volatility selection: converged IV, else HV, else the configured default,
4. Black-Scholes price and Greeks at the selected volatility,
5. price difference against the market premium,
6. risk classification.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from options_analytics.options.analytics.types import (
    ContractInput,
    GreeksResult,
    VolatilitySource,
)
from options_analytics.options.config import AnalyticsConfig
from options_analytics.options.engines import BlackScholesPricer, GreeksModel
from options_analytics.options.models.black_scholes import DAYS_PER_YEAR
from options_analytics.options.risk.classifier import RiskClassifier
from options_analytics.options.types import MarketState, OptionSpec
from options_analytics.options.volatility.historical import HistoricalVolatilityEstimator
from options_analytics.options.volatility.implied import (
    ImpliedVolatilitySolver,
    IVResult,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class VolatilityChoice:
    """Volatility selected for pricing, with the estimates behind it."""

    value: float
    source: VolatilitySource
    implied: IVResult | None
    historical: float | None

    @property
    def used_fallback(self) -> bool:
        return self.source != VolatilitySource.IMPLIED


@dataclass(frozen=True)
class SingleLegAnalyzer:
    """Price, Greeks, implied volatility and risk for one option contract."""

    config: AnalyticsConfig = field(default_factory=AnalyticsConfig)
    pricer: GreeksModel = field(default_factory=BlackScholesPricer)

    @property
    def iv_solver(self) -> ImpliedVolatilitySolver:
        return ImpliedVolatilitySolver(config=self.config.iv)

    @property
    def hv_estimator(self) -> HistoricalVolatilityEstimator:
        return HistoricalVolatilityEstimator(lookback=self.config.hv_lookback)

    @property
    def classifier(self) -> RiskClassifier:
        return RiskClassifier(thresholds=self.config.risk)

    def _solve_iv(self, contract: ContractInput, seed: float | None) -> IVResult:
        """Solve IV from the seed, retrying once from the default guess."""
        solver = self.iv_solver
        result = solver.solve_contract(contract, initial_guess=seed)
        if result.converged or seed is None or seed == self.config.iv.initial_guess:
            return result
        logger.debug(
            "IV seeded at %.4f did not converge (%s); retrying from %.4f",
            seed,
            result.reason,
            self.config.iv.initial_guess,
        )
        return solver.solve_contract(contract)

    def choose_volatility(self, contract: ContractInput) -> VolatilityChoice:
        historical = self.hv_estimator.estimate(contract.historical_spot_prices)

        implied: IVResult | None = None
        if contract.use_implied_volatility:
            implied = self._solve_iv(contract, seed=historical)
            if implied.converged and implied.implied_volatility is not None:
                return VolatilityChoice(
                    value=implied.implied_volatility,
                    source=VolatilitySource.IMPLIED,
                    implied=implied,
                    historical=historical,
                )
            logger.debug("IV unavailable (%s); falling back", implied.reason)

        if historical is not None:
            return VolatilityChoice(
                value=historical,
                source=VolatilitySource.HISTORICAL,
                implied=implied,
                historical=historical,
            )
        return VolatilityChoice(
            value=self.config.default_volatility,
            source=VolatilitySource.DEFAULT,
            implied=implied,
            historical=historical,
        )

    def analyze(self, contract: ContractInput) -> GreeksResult:
        """Run the full single-leg pipeline for a validated contract."""
        choice = self.choose_volatility(contract)

        spec = OptionSpec(
            strike=contract.strike_price,
            time_to_expiry=contract.days_to_expiry / DAYS_PER_YEAR,
            option_type=contract.option_type,
        )
        state = MarketState(
            spot=contract.spot_price,
            volatility=choice.value,
            rate=contract.risk_free_rate,
        )
        priced = self.pricer.price_and_greeks(spec, state)

        greeks = priced.greeks
        risk_level = self.classifier.classify(
            contract.days_to_expiry, greeks, spot=contract.spot_price
        )

        iv_converged = choice.implied is not None and choice.implied.converged
        return GreeksResult(
            delta=greeks.delta,
            gamma=greeks.gamma,
            theta=greeks.theta,
            vega=greeks.vega,
            rho=priced.rho,
            theoretical_price=priced.price,
            market_price=contract.market_price,
            price_difference=contract.market_price - priced.price,
            volatility_used=choice.value,
            implied_volatility=choice.value if iv_converged else None,
            iv_converged=iv_converged,
            iv_used_fallback=choice.used_fallback,
            historical_volatility=choice.historical,
            volatility_source=choice.source,
            risk_level=risk_level,
        )
