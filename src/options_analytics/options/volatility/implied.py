"""Implied-volatility root finding.

The solver is a small explicit state machine. `SolverState` holds the current
estimate, the bracket known to contain the root and the iteration count;
`advance` evaluates one state and returns the next. Newton steps (using raw
vega as the derivative) are taken while they stay inside the bracket and vega
is usable; after the first rejected step the machine switches to bisection
for the rest of the budget.

Non-convergence is a normal outcome and is reported through `IVResult`, never
raised.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum
from typing import TYPE_CHECKING

from options_analytics.options.engines.base import VegaModel
from options_analytics.options.engines.bs_pricer import BlackScholesPricer
from options_analytics.options.models.black_scholes import (
    DAYS_PER_YEAR,
    MIN_TIME_TO_EXPIRY,
    arbitrage_bounds,
)
from options_analytics.options.types import (
    MarketState,
    OptionSpec,
    OptionTypeInput,
    normalize_option_type,
)

if TYPE_CHECKING:
    from options_analytics.options.analytics.types import ContractInput

logger = logging.getLogger(__name__)


class SolverMode(StrEnum):
    """Root-finding step used to produce the current estimate."""

    NEWTON = "newton"
    BISECTION = "bisection"


@dataclass(frozen=True)
class IVSolverConfig:
    """Tolerances, bounds and iteration budget for IV solving.

    `tolerance` is an absolute premium error; `min_vega` is a raw
    (per +1.0 vol) vega below which Newton steps are not attempted.
    """

    max_iterations: int = 100
    tolerance: float = 0.01
    initial_guess: float = 0.20
    min_volatility: float = 0.001
    max_volatility: float = 5.0
    min_vega: float = 1e-8

    def __post_init__(self) -> None:
        if self.max_iterations < 1:
            raise ValueError("max_iterations must be >= 1")
        if self.tolerance <= 0:
            raise ValueError("tolerance must be > 0")
        if self.min_volatility <= 0:
            raise ValueError("min_volatility must be > 0")
        if self.max_volatility <= self.min_volatility:
            raise ValueError("max_volatility must be > min_volatility")
        if not (self.min_volatility <= self.initial_guess <= self.max_volatility):
            raise ValueError("initial_guess must lie within the volatility bounds")
        if self.min_vega < 0:
            raise ValueError("min_vega must be >= 0")


@dataclass(frozen=True, slots=True)
class SolverState:
    """One step of the Newton/bisection state machine."""

    sigma: float
    low: float
    high: float
    iteration: int = 0
    mode: SolverMode = SolverMode.NEWTON
    converged: bool = False
    price_error: float | None = None

    def is_terminal(self, max_iterations: int) -> bool:
        return self.converged or self.iteration >= max_iterations


@dataclass(frozen=True)
class IVResult:
    """Outcome of one IV solve.

    `implied_volatility` is set if and only if `converged` is True; `reason`
    explains a failed solve.
    """

    implied_volatility: float | None
    converged: bool
    iterations: int = 0
    mode: SolverMode | None = None
    reason: str | None = None

    def __post_init__(self) -> None:
        if self.converged != (self.implied_volatility is not None):
            raise ValueError("implied_volatility must be set iff converged")

    @classmethod
    def failed(
        cls,
        reason: str,
        *,
        iterations: int = 0,
        mode: SolverMode | None = None,
    ) -> IVResult:
        return cls(
            implied_volatility=None,
            converged=False,
            iterations=iterations,
            mode=mode,
            reason=reason,
        )


def initial_state(config: IVSolverConfig, initial_guess: float | None = None) -> SolverState:
    """Start state with the guess clipped into the configured bounds."""
    guess = config.initial_guess if initial_guess is None else initial_guess
    sigma = min(max(guess, config.min_volatility), config.max_volatility)
    return SolverState(
        sigma=sigma,
        low=config.min_volatility,
        high=config.max_volatility,
    )


def advance(
    state: SolverState,
    *,
    market_price: float,
    price_fn: Callable[[float], float],
    vega_fn: Callable[[float], float],
    config: IVSolverConfig,
) -> SolverState:
    """Evaluate `state.sigma` and return the next state.

    Premiums are increasing in volatility, so the sign of the pricing error
    tells which side of the root the estimate sits on and shrinks the bracket.
    """
    error = price_fn(state.sigma) - market_price
    iteration = state.iteration + 1

    if abs(error) < config.tolerance:
        return SolverState(
            sigma=state.sigma,
            low=state.low,
            high=state.high,
            iteration=iteration,
            mode=state.mode,
            converged=True,
            price_error=error,
        )

    low, high = state.low, state.high
    if error > 0:
        high = state.sigma
    else:
        low = state.sigma

    if state.mode == SolverMode.NEWTON:
        vega = vega_fn(state.sigma)
        if vega >= config.min_vega:
            candidate = state.sigma - error / vega
            if low < candidate < high:
                return SolverState(
                    sigma=candidate,
                    low=low,
                    high=high,
                    iteration=iteration,
                    mode=SolverMode.NEWTON,
                    price_error=error,
                )

    return SolverState(
        sigma=0.5 * (low + high),
        low=low,
        high=high,
        iteration=iteration,
        mode=SolverMode.BISECTION,
        price_error=error,
    )


@dataclass(frozen=True)
class ImpliedVolatilitySolver:
    """Invert Black-Scholes for the volatility matching a market premium."""

    config: IVSolverConfig = field(default_factory=IVSolverConfig)
    pricer: VegaModel = field(default_factory=BlackScholesPricer)

    def _reject_reason(
        self,
        market_price: float,
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        option_type: OptionTypeInput,
    ) -> str | None:
        """Return why a premium cannot be inverted, or None if it can."""
        if market_price <= 0:
            return "market price must be positive"
        if market_price < self.config.tolerance:
            return "market price is below the pricing tolerance"
        if time_to_expiry < MIN_TIME_TO_EXPIRY:
            return "time to expiry is too short to imply a volatility"

        lower, upper = arbitrage_bounds(spot, strike, time_to_expiry, rate, option_type)
        if market_price < lower - self.config.tolerance:
            return "market price below the no-arbitrage lower bound"
        if market_price > upper + self.config.tolerance:
            return "market price above the no-arbitrage upper bound"
        return None

    def solve(
        self,
        market_price: float,
        *,
        spot: float,
        strike: float,
        time_to_expiry: float,
        rate: float,
        option_type: OptionTypeInput,
        initial_guess: float | None = None,
    ) -> IVResult:
        """Solve one premium; `time_to_expiry` is in years."""
        opt_type = normalize_option_type(option_type)
        reason = self._reject_reason(
            market_price, spot, strike, time_to_expiry, rate, opt_type
        )
        if reason is not None:
            logger.debug("IV solve rejected: %s", reason)
            return IVResult.failed(reason)

        spec = OptionSpec(strike=strike, time_to_expiry=time_to_expiry, option_type=opt_type)

        def price_fn(sigma: float) -> float:
            return self.pricer.price(spec, MarketState(spot=spot, volatility=sigma, rate=rate))

        def vega_fn(sigma: float) -> float:
            return self.pricer.vega_raw(spec, MarketState(spot=spot, volatility=sigma, rate=rate))

        cfg = self.config
        state = initial_state(cfg, initial_guess)
        while not state.is_terminal(cfg.max_iterations):
            state = advance(
                state,
                market_price=market_price,
                price_fn=price_fn,
                vega_fn=vega_fn,
                config=cfg,
            )

        if state.converged:
            return IVResult(
                implied_volatility=state.sigma,
                converged=True,
                iterations=state.iteration,
                mode=state.mode,
            )

        logger.debug(
            "IV solve did not converge: iterations=%d last_sigma=%.6f error=%s",
            state.iteration,
            state.sigma,
            state.price_error,
        )
        return IVResult.failed(
            f"did not converge within {cfg.max_iterations} iterations",
            iterations=state.iteration,
            mode=state.mode,
        )

    def solve_contract(
        self, contract: ContractInput, initial_guess: float | None = None
    ) -> IVResult:
        """Solve the implied volatility of one validated contract."""
        return self.solve(
            contract.market_price,
            spot=contract.spot_price,
            strike=contract.strike_price,
            time_to_expiry=contract.days_to_expiry / DAYS_PER_YEAR,
            rate=contract.risk_free_rate,
            option_type=contract.option_type,
            initial_guess=initial_guess,
        )

    def solve_many(self, contracts: Sequence[ContractInput]) -> list[IVResult]:
        """Solve each contract independently, preserving input order."""
        return [self.solve_contract(contract) for contract in contracts]
