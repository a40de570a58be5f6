"""Request and result records for single-leg and two-leg analytics."""

from __future__ import annotations

import math
from collections.abc import Iterable, Mapping
from dataclasses import asdict, dataclass, field
from enum import StrEnum
from typing import Any

import pandas as pd

from options_analytics.options.errors import InvalidContractError
from options_analytics.options.risk.types import RiskLevel
from options_analytics.options.types import OptionType, OptionTypeInput, normalize_option_type


class VolatilitySource(StrEnum):
    """Which volatility estimate was fed into the pricer.

    Ordered from most to least market-implied.
    """

    IMPLIED = "implied"
    HISTORICAL = "historical"
    DEFAULT = "default"


_SOURCE_RANK: dict[VolatilitySource, int] = {
    VolatilitySource.IMPLIED: 0,
    VolatilitySource.HISTORICAL: 1,
    VolatilitySource.DEFAULT: 2,
}


class StrategyKind(StrEnum):
    STRADDLE = "straddle"
    STRANGLE = "strangle"


def _require_finite(name: str, value: float) -> float:
    try:
        number = float(value)
    except (TypeError, ValueError) as e:
        raise InvalidContractError(f"{name} must be a number, got {value!r}") from e
    if not math.isfinite(number):
        raise InvalidContractError(f"{name} must be finite, got {value!r}")
    return number


def _history_price(value: float) -> float:
    # Non-finite and non-positive closes are dropped later by the estimator.
    try:
        return float(value)
    except (TypeError, ValueError) as e:
        raise InvalidContractError(
            f"historical_spot_prices must be numeric, got {value!r}"
        ) from e


@dataclass(frozen=True)
class ContractInput:
    """One option contract's analysis request.

    Validated on construction: a `ContractInput` that exists is safe to price.
    `days_to_expiry` may be fractional; `historical_spot_prices` is ordered
    oldest to newest and only feeds the historical-volatility fallback.
    """

    spot_price: float
    strike_price: float
    market_price: float
    option_type: OptionTypeInput
    days_to_expiry: float
    risk_free_rate: float = 0.07
    use_implied_volatility: bool = True
    historical_spot_prices: tuple[float, ...] | None = field(default=None, repr=False)

    def __post_init__(self) -> None:
        spot = _require_finite("spot_price", self.spot_price)
        strike = _require_finite("strike_price", self.strike_price)
        market = _require_finite("market_price", self.market_price)
        days = _require_finite("days_to_expiry", self.days_to_expiry)
        rate = _require_finite("risk_free_rate", self.risk_free_rate)

        if spot <= 0:
            raise InvalidContractError(f"spot_price must be > 0, got {spot}")
        if strike <= 0:
            raise InvalidContractError(f"strike_price must be > 0, got {strike}")
        if market < 0:
            raise InvalidContractError(f"market_price must be >= 0, got {market}")
        if days < 0:
            raise InvalidContractError(f"days_to_expiry must be >= 0, got {days}")
        try:
            opt_type = normalize_option_type(self.option_type)
        except ValueError as e:
            raise InvalidContractError(str(e)) from e

        history = self.historical_spot_prices
        if history is not None:
            history = tuple(_history_price(p) for p in history)

        # Frozen dataclass: store the normalized values.
        object.__setattr__(self, "spot_price", spot)
        object.__setattr__(self, "strike_price", strike)
        object.__setattr__(self, "market_price", market)
        object.__setattr__(self, "days_to_expiry", days)
        object.__setattr__(self, "risk_free_rate", rate)
        object.__setattr__(self, "option_type", opt_type)
        object.__setattr__(self, "historical_spot_prices", history)


@dataclass(frozen=True)
class GreeksResult:
    """Complete analytics for one leg (or a combined position).

    `iv_converged` and `iv_used_fallback` are always set: a consumer reading
    `implied_volatility` must check `iv_converged` first. `volatility_source`
    names the estimate behind `volatility_used`.
    """

    delta: float
    gamma: float
    theta: float
    vega: float
    rho: float
    theoretical_price: float
    market_price: float
    price_difference: float
    volatility_used: float
    implied_volatility: float | None
    iv_converged: bool
    iv_used_fallback: bool
    historical_volatility: float | None
    volatility_source: VolatilitySource
    risk_level: RiskLevel

    def __post_init__(self) -> None:
        if not self.volatility_used > 0:
            raise ValueError("volatility_used must be > 0")

    def to_dict(self) -> dict[str, Any]:
        out = asdict(self)
        out["volatility_source"] = str(self.volatility_source)
        out["risk_level"] = str(self.risk_level)
        return out


def _mean_of_available(values: Iterable[float | None]) -> float | None:
    present = [v for v in values if v is not None]
    if not present:
        return None
    return sum(present) / len(present)


def combine_results(ce: GreeksResult, pe: GreeksResult) -> GreeksResult:
    """Aggregate two legs into one position-level result.

    Greeks and premiums are additive; volatility fields are averaged and the
    flags take the pessimistic view of the two legs.
    """
    market_price = ce.market_price + pe.market_price
    theoretical_price = ce.theoretical_price + pe.theoretical_price
    implied = (
        (ce.implied_volatility + pe.implied_volatility) / 2
        if ce.implied_volatility is not None and pe.implied_volatility is not None
        else None
    )
    return GreeksResult(
        delta=ce.delta + pe.delta,
        gamma=ce.gamma + pe.gamma,
        theta=ce.theta + pe.theta,
        vega=ce.vega + pe.vega,
        rho=ce.rho + pe.rho,
        theoretical_price=theoretical_price,
        market_price=market_price,
        price_difference=market_price - theoretical_price,
        volatility_used=(ce.volatility_used + pe.volatility_used) / 2,
        implied_volatility=implied,
        iv_converged=ce.iv_converged and pe.iv_converged,
        iv_used_fallback=ce.iv_used_fallback or pe.iv_used_fallback,
        historical_volatility=_mean_of_available(
            (ce.historical_volatility, pe.historical_volatility)
        ),
        volatility_source=max(
            (ce.volatility_source, pe.volatility_source),
            key=_SOURCE_RANK.__getitem__,
        ),
        risk_level=RiskLevel.worst(ce.risk_level, pe.risk_level),
    )


@dataclass(frozen=True)
class CombinedLegResult:
    """Straddle/strangle output: both legs plus the aggregated position."""

    strategy: StrategyKind
    ce: GreeksResult
    pe: GreeksResult
    combined: GreeksResult

    def to_dict(self) -> dict[str, Any]:
        return {
            "strategy": str(self.strategy),
            "ce": self.ce.to_dict(),
            "pe": self.pe.to_dict(),
            "combined": self.combined.to_dict(),
        }

    def to_frame(self) -> pd.DataFrame:
        return results_to_frame({"ce": self.ce, "pe": self.pe, "combined": self.combined})


def results_to_frame(results: Mapping[str, GreeksResult]) -> pd.DataFrame:
    """Tabulate labelled results, one row per label, in insertion order."""
    return pd.DataFrame(
        [result.to_dict() for result in results.values()],
        index=pd.Index(list(results.keys()), name="leg"),
    )


def require_option_type(contract: ContractInput, expected: OptionType, leg: str) -> None:
    """Raise if a combination leg carries the wrong option side."""
    if contract.option_type != expected:
        raise InvalidContractError(
            f"{leg} leg must be a {expected} option, got {contract.option_type}"
        )
