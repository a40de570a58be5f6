"""Pricing records shared by the models, engines and analytics facades."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Literal, TypeAlias


class OptionType(StrEnum):
    """Option side. Exchange labels (`CE`/`PE`, `C`/`P`) normalise to these."""

    CALL = "call"
    PUT = "put"


# Tolerant input type accepted at system boundaries (dashboard payloads/tests).
OptionTypeInput: TypeAlias = (
    OptionType | Literal["call", "put", "C", "P", "CE", "PE"] | str
)

_OPTION_TYPE_ALIASES: dict[str, OptionType] = {
    "call": OptionType.CALL,
    "c": OptionType.CALL,
    "ce": OptionType.CALL,
    "put": OptionType.PUT,
    "p": OptionType.PUT,
    "pe": OptionType.PUT,
}


def normalize_option_type(option_type: OptionTypeInput) -> OptionType:
    """Normalize option type labels (call/put, C/P, CE/PE) to `OptionType`."""
    if isinstance(option_type, OptionType):
        return option_type
    key = str(option_type).strip().lower()
    try:
        return _OPTION_TYPE_ALIASES[key]
    except KeyError as e:
        raise ValueError(
            "option_type must be one of {'call', 'put', 'C', 'P', 'CE', 'PE'}, "
            f"got {option_type!r}"
        ) from e


@dataclass(frozen=True)
class OptionSpec:
    """Strike, expiry and side of one European option.

    `time_to_expiry` is expressed in years.
    """

    strike: float
    time_to_expiry: float
    option_type: OptionTypeInput


@dataclass(frozen=True)
class MarketState:
    """Market conditions a contract is valued under (no dividend yield)."""

    spot: float
    volatility: float
    rate: float = 0.0


GREEK_NAMES: tuple[str, ...] = ("delta", "gamma", "vega", "theta")


@dataclass(frozen=True, slots=True)
class Greeks:
    """Sensitivities in dashboard units.

    `vega` is per volatility point and `theta` per calendar day.
    """

    delta: float
    gamma: float
    vega: float
    theta: float


@dataclass(frozen=True, slots=True)
class PricingResult:
    """Model value of one contract with its sensitivities."""

    price: float
    greeks: Greeks
    rho: float

    @classmethod
    def from_flat(cls, data: Mapping[str, float]) -> PricingResult:
        """Build from `bs_greeks`-style output (price, the Greeks and rho)."""
        greeks = Greeks(*(float(data[name]) for name in GREEK_NAMES))
        return cls(price=float(data["price"]), greeks=greeks, rho=float(data["rho"]))
