"""Run-level analytics configuration (solver, risk bands, fallbacks)."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import asdict, dataclass, field, fields
from typing import Any

from options_analytics.options.risk.types import RiskThresholds
from options_analytics.options.volatility.implied import IVSolverConfig

DEFAULT_ANALYTICS: dict[str, Any] = {
    "iv": asdict(IVSolverConfig()),
    "risk": asdict(RiskThresholds()),
    "default_volatility": 0.20,
    "default_risk_free_rate": 0.07,
    "hv_lookback": 30,
}


def _section(mapping: Mapping[str, Any], key: str) -> dict[str, Any]:
    value = mapping.get(key) or {}
    if not isinstance(value, Mapping):
        raise ValueError(f"analytics.{key} must be a mapping")
    return dict(value)


def _build(factory: type, values: Mapping[str, Any], where: str) -> Any:
    """Construct a config dataclass, reporting bad keys and values as `ValueError`."""
    unknown = sorted(set(values) - {f.name for f in fields(factory)})
    if unknown:
        raise ValueError(f"Unknown {where} key(s): {unknown}")
    try:
        return factory(**values)
    except TypeError as e:
        # Ill-typed values fail comparisons in __post_init__.
        raise ValueError(f"Invalid {where} value: {e}") from e


@dataclass(frozen=True)
class AnalyticsConfig:
    """Explicit tuning for one market/instrument.

    Passed to analyzers at construction time so several markets can be
    analysed side by side with different settings.
    """

    iv: IVSolverConfig = field(default_factory=IVSolverConfig)
    risk: RiskThresholds = field(default_factory=RiskThresholds)
    default_volatility: float = 0.20
    default_risk_free_rate: float = 0.07
    hv_lookback: int | None = 30

    def __post_init__(self) -> None:
        if self.default_volatility <= 0:
            raise ValueError("default_volatility must be > 0")
        if self.hv_lookback is not None and self.hv_lookback < 3:
            raise ValueError("hv_lookback must be >= 3 or None")

    @classmethod
    def from_mapping(cls, mapping: Mapping[str, Any] | None) -> AnalyticsConfig:
        """Build from a nested mapping such as the `analytics` YAML section.

        Missing keys keep their defaults; unknown keys and ill-typed values
        raise `ValueError`.
        """
        if not mapping:
            return cls()
        kwargs: dict[str, Any] = {
            key: value
            for key, value in mapping.items()
            if key not in ("iv", "risk")
        }
        kwargs["iv"] = _build(IVSolverConfig, _section(mapping, "iv"), "analytics.iv")
        kwargs["risk"] = _build(
            RiskThresholds, _section(mapping, "risk"), "analytics.risk"
        )
        return _build(cls, kwargs, "analytics")

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)
