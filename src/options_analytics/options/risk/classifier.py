"""Days-to-expiry and sensitivity based risk classification."""

from __future__ import annotations

from dataclasses import dataclass, field

from options_analytics.options.risk.types import RiskLevel, RiskThresholds
from options_analytics.options.types import Greeks


@dataclass(frozen=True)
class RiskClassifier:
    """Map days to expiry and Greek magnitudes to a `RiskLevel`.

    Time to expiry sets the base level; a position whose gamma or vega is
    large relative to spot is escalated by one level.
    """

    thresholds: RiskThresholds = field(default_factory=RiskThresholds)

    def base_level(self, days_to_expiry: float) -> RiskLevel:
        if days_to_expiry < self.thresholds.danger_days:
            return RiskLevel.DANGER
        if days_to_expiry < self.thresholds.caution_days:
            return RiskLevel.CAUTION
        return RiskLevel.SAFE

    def is_high_sensitivity(self, greeks: Greeks, *, spot: float) -> bool:
        if spot <= 0:
            raise ValueError("spot must be > 0")
        gamma_sensitivity = abs(greeks.gamma) * spot / 100.0
        vega_sensitivity = abs(greeks.vega) / spot
        return (
            gamma_sensitivity > self.thresholds.gamma_threshold
            or vega_sensitivity > self.thresholds.vega_threshold
        )

    def classify(
        self,
        days_to_expiry: float,
        greeks: Greeks,
        *,
        spot: float,
    ) -> RiskLevel:
        level = self.base_level(days_to_expiry)
        if self.is_high_sensitivity(greeks, spot=spot):
            level = level.escalate()
        return level
