"""Risk levels and classification thresholds."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum


class RiskLevel(StrEnum):
    """Discrete position risk, ordered safe < caution < danger."""

    SAFE = "safe"
    CAUTION = "caution"
    DANGER = "danger"

    @property
    def severity(self) -> int:
        return _SEVERITY[self]

    def escalate(self) -> RiskLevel:
        """Return the next more severe level (danger stays danger)."""
        return _BY_SEVERITY[min(self.severity + 1, len(_BY_SEVERITY) - 1)]

    @classmethod
    def worst(cls, *levels: RiskLevel) -> RiskLevel:
        """Most severe of the given levels."""
        if not levels:
            raise ValueError("at least one risk level is required")
        return max((cls(level) for level in levels), key=lambda level: level.severity)


_BY_SEVERITY: tuple[RiskLevel, ...] = (
    RiskLevel.SAFE,
    RiskLevel.CAUTION,
    RiskLevel.DANGER,
)
_SEVERITY: dict[RiskLevel, int] = {level: i for i, level in enumerate(_BY_SEVERITY)}


@dataclass(frozen=True)
class RiskThresholds:
    """Bands used by `RiskClassifier`.

    Units:
    - `danger_days` / `caution_days`: calendar days to expiry (strict `<`).
    - `gamma_threshold`: delta change for a 1% spot move, `|gamma| * spot / 100`.
    - `vega_threshold`: premium change per vol point as a fraction of spot,
      `|vega| / spot`.

    Index options and single stocks usually warrant different bands, so these
    are passed explicitly rather than read from module constants.
    """

    danger_days: float = 3.0
    caution_days: float = 10.0
    gamma_threshold: float = 0.25
    vega_threshold: float = 0.005

    def __post_init__(self) -> None:
        if self.danger_days < 0:
            raise ValueError("danger_days must be >= 0")
        if self.caution_days < self.danger_days:
            raise ValueError("caution_days must be >= danger_days")
        if self.gamma_threshold <= 0:
            raise ValueError("gamma_threshold must be > 0")
        if self.vega_threshold <= 0:
            raise ValueError("vega_threshold must be > 0")
