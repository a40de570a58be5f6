"""Risk classification for single options and combinations."""

from .classifier import RiskClassifier
from .types import RiskLevel, RiskThresholds

__all__ = [
    "RiskLevel",
    "RiskThresholds",
    "RiskClassifier",
]
