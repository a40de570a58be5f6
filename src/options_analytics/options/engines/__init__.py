"""Pricing engines used by the analytics facades."""

from .base import GreeksModel, PriceModel, VegaModel
from .bs_pricer import BlackScholesPricer

__all__ = [
    "PriceModel",
    "VegaModel",
    "GreeksModel",
    "BlackScholesPricer",
]
