"""Options analytics engine: Black-Scholes Greeks, implied volatility and
straddle/strangle risk for a trading dashboard."""

__version__ = "0.1.0"
