"""Strike helpers for building combinations from a spot price."""

from __future__ import annotations


def atm_strike(spot: float, step: float = 100.0) -> float:
    """Nearest listed strike to `spot` on a grid of `step` (100 for NIFTY)."""
    if spot <= 0:
        raise ValueError("spot must be > 0")
    if step <= 0:
        raise ValueError("step must be > 0")
    return float(round(spot / step) * step)


def strangle_strikes(
    spot: float, width: float, step: float = 100.0
) -> tuple[float, float]:
    """(call strike, put strike) placed `width` either side of the ATM strike.

    Raises `ValueError` when the put strike would not be positive.
    """
    if width < 0:
        raise ValueError("width must be >= 0")
    center = atm_strike(spot, step)
    if width >= center:
        raise ValueError(f"width {width} leaves no positive put strike below {center}")
    return center + width, center - width
