"""Straddle vs strangle Greeks across the last days before expiry.

This script demonstrates the analytics facades:
1) build an ATM straddle from spot and the two premiums,
2) build a strangle `width` points either side of the ATM strike,
3) tabulate the combined Greeks and risk level for a few expiries.

Premiums are repriced from a flat volatility so the example runs offline.
"""

from __future__ import annotations

import argparse
from dataclasses import dataclass

import pandas as pd

from options_analytics.options import (
    ContractInput,
    MultiLegCombinator,
    atm_strike,
    bs_price,
    results_to_frame,
    strangle_strikes,
)


@dataclass(frozen=True)
class ExampleConfig:
    """Runtime configuration for the straddle/strangle example."""

    spot: float
    width: float
    volatility: float
    rate: float
    expiries: tuple[float, ...]


def _parse_args() -> ExampleConfig:
    parser = argparse.ArgumentParser(description="Compare straddle and strangle Greeks.")
    parser.add_argument("--spot", type=float, default=26100.0, help="Index level.")
    parser.add_argument(
        "--width",
        type=float,
        default=200.0,
        help="Strangle strike distance from ATM, in index points.",
    )
    parser.add_argument(
        "--volatility",
        type=float,
        default=0.12,
        help="Flat volatility used to generate the premiums.",
    )
    parser.add_argument("--rate", type=float, default=0.07, help="Risk-free rate.")
    parser.add_argument(
        "--expiries",
        type=float,
        nargs="+",
        default=[14.0, 7.0, 3.0, 1.0],
        help="Days to expiry to evaluate.",
    )
    args = parser.parse_args()

    return ExampleConfig(
        spot=float(args.spot),
        width=float(args.width),
        volatility=float(args.volatility),
        rate=float(args.rate),
        expiries=tuple(float(d) for d in args.expiries),
    )


def _leg(cfg: ExampleConfig, strike: float, option_type: str, days: float) -> ContractInput:
    premium = bs_price(
        cfg.spot, strike, days / 365.0, cfg.volatility, cfg.rate, option_type
    )
    return ContractInput(
        spot_price=cfg.spot,
        strike_price=strike,
        market_price=premium,
        option_type=option_type,
        days_to_expiry=days,
        risk_free_rate=cfg.rate,
    )


def main() -> None:
    cfg = _parse_args()
    combinator = MultiLegCombinator()

    atm = atm_strike(cfg.spot)
    ce_strike, pe_strike = strangle_strikes(cfg.spot, cfg.width)

    combined = {}
    for days in cfg.expiries:
        straddle = combinator.straddle(
            _leg(cfg, atm, "call", days), _leg(cfg, atm, "put", days)
        )
        strangle = combinator.strangle(
            _leg(cfg, ce_strike, "call", days), _leg(cfg, pe_strike, "put", days)
        )
        combined[f"straddle {days:g}d"] = straddle.combined
        combined[f"strangle {days:g}d"] = strangle.combined

    table = results_to_frame(combined)
    columns = ["market_price", "delta", "gamma", "theta", "vega", "risk_level"]
    with pd.option_context("display.width", 120, "display.precision", 4):
        print(f"Spot={cfg.spot:g}  ATM={atm:g}  strangle={pe_strike:g}/{ce_strike:g}")
        print(table[columns])


if __name__ == "__main__":
    main()
