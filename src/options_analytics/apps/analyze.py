#!/usr/bin/env python
"""Compute Greeks, implied volatility and risk for an option, straddle or strangle.

Examples:
    options-analytics --strategy straddle --spot 26100 --dte 5 \
        --ce-price 150 --pe-price 120
    options-analytics --strategy strangle --spot 26100 --dte 5 \
        --ce-strike 26200 --ce-price 120 --pe-strike 26000 --pe-price 100
    options-analytics --strategy single --spot 26100 --dte 5 \
        --option-type CE --price 150 --history-csv nifty_daily.csv
"""

from __future__ import annotations

import argparse
import logging
from pathlib import Path
from typing import Any

import pandas as pd

from options_analytics.apps._cli import (
    add_print_config_arg,
    collect_logging_overrides,
    print_config,
    to_json,
)
from options_analytics.cli import (
    DEFAULT_LOGGING,
    add_config_arg,
    add_logging_args,
    build_config,
    resolve_path,
    setup_logging_from_config,
)
from options_analytics.options import (
    DEFAULT_ANALYTICS,
    AnalyticsConfig,
    ContractInput,
    MultiLegCombinator,
    SingleLegAnalyzer,
    atm_strike,
)

STRATEGIES = ("single", "straddle", "strangle")

DEFAULT_CONFIG: dict[str, Any] = {
    "logging": DEFAULT_LOGGING,
    "analytics": DEFAULT_ANALYTICS,
    "strike_step": 100.0,
    "history": {
        "csv": None,
        "column": "close",
    },
}


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Black-Scholes Greeks, IV and risk for options and combinations."
    )
    add_config_arg(parser)
    add_logging_args(parser)
    add_print_config_arg(parser)

    parser.add_argument("--strategy", choices=STRATEGIES, default="straddle")
    parser.add_argument("--spot", type=float, default=None, help="Underlying price.")
    parser.add_argument(
        "--dte", type=float, default=None, help="Calendar days to expiry (fractional ok)."
    )
    parser.add_argument(
        "--rate", type=float, default=None, help="Annual risk-free rate, decimal."
    )
    parser.add_argument("--strike-step", type=float, default=None)

    parser.add_argument("--option-type", type=str, default="call")
    parser.add_argument("--strike", type=float, default=None)
    parser.add_argument("--price", type=float, default=None)

    parser.add_argument("--ce-strike", type=float, default=None)
    parser.add_argument("--ce-price", type=float, default=None)
    parser.add_argument("--pe-strike", type=float, default=None)
    parser.add_argument("--pe-price", type=float, default=None)

    parser.add_argument(
        "--no-iv",
        dest="use_iv",
        action="store_false",
        help="Skip implied-volatility solving (use HV or the default vol).",
    )
    parser.add_argument(
        "--history-csv",
        type=str,
        default=None,
        help="CSV of historical spot closes (oldest first) for the HV fallback.",
    )
    parser.add_argument("--history-column", type=str, default=None)
    return parser


def _build_overrides(args: argparse.Namespace) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    history: dict[str, Any] = {}

    if args.rate is not None:
        overrides["analytics"] = {"default_risk_free_rate": args.rate}
    if args.strike_step is not None:
        overrides["strike_step"] = args.strike_step

    if args.history_csv is not None:
        history["csv"] = args.history_csv
    if args.history_column is not None:
        history["column"] = args.history_column
    if history:
        overrides["history"] = history

    logging_overrides = collect_logging_overrides(args)
    if logging_overrides:
        overrides["logging"] = logging_overrides

    return overrides


def load_history(path: Path | None, column: str) -> tuple[float, ...] | None:
    """Read an ordered price column from CSV; None when no file is configured."""
    if path is None:
        return None
    frame = pd.read_csv(path)
    if column not in frame.columns:
        raise ValueError(
            f"Column '{column}' not found in {path}. Available: {list(frame.columns)}"
        )
    prices = pd.to_numeric(frame[column], errors="coerce").dropna()
    return tuple(prices.astype(float).tolist())


def _validate_args(parser: argparse.ArgumentParser, args: argparse.Namespace) -> None:
    if args.spot is None or args.dte is None:
        parser.error("--spot and --dte are required")
    if args.strategy == "single" and args.price is None:
        parser.error("--price is required for --strategy single")
    if args.strategy in ("straddle", "strangle") and (
        args.ce_price is None or args.pe_price is None
    ):
        parser.error(f"--ce-price and --pe-price are required for {args.strategy}")
    if args.strategy == "strangle" and (args.ce_strike is None or args.pe_strike is None):
        parser.error("--ce-strike and --pe-strike are required for strangle")


def _contract(
    *,
    spot: float,
    strike: float,
    price: float,
    option_type: str,
    dte: float,
    rate: float,
    use_iv: bool,
    history: tuple[float, ...] | None,
) -> ContractInput:
    return ContractInput(
        spot_price=spot,
        strike_price=strike,
        market_price=price,
        option_type=option_type,
        days_to_expiry=dte,
        risk_free_rate=rate,
        use_implied_volatility=use_iv,
        historical_spot_prices=history,
    )


def run(args: argparse.Namespace, config: dict[str, Any]) -> dict[str, Any]:
    """Analyse the requested position and return a JSON-ready mapping."""
    logger = logging.getLogger(__name__)
    analytics = AnalyticsConfig.from_mapping(config["analytics"])
    step = float(config["strike_step"])
    history = load_history(
        resolve_path(config["history"]["csv"]), config["history"]["column"]
    )
    rate = analytics.default_risk_free_rate
    atm = atm_strike(args.spot, step)
    common = {
        "spot": args.spot,
        "dte": args.dte,
        "rate": rate,
        "use_iv": args.use_iv,
        "history": history,
    }

    logger.info("Strategy:  %s", args.strategy)
    logger.info("Spot:      %s (ATM strike %s)", args.spot, atm)
    logger.info("DTE:       %s", args.dte)
    logger.info("History:   %s prices", 0 if history is None else len(history))

    analyzer = SingleLegAnalyzer(config=analytics)
    if args.strategy == "single":
        strike = atm if args.strike is None else args.strike
        contract = _contract(
            strike=strike, price=args.price, option_type=args.option_type, **common
        )
        return {"strategy": "single", "result": analyzer.analyze(contract).to_dict()}

    ce = _contract(
        strike=atm if args.ce_strike is None else args.ce_strike,
        price=args.ce_price,
        option_type="call",
        **common,
    )
    pe = _contract(
        strike=atm if args.pe_strike is None else args.pe_strike,
        price=args.pe_price,
        option_type="put",
        **common,
    )
    combinator = MultiLegCombinator(analyzer=analyzer)
    if args.strategy == "straddle":
        return combinator.straddle(ce, pe).to_dict()
    return combinator.strangle(ce, pe).to_dict()


def main(argv: list[str] | None = None) -> None:
    parser = _build_parser()
    args = parser.parse_args(argv)
    try:
        overrides = _build_overrides(args)
    except ValueError as e:
        parser.error(str(e))
    config = build_config(DEFAULT_CONFIG, args.config, overrides)
    if args.print_config:
        print_config(config)
        return

    _validate_args(parser, args)
    setup_logging_from_config(config.get("logging"))
    logger = logging.getLogger(__name__)

    try:
        result = run(args, config)
    except ValueError as e:
        # Includes InvalidContractError.
        logger.error("Cannot analyse request: %s", e)
        raise SystemExit(2) from e

    print(to_json(result))


if __name__ == "__main__":
    main()
