"""The `logging` section of run configs and its command-line flags."""

from __future__ import annotations

import argparse
from collections.abc import Iterable, Mapping
from typing import Any

from options_analytics.utils.logging_config import setup_logging

DEFAULT_LOGGING: dict[str, Any] = {
    "level": "INFO",
    "format": "%(asctime)s %(levelname)s %(shortname)s - %(message)s",
    "file": None,
    "color": True,
    "modules": {},
}

# Older config files used the `setup_logging` keyword names directly.
_LEGACY_KEYS: dict[str, str] = {
    "fmt_console": "format",
    "log_file": "file",
    "colored": "color",
    "module_levels": "modules",
}


def parse_module_levels(specs: Iterable[str] | None) -> dict[str, str]:
    """Turn `["options_analytics.options.volatility=DEBUG"]` into a mapping."""
    levels: dict[str, str] = {}
    for spec in specs or ():
        name, sep, level = spec.partition("=")
        if not sep or not name.strip() or not level.strip():
            raise ValueError(f"Expected LOGGER=LEVEL, got {spec!r}")
        levels[name.strip()] = level.strip()
    return levels


def add_logging_args(parser: argparse.ArgumentParser) -> None:
    group = parser.add_argument_group("logging")
    group.add_argument("--log-level", help="Root logging level (e.g. INFO, DEBUG).")
    group.add_argument("--log-file", help="Also write logs to this file.")
    group.add_argument("--log-format", help="Console log format string.")
    group.add_argument(
        "--log-module",
        action="append",
        metavar="LOGGER=LEVEL",
        help="Per-logger level, repeatable "
        "(e.g. options_analytics.options.volatility=DEBUG).",
    )
    color = group.add_mutually_exclusive_group()
    color.add_argument(
        "--color", dest="log_color", action="store_true", help="Colour console levels."
    )
    color.add_argument(
        "--no-color", dest="log_color", action="store_false", help="Plain console output."
    )
    parser.set_defaults(log_color=None)


def _normalize_logging_config(config: Mapping[str, Any] | None) -> dict[str, Any]:
    """Fill defaults and map legacy keys; legacy keys win when both are set."""
    cfg = config or {}
    provided = {k: v for k, v in cfg.items() if k in DEFAULT_LOGGING and v is not None}
    provided.update(
        {_LEGACY_KEYS[k]: v for k, v in cfg.items() if k in _LEGACY_KEYS and v is not None}
    )
    return {**DEFAULT_LOGGING, **provided}


def setup_logging_from_config(config: Mapping[str, Any] | None) -> None:
    log_cfg = _normalize_logging_config(config)
    setup_logging(
        log_cfg["level"],
        fmt_console=log_cfg["format"],
        log_file=log_cfg["file"],
        module_levels=log_cfg["modules"] or None,
        colored=log_cfg["color"],
    )
