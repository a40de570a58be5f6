"""Helpers shared by the app entrypoints: config flags and JSON output."""

from __future__ import annotations

import json
import math
from collections.abc import Mapping
from enum import Enum
from pathlib import Path
from typing import Any

from options_analytics.cli.logging import parse_module_levels

# argparse dest -> key in the `logging` config section
_LOGGING_FLAGS: dict[str, str] = {
    "log_level": "level",
    "log_file": "file",
    "log_format": "format",
    "log_color": "color",
}


def add_print_config_arg(parser) -> None:
    parser.add_argument(
        "--print-config",
        action="store_true",
        help="Print the merged config as JSON and exit.",
    )


def collect_logging_overrides(args) -> dict[str, Any]:
    """Logging section overrides for the flags actually given on the command line."""
    overrides = {
        key: getattr(args, dest)
        for dest, key in _LOGGING_FLAGS.items()
        if getattr(args, dest, None) is not None
    }
    modules = parse_module_levels(getattr(args, "log_module", None))
    if modules:
        overrides["modules"] = modules
    return overrides


def _jsonable(obj: Any) -> Any:
    """Strict-JSON view of configs and results.

    Paths become strings, enums their values and non-finite floats `null`.
    """
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, Path):
        return str(obj)
    if isinstance(obj, float):
        return obj if math.isfinite(obj) else None
    if isinstance(obj, Mapping):
        return {str(k): _jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple, set)):
        return [_jsonable(v) for v in obj]
    return obj


def to_json(payload: Mapping[str, Any]) -> str:
    return json.dumps(_jsonable(payload), indent=2, sort_keys=True, allow_nan=False)


def print_config(config: Mapping[str, Any]) -> None:
    print(to_json(config))
