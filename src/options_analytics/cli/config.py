"""Layered run configuration for entrypoints.

Layers, lowest precedence first: built-in defaults, the YAML file given with
`--config` (or `$OPTIONS_ANALYTICS_CONFIG`), explicit CLI overrides. Only the
`analytics` section is interpreted here; every other section belongs to the
entrypoint that declares it.
"""

from __future__ import annotations

import copy
import os
from collections.abc import Mapping
from functools import reduce
from pathlib import Path
from typing import Any

import yaml

from options_analytics.options.config import DEFAULT_ANALYTICS, AnalyticsConfig

CONFIG_ENV_VAR = "OPTIONS_ANALYTICS_CONFIG"


def add_config_arg(parser, *, default: str | None = None) -> None:
    parser.add_argument(
        "--config",
        type=str,
        metavar="YAML",
        default=default if default is not None else os.environ.get(CONFIG_ENV_VAR),
        help=f"YAML run config (falls back to ${CONFIG_ENV_VAR}).",
    )


def load_yaml_config(path: str | Path | None) -> dict[str, Any]:
    """Parse a YAML config file; an empty file yields an empty mapping."""
    if path is None:
        return {}

    p = resolve_path(path)
    if not p.is_file():
        raise FileNotFoundError(f"Config file not found: {p}")

    data = yaml.safe_load(p.read_text(encoding="utf-8"))
    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(
            f"{p}: expected a YAML mapping at the top level, got {type(data).__name__}"
        )
    return data


def _merge_into(target: dict[str, Any], updates: Mapping[str, Any]) -> None:
    for key, value in updates.items():
        current = target.get(key)
        if isinstance(value, Mapping) and isinstance(current, dict):
            _merge_into(current, value)
        else:
            target[key] = copy.deepcopy(value)


def deep_merge(
    base: Mapping[str, Any],
    updates: Mapping[str, Any],
) -> dict[str, Any]:
    """Return a merged copy; nested mappings merge, anything else replaces."""
    merged = copy.deepcopy(dict(base))
    _merge_into(merged, updates)
    return merged


def build_config(
    defaults: Mapping[str, Any],
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> dict[str, Any]:
    layers = (load_yaml_config(yaml_path), overrides or {})
    return reduce(deep_merge, layers, dict(defaults))


def resolve_path(value: str | Path | None) -> Path | None:
    """Expand `~` and environment variables in user-supplied paths."""
    if value is None or isinstance(value, Path):
        return value
    return Path(os.path.expandvars(str(value))).expanduser()


def load_analytics_config(
    yaml_path: str | Path | None,
    overrides: Mapping[str, Any] | None = None,
) -> AnalyticsConfig:
    """Build an `AnalyticsConfig` from the `analytics` section of a YAML file."""
    merged = build_config(
        {"analytics": DEFAULT_ANALYTICS},
        yaml_path,
        {"analytics": overrides} if overrides else None,
    )
    return AnalyticsConfig.from_mapping(merged["analytics"])
