"""Logging setup for entrypoints (the CLI, notebooks, the dashboard bridge).

Analytics modules only ever do `logger = logging.getLogger(__name__)`; the
process embedding them calls `setup_logging(...)` once.

Every handler installed here adds `record.shortname`, the last dotted part
of the logger name, so formats may use `%(shortname)s` (`implied` rather
than `options_analytics.options.volatility.implied`).
"""

from __future__ import annotations

import copy
import logging
from collections.abc import Mapping
from pathlib import Path

DEFAULT_FORMAT = "%(asctime)s %(levelname)s %(name)s - %(message)s"
DEFAULT_DATEFMT = "%Y-%m-%d %H:%M:%S"


class _ShortNameFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.shortname = record.name.rpartition(".")[2]
        return True


class _ColorFormatter(logging.Formatter):
    """Wrap the level name in ANSI colour codes; console output only."""

    _RESET = "\033[0m"
    _LEVEL_COLOR: dict[int, str] = {
        logging.DEBUG: "\033[36m",
        logging.INFO: "\033[32m",
        logging.WARNING: "\033[33m",
        logging.ERROR: "\033[31m",
        logging.CRITICAL: "\033[1;31m",
    }

    def format(self, record: logging.LogRecord) -> str:
        color = self._LEVEL_COLOR.get(record.levelno)
        if color is None:
            return super().format(record)
        # Other handlers share the record, so colour a copy.
        tinted = copy.copy(record)
        tinted.levelname = f"{color}{record.levelname}{self._RESET}"
        return super().format(tinted)


def coerce_level(level: int | str) -> int:
    """Accept `logging.DEBUG`, `"debug"`, `"10"` and friends."""
    if isinstance(level, int):
        return level

    name = str(level).strip().upper()
    if not name:
        raise ValueError("Empty logging level")
    if name.isdigit():
        return int(name)

    resolved = logging.getLevelNamesMapping().get(name)
    if resolved is None:
        raise ValueError(f"Unknown logging level: {level!r}")
    return resolved


def _console_handler(fmt: str, datefmt: str, colored: bool) -> logging.Handler:
    handler = logging.StreamHandler()
    formatter_cls = _ColorFormatter if colored else logging.Formatter
    handler.setFormatter(formatter_cls(fmt=fmt, datefmt=datefmt))
    return handler


def _file_handler(path: str | Path, fmt: str, datefmt: str) -> logging.Handler:
    p = Path(path)
    p.parent.mkdir(parents=True, exist_ok=True)
    handler = logging.FileHandler(p, encoding="utf-8")
    handler.setFormatter(logging.Formatter(fmt=fmt, datefmt=datefmt))
    return handler


def setup_logging(
    level: int | str = "INFO",
    *,
    fmt_console: str = DEFAULT_FORMAT,
    fmt_file: str = DEFAULT_FORMAT,
    datefmt: str = DEFAULT_DATEFMT,
    log_file: str | Path | None = None,
    module_levels: Mapping[str, int | str] | None = None,
    colored: bool = False,
) -> None:
    """Configure the root logger.

    Parameters
    - level: root level, int or name.
    - fmt_console / fmt_file: formats for the console and the optional file.
    - log_file: also write uncoloured records to this file.
    - module_levels: per-logger overrides, e.g.
      `{"options_analytics.options.volatility": "DEBUG"}` to trace IV solves.
    - colored: colourise console level names.

    Uses `force=True` so repeated calls (notebooks, tests) replace handlers.
    """
    handlers = [_console_handler(fmt_console, datefmt, colored)]
    if log_file is not None:
        handlers.append(_file_handler(log_file, fmt_file, datefmt))
    for handler in handlers:
        handler.addFilter(_ShortNameFilter())

    logging.basicConfig(level=coerce_level(level), handlers=handlers, force=True)

    for name, lvl in (module_levels or {}).items():
        logging.getLogger(name).setLevel(coerce_level(lvl))
