"""Monitor configuration and lenient command-line resolution."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterable

from pydantic import BaseModel, ConfigDict, Field

from sysmon.errors import ConfigParseError

logger = logging.getLogger(__name__)

DEFAULT_LOG_FILE = "system_performance.log"
DEFAULT_INTERVAL_SECONDS = 5

_INTERVAL_FLAGS = {"-i", "--interval"}
_LOGFILE_FLAGS = {"-f", "--logfile"}
_VERBOSE_FLAGS = {"-v", "--verbose"}


class MonitorConfig(BaseModel):
    """Settings fixed at start-up for the lifetime of the monitor."""

    model_config = ConfigDict(frozen=True)

    log_file: Path = Field(description="Absolute path of the append-only log file")
    interval: int = Field(
        default=DEFAULT_INTERVAL_SECONDS,
        gt=0,
        description="Seconds between sampling ticks",
    )
    verbose: bool = Field(default=False, description="Echo every record to the console")


def parse_bool_env(value: str | None) -> bool | None:
    """Parse a boolean from an environment variable string.

    Returns True for "1", "true", "yes", "on" (case-insensitive).
    Returns None if value is None.
    """
    if value is None:
        return None
    return value.strip().lower() in {"1", "true", "yes", "on"}


def parse_int_env(value: str | None) -> int | None:
    """Parse an integer from an environment variable string.

    Returns None if value is None or cannot be parsed.
    """
    if value is None:
        return None
    try:
        return int(value)
    except (TypeError, ValueError):
        return None


def parse_interval(value: str) -> int:
    """Return a strictly positive interval or raise ConfigParseError."""
    if not (value.isascii() and value.removeprefix("+").isdigit()):
        raise ConfigParseError(
            f"Interval {value!r} is not an integer", context={"value": value}
        )
    interval = int(value)
    if interval <= 0:
        raise ConfigParseError(
            f"Interval {interval} must be positive", context={"value": value}
        )
    return interval


def resolve_log_path(value: str | Path, cwd: Path | None = None) -> Path:
    """Resolve a log path to an absolute path, relative to ``cwd``."""
    path = Path(value).expanduser()
    if not path.is_absolute():
        path = (cwd or Path.cwd()) / path
    return path.resolve()


def resolve_config(args: Iterable[str], *, cwd: Path | None = None) -> MonitorConfig:
    """
    Build a MonitorConfig from raw command-line tokens.

    Malformed values degrade silently to defaults and unknown tokens are
    ignored, so this never raises for user input.

    Args:
        args: Tokens following the program name.
        cwd: Base directory for relative paths (defaults to the process cwd).
    """
    tokens = list(args)
    log_file = resolve_log_path(DEFAULT_LOG_FILE, cwd)
    interval = DEFAULT_INTERVAL_SECONDS
    verbose = False

    index = 0
    while index < len(tokens):
        token = tokens[index]
        has_value = index + 1 < len(tokens) and tokens[index + 1] != ""
        if token in _INTERVAL_FLAGS and has_value:
            try:
                interval = parse_interval(tokens[index + 1])
            except ConfigParseError as exc:
                logger.debug("Keeping interval %s: %s", interval, exc)
            index += 1
        elif token in _LOGFILE_FLAGS and has_value:
            log_file = resolve_log_path(tokens[index + 1], cwd)
            index += 1
        elif token in _VERBOSE_FLAGS:
            verbose = True
        index += 1

    return MonitorConfig(log_file=log_file, interval=interval, verbose=verbose)
