"""Diagnostic console logging using structlog.

The record log written by :mod:`sysmon.usage_log` has a fixed line format and
does not go through here; this only covers what the monitor reports about
itself on stderr.
"""

from __future__ import annotations

import logging
import os
import sys

import structlog

from sysmon.config import parse_bool_env, parse_int_env

LEVEL_ENV = "SYSMON_LOG_LEVEL"
JSON_ENV = "SYSMON_LOG_JSON"


def _resolve_level(value: str | int | None, debug: bool) -> int:
    if debug:
        return logging.DEBUG
    if value is None:
        return logging.INFO
    if isinstance(value, int):
        return value
    numeric = parse_int_env(value)
    if numeric is not None:
        return numeric
    return logging.getLevelNamesMapping().get(value.upper(), logging.INFO)


def _shared_processors() -> list[structlog.types.Processor]:
    return [
        structlog.contextvars.merge_contextvars,
        structlog.processors.add_log_level,
        structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S", utc=True),
    ]


def configure_logging(
    *,
    level: str | int | None = None,
    debug: bool = False,
    json: bool | None = None,
    force: bool = False,
) -> None:
    """Configure stdlib logging and structlog with a shared stderr formatter."""
    resolved_level = _resolve_level(level or os.environ.get(LEVEL_ENV), debug)
    env_json = parse_bool_env(os.environ.get(JSON_ENV))
    resolved_json = env_json if json is None else json

    renderer: structlog.types.Processor
    if resolved_json:
        renderer = structlog.processors.JSONRenderer()
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=False)

    structlog.configure(
        processors=[
            *_shared_processors(),
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    if root_logger.handlers and not force:
        return
    if force:
        root_logger.handlers.clear()

    handler = logging.StreamHandler(sys.stderr)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=renderer,
            foreign_pre_chain=_shared_processors(),
        )
    )
    root_logger.setLevel(resolved_level)
    root_logger.addHandler(handler)
