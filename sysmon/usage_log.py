"""Append-only record log with best-effort writes."""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Callable, Optional

import typer

from sysmon.collector import UsageSample
from sysmon.errors import LogWriteError

logger = logging.getLogger(__name__)

TIMESTAMP_FORMAT = "%Y-%m-%d %H:%M:%S"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def format_line(message: str, when: datetime) -> str:
    """Render one record line, trailing newline included."""
    return f"{when.strftime(TIMESTAMP_FORMAT)} - INFO - {message}\n"


def format_start(log_file: Path, interval: int) -> str:
    return f"Starting system monitor. Logging to '{log_file}' every {interval} seconds."


def format_usage(sample: UsageSample) -> str:
    return (
        f"CPU: {sample.cpu_percent:.2f}% | "
        f"Memory: {sample.memory_percent:.2f}% "
        f"({sample.memory_used_gb:.2f} GB / {sample.memory_total_gb:.2f} GB used)"
    )


def format_fetch_error(detail: object) -> str:
    return f"ERROR - Failed to fetch system data: {detail}"


def format_fatal(detail: object) -> str:
    return f"FATAL - Monitoring failed to start: {detail}"


MONITORING_STOPPED = "Monitoring stopped."
SCRIPT_FINISHED = "System monitor script finished."


class UsageLog:
    """
    Writes record lines to the log file.

    Each write opens, appends and closes the file so nothing is held between
    ticks. Failures never propagate: they are reported on the console and the
    record is dropped.
    """

    def __init__(
        self,
        path: Path,
        *,
        verbose: bool = False,
        now: Callable[[], datetime] = _utc_now,
        echo: Callable[[str], None] = typer.echo,
    ) -> None:
        self.path = path
        self.verbose = verbose
        self._now = now
        self._echo = echo
        self.last_error: Optional[LogWriteError] = None

    def write(self, message: str, echo: bool = False) -> bool:
        """Append ``message`` as a record; return False if it was dropped."""
        line = format_line(message, self._now())
        try:
            with open(self.path, "a", encoding="utf-8") as handle:
                handle.write(line)
        except OSError as exc:
            self.last_error = LogWriteError(
                f"Failed to write to log file {self.path}: {exc}",
                context={"path": self.path},
                cause=exc,
            )
            logger.error("%s", self.last_error)
            return False

        if echo or self.verbose:
            self._echo(line.rstrip("\n"))
        return True
