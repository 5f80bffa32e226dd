"""Sampling loop: start-up, recurring ticks and signal-driven shutdown."""

from __future__ import annotations

import logging
import time
from enum import Enum
from typing import Callable, Optional

import typer

from sysmon.collector import UsageCollector, UsageSample
from sysmon.config import MonitorConfig
from sysmon.errors import CollectionError, StartupError
from sysmon.stop_token import StopToken
from sysmon.usage_log import (
    MONITORING_STOPPED,
    SCRIPT_FINISHED,
    UsageLog,
    format_fatal,
    format_fetch_error,
    format_start,
    format_usage,
)

logger = logging.getLogger(__name__)

EXIT_OK = 0
EXIT_STARTUP_FAILED = 1


class MonitorState(str, Enum):
    STARTING = "starting"
    RUNNING = "running"
    STOPPING = "stopping"
    STOPPED = "stopped"


class SystemMonitor:
    """
    Samples host usage once at start-up and then every ``config.interval``
    seconds until the stop token trips.

    Ticks run on the calling thread at fixed offsets from the first one, so
    two ticks never overlap; a tick that overruns its slot makes the loop
    skip the missed slots instead of firing them back-to-back.
    """

    def __init__(
        self,
        config: MonitorConfig,
        collector: Optional[UsageCollector] = None,
        usage_log: Optional[UsageLog] = None,
        stop_token: Optional[StopToken] = None,
        clock: Callable[[], float] = time.monotonic,
    ) -> None:
        self.config = config
        self.collector = collector or UsageCollector()
        self.usage_log = usage_log or UsageLog(config.log_file, verbose=config.verbose)
        self._stop_token = stop_token
        self._clock = clock
        self._state = MonitorState.STARTING
        self.ticks = 0

    @property
    def state(self) -> MonitorState:
        return self._state

    def run(self) -> int:
        """Run until stopped and return the process exit code."""
        token = self._stop_token or StopToken()
        with token:
            try:
                self._start()
            except StartupError as exc:
                logger.error("Monitoring failed to start: %s", exc)
                self.usage_log.write(format_fatal(exc))
                self._state = MonitorState.STOPPED
                return EXIT_STARTUP_FAILED

            self._state = MonitorState.RUNNING
            self._loop(token)
            self._shutdown()
        return EXIT_OK

    def tick(self) -> Optional[UsageSample]:
        """Sample once and log the reading, or the failure."""
        self.ticks += 1
        try:
            sample = self.collector.sample()
        except CollectionError as exc:
            logger.error("Failed to fetch system data: %s", exc)
            self.usage_log.write(format_fetch_error(exc))
            return None
        self.usage_log.write(format_usage(sample))
        return sample

    def _start(self) -> None:
        self.usage_log.write(
            format_start(self.config.log_file, self.config.interval), echo=True
        )
        if self.config.verbose:
            typer.echo("Press Ctrl+C to stop.")

        self.ticks += 1
        try:
            sample = self.collector.sample()
        except CollectionError as exc:
            raise StartupError(
                str(exc), context={"interval": self.config.interval}, cause=exc
            ) from exc
        self.usage_log.write(format_usage(sample))

    def _loop(self, token: StopToken) -> None:
        interval = self.config.interval
        next_tick = self._clock() + interval
        while not token.should_stop():
            remaining = next_tick - self._clock()
            if remaining > 0 and token.wait(remaining):
                break
            if token.should_stop():
                break
            self.tick()
            next_tick += interval
            now = self._clock()
            if next_tick <= now:
                skipped = int((now - next_tick) // interval) + 1
                logger.warning("Tick overran the interval, skipping %d slot(s)", skipped)
                next_tick += skipped * interval

    def _shutdown(self) -> None:
        self._state = MonitorState.STOPPING
        typer.echo("\nReceived shutdown signal. Stopping monitor...")
        self.usage_log.write(MONITORING_STOPPED)
        self.usage_log.write(SCRIPT_FINISHED)
        typer.echo("Monitor stopped. Log file saved.")
        self._state = MonitorState.STOPPED
