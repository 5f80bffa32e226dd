"""Signal-driven stop token observed by the monitor loop."""

from __future__ import annotations

import logging
import signal
import threading
from typing import Callable, Dict

logger = logging.getLogger(__name__)

STOP_SIGNALS = (signal.SIGINT, signal.SIGTERM)


class StopToken:
    """
    Lightweight cooperative stop controller.

    SIGINT/SIGTERM only trip the token; the loop notices it between ticks or
    while waiting for the next one, so shutdown runs on the main flow rather
    than inside the signal handler.
    """

    def __init__(self, enable_signals: bool = True) -> None:
        self._stopped = threading.Event()
        self._prev_handlers: Dict[int, Callable] = {}
        if enable_signals:
            self._install_signal_handlers()

    def _install_signal_handlers(self) -> None:
        """Capture SIGINT/SIGTERM and mark the token as stopped."""
        for sig in STOP_SIGNALS:
            try:
                previous = signal.getsignal(sig)
                signal.signal(sig, self._handle_signal)  # type: ignore[arg-type]
                if previous is not None:
                    self._prev_handlers[sig] = previous
            except (ValueError, OSError) as exc:
                # Not the main thread, or the platform lacks the signal.
                logger.debug("Cannot install handler for %s: %s", sig, exc)

    def _handle_signal(self, signum: int, frame) -> None:  # type: ignore[override]
        self.request_stop()

    def request_stop(self) -> None:
        """Mark the token as stopped; repeated calls are no-ops."""
        self._stopped.set()

    def should_stop(self) -> bool:
        """Return True when stop was requested."""
        return self._stopped.is_set()

    def wait(self, timeout: float) -> bool:
        """Block up to ``timeout`` seconds; return True if stop was requested."""
        return self._stopped.wait(timeout)

    def restore(self) -> None:
        """Restore original signal handlers."""
        for sig, handler in self._prev_handlers.items():
            try:
                signal.signal(sig, handler)  # type: ignore[arg-type]
            except (ValueError, OSError) as exc:
                logger.debug("Cannot restore handler for %s: %s", sig, exc)
        self._prev_handlers.clear()

    def __enter__(self) -> "StopToken":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.restore()
