"""
Host usage collection.

A provider wraps the statistics source (psutil by default) and the
collector turns its raw readings into a validated :class:`UsageSample`.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from numbers import Real
from typing import Any, Optional, Protocol

import psutil

from sysmon.errors import CollectionError

logger = logging.getLogger(__name__)

BYTES_PER_GB = 1024**3


@dataclass(frozen=True)
class UsageSample:
    """One CPU and memory reading."""

    cpu_percent: float
    memory_active: int
    memory_total: int

    @property
    def memory_percent(self) -> float:
        return self.memory_active / self.memory_total * 100

    @property
    def memory_used_gb(self) -> float:
        return self.memory_active / BYTES_PER_GB

    @property
    def memory_total_gb(self) -> float:
        return self.memory_total / BYTES_PER_GB


class UsageProvider(Protocol):
    """Source of raw host statistics."""

    def cpu_load(self) -> float:
        """Return the overall CPU load as a percentage."""
        ...

    def memory(self) -> Any:
        """Return an object exposing ``active`` and ``total`` in bytes."""
        ...


class PsutilProvider:
    """UsageProvider backed by psutil."""

    def __init__(self, prime_seconds: float = 0.1):
        """
        Initialize the provider.

        Args:
            prime_seconds: Blocking window for the very first CPU reading,
                since psutil measures load relative to the previous call.
        """
        self.prime_seconds = prime_seconds
        self._primed = False

    def cpu_load(self) -> float:
        if not self._primed:
            self._primed = True
            return psutil.cpu_percent(interval=self.prime_seconds)
        return psutil.cpu_percent(interval=None)

    def memory(self) -> Any:
        return psutil.virtual_memory()


def _require_number(name: str, value: Any) -> Real:
    if isinstance(value, bool) or not isinstance(value, Real):
        raise ValueError(f"{name} is not numeric: {value!r}")
    return value


class UsageCollector:
    """Samples CPU load and active memory through a provider."""

    def __init__(self, provider: Optional[UsageProvider] = None):
        self.provider: UsageProvider = provider or PsutilProvider()

    def sample(self) -> UsageSample:
        """
        Take one reading.

        Returns:
            A fresh UsageSample.

        Raises:
            CollectionError: The provider raised or returned malformed data.
        """
        try:
            cpu = _require_number("cpu load", self.provider.cpu_load())
            memory = self.provider.memory()
            active = _require_number("active memory", getattr(memory, "active", None))
            total = _require_number("total memory", getattr(memory, "total", None))
            if total <= 0:
                raise ValueError(f"total memory must be positive, got {total}")
        except Exception as exc:
            logger.debug("Usage provider failed", exc_info=True)
            raise CollectionError(
                str(exc) or exc.__class__.__name__,
                context={"provider": type(self.provider).__name__},
                cause=exc,
            ) from exc

        return UsageSample(
            cpu_percent=float(cpu),
            memory_active=int(active),
            memory_total=int(total),
        )
