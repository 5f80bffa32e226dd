"""Error types raised and recovered inside the monitor."""

from __future__ import annotations

from typing import Any, Mapping


class SysmonError(Exception):
    """Base error carrying the values that explain the failure."""

    def __init__(
        self,
        message: str,
        *,
        context: Mapping[str, Any] | None = None,
        cause: Exception | None = None,
    ) -> None:
        super().__init__(message)
        self.context = dict(context or {})
        if cause is not None:
            self.__cause__ = cause


class ConfigParseError(SysmonError):
    """Malformed command-line value; callers fall back to the default."""


class CollectionError(SysmonError):
    """The host statistics provider failed or returned malformed data."""


class LogWriteError(SysmonError):
    """Appending a record to the log file failed."""


class StartupError(SysmonError):
    """The first sample taken before the loop starts failed."""
