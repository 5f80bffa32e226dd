"""Fixtures shared by the sysmon unit tests."""

from __future__ import annotations

from pathlib import Path

import pytest

from sysmon.collector import BYTES_PER_GB, UsageCollector
from sysmon.config import MonitorConfig
from sysmon.usage_log import UsageLog
from tests.helpers.fakes import FIXED_NOW, ScriptedProvider


@pytest.fixture
def log_path(tmp_path: Path) -> Path:
    return tmp_path / "monitor.log"


@pytest.fixture
def make_config(log_path: Path):
    def _make(**overrides) -> MonitorConfig:
        values = {"log_file": log_path, "interval": 5, "verbose": False}
        values.update(overrides)
        return MonitorConfig(**values)

    return _make


@pytest.fixture
def steady_collector() -> UsageCollector:
    return UsageCollector(
        ScriptedProvider([(25.0, 4 * BYTES_PER_GB, 16 * BYTES_PER_GB)])
    )


@pytest.fixture
def fixed_log(log_path: Path) -> UsageLog:
    return UsageLog(log_path, now=lambda: FIXED_NOW)
