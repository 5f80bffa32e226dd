"""Periodic host CPU and memory sampler that appends readings to a log file."""

from sysmon.collector import PsutilProvider, UsageCollector, UsageSample
from sysmon.config import MonitorConfig, resolve_config
from sysmon.monitor import MonitorState, SystemMonitor
from sysmon.stop_token import StopToken
from sysmon.usage_log import UsageLog

__all__ = [
    "MonitorConfig",
    "MonitorState",
    "PsutilProvider",
    "StopToken",
    "SystemMonitor",
    "UsageCollector",
    "UsageLog",
    "UsageSample",
    "resolve_config",
]
