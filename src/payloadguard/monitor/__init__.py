"""
payloadguard monitor module.

Bounded log of recent request/response observations and the FastAPI routes
that expose it.
"""

from payloadguard.monitor.log import DEFAULT_CAPACITY, MonitorLog
from payloadguard.monitor.models import MonitorEntry
from payloadguard.monitor.router import MonitorRouter, create_monitor_router, mount_monitor

__all__ = [
    "MonitorEntry",
    "MonitorLog",
    "DEFAULT_CAPACITY",
    "MonitorRouter",
    "create_monitor_router",
    "mount_monitor",
]
