"""
FastAPI router exposing the monitoring log.
"""

from typing import Any

from fastapi import APIRouter, FastAPI

from payloadguard.monitor.log import MonitorLog


class MonitorRouter:
    """
    FastAPI router for reading and clearing a monitoring log.

    Usage:
        from fastapi import FastAPI
        from payloadguard.monitor import MonitorLog, MonitorRouter

        app = FastAPI()
        monitor = MonitorLog()

        app.include_router(MonitorRouter(monitor).router, prefix="/api/monitor")
    """

    def __init__(self, log: MonitorLog, prefix: str = "") -> None:
        """
        Initialize the router.

        Args:
            log: The monitoring log to expose
            prefix: Optional path prefix for routes
        """
        self.log = log
        self.router = APIRouter(prefix=prefix)

        self._setup_routes()

    def _setup_routes(self) -> None:
        @self.router.get("/logs")
        async def read_logs() -> list[dict[str, Any]]:
            """List observed requests, most recent first."""
            return [entry.to_log_dict() for entry in self.log.read_all()]

        @self.router.delete("/logs")
        async def clear_logs() -> dict[str, str]:
            """Drop all observed requests."""
            self.log.clear_all()
            return {"message": "API logs cleared"}


def create_monitor_router(log: MonitorLog, prefix: str = "/api/monitor") -> APIRouter:
    """
    Create a FastAPI router for a monitoring log.

    Usage:
        app.include_router(create_monitor_router(monitor))
    """
    return MonitorRouter(log, prefix=prefix).router


def mount_monitor(app: FastAPI, log: MonitorLog, prefix: str = "/api/monitor") -> None:
    """Mount the monitoring endpoints on a FastAPI app."""
    app.include_router(create_monitor_router(log, prefix=prefix))
