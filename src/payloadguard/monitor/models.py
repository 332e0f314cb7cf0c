"""
Monitoring log entry model.
"""

from datetime import datetime, timezone
from typing import Any

from pydantic import BaseModel, Field


class MonitorEntry(BaseModel):
    """
    Record of one completed request/response cycle.

    Captures the status actually sent and the real elapsed latency.
    """

    timestamp: datetime
    method: str
    path: str
    status: int
    latency_ms: float = Field(ge=0)

    # 2xx and 3xx responses count as successful
    success: bool

    model_config = {"frozen": True}

    @classmethod
    def create(
        cls,
        method: str,
        path: str,
        status: int,
        latency_ms: float,
        timestamp: datetime | None = None,
    ) -> "MonitorEntry":
        """Build an entry, deriving success from the status code."""
        return cls(
            timestamp=timestamp or datetime.now(timezone.utc),
            method=method.upper(),
            path=path,
            status=status,
            latency_ms=latency_ms,
            success=200 <= status < 400,
        )

    def to_log_dict(self) -> dict[str, Any]:
        """Convert to a JSON-ready dict for the monitor endpoint."""
        data = self.model_dump()
        data["timestamp"] = self.timestamp.isoformat()
        data["latency"] = f"{round(self.latency_ms)}ms"
        return data
