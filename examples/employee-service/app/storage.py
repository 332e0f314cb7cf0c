"""
In-memory employee storage for the example service.
"""

import threading
import uuid
from datetime import datetime, timezone
from typing import Any


class EmployeeStore:
    """Employee records keyed by id, newest first when listed."""

    def __init__(self) -> None:
        self._records: dict[str, dict[str, Any]] = {}
        self._lock = threading.Lock()

    def create(self, data: dict[str, Any]) -> dict[str, Any]:
        record = {
            **data,
            "id": uuid.uuid4().hex,
            "created_at": datetime.now(timezone.utc).isoformat(),
        }
        with self._lock:
            self._records[record["id"]] = record
        return record

    def list(self) -> list[dict[str, Any]]:
        with self._lock:
            records = list(self._records.values())
        return sorted(records, key=lambda r: r["created_at"], reverse=True)

    def get(self, employee_id: str) -> dict[str, Any] | None:
        with self._lock:
            return self._records.get(employee_id)

    def update(self, employee_id: str, changes: dict[str, Any]) -> dict[str, Any] | None:
        with self._lock:
            record = self._records.get(employee_id)
            if record is None:
                return None
            record.update({k: v for k, v in changes.items() if k not in ("id", "created_at")})
            return dict(record)

    def delete(self, employee_id: str) -> bool:
        with self._lock:
            return self._records.pop(employee_id, None) is not None
