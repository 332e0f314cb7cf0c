"""
Employee service guarded by payloadguard.

Run with:
    uvicorn app.main:app --reload
"""

import os
from typing import Any

from fastapi import FastAPI, HTTPException
from pydantic import BaseModel

from app.storage import EmployeeStore
from payloadguard import (
    GuardConfig,
    MonitorLog,
    PayloadGuardMiddleware,
    RouteRegistry,
    array,
    configure_policy,
    guard_response,
    mount_monitor,
    shape,
)
from payloadguard.logging import configure_logging

# === Shapes ===

employee_shape = shape(
    {
        "id": "any",
        "emp_id": "string",
        "name": "string",
        "email": "string",
        "phone": "string",
        "role": "string",
        "department": "string",
        "gender": "string",
        "salary": "string",
        "dob": "any",
        "address": "string",
        "experience": "string",
        "created_at": "any",
    }
)


class EmployeeIn(BaseModel):
    emp_id: str | None = None
    name: str
    email: str
    phone: str | None = None
    role: str
    department: str | None = None
    gender: str | None = None
    salary: str | None = None
    dob: str | None = None
    address: str | None = None
    experience: str | None = None


class EmployeeUpdate(BaseModel):
    emp_id: str | None = None
    name: str | None = None
    email: str | None = None
    phone: str | None = None
    role: str | None = None
    department: str | None = None
    gender: str | None = None
    salary: str | None = None
    dob: str | None = None
    address: str | None = None
    experience: str | None = None


# === App Setup ===

configure_logging(
    level=os.environ.get("LOG_LEVEL", "INFO"),
    format=os.environ.get("LOG_FORMAT", "text"),
)
configure_policy(sensitive_fields=["ssn", "bank_account"], merge=True)

monitor = MonitorLog()
store = EmployeeStore()

routes = RouteRegistry()
routes.register("GET", "/api/employees", response=array(employee_shape))
routes.register("GET", "/api/employees/{employee_id}", response=employee_shape)

config = GuardConfig.from_env()
config = GuardConfig(
    sanitize_inbound=config.sanitize_inbound,
    auto_filter_outbound=config.auto_filter_outbound,
    verbose=config.verbose or os.environ.get("APP_ENV") == "development",
    exclude_paths=(*config.exclude_paths, "/api/monitor/logs"),
)

app = FastAPI(
    title="Employee Service",
    description="Employee CRUD API with payload sanitization",
    version="0.1.0",
)
app.add_middleware(PayloadGuardMiddleware, config=config, routes=routes, monitor=monitor)
mount_monitor(app, monitor)


# === Routes ===


@app.post("/api/employees", status_code=201)
@guard_response(employee_shape)
async def register_employee(employee: EmployeeIn) -> Any:
    """Register an employee."""
    return store.create(employee.model_dump(exclude_none=True))


@app.get("/api/employees")
async def list_employees() -> Any:
    """List employees, newest first. Filtered by the middleware."""
    return store.list()


@app.get("/api/employees/{employee_id}")
async def get_employee(employee_id: str) -> Any:
    """Fetch one employee. Filtered by the middleware."""
    record = store.get(employee_id)
    if record is None:
        raise HTTPException(status_code=404, detail="Employee not found")
    return record


@app.put("/api/employees/{employee_id}")
@guard_response(employee_shape)
async def update_employee(employee_id: str, changes: EmployeeUpdate) -> Any:
    """Update an employee."""
    record = store.update(employee_id, changes.model_dump(exclude_none=True))
    if record is None:
        raise HTTPException(status_code=404, detail="Employee not found")
    return record


@app.delete("/api/employees/{employee_id}")
async def delete_employee(employee_id: str) -> dict[str, str]:
    """Delete an employee."""
    if not store.delete(employee_id):
        raise HTTPException(status_code=404, detail="Employee not found")
    return {"message": "Employee deleted successfully"}
