"""
Route decorators.

``guard_response`` binds a shape to a single handler: whatever the handler
returns is filtered before the framework serializes it.
"""

from __future__ import annotations

import functools
import inspect
from collections.abc import Callable
from typing import Any, TypeVar

from starlette.responses import Response

from payloadguard.policy.sensitive import SensitiveFieldPolicy
from payloadguard.shape.descriptor import to_field_spec
from payloadguard.shape.engine import apply_shape

F = TypeVar("F", bound=Callable[..., Any])


def guard_response(
    spec: Any,
    *,
    policy: SensitiveFieldPolicy | None = None,
) -> Callable[[F], F]:
    """
    Filter a route handler's return value through a shape.

    Works for sync and async handlers. Handlers that return a Response object
    bypass filtering, so explicit error responses are sent as built.

    Usage:
        @app.get("/api/employees")
        @guard_response(array(employee_shape))
        async def list_employees():
            return await repo.find_all()

    Raises:
        ShapeDefinitionError: At decoration time, if spec is malformed
    """
    bound = to_field_spec(spec)

    def _filter(result: Any) -> Any:
        if isinstance(result, Response):
            return result
        return apply_shape(bound, result, policy=policy)

    def decorator(fn: F) -> F:
        if inspect.iscoroutinefunction(fn):

            @functools.wraps(fn)
            async def async_wrapper(*args: Any, **kwargs: Any) -> Any:
                return _filter(await fn(*args, **kwargs))

            return async_wrapper  # type: ignore[return-value]

        @functools.wraps(fn)
        def sync_wrapper(*args: Any, **kwargs: Any) -> Any:
            return _filter(fn(*args, **kwargs))

        return sync_wrapper  # type: ignore[return-value]

    return decorator
