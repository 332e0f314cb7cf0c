"""
Per-route shape registry.

Routes are keyed by HTTP method and a Starlette path template
(``/api/employees/{id}``). The middleware looks shapes up before routing
happens, so templates are matched against the raw request path.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any

from starlette.routing import compile_path

from payloadguard.shape.descriptor import ArrayOf, Primitive, Shape, to_field_spec


@dataclass(frozen=True)
class RouteShapes:
    """Shapes bound to one route."""

    method: str
    path: str
    pattern: re.Pattern[str]
    request: Shape | ArrayOf | Primitive | None = None
    response: Shape | ArrayOf | Primitive | None = None


class RouteRegistry:
    """
    Registry of request/response shapes by route.

    Example:
        routes = RouteRegistry()
        routes.register("GET", "/api/employees", response=array(employee_shape))
        routes.register("PUT", "/api/employees/{id}", request=employee_shape)
    """

    def __init__(self) -> None:
        self._routes: list[RouteShapes] = []

    def register(
        self,
        method: str,
        path: str,
        *,
        request: Any = None,
        response: Any = None,
    ) -> RouteShapes:
        """
        Bind shapes to a route. Re-registering a route replaces its shapes.

        Raises:
            ShapeDefinitionError: If a shape is malformed
        """
        pattern, _, _ = compile_path(path)
        entry = RouteShapes(
            method=method.upper(),
            path=path,
            pattern=pattern,
            request=to_field_spec(request) if request is not None else None,
            response=to_field_spec(response) if response is not None else None,
        )
        self._routes = [
            r for r in self._routes if (r.method, r.path) != (entry.method, entry.path)
        ]
        self._routes.append(entry)
        return entry

    def match(self, method: str, path: str) -> RouteShapes | None:
        """Find the shapes registered for a request, if any."""
        method = method.upper()
        for route in self._routes:
            if route.method == method and route.pattern.match(path):
                return route
        return None

    def __len__(self) -> int:
        return len(self._routes)
