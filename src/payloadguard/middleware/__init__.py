"""
payloadguard middleware components.

ASGI middleware for inbound sanitization, outbound filtering and request
monitoring, plus the decorator for binding a shape to a single handler.
"""

from payloadguard.middleware.config import GuardConfig
from payloadguard.middleware.decorators import guard_response
from payloadguard.middleware.guard import PayloadGuardMiddleware, guard_middleware
from payloadguard.middleware.routes import RouteRegistry, RouteShapes

__all__ = [
    "GuardConfig",
    "PayloadGuardMiddleware",
    "guard_middleware",
    "RouteRegistry",
    "RouteShapes",
    "guard_response",
]
