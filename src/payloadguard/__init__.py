"""
payloadguard - schema-driven payload sanitization for JSON web services.

payloadguard filters untrusted request and response bodies down to the fields
a shape declares safe, recursively, and never emits a field whose name is in
the sensitive-field policy, even when a shape is missing or incomplete. An
ASGI middleware applies it to FastAPI/Starlette apps and keeps a bounded log
of recent request observations.
"""

__version__ = "0.1.0"

from payloadguard.core.errors import (
    PayloadGuardError,
    PolicyConfigurationError,
    ShapeDefinitionError,
)
from payloadguard.core.types import FieldKind
from payloadguard.middleware import (
    GuardConfig,
    PayloadGuardMiddleware,
    RouteRegistry,
    guard_middleware,
    guard_response,
)
from payloadguard.monitor import (
    MonitorEntry,
    MonitorLog,
    create_monitor_router,
    mount_monitor,
)
from payloadguard.policy import (
    DEFAULT_SENSITIVE_FIELDS,
    PolicyConfig,
    SensitiveFieldPolicy,
    configure_policy,
    get_policy,
    reset_policy,
)
from payloadguard.shape import (
    ArrayOf,
    Primitive,
    Shape,
    apply_shape,
    array,
    shape,
    strip_sensitive,
)

__all__ = [
    # Version
    "__version__",
    # Shapes
    "shape",
    "array",
    "apply_shape",
    "strip_sensitive",
    "Shape",
    "ArrayOf",
    "Primitive",
    "FieldKind",
    # Policy
    "configure_policy",
    "reset_policy",
    "get_policy",
    "SensitiveFieldPolicy",
    "PolicyConfig",
    "DEFAULT_SENSITIVE_FIELDS",
    # Middleware
    "PayloadGuardMiddleware",
    "GuardConfig",
    "RouteRegistry",
    "guard_middleware",
    "guard_response",
    # Monitoring
    "MonitorLog",
    "MonitorEntry",
    "create_monitor_router",
    "mount_monitor",
    # Errors
    "PayloadGuardError",
    "ShapeDefinitionError",
    "PolicyConfigurationError",
]
