"""
payloadguard core module.

Contains the error taxonomy and primitive kind tags shared by every layer.
"""

from payloadguard.core.errors import (
    PayloadGuardError,
    PolicyConfigurationError,
    ShapeDefinitionError,
)
from payloadguard.core.types import PYTHON_TYPE_KINDS, FieldKind

__all__ = [
    # Errors
    "PayloadGuardError",
    "ShapeDefinitionError",
    "PolicyConfigurationError",
    # Types
    "FieldKind",
    "PYTHON_TYPE_KINDS",
]
