"""
payloadguard shape module.

Contains the shape descriptor builders and the filter engine.
"""

from payloadguard.shape.descriptor import (
    ArrayOf,
    FieldSpec,
    Primitive,
    Shape,
    array,
    shape,
    to_field_spec,
)
from payloadguard.shape.engine import apply_shape, removed_keys, strip_sensitive

__all__ = [
    # Descriptors
    "Shape",
    "ArrayOf",
    "Primitive",
    "FieldSpec",
    "shape",
    "array",
    "to_field_spec",
    # Engine
    "apply_shape",
    "strip_sensitive",
    "removed_keys",
]
