"""
Filter engine.

Projects an untrusted value onto a shape: only declared keys survive, values
must match their declared kind, and names in the sensitive-field policy are
dropped even when declared. Filtering never raises on malformed input; the
worst case is an empty or partial result.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from payloadguard.policy.sensitive import SensitiveFieldPolicy, get_policy
from payloadguard.shape.descriptor import ArrayOf, FieldSpec, Primitive, Shape, to_field_spec

# Marker for a value omitted from the output
ABSENT: Any = object()


def _as_mapping(value: Any) -> Mapping[str, Any] | None:
    """Read a mapping-like value, or None if the value is not one."""
    if isinstance(value, Mapping):
        return value
    if isinstance(value, BaseModel):
        return value.model_dump()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return {f.name: getattr(value, f.name) for f in dataclasses.fields(value)}
    return None


def _is_sequence(value: Any) -> bool:
    return isinstance(value, list | tuple)


def _apply(spec: FieldSpec, value: Any, sensitive: frozenset[str]) -> Any:
    match spec:
        case Primitive(kind=kind):
            if value is ABSENT or not kind.matches(value):
                return ABSENT
            return value

        case ArrayOf(item=item):
            if not _is_sequence(value):
                return []
            items = []
            for element in value:
                filtered = _apply(item, element, sensitive)
                if filtered is not ABSENT:
                    items.append(filtered)
            return items

        case Shape():
            source = _as_mapping(value) if value is not ABSENT else None
            result: dict[str, Any] = {}
            for name, field_spec in spec.entries:
                if name in sensitive:
                    continue
                raw = ABSENT
                if source is not None and name in source:
                    raw = source[name]
                filtered = _apply(field_spec, raw, sensitive)
                if filtered is not ABSENT:
                    result[name] = filtered
            return result

    return ABSENT


def apply_shape(
    spec: Shape | ArrayOf | Primitive | Mapping[str, Any],
    value: Any,
    *,
    policy: SensitiveFieldPolicy | None = None,
) -> Any:
    """
    Filter a value through a shape or array spec.

    Args:
        spec: Shape, ArrayOf, Primitive, or a plain mapping built into a shape
        value: Untrusted input (never mutated)
        policy: Sensitive-field policy to consult (defaults to the process-wide one)

    Returns:
        A new dict for shapes, a new list for arrays. A primitive spec returns
        the value when its kind matches and None otherwise.

    Raises:
        ShapeDefinitionError: Only if spec itself is malformed
    """
    spec = to_field_spec(spec)
    sensitive = (policy if policy is not None else get_policy()).snapshot()
    result = _apply(spec, value, sensitive)
    return None if result is ABSENT else result


def strip_sensitive(
    value: Any,
    *,
    policy: SensitiveFieldPolicy | None = None,
) -> Any:
    """
    Permissive sanitization: keep every top-level key except sensitive ones.

    Mappings lose their sensitive keys; a top-level list has each mapping
    element stripped the same way. Other values are returned unchanged.
    """
    sensitive = (policy if policy is not None else get_policy()).snapshot()

    def strip(item: Any) -> Any:
        if isinstance(item, Mapping):
            return {k: v for k, v in item.items() if k not in sensitive}
        return item

    if _is_sequence(value):
        return [strip(item) for item in value]
    return strip(value)


def removed_keys(before: Any, after: Any) -> list[str]:
    """List the top-level keys present in before but not in after."""
    source = _as_mapping(before)
    if source is None or not isinstance(after, Mapping):
        return []
    return [str(key) for key in source if key not in after]


__all__ = [
    "apply_shape",
    "strip_sensitive",
    "removed_keys",
]
