"""
Shape descriptors.

A shape is a declarative whitelist: which keys a value may carry and what
kind each key's value must be. Field specs form a closed variant:

- Primitive(kind): a string, number, boolean or any-typed leaf
- Shape: an embedded object
- ArrayOf(spec): a homogeneous list

Shapes are immutable and built bottom-up, so they can never be cyclic.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, Union

from payloadguard.core.errors import ShapeDefinitionError
from payloadguard.core.types import PYTHON_TYPE_KINDS, FieldKind

if TYPE_CHECKING:
    from payloadguard.policy.sensitive import SensitiveFieldPolicy


@dataclass(frozen=True)
class Primitive:
    """A leaf field checked against a kind tag."""

    kind: FieldKind

    def __repr__(self) -> str:
        return f"Primitive({self.kind.value!r})"


@dataclass(frozen=True)
class ArrayOf:
    """A list whose every element matches ``item``."""

    item: FieldSpec

    def __call__(
        self, value: Any, *, policy: SensitiveFieldPolicy | None = None
    ) -> list[Any]:
        from payloadguard.shape.engine import apply_shape

        return apply_shape(self, value, policy=policy)


@dataclass(frozen=True)
class Shape:
    """
    An object whose declared keys map to field specs.

    Calling a shape filters a value through it:

        user = shape({"id": "number", "name": "string"})
        user({"id": 1, "name": "Ann", "password": "x"})  # {"id": 1, "name": "Ann"}
    """

    entries: tuple[tuple[str, FieldSpec], ...]

    @property
    def fields(self) -> Mapping[str, FieldSpec]:
        """Read-only view of the declared fields."""
        return MappingProxyType(dict(self.entries))

    @property
    def keys(self) -> tuple[str, ...]:
        """Declared field names in declaration order."""
        return tuple(name for name, _ in self.entries)

    def __contains__(self, name: object) -> bool:
        return any(name == key for key, _ in self.entries)

    def __len__(self) -> int:
        return len(self.entries)

    def __call__(
        self, value: Any, *, policy: SensitiveFieldPolicy | None = None
    ) -> dict[str, Any]:
        from payloadguard.shape.engine import apply_shape

        return apply_shape(self, value, policy=policy)


FieldSpec = Union[Primitive, Shape, ArrayOf]


def to_field_spec(spec: Any, *, field: str | None = None) -> FieldSpec:
    """
    Coerce a user-supplied field spec into the closed variant.

    Accepts kind tags ("string", "number", "boolean", "any"), FieldKind members,
    the Python types str/int/float/bool/object/typing.Any, existing specs, and
    plain mappings (built into a nested shape).

    Raises:
        ShapeDefinitionError: If the spec is not recognized
    """
    if isinstance(spec, Primitive | Shape | ArrayOf):
        return spec
    if isinstance(spec, FieldKind):
        return Primitive(spec)
    if isinstance(spec, str):
        try:
            return Primitive(FieldKind(spec))
        except ValueError:
            allowed = ", ".join(kind.value for kind in FieldKind)
            raise ShapeDefinitionError(
                f"Unknown type tag {spec!r}" + (f" for field {field!r}" if field else "")
                + f"; expected one of: {allowed}",
                field=field,
                received=spec,
            ) from None
    if isinstance(spec, Mapping):
        return shape(spec)
    try:
        kind = PYTHON_TYPE_KINDS.get(spec)
    except TypeError:
        # unhashable specs are never valid type shorthands
        kind = None
    if kind is not None:
        return Primitive(kind)

    raise ShapeDefinitionError(
        f"Unsupported field spec of type {type(spec).__name__}"
        + (f" for field {field!r}" if field else ""),
        field=field,
        received=spec,
    )


def shape(fields: Mapping[str, Any]) -> Shape:
    """
    Build an immutable shape descriptor.

    Args:
        fields: Mapping of field name to field spec

    Raises:
        ShapeDefinitionError: If fields is not a mapping, a key is not a
            string, or a field spec is not recognized
    """
    if isinstance(fields, Shape):
        return fields
    if not isinstance(fields, Mapping):
        raise ShapeDefinitionError(
            f"shape() expects a mapping of field specs, got {type(fields).__name__}",
            received=fields,
        )

    entries = []
    for name, spec in fields.items():
        if not isinstance(name, str):
            raise ShapeDefinitionError(
                f"Field names must be strings, got {type(name).__name__}",
                received=name,
            )
        entries.append((name, to_field_spec(spec, field=name)))

    return Shape(entries=tuple(entries))


def array(spec: Any) -> ArrayOf:
    """
    Wrap a field spec to mean "a list of values each matching spec".

    Raises:
        ShapeDefinitionError: If spec is not recognized
    """
    return ArrayOf(item=to_field_spec(spec))
