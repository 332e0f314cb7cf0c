"""
Shared type definitions for payloadguard.
"""

from decimal import Decimal
from enum import Enum
from typing import Any


class FieldKind(str, Enum):
    """Primitive kind tags a shape field can declare."""

    STRING = "string"
    NUMBER = "number"
    BOOLEAN = "boolean"
    ANY = "any"

    def matches(self, value: Any) -> bool:
        """
        Check whether a runtime value satisfies this tag.

        Dates, UUIDs and other identifier objects only satisfy ``ANY``.
        """
        match self:
            case FieldKind.ANY:
                return True
            case FieldKind.STRING:
                return isinstance(value, str)
            case FieldKind.BOOLEAN:
                return isinstance(value, bool)
            case FieldKind.NUMBER:
                # bool is an int subclass but never a number here
                return isinstance(value, int | float | Decimal) and not isinstance(value, bool)

        return False


# Python types accepted as shorthand for a kind tag
PYTHON_TYPE_KINDS: dict[Any, FieldKind] = {
    str: FieldKind.STRING,
    int: FieldKind.NUMBER,
    float: FieldKind.NUMBER,
    bool: FieldKind.BOOLEAN,
    object: FieldKind.ANY,
    Any: FieldKind.ANY,
}
