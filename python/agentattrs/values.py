"""
Attribute values.

Attribute values are a closed set of scalar types. ``AttributeValue``
tags each payload with its type so the store never has to inspect
arbitrary Python objects after insertion.
"""

from __future__ import annotations

import enum
from dataclasses import dataclass, replace
from typing import Any, Union

from agentattrs.errors import UnsupportedValueError

INT64_MIN = -(2**63)
INT64_MAX = 2**63 - 1

Scalar = Union[str, int, float, bool, None]


class ValueType(enum.Enum):
    STRING = "string"
    INTEGER = "integer"
    DOUBLE = "double"
    BOOLEAN = "boolean"
    NULL = "null"


_PAYLOAD_TYPES: dict[ValueType, tuple[type, ...]] = {
    ValueType.STRING: (str,),
    ValueType.INTEGER: (int,),
    ValueType.DOUBLE: (float,),
    ValueType.BOOLEAN: (bool,),
    ValueType.NULL: (type(None),),
}


@dataclass(frozen=True)
class AttributeValue:
    """A tagged scalar attribute value."""

    type: ValueType
    value: Scalar = None

    @classmethod
    def checked(cls, tag: ValueType, value: Any) -> "AttributeValue":
        """
        Build a value after checking the payload against its tag.

        The dataclass constructor does not validate; every other
        constructor goes through here.
        """
        if not isinstance(tag, ValueType):
            raise UnsupportedValueError(f"Unknown value type: {tag!r}")
        expected = _PAYLOAD_TYPES[tag]
        # bool is a subclass of int
        if isinstance(value, bool) and tag is not ValueType.BOOLEAN:
            expected = ()
        if not isinstance(value, expected):
            raise UnsupportedValueError(
                f"Expected {tag.value} value, got {type(value).__name__}"
            )
        if tag is ValueType.INTEGER and not INT64_MIN <= value <= INT64_MAX:
            raise UnsupportedValueError(f"Integer {value} does not fit in 64 bits")
        return cls(tag, value)

    @classmethod
    def string(cls, value: str) -> "AttributeValue":
        return cls.checked(ValueType.STRING, value)

    @classmethod
    def integer(cls, value: int) -> "AttributeValue":
        return cls.checked(ValueType.INTEGER, value)

    @classmethod
    def double(cls, value: float) -> "AttributeValue":
        return cls.checked(ValueType.DOUBLE, value)

    @classmethod
    def boolean(cls, value: bool) -> "AttributeValue":
        return cls.checked(ValueType.BOOLEAN, value)

    @classmethod
    def null(cls) -> "AttributeValue":
        return cls.checked(ValueType.NULL, None)

    @classmethod
    def of(cls, obj: Any) -> "AttributeValue":
        """
        Classify a Python scalar.

        Raises:
            UnsupportedValueError: for containers, bytes, and any other
                non-scalar object.
        """
        if isinstance(obj, AttributeValue):
            return cls.checked(obj.type, obj.value)
        if obj is None:
            return cls.null()
        # bool is a subclass of int
        if isinstance(obj, bool):
            return cls.boolean(obj)
        if isinstance(obj, int):
            return cls.integer(obj)
        if isinstance(obj, float):
            return cls.double(obj)
        if isinstance(obj, str):
            return cls.string(obj)
        raise UnsupportedValueError(
            f"Unsupported attribute value type: {type(obj).__name__}"
        )

    def truncated(self, limit: int) -> "AttributeValue":
        """Return a copy whose string payload holds at most ``limit`` characters."""
        if self.type is ValueType.STRING and len(self.value) > limit:
            return replace(self, value=self.value[:limit])
        return self

    def to_output(self) -> Scalar:
        return self.value


__all__ = [
    "AttributeValue",
    "ValueType",
    "INT64_MIN",
    "INT64_MAX",
]
