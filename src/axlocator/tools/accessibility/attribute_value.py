"""
Tagged value type for accessibility attribute values.

Provider bindings hand back whatever their native API produces (pyobjc
numbers, tuples, NSString subclasses, element references). Everything read
from a provider is converted into an AttributeValue before any matching or
formatting happens, so the matcher only ever switches on ValueKind.
"""

import math
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional, Tuple


class ValueKind(Enum):
    """Tag of an AttributeValue."""

    STRING = "string"
    BOOL = "bool"
    INT = "int"
    FLOAT = "float"
    SEQUENCE = "sequence"
    MAPPING = "mapping"
    NULL = "null"


@dataclass(frozen=True)
class AttributeValue:
    """
    A normalized attribute value.

    The payload is always a plain Python value matching the tag:
    str, bool, int, float, tuple of AttributeValue, tuple of
    (str, AttributeValue) pairs, or None.
    """

    kind: ValueKind
    payload: Any = None

    @classmethod
    def string(cls, value: str) -> "AttributeValue":
        return cls(ValueKind.STRING, str(value))

    @classmethod
    def boolean(cls, value: bool) -> "AttributeValue":
        return cls(ValueKind.BOOL, bool(value))

    @classmethod
    def integer(cls, value: int) -> "AttributeValue":
        return cls(ValueKind.INT, int(value))

    @classmethod
    def floating(cls, value: float) -> "AttributeValue":
        return cls(ValueKind.FLOAT, float(value))

    @classmethod
    def sequence(cls, values) -> "AttributeValue":
        return cls(ValueKind.SEQUENCE, tuple(cls.from_native(v) for v in values))

    @classmethod
    def mapping(cls, values: Dict[Any, Any]) -> "AttributeValue":
        items = tuple((str(k), cls.from_native(v)) for k, v in values.items())
        return cls(ValueKind.MAPPING, items)

    @classmethod
    def null(cls) -> "AttributeValue":
        return cls(ValueKind.NULL, None)

    @classmethod
    def from_native(cls, value: Any) -> "AttributeValue":
        """
        Convert a provider-native value into the tagged union.

        bool is checked before int because bool is an int subclass. Floats with
        no fractional part stay floats; providers that mean integers report
        integers. Unknown objects fall back to their string form.
        """
        if isinstance(value, AttributeValue):
            return value
        if value is None:
            return cls.null()
        if isinstance(value, bool):
            return cls.boolean(value)
        if isinstance(value, int):
            return cls.integer(value)
        if isinstance(value, float):
            return cls.floating(value)
        if isinstance(value, str):
            return cls.string(value)
        if isinstance(value, bytes):
            return cls.string(value.decode("utf-8", errors="replace"))
        if isinstance(value, dict):
            return cls.mapping(value)
        if isinstance(value, (list, tuple, set, frozenset)):
            return cls.sequence(value)
        try:
            return cls.string(str(value))
        except (TypeError, ValueError):
            return cls.null()

    @property
    def is_null(self) -> bool:
        return self.kind is ValueKind.NULL

    @property
    def string_value(self) -> Optional[str]:
        return self.payload if self.kind is ValueKind.STRING else None

    @property
    def bool_value(self) -> Optional[bool]:
        return self.payload if self.kind is ValueKind.BOOL else None

    @property
    def int_value(self) -> Optional[int]:
        return self.payload if self.kind is ValueKind.INT else None

    @property
    def float_value(self) -> Optional[float]:
        return self.payload if self.kind is ValueKind.FLOAT else None

    @property
    def sequence_value(self) -> Optional[Tuple["AttributeValue", ...]]:
        return self.payload if self.kind is ValueKind.SEQUENCE else None

    @property
    def mapping_value(self) -> Optional[Dict[str, "AttributeValue"]]:
        if self.kind is not ValueKind.MAPPING:
            return None
        return dict(self.payload)

    def as_text(self) -> Optional[str]:
        """
        String form used for criterion comparison.

        Returns None for null so callers can treat it like a missing attribute.
        """
        kind = self.kind
        if kind is ValueKind.NULL:
            return None
        if kind is ValueKind.STRING:
            return self.payload
        if kind is ValueKind.BOOL:
            return "true" if self.payload else "false"
        if kind is ValueKind.INT:
            return str(self.payload)
        if kind is ValueKind.FLOAT:
            if math.isfinite(self.payload) and self.payload.is_integer():
                return str(int(self.payload))
            return repr(self.payload)
        if kind is ValueKind.SEQUENCE:
            return ", ".join(item.as_text() or "" for item in self.payload)
        return "{" + ", ".join(f"{key}: {item.describe()}" for key, item in self.payload) + "}"

    def as_text_list(self) -> Optional[List[str]]:
        """Entries of a sequence value as strings, nulls skipped."""
        if self.kind is not ValueKind.SEQUENCE:
            return None
        return [text for text in (item.as_text() for item in self.payload) if text is not None]

    def as_bool(self) -> Optional[bool]:
        """Boolean reading of the value, tolerant of "true"/"1" style strings."""
        kind = self.kind
        if kind is ValueKind.BOOL:
            return self.payload
        if kind in (ValueKind.INT, ValueKind.FLOAT):
            return self.payload != 0
        if kind is ValueKind.STRING:
            return parse_bool(self.payload)
        return None

    def as_int(self) -> Optional[int]:
        kind = self.kind
        if kind is ValueKind.INT:
            return self.payload
        if kind is ValueKind.FLOAT and self.payload.is_integer():
            return int(self.payload)
        if kind is ValueKind.STRING:
            try:
                return int(self.payload.strip())
            except ValueError:
                return None
        return None

    def to_native(self) -> Any:
        """Plain Python representation (JSON-serializable)."""
        kind = self.kind
        if kind is ValueKind.SEQUENCE:
            return [item.to_native() for item in self.payload]
        if kind is ValueKind.MAPPING:
            return {key: item.to_native() for key, item in self.payload}
        return self.payload

    def describe(self) -> str:
        """Debug representation with quoted strings."""
        kind = self.kind
        if kind is ValueKind.NULL:
            return "null"
        if kind is ValueKind.STRING:
            return f'"{self.payload}"'
        if kind is ValueKind.SEQUENCE:
            return "[" + ", ".join(item.describe() for item in self.payload) + "]"
        if kind is ValueKind.MAPPING:
            return "{" + ", ".join(f'"{key}": {item.describe()}' for key, item in self.payload) + "}"
        return self.as_text() or ""

    def __str__(self) -> str:
        return self.describe()


_TRUE_STRINGS = frozenset({"true", "1", "yes", "y", "on"})
_FALSE_STRINGS = frozenset({"false", "0", "no", "n", "off"})


def parse_bool(text: str) -> Optional[bool]:
    """Parse a boolean-ish string; None when it is neither."""
    lowered = text.strip().lower()
    if lowered in _TRUE_STRINGS:
        return True
    if lowered in _FALSE_STRINGS:
        return False
    return None
