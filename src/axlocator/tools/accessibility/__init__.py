"""
Accessibility provider contract and attribute access.

Platform bindings live in subpackages (macos).
"""

from .protocol import AccessibleElement, ApplicationResolver
from .attribute_value import AttributeValue, ValueKind
from .attribute_accessor import AttributeAccessor

__all__ = [
    "AccessibleElement",
    "ApplicationResolver",
    "AttributeValue",
    "ValueKind",
    "AttributeAccessor",
]
