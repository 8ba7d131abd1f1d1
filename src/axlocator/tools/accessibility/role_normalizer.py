"""
Role normalization and label computation.

Roles are compared with and without their "AX" prefix (AXButton, Button).
This is the only place where that prefix handling should exist.
"""

from typing import Callable, Optional

from .attribute_names import (
    APPLICATION_ROLE,
    AX_DESCRIPTION,
    AX_HELP,
    AX_IDENTIFIER,
    AX_PLACEHOLDER_VALUE,
    AX_TITLE,
    AX_VALUE,
)

ROLE_WILDCARD = "*"
MAX_VALUE_LABEL_LENGTH = 100
MAX_IDENTIFIER_LABEL_LENGTH = 6


def normalize_role(ax_role: Optional[str]) -> str:
    """
    Strip the "AX" prefix from a role.

    Args:
        ax_role: Role as reported by the provider (e.g. "AXButton")

    Returns:
        Normalized role (e.g. "Button"), empty string for None
    """
    if not ax_role:
        return ""

    if ax_role.startswith("AX"):
        return ax_role[2:]

    return ax_role


def roles_equivalent(actual: str, expected: str) -> bool:
    """Exact role comparison that treats Button and AXButton as equal."""
    if actual == expected:
        return True
    return normalize_role(actual) == normalize_role(expected)


def is_application_role(role: Optional[str]) -> bool:
    return bool(role) and roles_equivalent(role, APPLICATION_ROLE)


def get_best_label(read_text: Callable[[str], Optional[str]]) -> str:
    """
    Get the best available label for an element.

    Tries attributes in order of preference:
    1. AXTitle - explicit title
    2. AXDescription - accessibility description
    3. AXValue - current value, when short
    4. AXPlaceholderValue - placeholder text
    5. AXHelp - help text
    6. AXIdentifier - only very short identifiers

    Args:
        read_text: Callable returning an attribute's text or None

    Returns:
        Best available label, or empty string if none found
    """
    title = read_text(AX_TITLE)
    if title:
        return title

    description = read_text(AX_DESCRIPTION)
    if description:
        return description

    value = read_text(AX_VALUE)
    if value and len(value) <= MAX_VALUE_LABEL_LENGTH:
        return value

    placeholder = read_text(AX_PLACEHOLDER_VALUE)
    if placeholder:
        return placeholder

    help_text = read_text(AX_HELP)
    if help_text:
        return help_text

    identifier = read_text(AX_IDENTIFIER)
    if identifier and len(identifier) <= MAX_IDENTIFIER_LABEL_LENGTH:
        return identifier

    return ""
