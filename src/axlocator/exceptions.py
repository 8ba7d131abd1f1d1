"""
Custom exceptions for the axlocator search engine.

Mismatching criteria and missing attributes are never errors; they are the
normal "no match" outcome. Everything below describes a query that could not
produce a result, or a provider that stopped answering.
"""

from typing import Any, List, Optional, Sequence


class AXLocatorError(Exception):
    """Base exception for all axlocator errors."""

    error_type: str = "error"


class ProviderError(AXLocatorError):
    """
    Raised by provider bindings when a native call fails.

    Bindings raise this for invalid/stale handles, timeouts or a disabled
    accessibility API. The accessor translates it into ProviderUnavailableError.
    """

    error_type = "provider_error"

    def __init__(self, message: str, cause: Optional[Exception] = None):
        self.cause = cause
        super().__init__(message)


class ProviderUnavailableError(AXLocatorError):
    """Raised when an element handle is invalidated mid-operation."""

    error_type = "provider_unavailable"

    def __init__(self, operation: str, element: str = "", cause: Optional[Exception] = None):
        self.operation = operation
        self.element = element
        self.cause = cause
        msg = f"Accessibility provider unavailable during {operation}"
        if element:
            msg += f" on {element}"
        if cause is not None:
            msg += f": {cause}"
        super().__init__(msg)


class ProviderAffinityError(AXLocatorError):
    """Raised when the provider is used from a thread that does not own it."""

    error_type = "provider_affinity"


class ApplicationNotFoundError(AXLocatorError):
    """Raised when no running application matches an identifier."""

    error_type = "application_not_found"

    def __init__(self, identifier: str):
        self.identifier = identifier
        super().__init__(f"Application '{identifier}' not found or not running")


class InvalidLocatorError(AXLocatorError):
    """Raised when a locator or path hint payload fails validation."""

    error_type = "invalid_locator"


def _describe_criteria(criteria: Sequence[Any]) -> str:
    parts = []
    for criterion in criteria:
        describe = getattr(criterion, "describe", None)
        parts.append(describe() if callable(describe) else str(criterion))
    return ", ".join(parts)


class PathNavigationFailedError(AXLocatorError):
    """Raised when a path hint step cannot be resolved."""

    error_type = "path_navigation_failed"

    def __init__(self, step_index: int, criteria: Sequence[Any], anchor: str = ""):
        self.step_index = step_index
        self.criteria = list(criteria)
        self.anchor = anchor
        msg = (
            f"Path step {step_index} could not be resolved "
            f"(criteria: {_describe_criteria(self.criteria)})"
        )
        if anchor:
            msg += f" below {anchor}"
        super().__init__(msg)


class NoCriteriaOrPathError(AXLocatorError):
    """Raised when a locator has neither criteria nor a path hint."""

    error_type = "no_criteria_or_path"

    def __init__(self):
        super().__init__("Locator has no criteria and no path hint")


class NoMatchFoundError(AXLocatorError):
    """Raised when the criteria search finishes without a match."""

    error_type = "no_match_found"

    def __init__(self, criteria: Sequence[Any], depth_limit_reached: bool = False):
        self.criteria = list(criteria)
        self.depth_limit_reached = depth_limit_reached
        msg = f"No element matches criteria: {_describe_criteria(self.criteria)}"
        if depth_limit_reached:
            msg += " (search was truncated by max depth)"
        super().__init__(msg)


class RequiredActionMissingError(AXLocatorError):
    """Raised when elements match the criteria but none support the action."""

    error_type = "required_action_missing"

    def __init__(self, action: str, candidates: Optional[List[Any]] = None):
        self.action = action
        self.candidates = candidates or []
        super().__init__(
            f"Found {len(self.candidates)} element(s) matching criteria, "
            f"but none support action '{action}'"
        )


class AttributeNotReadableError(AXLocatorError):
    """Raised when an attribute that must be read has no value."""

    error_type = "attribute_not_readable"

    def __init__(self, attribute: str, element: str = ""):
        self.attribute = attribute
        self.element = element
        msg = f"Attribute '{attribute}' is not readable"
        super().__init__(f"{msg} on {element}" if element else msg)


class AttributeNotSettableError(AXLocatorError):
    """Raised when writing an attribute the provider reports read-only."""

    error_type = "attribute_not_settable"

    def __init__(self, attribute: str, element: str = ""):
        self.attribute = attribute
        self.element = element
        msg = f"Attribute '{attribute}' is not settable"
        super().__init__(f"{msg} on {element}" if element else msg)


class ActionUnsupportedError(AXLocatorError):
    """Raised when invoking an action the element does not support."""

    error_type = "action_unsupported"

    def __init__(self, action: str, element: str = ""):
        self.action = action
        self.element = element
        msg = f"Action '{action}' is not supported"
        super().__init__(f"{msg} on {element}" if element else msg)
