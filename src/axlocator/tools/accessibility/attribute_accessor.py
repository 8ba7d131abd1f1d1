"""
Single point of contact between the search engine and a provider element.

Every provider call made by matching, traversal and path resolution goes
through AttributeAccessor, which:
- normalizes raw values into AttributeValue
- computes derived attributes (ComputedName, PID, IsIgnored, IsClickable)
- turns ProviderError into ProviderUnavailableError
"""

from typing import Any, List, Optional

from ...exceptions import (
    ActionUnsupportedError,
    AttributeNotSettableError,
    ProviderError,
    ProviderUnavailableError,
)
from ...utils.logging.search_trace import SearchTrace
from .attribute_names import (
    AX_HIDDEN,
    AX_IDENTIFIER,
    AX_PRESS,
    AX_ROLE,
    AX_TITLE,
    AX_VALUE,
    COMPUTED_NAME,
    COMPUTED_NAME_WITH_VALUE,
    IS_CLICKABLE,
    IS_IGNORED,
    PID,
    normalize_attribute_name,
)
from .attribute_value import AttributeValue
from .protocol import AccessibleElement
from .role_normalizer import get_best_label, normalize_role

DESCRIBE_MAX_LEN = 40


def _normalize_action(action: str) -> str:
    return action if action.startswith("AX") else f"AX{action}"


def _truncate(text: str, max_len: int = DESCRIBE_MAX_LEN) -> str:
    return text if len(text) <= max_len else text[: max_len - 3] + "..."


class AttributeAccessor:
    """
    Reads and writes element attributes on behalf of the search components.

    Args:
        trace: Logging context; a default one is created when omitted
    """

    def __init__(self, trace: Optional[SearchTrace] = None):
        self.trace = trace or SearchTrace()

    def _raw(self, element: AccessibleElement, name: str) -> Any:
        try:
            return element.get_attribute(name)
        except ProviderError as e:
            raise ProviderUnavailableError(f"read of {name}", cause=e) from e

    def read(self, element: AccessibleElement, name: str) -> Optional[AttributeValue]:
        """
        Read one attribute as an AttributeValue.

        Aliases are resolved first, so "role" and "AXRole" are the same read.
        Computed attributes are derived here and never requested from the
        provider by their computed name.

        Returns:
            The value, or None when the element has no such attribute
        """
        canonical = normalize_attribute_name(name)

        if canonical == COMPUTED_NAME:
            label = self.computed_name(element)
            return AttributeValue.string(label) if label else None
        if canonical == COMPUTED_NAME_WITH_VALUE:
            label = self.computed_name_with_value(element)
            return AttributeValue.string(label) if label else None
        if canonical == PID:
            pid = self.process_id(element)
            return AttributeValue.integer(pid) if pid is not None else None
        if canonical == IS_IGNORED:
            return AttributeValue.boolean(self.is_ignored(element))
        if canonical == IS_CLICKABLE:
            return AttributeValue.boolean(self.is_clickable(element))

        raw = self._raw(element, canonical)
        if raw is None:
            return None
        value = AttributeValue.from_native(raw)
        return None if value.is_null else value

    def read_text(self, element: AccessibleElement, name: str) -> Optional[str]:
        value = self.read(element, name)
        return value.as_text() if value is not None else None

    def role(self, element: AccessibleElement) -> Optional[str]:
        return self.read_text(element, AX_ROLE)

    def write(self, element: AccessibleElement, name: str, value: Any) -> None:
        """
        Write an attribute after checking it is settable.

        Raises:
            AttributeNotSettableError: provider reports the attribute read-only
            ProviderUnavailableError: the provider failed during the write
        """
        canonical = normalize_attribute_name(name)
        native = value.to_native() if isinstance(value, AttributeValue) else value
        try:
            settable = element.is_attribute_settable(canonical)
            if not settable:
                raise AttributeNotSettableError(canonical, self.describe_safely(element))
            element.set_attribute(canonical, native)
        except ProviderError as e:
            raise ProviderUnavailableError(
                f"write of {canonical}", self.describe_safely(element), cause=e
            ) from e
        self.trace.debug("Set %s on %s", canonical, self.describe_safely(element))

    def children(self, element: AccessibleElement) -> List[AccessibleElement]:
        try:
            return list(element.get_children() or [])
        except ProviderError as e:
            raise ProviderUnavailableError(
                "child enumeration", self.describe_safely(element), cause=e
            ) from e

    def actions(self, element: AccessibleElement) -> List[str]:
        """Supported actions, normalized to their AX-prefixed names."""
        try:
            raw = element.get_supported_actions() or []
        except ProviderError as e:
            raise ProviderUnavailableError(
                "action listing", self.describe_safely(element), cause=e
            ) from e
        return [_normalize_action(str(a)) for a in raw]

    def supports_action(self, element: AccessibleElement, action: str) -> bool:
        return _normalize_action(action) in self.actions(element)

    def perform_action(self, element: AccessibleElement, action: str) -> None:
        """
        Invoke an action the element advertises.

        Raises:
            ActionUnsupportedError: element does not list the action
            ProviderUnavailableError: the provider failed during the call
        """
        normalized = _normalize_action(action)
        if not self.supports_action(element, normalized):
            raise ActionUnsupportedError(normalized, self.describe_safely(element))
        try:
            element.perform_action(normalized)
        except ProviderError as e:
            raise ProviderUnavailableError(
                f"action {normalized}", self.describe_safely(element), cause=e
            ) from e
        self.trace.info("Performed %s on %s", normalized, self.describe_safely(element))

    def process_id(self, element: AccessibleElement) -> Optional[int]:
        try:
            pid = element.get_process_id()
        except ProviderError as e:
            raise ProviderUnavailableError(
                "process id lookup", self.describe_safely(element), cause=e
            ) from e
        if pid is None:
            return None
        try:
            return int(pid)
        except (TypeError, ValueError):
            return None

    def is_ignored(self, element: AccessibleElement) -> bool:
        """An element is ignored when the provider reports it hidden."""
        hidden = self._raw(element, AX_HIDDEN)
        if hidden is None:
            return False
        return AttributeValue.from_native(hidden).as_bool() is True

    def is_clickable(self, element: AccessibleElement) -> bool:
        return self.supports_action(element, AX_PRESS)

    def computed_name(self, element: AccessibleElement) -> str:
        return get_best_label(lambda attr: self._text_or_none(element, attr))

    def computed_name_with_value(self, element: AccessibleElement) -> str:
        """Computed name followed by the current value when it adds something."""
        name = self.computed_name(element)
        value = self._text_or_none(element, AX_VALUE)
        if value and value != name:
            return f"{name} {value}".strip()
        return name

    def _text_or_none(self, element: AccessibleElement, name: str) -> Optional[str]:
        raw = self._raw(element, name)
        if raw is None:
            return None
        text = AttributeValue.from_native(raw).as_text()
        return text.strip() if text else None

    def describe(self, element: AccessibleElement) -> str:
        """
        Short human-readable description for logs, e.g. Button("Save" #save-btn).
        """
        role = normalize_role(self._text_or_none(element, AX_ROLE)) or "Unknown"
        parts = []
        title = self._text_or_none(element, AX_TITLE)
        if title:
            parts.append(f'"{_truncate(title)}"')
        identifier = self._text_or_none(element, AX_IDENTIFIER)
        if identifier:
            parts.append(f"#{_truncate(identifier)}")
        return f"{role}({' '.join(parts)})" if parts else role

    def describe_safely(self, element: AccessibleElement) -> str:
        """describe() for error paths, where the handle may already be dead."""
        try:
            return self.describe(element)
        except (ProviderError, ProviderUnavailableError):
            return "<unavailable element>"
