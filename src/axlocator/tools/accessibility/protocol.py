"""
Platform-agnostic contract for accessibility providers.

The search engine only ever talks to elements through AccessibleElement and
to the process list through ApplicationResolver. Platform bindings (see the
macos package) wrap their native handles in these classes. This file contains
no platform-specific code.
"""

from abc import ABC, abstractmethod
from typing import Any, Hashable, List, Optional


class AccessibleElement(ABC):
    """
    One node of an externally-owned UI element tree.

    Instances are cheap wrappers; two wrappers around the same native node must
    report the same ``identity`` so traversal can detect cycles. Equality and
    hashing follow identity.

    Provider failures (stale handle, disabled API, timeout) are raised as
    ``axlocator.exceptions.ProviderError``. Missing attributes are not
    failures: ``get_attribute`` returns None.
    """

    @property
    @abstractmethod
    def identity(self) -> Hashable:
        """Stable, hashable identity of the underlying native node."""
        ...

    @abstractmethod
    def get_attribute(self, name: str) -> Optional[Any]:
        """
        Read a raw attribute value.

        Returns:
            The provider-native value, or None when the attribute is missing
            or unsupported on this element.
        """
        ...

    @abstractmethod
    def set_attribute(self, name: str, value: Any) -> None:
        """Write an attribute. Raises ProviderError if the provider rejects it."""
        ...

    @abstractmethod
    def is_attribute_settable(self, name: str) -> bool:
        ...

    @abstractmethod
    def get_children(self) -> List["AccessibleElement"]:
        """Children in provider order; empty when none or unsupported."""
        ...

    @abstractmethod
    def get_supported_actions(self) -> List[str]:
        """Action names the element advertises (e.g. AXPress)."""
        ...

    @abstractmethod
    def perform_action(self, name: str) -> None:
        ...

    @abstractmethod
    def get_process_id(self) -> Optional[int]:
        ...

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, AccessibleElement):
            return NotImplemented
        return self.identity == other.identity

    def __hash__(self) -> int:
        return hash(self.identity)


class ApplicationResolver(ABC):
    """Resolves an application identifier into its root element."""

    @abstractmethod
    def resolve(self, identifier: str) -> Optional[AccessibleElement]:
        """
        Find a running application.

        Args:
            identifier: PID (digits), bundle identifier or application name.
                The literal "focused" selects the frontmost application.

        Returns:
            The application element, or None if nothing matches.
        """
        ...
