"""
atomacos node adapter.

Wraps an atomacos NativeUIElement in the AccessibleElement contract. atomacos
exposes attributes as Python attributes (node.AXRole) and actions as
callables without the AX prefix (node.Press()).
"""

from typing import Any, Hashable, List, Optional

from ....exceptions import ActionUnsupportedError, ProviderError
from ..attribute_names import AX_ACTIONS, AX_CHILDREN
from ..protocol import AccessibleElement

# atomacos error classes, by name, that mean the attribute simply has no value.
_MISSING_VALUE_ERRORS = frozenset(
    {
        "AXErrorNoValue",
        "AXErrorAttributeUnsupported",
        "AXErrorActionUnsupported",
        "AXErrorUnsupported",
        "AXErrorParameterizedAttributeUnsupported",
    }
)


def _is_missing_value_error(error: Exception) -> bool:
    return type(error).__name__ in _MISSING_VALUE_ERRORS


def _is_nonempty_list(value: Any) -> bool:
    """
    Safely check if value is a non-empty list-like object.
    Handles OC_PythonLong and other scalar types that don't support len().
    """
    if value is None:
        return False
    try:
        return hasattr(value, "__iter__") and not isinstance(value, str) and len(value) > 0
    except TypeError:
        return False


def _safe_iter(value: Any) -> list:
    """
    Safely iterate over a value that might be OC_PythonLong or None.
    Returns empty list if value is not iterable.
    """
    if value is None:
        return []
    if isinstance(value, str):
        return []
    try:
        if hasattr(value, "__iter__"):
            return list(value)
        return []
    except (TypeError, ValueError):
        return []


def _provider_error(operation: str, error: Exception) -> ProviderError:
    return ProviderError(f"atomacos {operation} failed: {type(error).__name__}: {error}", cause=error)


class MacOSElement(AccessibleElement):
    """
    AccessibleElement backed by an atomacos node.

    Args:
        node: atomacos NativeUIElement (or any object exposing AX attributes)
    """

    def __init__(self, node: Any):
        self.node = node

    @property
    def identity(self) -> Hashable:
        ref = getattr(self.node, "ref", None)
        return ref if ref is not None else self.node

    def get_attribute(self, name: str) -> Optional[Any]:
        try:
            return getattr(self.node, name)
        except AttributeError:
            return None
        except Exception as e:
            if _is_missing_value_error(e):
                return None
            raise _provider_error(f"read of {name}", e) from e

    def set_attribute(self, name: str, value: Any) -> None:
        try:
            setattr(self.node, name, value)
        except Exception as e:
            raise _provider_error(f"write of {name}", e) from e

    def is_attribute_settable(self, name: str) -> bool:
        for probe in ("isAttributeSettable", "_isSettable"):
            method = getattr(self.node, probe, None)
            if callable(method):
                try:
                    return bool(method(name))
                except Exception as e:
                    if _is_missing_value_error(e):
                        return False
                    raise _provider_error(f"settable check of {name}", e) from e
        # No probe available; let the write itself report a failure.
        return True

    def get_children(self) -> List[AccessibleElement]:
        children = self.get_attribute(AX_CHILDREN)
        return [MacOSElement(child) for child in _safe_iter(children)]

    def get_supported_actions(self) -> List[str]:
        get_actions = getattr(self.node, "getActions", None)
        if callable(get_actions):
            try:
                actions = get_actions()
            except Exception as e:
                if not _is_missing_value_error(e):
                    raise _provider_error("action listing", e) from e
                actions = None
            if _is_nonempty_list(actions):
                return [str(a) for a in _safe_iter(actions)]

        actions = self.get_attribute(AX_ACTIONS)
        return [str(a) for a in _safe_iter(actions)]

    def perform_action(self, name: str) -> None:
        short_name = name[2:] if name.startswith("AX") else name
        action = getattr(self.node, short_name, None)
        try:
            if callable(action):
                action()
                return
            perform = getattr(self.node, "_performAction", None)
            if callable(perform):
                perform(name if name.startswith("AX") else f"AX{name}")
                return
        except Exception as e:
            raise _provider_error(f"action {name}", e) from e
        raise ActionUnsupportedError(name)

    def get_process_id(self) -> Optional[int]:
        get_pid = getattr(self.node, "_getPid", None)
        if callable(get_pid):
            try:
                return int(get_pid())
            except Exception as e:
                raise _provider_error("pid lookup", e) from e
        for attr in ("AXPid", "pid"):
            pid = self.get_attribute(attr)
            if pid:
                return int(pid)
        return None

    def __repr__(self) -> str:
        return f"MacOSElement({self.node!r})"
