"""
Application lookup on macOS via atomacos, with psutil as a name fallback.
"""

import importlib
import importlib.util
import logging
import platform
from typing import Any, List, Optional, Tuple

import psutil

from ....exceptions import ProviderError, ProviderUnavailableError
from ..attribute_names import AX_ROLE, AX_WINDOWS, WINDOW_ROLES
from ..protocol import AccessibleElement, ApplicationResolver
from .element import MacOSElement, _is_nonempty_list

logger = logging.getLogger(__name__)

FOCUSED_APP_IDENTIFIERS = ("focused", "frontmost")

HELPER_NAME_PATTERNS = (
    "helper",
    "agent",
    "service",
    "renderer",
    "gpu",
    "web content",
    "extension",
    "xpc",
)
HELPER_BUNDLE_PATTERNS = (".helper", ".agent", "xpcservice", ".renderer")


def atomacos_available() -> bool:
    if platform.system().lower() != "darwin":
        return False
    return importlib.util.find_spec("atomacos") is not None


def matches_name(name1: str, name2: str) -> bool:
    if not name1 or not name2:
        return False
    n1, n2 = name1.lower(), name2.lower()
    return n1 in n2 or n2 in n1


def score_app_match(candidate_name: str, search_name: str, bundle_id: str) -> int:
    """
    Score how well a candidate app matches the search name.

    Higher scores indicate better matches. Penalizes helper processes.

    Args:
        candidate_name: Name of the running application
        search_name: Name the user searched for
        bundle_id: Bundle identifier of the app

    Returns:
        Integer score (higher = better match)
    """
    score = 0
    cn = candidate_name.lower()
    sn = search_name.lower()
    bid = (bundle_id or "").lower()

    if cn == sn:
        score += 1000

    if cn.startswith(sn):
        score += 500

    if any(p in cn for p in HELPER_NAME_PATTERNS):
        score -= 500

    if any(p in bid for p in HELPER_BUNDLE_PATTERNS):
        score -= 500

    score -= len(candidate_name) // 5

    return score


class MacOSApplicationResolver(ApplicationResolver):
    """
    Resolves PIDs, bundle identifiers and application names to AX roots.

    Args:
        atomacos_module: atomacos module to use; imported on first use when
            omitted. Tests pass a stand-in here.
    """

    def __init__(self, atomacos_module: Any = None):
        self._atomacos = atomacos_module

    @property
    def atomacos(self) -> Any:
        if self._atomacos is None:
            if not atomacos_available():
                raise ProviderUnavailableError(
                    "application lookup",
                    cause=RuntimeError("atomacos is not installed or this is not macOS"),
                )
            self._atomacos = importlib.import_module("atomacos")
        return self._atomacos

    def resolve(self, identifier: str) -> Optional[AccessibleElement]:
        identifier = (identifier or "").strip()
        if not identifier:
            return None

        if identifier.lower() in FOCUSED_APP_IDENTIFIERS:
            return self._wrap(self._call("getFrontmostApp"))

        if identifier.isdigit():
            return self._wrap(self._call("getAppRefByPid", int(identifier)))

        if "." in identifier and " " not in identifier:
            app_ref = self._call("getAppRefByBundleId", identifier)
            if app_ref is not None:
                return self._wrap(app_ref)

        return self._wrap(self._find_by_name(identifier))

    def _call(self, function: str, *args: Any) -> Any:
        try:
            return getattr(self.atomacos, function)(*args)
        except (ValueError, RuntimeError, LookupError) as e:
            logger.debug("atomacos.%s%r failed: %s", function, args, e)
            return None

    @staticmethod
    def _wrap(app_ref: Any) -> Optional[AccessibleElement]:
        return MacOSElement(app_ref) if app_ref is not None else None

    def _running_app_candidates(self, app_name: str) -> List[Tuple[int, str, str]]:
        candidates = []
        for running_app in self.atomacos.NativeUIElement.getRunningApps():
            localized_name = None
            if hasattr(running_app, "localizedName"):
                localized_name = running_app.localizedName()
            if not localized_name or not matches_name(localized_name, app_name):
                continue

            bundle_id = None
            if hasattr(running_app, "bundleIdentifier"):
                bundle_id = running_app.bundleIdentifier()
            if not bundle_id:
                continue

            score = score_app_match(localized_name, app_name, bundle_id)
            candidates.append((score, localized_name, bundle_id))

        candidates.sort(key=lambda x: -x[0])
        return candidates

    def _find_by_name(self, app_name: str) -> Any:
        """
        Pick the best-scored running application, preferring one with windows.
        """
        refs = []
        for score, name, bundle_id in self._running_app_candidates(app_name):
            app_ref = self._call("getAppRefByBundleId", bundle_id)
            if app_ref is None:
                continue
            if has_windows(app_ref):
                logger.debug("Resolved %r to %s (%s, score %d)", app_name, name, bundle_id, score)
                return app_ref
            refs.append(app_ref)
        if refs:
            return refs[0]

        pid = find_pid_by_process_name(app_name)
        if pid is not None:
            return self._call("getAppRefByPid", pid)
        return None


def has_windows(app_ref: Any) -> bool:
    if not app_ref:
        return False
    element = MacOSElement(app_ref)
    try:
        if _is_nonempty_list(element.get_attribute(AX_WINDOWS)):
            return True
        for child in element.get_children():
            role = child.get_attribute(AX_ROLE)
            if role and str(role) in WINDOW_ROLES:
                return True
    except ProviderError as e:
        logger.debug("Window check failed: %s", e)
    return False


def find_pid_by_process_name(app_name: str) -> Optional[int]:
    """
    Best-scored running process whose name matches, for apps atomacos misses.
    """
    best: Optional[Tuple[int, int]] = None
    for proc in psutil.process_iter(["pid", "name"]):
        try:
            name = proc.info["name"] or ""
            pid = proc.info["pid"]
        except (psutil.NoSuchProcess, psutil.AccessDenied):
            continue
        if not matches_name(name, app_name):
            continue
        score = score_app_match(name, app_name, "")
        if best is None or score > best[0]:
            best = (score, pid)
    return best[1] if best else None
