"""
Criterion evaluation against a single element.

Matching never raises for a mismatch or a missing attribute; both are simply
False. Provider failures propagate as ProviderUnavailableError.
"""

import re
from typing import Iterable, List, Optional, Sequence

from ..schemas.locator import Criterion, MatchType
from ..tools.accessibility.attribute_accessor import AttributeAccessor
from ..tools.accessibility.attribute_names import (
    AX_DOM_CLASS_LIST,
    AX_ROLE,
    COMPUTED_NAME,
    COMPUTED_NAME_WITH_VALUE,
    IS_CLICKABLE,
    IS_IGNORED,
    PID,
    STRUCTURAL_ATTRIBUTES,
)
from ..tools.accessibility.attribute_value import AttributeValue, ValueKind, parse_bool
from ..tools.accessibility.protocol import AccessibleElement
from ..tools.accessibility.role_normalizer import (
    ROLE_WILDCARD,
    is_application_role,
    normalize_role,
    roles_equivalent,
)
from ..utils.logging.search_trace import SearchTrace


def compare_text(actual: str, expected: str, match_type: MatchType, trace: Optional[SearchTrace] = None) -> bool:
    """
    Compare two strings under a match mode.

    exact, prefix and suffix are case-sensitive; contains and containsAny are
    case-insensitive. regex uses re.search, so the pattern may match anywhere;
    prefix it with (?i) for case-insensitive matching. An invalid pattern is a
    non-match.
    """
    if match_type is MatchType.EXACT:
        return actual == expected
    if match_type is MatchType.CONTAINS:
        return expected.lower() in actual.lower()
    if match_type is MatchType.PREFIX:
        return actual.startswith(expected)
    if match_type is MatchType.SUFFIX:
        return actual.endswith(expected)
    if match_type is MatchType.CONTAINS_ANY:
        lowered = actual.lower()
        fragments = [f.strip().lower() for f in expected.split(",")]
        return any(f in lowered for f in fragments if f)
    if match_type is MatchType.REGEX:
        try:
            return re.search(expected, actual) is not None
        except re.error as e:
            if trace is not None:
                trace.warning("Invalid regex %r: %s", expected, e)
            return False
    return False


class CriterionMatcher:
    """
    Evaluates criteria against elements through an AttributeAccessor.

    Args:
        accessor: Attribute reader shared with the traverser
        trace: Logging context (defaults to the accessor's)
    """

    def __init__(self, accessor: Optional[AttributeAccessor] = None, trace: Optional[SearchTrace] = None):
        self.accessor = accessor or AttributeAccessor(trace)
        self.trace = trace or self.accessor.trace

    def matches(self, element: AccessibleElement, criterion: Criterion) -> bool:
        key = criterion.key
        expected = criterion.value
        match_type = criterion.match_type

        if key == AX_ROLE:
            return self._match_role(element, expected, match_type)
        if key == PID:
            return self._match_pid(element, expected)
        if key in (IS_IGNORED, IS_CLICKABLE):
            return self._match_flag(element, key, expected)

        actual = self.accessor.read(element, key)
        if actual is None:
            self._log_missing(element, key)
            return False

        if key in (COMPUTED_NAME, COMPUTED_NAME_WITH_VALUE):
            return self._match_computed_name(actual, expected, match_type)
        if actual.kind is ValueKind.SEQUENCE or key == AX_DOM_CLASS_LIST:
            return self._match_list(actual, expected, match_type)

        text = actual.as_text()
        if text is None:
            return False
        return compare_text(text, expected, match_type, self.trace)

    def matches_all(self, element: AccessibleElement, criteria: Sequence[Criterion]) -> bool:
        """True for an empty set; otherwise every criterion must match."""
        for criterion in criteria:
            if not self.matches(element, criterion):
                return False
        return True

    def matches_any(self, element: AccessibleElement, criteria: Sequence[Criterion]) -> bool:
        """False for an empty set; otherwise at least one criterion must match."""
        for criterion in criteria:
            if self.matches(element, criterion):
                return True
        return False

    def matches_criteria(
        self, element: AccessibleElement, criteria: Sequence[Criterion], match_all: bool = True
    ) -> bool:
        if match_all:
            return self.matches_all(element, criteria)
        return self.matches_any(element, criteria)

    def failed_criteria(self, element: AccessibleElement, criteria: Iterable[Criterion]) -> List[Criterion]:
        """Criteria the element does not satisfy, for diagnostics."""
        return [c for c in criteria if not self.matches(element, c)]

    def _match_role(self, element: AccessibleElement, expected: str, match_type: MatchType) -> bool:
        if expected.strip() == ROLE_WILDCARD:
            return True
        actual = self.accessor.role(element)
        if actual is None:
            self._log_missing(element, AX_ROLE)
            return False
        if match_type is MatchType.EXACT:
            return roles_equivalent(actual, expected)
        if compare_text(actual, expected, match_type, self.trace):
            return True
        # "Button" prefixes and patterns also apply to the unprefixed role.
        stripped = normalize_role(actual)
        return stripped != actual and compare_text(stripped, expected, match_type, self.trace)

    def _match_pid(self, element: AccessibleElement, expected: str) -> bool:
        try:
            expected_pid = int(expected.strip())
        except ValueError:
            self.trace.debug("PID criterion %r is not an integer; no match", expected)
            return False
        if is_application_role(self.accessor.role(element)):
            # An application element is the process: PID holds by context.
            return True
        actual = self.accessor.process_id(element)
        if actual is None:
            self._log_missing(element, PID)
            return False
        return actual == expected_pid

    def _match_flag(self, element: AccessibleElement, key: str, expected: str) -> bool:
        wanted = parse_bool(expected)
        if wanted is None:
            self.trace.debug("%s criterion %r is not a boolean; no match", key, expected)
            return False
        actual = self.accessor.read(element, key)
        return actual is not None and actual.as_bool() == wanted

    def _match_computed_name(self, actual: AttributeValue, expected: str, match_type: MatchType) -> bool:
        text = actual.as_text()
        if text is None:
            return False
        if match_type is MatchType.EXACT:
            return text.strip().lower() == expected.strip().lower()
        return compare_text(text, expected, match_type, self.trace)

    def _match_list(self, actual: AttributeValue, expected: str, match_type: MatchType) -> bool:
        entries = actual.as_text_list()
        if entries is None:
            # A class list reported as one space-separated string.
            text = actual.as_text() or ""
            entries = text.split()
        return any(compare_text(entry, expected, match_type, self.trace) for entry in entries)

    def _log_missing(self, element: AccessibleElement, key: str) -> None:
        if key in STRUCTURAL_ATTRIBUTES:
            self.trace.info(
                "Structural attribute %s missing on %s; treating as no match",
                key,
                self.accessor.describe_safely(element),
            )
        else:
            self.trace.debug(
                "Attribute %s not found on %s; no match", key, self.accessor.describe_safely(element)
            )
