"""
Visitor implementations for TreeTraverser.

SearchVisitor looks for nodes satisfying a criteria set (optionally gated on a
required action). CollectVisitor gathers every non-excluded node.
"""

from enum import Enum
from typing import Dict, List, Optional, Sequence

from ..schemas.locator import Criterion
from ..tools.accessibility.attribute_names import AX_IDENTIFIER, AX_TITLE
from ..tools.accessibility.protocol import AccessibleElement
from .criterion_matcher import CriterionMatcher
from .tree_traverser import TraversalState, VisitResult, Visitor


class MatchStatus(Enum):
    """Outcome of evaluating one node against a search."""

    FULL_MATCH = "found"
    PARTIAL_MATCH_ACTION_MISSING = "partial"
    NO_MATCH = "noMatch"


def _criteria_for_log(criteria: Sequence[Criterion]) -> Dict[str, str]:
    return {c.attribute: c.value for c in criteria}


class SearchVisitor(Visitor):
    """
    Records nodes matching a criteria set.

    A node that satisfies the criteria but does not support ``require_action``
    is a partial match: it is kept in ``partial_matches`` for diagnostics and
    never counted as a result.

    Args:
        matcher: Criterion evaluator
        criteria: Criteria every (or any) node must satisfy
        match_all: AND the criteria when True, OR them when False
        stop_at_first: Stop the traversal at the first full match
        require_action: Action a match must support (e.g. "AXPress")
        min_depth: Nodes shallower than this are visited but never matched
    """

    def __init__(
        self,
        matcher: CriterionMatcher,
        criteria: Sequence[Criterion],
        match_all: bool = True,
        stop_at_first: bool = True,
        require_action: Optional[str] = None,
        min_depth: int = 0,
    ):
        self.matcher = matcher
        self.criteria = tuple(criteria)
        self.match_all = match_all
        self.stop_at_first = stop_at_first
        self.require_action = require_action
        self.min_depth = min_depth
        self.matches: List[AccessibleElement] = []
        self.partial_matches: List[AccessibleElement] = []

    @property
    def first_match(self) -> Optional[AccessibleElement]:
        return self.matches[0] if self.matches else None

    def evaluate(self, element: AccessibleElement) -> MatchStatus:
        if not self.matcher.matches_criteria(element, self.criteria, self.match_all):
            return MatchStatus.NO_MATCH
        if self.require_action and not self.matcher.accessor.supports_action(
            element, self.require_action
        ):
            return MatchStatus.PARTIAL_MATCH_ACTION_MISSING
        return MatchStatus.FULL_MATCH

    def visit(self, element: AccessibleElement, state: TraversalState) -> VisitResult:
        if state.current_depth < self.min_depth:
            return VisitResult.CONTINUE

        status = self.evaluate(element)
        self._record(element, state, status)

        if status is MatchStatus.PARTIAL_MATCH_ACTION_MISSING:
            self.partial_matches.append(element)
            self.matcher.trace.info(
                "%s matches criteria but does not support %s; continuing",
                self.matcher.accessor.describe_safely(element),
                self.require_action,
            )
            return VisitResult.CONTINUE

        if status is MatchStatus.FULL_MATCH:
            self.matches.append(element)
            self.matcher.trace.debug(
                "Match at depth %d: %s",
                state.current_depth,
                self.matcher.accessor.describe_safely(element),
            )
            if self.stop_at_first:
                return VisitResult.STOP

        return VisitResult.CONTINUE

    def _record(self, element: AccessibleElement, state: TraversalState, status: MatchStatus) -> None:
        trace = self.matcher.trace
        if not trace.records_visits:
            return
        accessor = self.matcher.accessor
        trace.record_visit(
            depth=state.current_depth,
            max_depth=state.max_depth,
            status=status.value,
            role=accessor.role(element),
            title=accessor.read_text(element, AX_TITLE),
            identifier=accessor.read_text(element, AX_IDENTIFIER),
            criteria=_criteria_for_log(self.criteria),
            is_match=status is MatchStatus.FULL_MATCH,
        )


class CollectVisitor(Visitor):
    """
    Gathers every visited node that is not excluded.

    Ignored nodes are left out unless ``include_ignored`` is set, but their
    subtrees are still walked. Never stops early; callers cap the result list
    after the traversal.

    Args:
        matcher: Criterion evaluator (also used for the ignored check)
        criteria: Optional filter; None or empty collects everything
        match_all: AND the criteria when True, OR them when False
        include_ignored: Keep nodes the provider reports as ignored
    """

    def __init__(
        self,
        matcher: CriterionMatcher,
        criteria: Optional[Sequence[Criterion]] = None,
        match_all: bool = True,
        include_ignored: bool = False,
    ):
        self.matcher = matcher
        self.criteria = tuple(criteria or ())
        self.match_all = match_all
        self.include_ignored = include_ignored
        self.collected: List[AccessibleElement] = []

    def visit(self, element: AccessibleElement, state: TraversalState) -> VisitResult:
        if not self.include_ignored and self.matcher.accessor.is_ignored(element):
            self.matcher.trace.record_visit(state.current_depth, state.max_depth, "ignored")
            return VisitResult.CONTINUE
        if self.criteria and not self.matcher.matches_criteria(
            element, self.criteria, self.match_all
        ):
            self.matcher.trace.record_visit(state.current_depth, state.max_depth, "noMatch", is_match=False)
            return VisitResult.CONTINUE
        self.collected.append(element)
        self.matcher.trace.record_visit(state.current_depth, state.max_depth, "vis", is_match=True)
        return VisitResult.CONTINUE
