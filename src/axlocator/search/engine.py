"""
Query orchestration.

A query moves through: root resolved -> root path hint resolved -> call-level
path hint resolved -> criteria searched -> done or failed. Every failure is a
typed AXLocatorError; a mismatch is never an error on its own.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Iterable, List, Optional, Sequence, Union

from pydantic import ValidationError

from ..config.search_config import SearchConfig, get_search_config
from ..exceptions import (
    ApplicationNotFoundError,
    AttributeNotReadableError,
    InvalidLocatorError,
    NoCriteriaOrPathError,
    NoMatchFoundError,
    RequiredActionMissingError,
)
from ..schemas.locator import Criterion, Locator, PathStep
from ..tools.accessibility.attribute_accessor import AttributeAccessor
from ..tools.accessibility.attribute_value import AttributeValue
from ..tools.accessibility.protocol import AccessibleElement, ApplicationResolver
from ..utils.logging.search_trace import SearchTrace
from ..utils.threading.affinity import ProviderAffinity
from .criterion_matcher import CriterionMatcher
from .path_resolver import PathResolver, is_app_specifier
from .tree_traverser import TraversalState, TreeTraverser
from .visitors import CollectVisitor, SearchVisitor

LocatorLike = Union[Locator, dict]
PathLike = Optional[Sequence[Union[PathStep, dict, str]]]


@dataclass
class SearchResult:
    """
    Outcome of a successful search, with traversal metadata.

    ``element`` is the first match (None only for an empty find-all).
    ``depth_limit_reached`` is the soft max-depth signal: at least one branch
    was cut off by the depth bound.
    """

    element: Optional[AccessibleElement]
    elements: List[AccessibleElement] = field(default_factory=list)
    anchor: Optional[AccessibleElement] = None
    visited_count: int = 0
    depth_limit_reached: bool = False
    partial_matches: List[AccessibleElement] = field(default_factory=list)


def coerce_locator(locator: LocatorLike) -> Locator:
    """Accept a Locator or its JSON dict form."""
    if isinstance(locator, Locator):
        return locator
    try:
        return Locator.model_validate(locator)
    except ValidationError as e:
        raise InvalidLocatorError(f"Invalid locator: {e}") from e


def coerce_path(path: PathLike) -> List[PathStep]:
    """Accept PathStep objects, step dicts or legacy segment strings."""
    if not path:
        return []
    steps = []
    for index, step in enumerate(path):
        if isinstance(step, PathStep):
            steps.append(step)
            continue
        try:
            steps.append(PathStep.model_validate(step))
        except ValidationError as e:
            raise InvalidLocatorError(f"Invalid path step {index}: {e}") from e
    return steps


def coerce_criteria(criteria: Optional[Iterable[Union[Criterion, dict]]]) -> List[Criterion]:
    if not criteria:
        return []
    result = []
    for criterion in criteria:
        if isinstance(criterion, Criterion):
            result.append(criterion)
            continue
        try:
            result.append(Criterion.model_validate(criterion))
        except ValidationError as e:
            raise InvalidLocatorError(f"Invalid criterion: {e}") from e
    return result


def _check_limit(limit: Optional[int]) -> None:
    if limit is not None and limit < 0:
        raise ValueError(f"limit must not be negative, got {limit}")


class SearchEngine:
    """
    Entry point for element queries.

    Args:
        config: Depth defaults and diagnostics (defaults to the process config)
        application_resolver: Collaborator used by find_in_application
        affinity: Provider thread affinity; None runs every call inline
        trace: Logging context shared by all components of this engine
    """

    def __init__(
        self,
        config: Optional[SearchConfig] = None,
        application_resolver: Optional[ApplicationResolver] = None,
        affinity: Optional[ProviderAffinity] = None,
        trace: Optional[SearchTrace] = None,
    ):
        self.config = config or get_search_config()
        self.application_resolver = application_resolver
        self.affinity = affinity
        self.trace = trace or SearchTrace(
            collect=self.config.collect_debug_logs, trace_file=self.config.trace_file
        )
        self.accessor = AttributeAccessor(self.trace)
        self.matcher = CriterionMatcher(self.accessor, self.trace)
        self.traverser = TreeTraverser(self.accessor, self.trace)
        self.path_resolver = PathResolver(
            self.matcher, self.traverser, self.config.default_path_step_depth
        )

    def call(self, func: Callable[..., Any], *args: Any, **kwargs: Any) -> Any:
        """Run ``func`` in the provider context, then flush the trace file."""
        try:
            if self.affinity is None:
                return func(*args, **kwargs)
            return self.affinity.run(func, *args, **kwargs)
        finally:
            self.trace.flush()

    # Anchor resolution

    def resolve_application(self, identifier: str) -> AccessibleElement:
        """
        Resolve an application identifier to its root element.

        Raises:
            ApplicationNotFoundError: no resolver configured or nothing matched
        """
        if self.application_resolver is None:
            self.trace.warning("No application resolver configured; cannot resolve %r", identifier)
            raise ApplicationNotFoundError(identifier)
        root = self.call(self.application_resolver.resolve, identifier)
        if root is None:
            raise ApplicationNotFoundError(identifier)
        self.trace.debug("Resolved application %r", identifier)
        return root

    def resolve_path(self, root: AccessibleElement, path: PathLike) -> AccessibleElement:
        """Resolve a path hint from ``root``; raises PathNavigationFailedError."""
        steps = coerce_path(path)
        return self.call(self.path_resolver.resolve, root, steps)

    def _resolve_anchor(
        self, root: AccessibleElement, locator: Locator, path_hint: List[PathStep]
    ) -> AccessibleElement:
        anchor = root
        if locator.root_path_hint:
            anchor = self.path_resolver.resolve(anchor, locator.root_path_hint)
        if path_hint:
            anchor = self.path_resolver.resolve(anchor, path_hint)
        return anchor

    # Searches

    def search(
        self,
        root: AccessibleElement,
        locator: LocatorLike,
        max_depth: Optional[int] = None,
        path_hint: PathLike = None,
    ) -> SearchResult:
        """
        Find the first element matching ``locator`` below ``root``.

        Raises:
            NoCriteriaOrPathError: locator has neither criteria nor a path hint
            PathNavigationFailedError: a path step could not be resolved
            RequiredActionMissingError: only partial matches were found
            NoMatchFoundError: nothing matched
        """
        locator = coerce_locator(locator)
        steps = coerce_path(path_hint)
        return self.call(self._search_impl, root, locator, max_depth, steps, True)

    def find_element(
        self,
        root: AccessibleElement,
        locator: LocatorLike,
        max_depth: Optional[int] = None,
        path_hint: PathLike = None,
    ) -> AccessibleElement:
        return self.search(root, locator, max_depth=max_depth, path_hint=path_hint).element

    def search_all(
        self,
        root: AccessibleElement,
        locator: LocatorLike,
        max_depth: Optional[int] = None,
        limit: Optional[int] = None,
        path_hint: PathLike = None,
    ) -> SearchResult:
        """
        All full matches in pre-order, optionally capped to ``limit``.

        No match is a valid (empty) result; path and criteria errors still
        raise. ``depth_limit_reached`` reports whether a branch was cut off.
        """
        _check_limit(limit)
        locator = coerce_locator(locator)
        steps = coerce_path(path_hint)
        result = self.call(self._search_impl, root, locator, max_depth, steps, False)
        if limit is not None:
            result.elements = result.elements[:limit]
        return result

    def find_elements(
        self,
        root: AccessibleElement,
        locator: LocatorLike,
        max_depth: Optional[int] = None,
        limit: Optional[int] = None,
        path_hint: PathLike = None,
    ) -> List[AccessibleElement]:
        return self.search_all(
            root, locator, max_depth=max_depth, limit=limit, path_hint=path_hint
        ).elements

    def _search_impl(
        self,
        root: AccessibleElement,
        locator: Locator,
        max_depth: Optional[int],
        path_hint: List[PathStep],
        stop_at_first: bool,
    ) -> SearchResult:
        anchor = self._resolve_anchor(root, locator, path_hint)

        if len(locator.criteria) == 1 and is_app_specifier(locator.criteria[0]):
            self.trace.debug(
                "Locator only names the application (%s); using the anchor",
                locator.criteria[0].describe(),
            )
            return SearchResult(element=anchor, elements=[anchor], anchor=anchor)

        if not locator.criteria:
            if locator.root_path_hint or path_hint:
                self.trace.debug("No criteria; path hint anchor is the result")
                return SearchResult(element=anchor, elements=[anchor], anchor=anchor)
            raise NoCriteriaOrPathError()

        depth = self._depth(max_depth, self.config.default_max_depth_search)
        self.trace.info(
            "Searching for %s below %s (max depth %d)",
            locator.describe(),
            self.accessor.describe_safely(anchor),
            depth,
        )
        visitor = SearchVisitor(
            self.matcher,
            locator.criteria,
            match_all=locator.match_all,
            stop_at_first=stop_at_first,
            require_action=locator.require_action,
        )
        state = TraversalState.for_search(depth)
        self.traverser.traverse(anchor, visitor, state)

        if visitor.first_match is None and stop_at_first:
            if visitor.partial_matches:
                raise RequiredActionMissingError(locator.require_action, visitor.partial_matches)
            raise NoMatchFoundError(locator.criteria, state.depth_limit_reached)

        if state.depth_limit_reached:
            self.trace.debug("Search was truncated at max depth %d", depth)

        return SearchResult(
            element=visitor.first_match,
            elements=list(visitor.matches),
            anchor=anchor,
            visited_count=state.visited_count,
            depth_limit_reached=state.depth_limit_reached,
            partial_matches=list(visitor.partial_matches),
        )

    def collect(
        self,
        root: AccessibleElement,
        criteria: Optional[Iterable[Union[Criterion, dict]]] = None,
        max_depth: Optional[int] = None,
        include_ignored: bool = False,
        limit: Optional[int] = None,
        match_all: bool = True,
        path_hint: PathLike = None,
    ) -> SearchResult:
        """
        Every non-ignored element below ``root`` (inclusive), optionally filtered.

        The anchor is ``root`` after applying ``path_hint``. ``limit`` caps
        the result after the traversal completes.
        """
        _check_limit(limit)
        criteria_list = coerce_criteria(criteria)
        steps = coerce_path(path_hint)
        return self.call(
            self._collect_impl, root, criteria_list, max_depth, include_ignored, limit, match_all, steps
        )

    def collect_elements(
        self,
        root: AccessibleElement,
        criteria: Optional[Iterable[Union[Criterion, dict]]] = None,
        max_depth: Optional[int] = None,
        include_ignored: bool = False,
        limit: Optional[int] = None,
        match_all: bool = True,
        path_hint: PathLike = None,
    ) -> List[AccessibleElement]:
        return self.collect(
            root,
            criteria=criteria,
            max_depth=max_depth,
            include_ignored=include_ignored,
            limit=limit,
            match_all=match_all,
            path_hint=path_hint,
        ).elements

    def _collect_impl(
        self,
        root: AccessibleElement,
        criteria: List[Criterion],
        max_depth: Optional[int],
        include_ignored: bool,
        limit: Optional[int],
        match_all: bool,
        path_hint: List[PathStep],
    ) -> SearchResult:
        anchor = self.path_resolver.resolve(root, path_hint) if path_hint else root
        depth = self._depth(max_depth, self.config.default_max_depth_collect_all)
        visitor = CollectVisitor(
            self.matcher, criteria, match_all=match_all, include_ignored=include_ignored
        )
        state = TraversalState.for_search(depth)
        self.traverser.traverse(anchor, visitor, state)
        collected = visitor.collected
        self.trace.info(
            "Collected %d element(s) from %d visited (max depth %d)",
            len(collected),
            state.visited_count,
            depth,
        )
        if state.depth_limit_reached:
            self.trace.debug("Collection was truncated at max depth %d", depth)
        return SearchResult(
            element=collected[0] if collected else None,
            elements=collected[:limit] if limit is not None else collected,
            anchor=anchor,
            visited_count=state.visited_count,
            depth_limit_reached=state.depth_limit_reached,
        )

    def find_in_application(
        self,
        application: str,
        locator: LocatorLike,
        max_depth: Optional[int] = None,
        path_hint: PathLike = None,
    ) -> AccessibleElement:
        """Resolve the application root, then find_element from it."""
        root = self.resolve_application(application)
        return self.find_element(root, locator, max_depth=max_depth, path_hint=path_hint)

    # Element operations

    def perform_action(
        self,
        root: AccessibleElement,
        locator: LocatorLike,
        action: str,
        max_depth: Optional[int] = None,
        path_hint: PathLike = None,
    ) -> AccessibleElement:
        """
        Find an element that supports ``action`` and invoke it.

        Returns:
            The element the action was performed on
        """
        locator = coerce_locator(locator)
        if locator.criteria and not locator.require_action:
            locator = locator.model_copy(update={"require_action": action})
        element = self.find_element(root, locator, max_depth=max_depth, path_hint=path_hint)
        self.call(self.accessor.perform_action, element, action)
        return element

    def get_attribute(
        self,
        root: AccessibleElement,
        locator: LocatorLike,
        attribute: str,
        max_depth: Optional[int] = None,
        path_hint: PathLike = None,
    ) -> AttributeValue:
        """
        Read one attribute of the located element.

        Raises:
            AttributeNotReadableError: the element has no value for it
        """
        element = self.find_element(root, locator, max_depth=max_depth, path_hint=path_hint)
        value = self.call(self.accessor.read, element, attribute)
        if value is None:
            raise AttributeNotReadableError(attribute, self.accessor.describe_safely(element))
        return value

    def set_attribute(
        self,
        root: AccessibleElement,
        locator: LocatorLike,
        attribute: str,
        value: Any,
        max_depth: Optional[int] = None,
        path_hint: PathLike = None,
    ) -> AccessibleElement:
        element = self.find_element(root, locator, max_depth=max_depth, path_hint=path_hint)
        self.call(self.accessor.write, element, attribute, value)
        return element

    def run_batch(self, queries: Sequence[Any], root: Optional[AccessibleElement] = None):
        """Run queries in order; see BatchProcessor."""
        from .batch import BatchProcessor

        return BatchProcessor(self).run(queries, root=root)

    @staticmethod
    def _depth(requested: Optional[int], default: int) -> int:
        if requested is None:
            return default
        if requested < 0:
            raise ValueError(f"max_depth must not be negative, got {requested}")
        return requested
