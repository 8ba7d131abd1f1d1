"""
Path hint navigation.

A path hint is an ordered list of PathStep. Each step is resolved below the
anchor produced by the previous one; the first step that cannot be resolved
aborts the whole navigation.
"""

from typing import Optional, Sequence

from ..exceptions import PathNavigationFailedError
from ..schemas.locator import Criterion, PathStep
from ..tools.accessibility.attribute_names import APP_SPECIFIER_KEYS, AX_ROLE
from ..tools.accessibility.protocol import AccessibleElement
from ..tools.accessibility.role_normalizer import is_application_role
from .criterion_matcher import CriterionMatcher
from .tree_traverser import TraversalState, TreeTraverser
from .visitors import SearchVisitor

DEFAULT_STEP_DEPTH = 3


def is_app_specifier(criterion: Criterion) -> bool:
    """True for criteria keyed by application, bundle_id, pid or path."""
    return criterion.attribute.strip().lower() in APP_SPECIFIER_KEYS


def _designates_application(criterion: Criterion) -> bool:
    if is_app_specifier(criterion):
        return True
    return criterion.key == AX_ROLE and is_application_role(criterion.value)


def is_application_step(step: PathStep) -> bool:
    """True when every criterion of the step names the application itself."""
    return all(_designates_application(c) for c in step.criteria)


class PathResolver:
    """
    Resolves a path hint to a single anchor element.

    For every step the anchor's descendants (never the anchor itself) are
    searched pre-order, down to the step's depth; the first match becomes the
    new anchor. When no descendant matches but the anchor itself satisfies the
    step, the anchor is kept. Otherwise PathNavigationFailedError is raised.

    Args:
        matcher: Criterion evaluator
        traverser: Tree walker sharing the matcher's accessor
        default_step_depth: Depth for steps that do not set one
    """

    def __init__(
        self,
        matcher: CriterionMatcher,
        traverser: Optional[TreeTraverser] = None,
        default_step_depth: int = DEFAULT_STEP_DEPTH,
    ):
        self.matcher = matcher
        self.traverser = traverser or TreeTraverser(matcher.accessor, matcher.trace)
        self.default_step_depth = default_step_depth

    @property
    def trace(self):
        return self.matcher.trace

    def resolve(self, root: AccessibleElement, path: Sequence[PathStep]) -> AccessibleElement:
        """
        Walk ``path`` from ``root``.

        Returns:
            The element the last step resolved to (``root`` for an empty path)

        Raises:
            PathNavigationFailedError: carries the failing step index and its criteria
        """
        anchor = root
        for index, step in enumerate(path):
            if index == 0 and is_application_step(step):
                self.trace.debug("Path step 0 designates the application; staying at root")
                continue
            anchor = self.resolve_step(anchor, step, index)
        return anchor

    def resolve_step(self, anchor: AccessibleElement, step: PathStep, index: int = 0) -> AccessibleElement:
        depth = step.depth if step.depth is not None else self.default_step_depth
        self.trace.debug(
            "Path step %d: %s below %s (depth %d)",
            index,
            step.describe(),
            self.matcher.accessor.describe_safely(anchor),
            depth,
        )

        found = self._find_descendant(anchor, step, depth)
        if found is not None:
            return found

        if self.matcher.matches_criteria(anchor, step.criteria, step.match_all):
            self.trace.debug("Path step %d: no descendant matched; anchor itself matches, retaining it", index)
            return anchor

        description = self.matcher.accessor.describe_safely(anchor)
        self.trace.warning("Path step %d failed below %s: %s", index, description, step.describe())
        raise PathNavigationFailedError(index, step.criteria, anchor=description)

    def _find_descendant(
        self, anchor: AccessibleElement, step: PathStep, depth: int
    ) -> Optional[AccessibleElement]:
        if depth < 1:
            return None
        visitor = SearchVisitor(
            self.matcher,
            step.criteria,
            match_all=step.match_all,
            stop_at_first=True,
            min_depth=1,
        )
        self.traverser.traverse(anchor, visitor, TraversalState.for_search(depth))
        return visitor.first_match
