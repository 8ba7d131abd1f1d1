"""
Depth-first walker over an accessibility element tree.

The walk is pre-order and bounded two ways: a node deeper than
``state.max_depth`` is never visited, and a node whose identity was already
seen in this traversal is never visited again. Visitors steer the walk with
VisitResult.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from enum import Enum
from typing import Hashable, Optional, Set

from ..tools.accessibility.attribute_accessor import AttributeAccessor
from ..tools.accessibility.protocol import AccessibleElement
from ..utils.logging.search_trace import SearchTrace


class VisitResult(Enum):
    """What the traverser does after visiting a node."""

    CONTINUE = "continue"
    """Descend into the node's children"""

    SKIP_CHILDREN = "skip_children"
    """Do not descend, carry on with siblings"""

    STOP = "stop"
    """Abort the whole traversal"""


@dataclass
class TraversalState:
    """
    Per-traversal bookkeeping. Never shared between traversals.
    """

    max_depth: int
    visited: Set[Hashable] = field(default_factory=set)
    current_depth: int = 0
    visited_count: int = 0
    depth_limit_reached: bool = False
    cycles_detected: int = 0

    @classmethod
    def for_search(cls, max_depth: int) -> "TraversalState":
        if max_depth < 0:
            raise ValueError(f"max_depth must not be negative, got {max_depth}")
        return cls(max_depth=max_depth)


class Visitor(ABC):
    """Callback invoked by TreeTraverser once per visited node."""

    @abstractmethod
    def visit(self, element: AccessibleElement, state: TraversalState) -> VisitResult:
        """
        Inspect one node.

        ``state.current_depth`` is the node's depth below the traversal root.
        """
        ...


class TreeTraverser:
    """
    Pre-order depth-first traversal with max-depth and cycle guards.

    Args:
        accessor: Used to fetch children, once per visited node
        trace: Logging context (defaults to the accessor's)
    """

    def __init__(self, accessor: Optional[AttributeAccessor] = None, trace: Optional[SearchTrace] = None):
        self.accessor = accessor or AttributeAccessor(trace)
        self.trace = trace or self.accessor.trace

    def traverse(
        self, root: AccessibleElement, visitor: Visitor, state: TraversalState
    ) -> VisitResult:
        """
        Walk the tree below ``root`` (inclusive).

        Returns:
            VisitResult.STOP if the visitor stopped the walk, otherwise
            VisitResult.CONTINUE once every reachable node was visited.
        """
        self.trace.debug("Traversal starting (max depth %d)", state.max_depth)
        result = self._walk(root, 0, visitor, state)
        self.trace.debug(
            "Traversal finished: %d visited, depth limit %s, %d cycle(s)",
            state.visited_count,
            "reached" if state.depth_limit_reached else "not reached",
            state.cycles_detected,
        )
        return VisitResult.STOP if result is VisitResult.STOP else VisitResult.CONTINUE

    def _walk(
        self, element: AccessibleElement, depth: int, visitor: Visitor, state: TraversalState
    ) -> VisitResult:
        if depth > state.max_depth:
            state.depth_limit_reached = True
            self.trace.record_visit(depth, state.max_depth, "maxD")
            return VisitResult.SKIP_CHILDREN

        identity = element.identity
        if identity in state.visited:
            state.cycles_detected += 1
            self.trace.debug("Cycle detected at depth %d; skipping branch", depth)
            self.trace.record_visit(depth, state.max_depth, "cycle")
            return VisitResult.SKIP_CHILDREN
        state.visited.add(identity)
        state.visited_count += 1
        state.current_depth = depth

        result = visitor.visit(element, state)
        if result is not VisitResult.CONTINUE:
            return result

        for child in self.accessor.children(element):
            if self._walk(child, depth + 1, visitor, state) is VisitResult.STOP:
                return VisitResult.STOP
        return VisitResult.CONTINUE
