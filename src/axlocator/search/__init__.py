"""
Query/search engine: criteria matching, path hints and tree traversal.
"""

from .criterion_matcher import CriterionMatcher, compare_text
from .tree_traverser import TraversalState, TreeTraverser, Visitor, VisitResult
from .visitors import CollectVisitor, MatchStatus, SearchVisitor
from .path_resolver import PathResolver
from .engine import SearchEngine, SearchResult
from .batch import BatchProcessor

__all__ = [
    "CriterionMatcher",
    "compare_text",
    "TraversalState",
    "TreeTraverser",
    "Visitor",
    "VisitResult",
    "CollectVisitor",
    "MatchStatus",
    "SearchVisitor",
    "PathResolver",
    "SearchEngine",
    "SearchResult",
    "BatchProcessor",
]
