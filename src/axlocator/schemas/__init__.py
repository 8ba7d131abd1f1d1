"""
Pydantic schemas for locators, batch queries and search logs.
"""

from .locator import Criterion, Locator, MatchType, PathStep, parse_path_segment
from .batch import BatchCommand, BatchQuery, BatchResult, ElementSummary
from .search_log import SearchLogEntry

__all__ = [
    "Criterion",
    "Locator",
    "MatchType",
    "PathStep",
    "parse_path_segment",
    "BatchCommand",
    "BatchQuery",
    "BatchResult",
    "ElementSummary",
    "SearchLogEntry",
]
