"""
axlocator: find and enumerate UI elements in accessibility trees.

Example:
    from axlocator import SearchEngine
    from axlocator.tools.accessibility.macos import MacOSApplicationResolver

    engine = SearchEngine(application_resolver=MacOSApplicationResolver())
    button = engine.find_in_application(
        "TextEdit",
        {"criteria": [{"attribute": "role", "value": "Button"},
                      {"attribute": "title", "value": "Save"}]},
    )
"""

from .config import SearchConfig, get_search_config, load_search_config_from_env
from .exceptions import AXLocatorError
from .schemas import Criterion, Locator, MatchType, PathStep
from .search import SearchEngine, SearchResult
from .tools.accessibility import AccessibleElement, ApplicationResolver, AttributeValue

__version__ = "0.1.0"

__all__ = [
    "SearchConfig",
    "get_search_config",
    "load_search_config_from_env",
    "AXLocatorError",
    "Criterion",
    "Locator",
    "MatchType",
    "PathStep",
    "SearchEngine",
    "SearchResult",
    "AccessibleElement",
    "ApplicationResolver",
    "AttributeValue",
]
