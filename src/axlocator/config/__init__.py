"""
Configuration module for search limits and diagnostics.
"""

from .search_config import (
    SearchConfig,
    get_search_config,
    load_search_config_from_env,
    set_search_config,
)

__all__ = [
    "SearchConfig",
    "get_search_config",
    "load_search_config_from_env",
    "set_search_config",
]
