"""
Search limits and diagnostics configuration.

Depth values count tree levels below the anchor the search starts from.
Values can be overridden through AXLOCATOR_* environment variables (a .env
file in the working directory is honoured).
"""

import os
from dataclasses import dataclass, replace
from typing import Optional

from dotenv import load_dotenv


@dataclass
class SearchConfig:
    """
    Centralized defaults for the search engine.
    """

    default_max_depth_search: int = 10
    """Depth bound for single-element and find-all searches"""

    default_max_depth_collect_all: int = 5
    """Depth bound for collect queries"""

    default_path_step_depth: int = 3
    """Depth bound of a path hint step that does not set its own"""

    collect_debug_logs: bool = False
    """Keep trace lines so batch results can return them"""

    verbose: bool = False
    """Log search internals at DEBUG level"""

    trace_file: Optional[str] = None
    """Append per-node SearchLogEntry records to this NDJSON file"""


# Global instance
DEFAULT_SEARCH = SearchConfig()

_active_config: SearchConfig = DEFAULT_SEARCH


def get_search_config() -> SearchConfig:
    """Get the process-wide search configuration."""
    return _active_config


def set_search_config(config: SearchConfig) -> None:
    """Replace the process-wide search configuration."""
    global _active_config
    _active_config = config


def _env_int(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    try:
        value = int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None
    if value < 0:
        raise ValueError(f"{name} must not be negative, got {value}")
    return value


def _env_bool(name: str, default: bool) -> bool:
    raw = os.getenv(name)
    if raw is None or not raw.strip():
        return default
    return raw.strip().lower() in ("1", "true", "yes", "on")


def load_search_config_from_env(base: Optional[SearchConfig] = None) -> SearchConfig:
    """
    Build a SearchConfig from environment variables.

    Environment Variables:
    - AXLOCATOR_MAX_DEPTH_SEARCH
    - AXLOCATOR_MAX_DEPTH_COLLECT
    - AXLOCATOR_PATH_STEP_DEPTH
    - AXLOCATOR_DEBUG_LOGS
    - AXLOCATOR_VERBOSE
    - AXLOCATOR_TRACE_FILE

    Args:
        base: Values to start from (defaults to SearchConfig())

    Returns:
        New SearchConfig; the process-wide config is left untouched
    """
    load_dotenv()
    config = base or SearchConfig()

    return replace(
        config,
        default_max_depth_search=_env_int(
            "AXLOCATOR_MAX_DEPTH_SEARCH", config.default_max_depth_search
        ),
        default_max_depth_collect_all=_env_int(
            "AXLOCATOR_MAX_DEPTH_COLLECT", config.default_max_depth_collect_all
        ),
        default_path_step_depth=_env_int(
            "AXLOCATOR_PATH_STEP_DEPTH", config.default_path_step_depth
        ),
        collect_debug_logs=_env_bool("AXLOCATOR_DEBUG_LOGS", config.collect_debug_logs),
        verbose=_env_bool("AXLOCATOR_VERBOSE", config.verbose),
        trace_file=os.getenv("AXLOCATOR_TRACE_FILE") or config.trace_file,
    )
