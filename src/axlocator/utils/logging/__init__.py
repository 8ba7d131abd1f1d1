"""
Logging helpers: package logging setup and the per-search trace context.
"""

from .logging_config import setup_logging, silence_logging
from .search_trace import SearchTrace

__all__ = ["setup_logging", "silence_logging", "SearchTrace"]
