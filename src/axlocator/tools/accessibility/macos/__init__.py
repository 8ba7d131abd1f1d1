"""
macOS-specific accessibility binding.

This package contains all atomacos-specific code:
- MacOSElement: atomacos node adapter
- MacOSApplicationResolver: PID / bundle id / name lookup
"""

from .element import MacOSElement
from .application import MacOSApplicationResolver, score_app_match

__all__ = [
    "MacOSElement",
    "MacOSApplicationResolver",
    "score_app_match",
]
