"""
Utility modules organized by domain.

Submodules:
- logging: Logging configuration and the per-search trace context
- threading: Provider thread affinity
"""
