"""
Provider-facing tools.
"""
