"""Thread affinity helpers for provider access."""

from .affinity import ProviderAffinity

__all__ = ["ProviderAffinity"]
