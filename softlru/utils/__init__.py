"""Utility modules for softlru."""

from . import hooks
from . import lru_cache

__all__ = ["hooks", "lru_cache"]
