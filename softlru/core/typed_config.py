"""
Typed cache configuration.

Pydantic-validated, immutable description of one cache instance, for
applications that declare their caches in config files rather than code.
"""

from typing import Optional

from pydantic import BaseModel, ConfigDict, field_validator


class CacheConfig(BaseModel):
    """Construction parameters for a single LRUCache."""

    model_config = ConfigDict(frozen=True)

    capacity: int
    name: Optional[str] = None

    @field_validator("capacity")
    @classmethod
    def capacity_positive(cls, v: int) -> int:
        if v <= 0:
            raise ValueError("capacity must be > 0")
        return v
