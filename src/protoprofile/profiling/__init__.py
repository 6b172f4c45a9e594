"""Profile dataset types and loading utilities for protoprofile."""

from protoprofile.profiling.loader import AccessInfoLoader, load_access_info
from protoprofile.profiling.types import (
    AccessInfo,
    AccessKind,
    AccessStats,
    FieldAccessInfo,
    MessageAccessInfo,
)

__all__ = [
    "AccessInfo",
    "AccessInfoLoader",
    "AccessKind",
    "AccessStats",
    "FieldAccessInfo",
    "MessageAccessInfo",
    "load_access_info",
]
