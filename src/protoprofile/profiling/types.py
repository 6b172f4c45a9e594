"""Profiling data types for field access analysis."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field, field_validator


class AccessKind(str, Enum):
    """Kind of field access recorded by the profiler."""

    READ = "read"
    WRITE = "write"
    READ_WRITE_OTHER = "read_write_other"


@dataclass(frozen=True)
class AccessStats:
    """Access statistics for a single field, normalized by its message count."""

    field_name: str
    reads: int = 0
    writes: int = 0
    read_write_other: int = 0
    message_count: int = 0

    def count(self, kind: AccessKind) -> int:
        if kind is AccessKind.READ:
            return self.reads
        if kind is AccessKind.WRITE:
            return self.writes
        return self.read_write_other

    def ratio(self, kind: AccessKind) -> float:
        """Accesses of this kind per access to the containing message."""
        if self.message_count <= 0:
            return 0.0
        return self.count(kind) / self.message_count

    def is_hot(self, kind: AccessKind, hot_ratio: float) -> bool:
        return self.ratio(kind) >= hot_ratio

    def is_cold(self, kind: AccessKind, cold_ratio: float) -> bool:
        return self.ratio(kind) < cold_ratio

    @property
    def presence_ratio(self) -> float:
        """How often the field is set when its message is accessed."""
        ratio = max(self.ratio(AccessKind.READ), self.ratio(AccessKind.WRITE))
        return min(ratio, 1.0)

    @property
    def absence_ratio(self) -> float:
        return 1.0 - self.presence_ratio


class FieldAccessInfo(BaseModel):
    """Recorded access counts for one field."""

    name: str = Field(min_length=1, description="Field name")
    reads: int = Field(default=0, ge=0, description="Read accesses")
    writes: int = Field(default=0, ge=0, description="Write accesses")
    read_write_other: int = Field(
        default=0, ge=0, description="Other accesses that may read or write the field"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)


class MessageAccessInfo(BaseModel):
    """Recorded accesses for one message type, keyed by its mangled name."""

    name: str = Field(min_length=1, description="Mangled message type name")
    count: int = Field(default=0, ge=0, description="Accesses to the message")
    fields: list[FieldAccessInfo] = Field(
        default_factory=list, description="Per-field access counts"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("fields")
    @classmethod
    def unique_field_names(cls, v) -> list[FieldAccessInfo]:
        """Validate that each field is recorded once."""
        names = [f.name for f in v]
        if len(names) != len(set(names)):
            msg = "Field names must be unique"
            raise ValueError(msg)
        return v

    @property
    def has_profile(self) -> bool:
        """Whether any field data was recorded for this message."""
        return bool(self.fields)

    def field_stats(self, field_name: str) -> AccessStats | None:
        """Return stats for a field, or None when the field is not in the profile."""
        for info in self.fields:
            if info.name == field_name:
                return AccessStats(
                    field_name=info.name,
                    reads=info.reads,
                    writes=info.writes,
                    read_write_other=info.read_write_other,
                    message_count=self.count,
                )
        return None


class AccessInfo(BaseModel):
    """A complete profile dataset."""

    unlikely_used_threshold: int = Field(
        default=0,
        ge=0,
        description="Fields with at most this many read/write/other accesses are unlikely used",
    )
    messages: list[MessageAccessInfo] = Field(
        default_factory=list, description="Profiled message types"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    def sorted_messages(self) -> list[MessageAccessInfo]:
        """Messages ordered by mangled name."""
        return sorted(self.messages, key=lambda message: message.name)
