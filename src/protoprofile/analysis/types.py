"""Classification results shared by the classifier, decider and report."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum


class Scale(IntEnum):
    """Ordered likelihood bucket used for both presence and usage."""

    NEVER = 0
    RARELY = 1
    DEFAULT = 2
    LIKELY = 3

    def __str__(self) -> str:
        return self.name


class Optimization(Enum):
    """Storage optimization to apply to a field.

    SPLIT is part of the output domain, but no rule assigns it yet.
    """

    NONE = "NONE"
    LAZY = "LAZY"
    INLINE = "INLINE"
    SPLIT = "SPLIT"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class FieldAnalysis:
    """Presence and usage buckets for one field."""

    presence: Scale = Scale.DEFAULT
    usage: Scale = Scale.DEFAULT
