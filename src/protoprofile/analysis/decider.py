"""Optimization decider: turns a field's classification into a verdict.

Rules, first match wins:

    string   presence >= LIKELY and layout allows inlining      -> INLINE
    message  presence > RARELY, usage == RARELY, not repeated   -> LAZY
    anything else                                               -> NONE

NEVER presence is kept out of LAZY on purpose: it may only mean no data was
collected for the field.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from protoprofile.analysis.types import FieldAnalysis, Optimization, Scale
from protoprofile.layout import DefaultStringLayout, StringLayout
from protoprofile.type_mappings import FieldKind

if TYPE_CHECKING:
    from protoprofile.registry import FieldDefinition


class OptimizationDecider:
    """Chooses one Optimization per field."""

    def __init__(self, layout: StringLayout | None = None) -> None:
        self.layout = layout or DefaultStringLayout()

    def decide(self, field: FieldDefinition, analysis: FieldAnalysis) -> Optimization:
        if field.kind is FieldKind.STRING:
            if analysis.presence >= Scale.LIKELY and self.layout.can_inline_string(field):
                return Optimization.INLINE

        if field.kind is FieldKind.MESSAGE:
            if (
                analysis.presence > Scale.RARELY
                and analysis.usage == Scale.RARELY
                and not field.repeated
            ):
                return Optimization.LAZY

        return Optimization.NONE
