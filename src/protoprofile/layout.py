"""Generator layout capabilities consulted by the optimization decider."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from protoprofile.type_mappings import FieldKind

if TYPE_CHECKING:
    from protoprofile.registry import FieldDefinition


class StringLayout(Protocol):
    """Answers whether the generated layout can store a string field inline."""

    def can_inline_string(self, field: FieldDefinition) -> bool: ...


class DefaultStringLayout:
    """Inline storage rules for string fields in generated classes.

    Only singular, plain ``STRING`` fields qualify. Repeated fields, extensions
    and oneof members keep their own storage, and ``CORD`` / ``STRING_PIECE``
    representations are never inlined.
    """

    def can_inline_string(self, field: FieldDefinition) -> bool:
        if field.kind is not FieldKind.STRING:
            return False
        if field.repeated or field.extension or field.oneof is not None:
            return False
        return field.string_type == "STRING"
