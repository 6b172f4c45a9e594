"""Type registry: fully qualified lookup of message types across schema documents."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass
from pathlib import Path

from protoprofile.errors import SchemaError
from protoprofile.models.schema import (
    FieldSchema,
    MessageSchema,
    SchemaDocument,
    load_schema_from_yaml,
)
from protoprofile.type_mappings import FieldKind, is_scalar_kind

logger = logging.getLogger(__name__)

NESTING_SEPARATOR = "."


@dataclass(frozen=True)
class FieldDefinition:
    """A field of a registered message type."""

    name: str
    kind: FieldKind
    containing_type: str
    repeated: bool = False
    type_name: str | None = None  # resolved full name for message/enum fields
    oneof: str | None = None
    extension: bool = False
    string_type: str = "STRING"

    @property
    def full_name(self) -> str:
        return f"{self.containing_type}{NESTING_SEPARATOR}{self.name}"

    @property
    def type_simple_name(self) -> str | None:
        """Last segment of the referenced type name, if any."""
        if self.type_name is None:
            return None
        return self.type_name.rsplit(NESTING_SEPARATOR, 1)[-1]


@dataclass(frozen=True)
class TypeDefinition:
    """A registered message type with its fields in declaration order."""

    full_name: str
    fields: tuple[FieldDefinition, ...] = ()

    @property
    def name(self) -> str:
        return self.full_name.rsplit(NESTING_SEPARATOR, 1)[-1]

    def field(self, name: str) -> FieldDefinition | None:
        for field_def in self.fields:
            if field_def.name == name:
                return field_def
        return None


def _qualify(scope: str | None, name: str) -> str:
    return f"{scope}{NESTING_SEPARATOR}{name}" if scope else name


class TypeRegistry:
    """Registry of message types keyed by fully qualified, dot-separated name.

    Field type references are resolved once, when the registry is built, using
    the usual scoping rule: absolute names start with a dot, relative names are
    looked up from the innermost enclosing scope outward.
    """

    def __init__(self, documents: Iterable[SchemaDocument] = ()) -> None:
        self._messages: dict[str, TypeDefinition] = {}
        self._enums: set[str] = set()

        declared: list[tuple[str, MessageSchema]] = []
        for document in documents:
            for enum in document.enums:
                self._declare_enum(_qualify(document.package, enum.name), declared)
            for message in document.messages:
                self._collect(document.package, message, declared)

        # Names are all known now, so references can be resolved in one pass
        message_names = {full_name for full_name, _ in declared}
        for full_name, message in declared:
            fields = tuple(
                self._build_field(full_name, field_schema, message_names)
                for field_schema in message.fields
            )
            self._messages[full_name] = TypeDefinition(full_name=full_name, fields=fields)

        logger.debug(
            f"Type registry built with {len(self._messages)} messages "
            f"and {len(self._enums)} enums"
        )

    @classmethod
    def from_files(cls, paths: Iterable[str | Path]) -> TypeRegistry:
        """Build a registry from schema YAML files.

        Args:
        ----
            paths: Schema document paths

        Returns:
        -------
            Registry containing every type declared in the documents

        Raises:
        ------
            SchemaError: If a document is missing, invalid, or redeclares a type

        """
        documents = [load_schema_from_yaml(path) for path in paths]
        registry = cls(documents)
        logger.info(
            f"Loaded {len(registry)} message types from {len(documents)} schema files"
        )
        return registry

    def _declare_enum(
        self, full_name: str, declared: list[tuple[str, MessageSchema]]
    ) -> None:
        if full_name in self._enums or any(name == full_name for name, _ in declared):
            msg = f"Duplicate type name: {full_name}"
            raise SchemaError(msg)
        self._enums.add(full_name)

    def _collect(
        self,
        scope: str | None,
        message: MessageSchema,
        declared: list[tuple[str, MessageSchema]],
    ) -> None:
        full_name = _qualify(scope, message.name)
        if full_name in self._enums or any(name == full_name for name, _ in declared):
            msg = f"Duplicate type name: {full_name}"
            raise SchemaError(msg)
        declared.append((full_name, message))
        for enum in message.enums:
            self._declare_enum(_qualify(full_name, enum.name), declared)
        for nested in message.nested_types:
            self._collect(full_name, nested, declared)

    def _resolve_reference(
        self, scope: str, reference: str, candidates: set[str] | frozenset[str]
    ) -> str | None:
        if reference.startswith(NESTING_SEPARATOR):
            absolute = reference[1:]
            return absolute if absolute in candidates else None

        parts = scope.split(NESTING_SEPARATOR)
        for depth in range(len(parts), -1, -1):
            candidate = NESTING_SEPARATOR.join([*parts[:depth], reference])
            if candidate in candidates:
                return candidate
        return None

    def _build_field(
        self, containing_type: str, field_schema: FieldSchema, message_names: set[str]
    ) -> FieldDefinition:
        kind = field_schema.kind
        type_name = None
        if not is_scalar_kind(kind):
            if kind is FieldKind.MESSAGE:
                reference, candidates = field_schema.message_type, message_names
            else:
                reference, candidates = field_schema.enum_type, self._enums
            if reference is not None:
                type_name = self._resolve_reference(containing_type, reference, candidates)
                if type_name is None:
                    logger.warning(
                        f"Unresolved {kind.value} type '{reference}' for field "
                        f"{containing_type}.{field_schema.name}"
                    )

        return FieldDefinition(
            name=field_schema.name,
            kind=kind,
            containing_type=containing_type,
            repeated=field_schema.repeated,
            type_name=type_name,
            oneof=field_schema.oneof,
            extension=field_schema.extension,
            string_type=field_schema.string_type,
        )

    def find_by_qualified_name(self, name: str) -> TypeDefinition | None:
        """Exact lookup of a message type by its dot-separated full name."""
        return self._messages.get(name)

    def is_message_type(self, name: str) -> bool:
        return name in self._messages

    def is_enum_type(self, name: str) -> bool:
        return name in self._enums

    def message_type_of(self, field: FieldDefinition) -> TypeDefinition | None:
        """Return the message type a message field refers to, if resolved."""
        if field.kind is not FieldKind.MESSAGE or field.type_name is None:
            return None
        return self._messages.get(field.type_name)

    def messages(self) -> list[TypeDefinition]:
        """All registered message types in declaration order."""
        return list(self._messages.values())

    def __len__(self) -> int:
        return len(self._messages)

    def __contains__(self, name: object) -> bool:
        return name in self._messages
