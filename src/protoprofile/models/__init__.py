"""Schema data models for protoprofile."""

from protoprofile.models.schema import (
    EnumSchema,
    FieldSchema,
    MessageSchema,
    SchemaDocument,
    load_schema_from_yaml,
    save_schema_to_yaml,
)

__all__ = [
    "EnumSchema",
    "FieldSchema",
    "MessageSchema",
    "SchemaDocument",
    "load_schema_from_yaml",
    "save_schema_to_yaml",
]
