"""Type mapping utilities for converting schema field types to storage kinds."""

from enum import Enum


class FieldKind(str, Enum):
    """Storage kind of a field as seen by the code generator."""

    INT32 = "int32"
    INT64 = "int64"
    UINT32 = "uint32"
    UINT64 = "uint64"
    DOUBLE = "double"
    FLOAT = "float"
    BOOL = "bool"
    ENUM = "enum"
    STRING = "string"
    MESSAGE = "message"

    def __str__(self) -> str:
        return self.value


_FIELD_KINDS = {
    "int32": FieldKind.INT32,
    "sint32": FieldKind.INT32,
    "sfixed32": FieldKind.INT32,
    "int64": FieldKind.INT64,
    "sint64": FieldKind.INT64,
    "sfixed64": FieldKind.INT64,
    "uint32": FieldKind.UINT32,
    "fixed32": FieldKind.UINT32,
    "uint64": FieldKind.UINT64,
    "fixed64": FieldKind.UINT64,
    "double": FieldKind.DOUBLE,
    "float": FieldKind.FLOAT,
    "bool": FieldKind.BOOL,
    "enum": FieldKind.ENUM,
    "string": FieldKind.STRING,
    "bytes": FieldKind.STRING,
    "message": FieldKind.MESSAGE,
    "group": FieldKind.MESSAGE,
}

SCHEMA_FIELD_TYPES = tuple(_FIELD_KINDS)


def map_to_field_kind(field_type: str) -> FieldKind:
    """Map a schema field type to its storage kind.

    Several wire types share a storage kind, e.g. ``sint32`` and ``sfixed32``
    are both stored as ``int32`` and ``bytes`` is stored as ``string``.

    Args:
    ----
        field_type: Schema field type (e.g., "int32", "fixed64", "bytes")

    Returns:
    -------
        The matching FieldKind

    Raises:
    ------
        ValueError: If the field type is not a known schema type

    """
    try:
        return _FIELD_KINDS[field_type.lower()]
    except KeyError:
        msg = f"Unknown field type: {field_type}"
        raise ValueError(msg) from None


def is_scalar_kind(kind: FieldKind) -> bool:
    """Return True for kinds stored directly in the parent (no type reference)."""
    return kind not in (FieldKind.ENUM, FieldKind.MESSAGE)
