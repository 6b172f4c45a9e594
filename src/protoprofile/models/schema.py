"""Schema Pydantic Models

Type-safe models for message schema documents.
Provides runtime validation and serialization/deserialization.
"""

from pathlib import Path
from typing import Annotated, Literal

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    StringConstraints,
    field_validator,
    model_validator,
)

from protoprofile.errors import SchemaError
from protoprofile.type_mappings import SCHEMA_FIELD_TYPES, FieldKind, map_to_field_kind

Identifier = Annotated[
    str, StringConstraints(pattern=r"^[A-Za-z_][A-Za-z0-9_]*$", max_length=128)
]
TypeReference = Annotated[
    str, StringConstraints(pattern=r"^\.?[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
]


class FieldSchema(BaseModel):
    """Field definition inside a message."""

    name: Identifier = Field(description="Field name")
    type: str = Field(
        description="Schema field type",
        pattern="^(" + "|".join(SCHEMA_FIELD_TYPES) + ")$",
    )
    repeated: bool = Field(default=False, description="Whether the field is repeated")
    message_type: TypeReference | None = Field(
        default=None,
        description="Referenced message type for message/group fields. "
        "Absolute when prefixed with '.', otherwise resolved from the enclosing scope.",
    )
    enum_type: TypeReference | None = Field(
        default=None, description="Referenced enum type for enum fields"
    )
    oneof: Identifier | None = Field(
        default=None, description="Name of the oneof this field belongs to"
    )
    extension: bool = Field(default=False, description="Whether the field is an extension")
    string_type: Literal["STRING", "CORD", "STRING_PIECE"] = Field(
        default="STRING", description="In-memory representation of string/bytes fields"
    )
    description: str | None = Field(default=None, description="Field description")

    model_config = ConfigDict(extra="forbid", frozen=True)

    @property
    def kind(self) -> FieldKind:
        """Storage kind derived from the schema type."""
        return map_to_field_kind(self.type)

    @model_validator(mode="after")
    def type_reference_matches_kind(self) -> "FieldSchema":
        """Validate that message_type/enum_type are set on the right kinds."""
        is_message = self.kind is FieldKind.MESSAGE
        if is_message and self.message_type is None:
            msg = f"Field '{self.name}' of type {self.type} needs message_type"
            raise ValueError(msg)
        if not is_message and self.message_type is not None:
            msg = f"Field '{self.name}' of type {self.type} cannot have message_type"
            raise ValueError(msg)
        if self.enum_type is not None and self.kind is not FieldKind.ENUM:
            msg = f"Field '{self.name}' of type {self.type} cannot have enum_type"
            raise ValueError(msg)
        return self


class EnumSchema(BaseModel):
    """Enum definition."""

    name: Identifier = Field(description="Enum name")
    values: list[Identifier] = Field(min_length=1, description="Enum value names")

    model_config = ConfigDict(extra="forbid", frozen=True)


class MessageSchema(BaseModel):
    """Message definition, possibly containing nested messages and enums."""

    name: Identifier = Field(description="Message name")
    description: str | None = Field(default=None, description="Message description")
    fields: list[FieldSchema] = Field(
        default_factory=list, description="Fields in declaration order"
    )
    nested_types: list["MessageSchema"] = Field(
        default_factory=list, description="Messages declared inside this message"
    )
    enums: list[EnumSchema] = Field(
        default_factory=list, description="Enums declared inside this message"
    )

    model_config = ConfigDict(extra="forbid", frozen=True)

    @field_validator("fields")
    @classmethod
    def unique_field_names(cls, v) -> list[FieldSchema]:
        """Validate that field names are unique."""
        names = [f.name for f in v]
        if len(names) != len(set(names)):
            msg = "Field names must be unique"
            raise ValueError(msg)
        return v


class SchemaDocument(BaseModel):
    """A schema document: an optional package and its top-level types."""

    package: Annotated[
        str, StringConstraints(pattern=r"^[A-Za-z_][A-Za-z0-9_]*(\.[A-Za-z_][A-Za-z0-9_]*)*$")
    ] | None = Field(default=None, description="Dotted package name")
    messages: list[MessageSchema] = Field(
        default_factory=list, description="Top-level messages"
    )
    enums: list[EnumSchema] = Field(default_factory=list, description="Top-level enums")

    model_config = ConfigDict(
        extra="forbid",
        frozen=True,
        json_schema_extra={
            "example": {
                "package": "shop.v1",
                "messages": [
                    {
                        "name": "Order",
                        "fields": [
                            {"name": "id", "type": "int64"},
                            {"name": "note", "type": "string"},
                            {
                                "name": "items",
                                "type": "message",
                                "message_type": "Item",
                                "repeated": True,
                            },
                        ],
                        "nested_types": [
                            {"name": "Item", "fields": [{"name": "sku", "type": "string"}]}
                        ],
                    }
                ],
            }
        },
    )


def load_schema_from_yaml(yaml_path: str | Path) -> SchemaDocument:
    """Load and validate a schema document from a YAML file.

    Args:
        yaml_path: Path to schema YAML file

    Returns:
        Validated SchemaDocument model

    Raises:
        SchemaError: If the file is missing, is not YAML, or fails validation

    """
    import yaml
    from pydantic import ValidationError

    yaml_file = Path(yaml_path)
    if not yaml_file.is_file():
        msg = f"Schema file not found: {yaml_file}"
        raise SchemaError(msg)

    try:
        with yaml_file.open(encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except (yaml.YAMLError, UnicodeDecodeError) as e:
        msg = f"Invalid YAML in {yaml_file}: {e}"
        raise SchemaError(msg) from e
    except OSError as e:
        msg = f"Failed to read schema file {yaml_file}: {e}"
        raise SchemaError(msg) from e

    try:
        return SchemaDocument(**(data or {}))
    except (ValidationError, TypeError) as e:
        msg = f"Invalid schema document {yaml_file}: {e}"
        raise SchemaError(msg) from e


def save_schema_to_yaml(schema: SchemaDocument, yaml_path: str | Path) -> None:
    """Save a schema document to a YAML file.

    Args:
        schema: SchemaDocument model to save
        yaml_path: Output YAML file path

    """
    import yaml as yaml_lib

    yaml_file = Path(yaml_path)
    yaml_file.parent.mkdir(parents=True, exist_ok=True)

    # Defaults are dropped so round-tripped documents stay close to hand-written ones
    data = schema.model_dump(exclude_none=True, exclude_defaults=True)

    with yaml_file.open("w", encoding="utf-8") as f:
        yaml_lib.dump(
            data, f, default_flow_style=False, allow_unicode=True, sort_keys=False
        )


__all__ = [
    "EnumSchema",
    "FieldSchema",
    "MessageSchema",
    "SchemaDocument",
    "load_schema_from_yaml",
    "save_schema_to_yaml",
]
