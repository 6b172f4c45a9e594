"""Unit tests for schema Pydantic models and the type registry."""

from __future__ import annotations

import logging

import pytest
from pydantic import ValidationError

from protoprofile.errors import SchemaError
from protoprofile.models.schema import (
    FieldSchema,
    MessageSchema,
    SchemaDocument,
    load_schema_from_yaml,
    save_schema_to_yaml,
)
from protoprofile.registry import TypeRegistry
from protoprofile.type_mappings import FieldKind


class TestFieldSchema:
    """Test FieldSchema model."""

    def test_creates_minimal_field(self):
        """Test creating a scalar field with required values only."""
        field = FieldSchema(name="id", type="int64")
        assert field.kind is FieldKind.INT64
        assert field.repeated is False
        assert field.string_type == "STRING"

    def test_rejects_invalid_type(self):
        """Test unknown field types are rejected."""
        with pytest.raises(ValidationError):
            FieldSchema(name="amount", type="decimal")

    def test_validates_name_pattern(self):
        """Test field names must be identifiers."""
        with pytest.raises(ValidationError):
            FieldSchema(name="1bad", type="string")

    def test_message_field_requires_message_type(self):
        """Test message fields need a type reference."""
        with pytest.raises(ValidationError, match="needs message_type"):
            FieldSchema(name="child", type="message")

    def test_scalar_field_rejects_message_type(self):
        """Test scalar fields cannot reference a message."""
        with pytest.raises(ValidationError, match="cannot have message_type"):
            FieldSchema(name="id", type="int32", message_type="Other")

    def test_enum_type_only_on_enum_fields(self):
        """Test enum_type is restricted to enum fields."""
        FieldSchema(name="status", type="enum", enum_type="Status")
        with pytest.raises(ValidationError, match="cannot have enum_type"):
            FieldSchema(name="status", type="string", enum_type="Status")

    def test_rejects_unknown_string_type(self):
        """Test string_type is restricted to known representations."""
        with pytest.raises(ValidationError):
            FieldSchema(name="s", type="string", string_type="ROPE")


class TestMessageSchema:
    """Test MessageSchema model."""

    def test_field_names_must_be_unique(self):
        """Test duplicate field names are rejected."""
        with pytest.raises(ValidationError, match="Field names must be unique"):
            MessageSchema(
                name="M",
                fields=[{"name": "a", "type": "int32"}, {"name": "a", "type": "string"}],
            )

    def test_rejects_extra_keys(self):
        """Test unknown keys are forbidden."""
        with pytest.raises(ValidationError):
            MessageSchema(name="M", columns=[])


class TestSchemaYaml:
    """Test loading and saving schema documents."""

    def test_round_trip(self, tmp_path, shop_schema):
        """Test a saved document loads back unchanged."""
        path = tmp_path / "schemas" / "shop.yaml"
        save_schema_to_yaml(shop_schema, path)

        assert path.exists()
        assert load_schema_from_yaml(path) == shop_schema

    def test_missing_file(self, tmp_path):
        """Test a missing schema raises SchemaError."""
        with pytest.raises(SchemaError, match="not found"):
            load_schema_from_yaml(tmp_path / "missing.yaml")

    def test_invalid_document(self, write_yaml):
        """Test schema validation errors become SchemaError."""
        path = write_yaml("bad.yaml", {"messages": [{"name": "M", "fields": "nope"}]})
        with pytest.raises(SchemaError, match="Invalid schema document"):
            load_schema_from_yaml(path)

    def test_invalid_yaml(self, tmp_path):
        """Test unparseable YAML becomes SchemaError."""
        path = tmp_path / "broken.yaml"
        path.write_text("messages: [unclosed\n", encoding="utf-8")
        with pytest.raises(SchemaError, match="Invalid YAML"):
            load_schema_from_yaml(path)

    def test_invalid_utf8(self, tmp_path):
        """Test undecodable bytes become SchemaError."""
        path = tmp_path / "binary.yaml"
        path.write_bytes(b"\xff\xfe\x00\x81messages: []")
        with pytest.raises(SchemaError, match="Invalid YAML"):
            load_schema_from_yaml(path)

    def test_directory_path(self, tmp_path):
        """Test a directory is not accepted as a schema file."""
        with pytest.raises(SchemaError, match="not found"):
            load_schema_from_yaml(tmp_path)


class TestTypeRegistry:
    """Test TypeRegistry lookups and reference resolution."""

    def test_registers_nested_types_with_full_names(self, shop_registry):
        """Test nested messages are registered under dotted names."""
        assert shop_registry.is_message_type("shop.v1.Order")
        assert shop_registry.is_message_type("shop.v1.Order.Item")
        assert shop_registry.find_by_qualified_name("shop.v1.Order.Item").name == "Item"
        assert len(shop_registry) == 4

    def test_lookup_is_exact(self, shop_registry):
        """Test lookups require the full name."""
        assert shop_registry.find_by_qualified_name("Order") is None
        assert not shop_registry.is_message_type("shop.v1.Order_Item")

    def test_enums_are_not_message_types(self, shop_registry):
        """Test enums are tracked separately from messages."""
        assert shop_registry.is_enum_type("shop.v1.Order.Status")
        assert not shop_registry.is_message_type("shop.v1.Order.Status")

    def test_fields_keep_declaration_order(self, shop_registry):
        """Test field order follows the schema."""
        order = shop_registry.find_by_qualified_name("shop.v1.Order")
        assert [f.name for f in order.fields] == [
            "id",
            "note",
            "customer",
            "items",
            "status",
            "tags",
        ]

    def test_resolves_relative_references_from_inner_scope(self, shop_registry):
        """Test relative names resolve innermost scope first."""
        order = shop_registry.find_by_qualified_name("shop.v1.Order")
        assert order.field("items").type_name == "shop.v1.Order.Item"
        assert order.field("customer").type_name == "shop.v1.Customer"
        assert order.field("status").type_name == "shop.v1.Order.Status"
        assert shop_registry.message_type_of(order.field("customer")).full_name == (
            "shop.v1.Customer"
        )

    def test_resolves_absolute_references(self):
        """Test a leading dot makes a reference absolute."""
        registry = TypeRegistry(
            [
                SchemaDocument(
                    package="a",
                    messages=[
                        {
                            "name": "Outer",
                            "fields": [
                                {"name": "x", "type": "message", "message_type": ".a.Outer"}
                            ],
                        }
                    ],
                )
            ]
        )
        field = registry.find_by_qualified_name("a.Outer").field("x")
        assert field.type_name == "a.Outer"
        assert field.full_name == "a.Outer.x"

    def test_unresolved_reference_is_logged(self, caplog):
        """Test unknown references leave the type unresolved and warn."""
        document = SchemaDocument(
            messages=[
                {
                    "name": "M",
                    "fields": [{"name": "x", "type": "message", "message_type": "Missing"}],
                }
            ]
        )
        with caplog.at_level(logging.WARNING):
            registry = TypeRegistry([document])

        field = registry.find_by_qualified_name("M").field("x")
        assert field.type_name is None
        assert registry.message_type_of(field) is None
        assert "Unresolved message type 'Missing'" in caplog.text

    def test_duplicate_type_names_are_rejected(self, shop_schema):
        """Test the same type cannot be declared twice."""
        with pytest.raises(SchemaError, match="Duplicate type name"):
            TypeRegistry([shop_schema, shop_schema])

    def test_from_files(self, tmp_path, shop_schema):
        """Test building a registry from YAML files."""
        path = tmp_path / "shop.yaml"
        save_schema_to_yaml(shop_schema, path)

        registry = TypeRegistry.from_files([path])
        assert "shop.v1.Customer" in registry
        assert [m.full_name for m in registry.messages()][0] == "shop.v1.Order"

    def test_messages_in_declaration_order(self, shop_registry):
        """Test messages() lists every message type in declaration order."""
        assert [m.full_name for m in shop_registry.messages()] == [
            "shop.v1.Order",
            "shop.v1.Order.Item",
            "shop.v1.Customer",
            "shop.v1.Address",
        ]

    def test_enum_cannot_reuse_message_name(self, shop_schema):
        """Test an enum in a later document cannot shadow a message."""
        clash = SchemaDocument(package="shop.v1", enums=[{"name": "Customer", "values": ["A"]}])
        with pytest.raises(SchemaError, match="Duplicate type name: shop.v1.Customer"):
            TypeRegistry([shop_schema, clash])
