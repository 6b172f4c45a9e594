"""Pytest configuration and shared fixtures for protoprofile tests."""

from __future__ import annotations

import pytest
import yaml

from protoprofile.models import SchemaDocument
from protoprofile.registry import TypeRegistry


@pytest.fixture
def shop_schema() -> SchemaDocument:
    """A small schema with a package, nested messages and an enum."""
    return SchemaDocument(
        package="shop.v1",
        messages=[
            {
                "name": "Order",
                "fields": [
                    {"name": "id", "type": "int64"},
                    {"name": "note", "type": "string"},
                    {"name": "customer", "type": "message", "message_type": "Customer"},
                    {
                        "name": "items",
                        "type": "message",
                        "message_type": "Item",
                        "repeated": True,
                    },
                    {"name": "status", "type": "enum", "enum_type": "Status"},
                    {"name": "tags", "type": "string", "repeated": True},
                ],
                "nested_types": [
                    {
                        "name": "Item",
                        "fields": [
                            {"name": "sku", "type": "string"},
                            {"name": "quantity", "type": "uint32"},
                        ],
                    },
                ],
                "enums": [{"name": "Status", "values": ["UNKNOWN", "OPEN", "CLOSED"]}],
            },
            {
                "name": "Customer",
                "fields": [
                    {"name": "name", "type": "string"},
                    {"name": "address", "type": "message", "message_type": "Address"},
                ],
            },
            {
                "name": "Address",
                "fields": [{"name": "street", "type": "string"}],
            },
        ],
    )


@pytest.fixture
def shop_registry(shop_schema) -> TypeRegistry:
    return TypeRegistry([shop_schema])


@pytest.fixture
def write_yaml(tmp_path):
    """Write a document to a YAML file under tmp_path and return its path."""

    def _write(name: str, data) -> str:
        path = tmp_path / name
        with path.open("w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, sort_keys=False)
        return str(path)

    return _write
