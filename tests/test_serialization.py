"""Tests for rendering models as JSON-compatible data."""

from __future__ import annotations

import json

from errgen.extractor import extract_input
from errgen.serialization import input_to_dict
from errgen.syntax import Attribute, DataKind, DeclarationNode, GenericParam, Generics
from tests._fixtures.declarations import enum, named, positional, variant


def test_enum_model_renders_members_and_attrs(attribute_parser) -> None:
    node = enum(
        "Error",
        variant("Io", positional("io::Error", Attribute("from")), attrs=[Attribute("error", "transparent")]),
        variant("Missing", named("key", "String"), attrs=[Attribute("error", '"missing {key}"')]),
    )

    payload = input_to_dict(extract_input(node, attribute_parser))

    assert payload["kind"] == "enum"
    assert payload["generics"] == {"params": [], "where_clause": None}
    io_variant, missing = payload["variants"]
    assert io_variant["attrs"] == {"transparent": True}
    assert io_variant["fields"] == [
        {"member": {"index": 0}, "type": "io::Error", "attrs": {"from": True}}
    ]
    assert missing["attrs"] == {"display": {"fmt": "missing {key}", "args": []}}
    assert missing["fields"][0]["member"] == {"name": "key"}
    json.dumps(payload)


def test_struct_model_renders_generics(recording_parser) -> None:
    node = DeclarationNode(
        name="Context",
        kind=DataKind.STRUCT,
        generics=Generics(params=(GenericParam("E", bounds=("Error",)),), where_clause="where E: Send"),
        fields=(named("inner", "E"),),
    )

    payload = input_to_dict(extract_input(node, recording_parser))

    assert payload["kind"] == "struct"
    assert payload["generics"] == {
        "params": [{"name": "E", "kind": "type", "bounds": ["Error"]}],
        "where_clause": "where E: Send",
    }
    assert payload["attrs"] == {}
