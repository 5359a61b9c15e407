"""Conversion of declaration nodes into the typed error model."""

from __future__ import annotations

from typing import Sequence, Tuple

from .attrs.base import AttributeParser
from .errors import UnsupportedKind
from .models import Enum, Field, IndexMember, Input, Member, NamedMember, Struct, Variant
from .syntax import DataKind, DeclarationNode, FieldNode, VariantNode


def extract_input(node: DeclarationNode, parser: AttributeParser) -> Input:
    """Build the typed model for ``node``.

    The first exception raised by ``parser`` propagates unchanged and no
    model is produced. Unions raise :class:`UnsupportedKind`.
    """
    if node.kind is DataKind.STRUCT:
        return _struct_from_node(node, parser)
    if node.kind is DataKind.ENUM:
        return _enum_from_node(node, parser)
    raise UnsupportedKind(f"{node.kind.value} as errors are not supported", node=node)


def _struct_from_node(node: DeclarationNode, parser: AttributeParser) -> Struct:
    return Struct(
        attrs=parser.parse(node.attrs),
        name=node.name,
        generics=node.generics,
        fields=_fields_from_nodes(node.fields, parser),
    )


def _enum_from_node(node: DeclarationNode, parser: AttributeParser) -> Enum:
    attrs = parser.parse(node.attrs)
    variants = tuple(_variant_from_node(variant, parser) for variant in node.variants)
    return Enum(attrs=attrs, name=node.name, generics=node.generics, variants=variants)


def _variant_from_node(node: VariantNode, parser: AttributeParser) -> Variant:
    return Variant(
        attrs=parser.parse(node.attrs),
        name=node.name,
        fields=_fields_from_nodes(node.fields, parser),
    )


def _fields_from_nodes(
    nodes: Sequence[FieldNode], parser: AttributeParser
) -> Tuple[Field, ...]:
    return tuple(_field_from_node(index, node, parser) for index, node in enumerate(nodes))


def _field_from_node(index: int, node: FieldNode, parser: AttributeParser) -> Field:
    member: Member = NamedMember(node.name) if node.name is not None else IndexMember(index)
    return Field(attrs=parser.parse(node.attrs), member=member, ty=node.ty)


__all__ = ["extract_input"]
