"""Tree-sitter powered reader for Rust type declarations."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Optional, Set, Tuple

from ..syntax import (
    Attribute,
    DataKind,
    DeclarationNode,
    FieldNode,
    GenericParam,
    Generics,
    Span,
    TypeRef,
    VariantNode,
)

try:  # pragma: no cover - optional dependency
    import tree_sitter_rust
    from tree_sitter import Language, Parser

    TREE_SITTER_AVAILABLE = True
except ModuleNotFoundError:  # pragma: no cover - optional dependency
    tree_sitter_rust = None  # type: ignore[assignment]
    Language = None  # type: ignore[assignment]
    Parser = None  # type: ignore[assignment]
    TREE_SITTER_AVAILABLE = False


_ITEM_KINDS = {
    "struct_item": DataKind.STRUCT,
    "enum_item": DataKind.ENUM,
    "union_item": DataKind.UNION,
}
_TRIVIA = {"line_comment", "block_comment", "inner_attribute_item"}


class RustDeclarationReader:
    """Reads struct, enum and union items out of Rust source files."""

    def __init__(self, enabled: Optional[bool] = None) -> None:
        self._enabled = TREE_SITTER_AVAILABLE if enabled is None else enabled
        self._parser: Optional[Parser] = None

    @property
    def enabled(self) -> bool:
        return self._enabled

    def read_file(self, path: Path) -> List[DeclarationNode]:
        source = path.read_text(encoding="utf-8")
        return self.read_source(source, origin=str(path))

    def read_source(self, source: str, *, origin: Optional[str] = None) -> List[DeclarationNode]:
        """Return every type declaration in ``source`` in textual order."""
        parser = self._get_parser()
        if parser is None:
            return []
        source_bytes = source.encode("utf-8")
        tree = parser.parse(source_bytes)
        return list(_Walker(source_bytes, origin).items(tree.root_node))

    def _get_parser(self) -> Optional[Parser]:
        if not self._enabled or not TREE_SITTER_AVAILABLE:
            return None
        if self._parser is None:
            self._parser = Parser(Language(tree_sitter_rust.language()))
        return self._parser


class _Walker:
    def __init__(self, source_bytes: bytes, origin: Optional[str]) -> None:
        self._source = source_bytes
        self._origin = origin

    def items(self, container) -> Iterable[DeclarationNode]:  # type: ignore[no-untyped-def]
        pending: List[Attribute] = []
        for child in container.named_children:
            if child.type == "attribute_item":
                pending.append(self._attribute(child))
                continue
            if child.type in _TRIVIA:
                continue
            if child.type in _ITEM_KINDS:
                yield self._declaration(child, _ITEM_KINDS[child.type], tuple(pending))
            elif child.type == "mod_item":
                body = child.child_by_field_name("body")
                if body is not None:
                    yield from self.items(body)
            pending = []

    def _declaration(self, node, kind: DataKind, attrs: Tuple[Attribute, ...]) -> DeclarationNode:  # type: ignore[no-untyped-def]
        body = node.child_by_field_name("body")
        fields: Tuple[FieldNode, ...] = ()
        variants: Tuple[VariantNode, ...] = ()
        if kind is DataKind.ENUM:
            variants = self._variants(body) if body is not None else ()
        elif body is not None:
            fields = self._fields(body)
        return DeclarationNode(
            name=self._text(node.child_by_field_name("name")),
            kind=kind,
            attrs=attrs,
            generics=self._generics(node),
            fields=fields,
            variants=variants,
            span=self._span(node),
        )

    def _variants(self, body) -> Tuple[VariantNode, ...]:  # type: ignore[no-untyped-def]
        variants: List[VariantNode] = []
        pending: List[Attribute] = []
        for child in body.named_children:
            if child.type == "attribute_item":
                pending.append(self._attribute(child))
            elif child.type == "enum_variant":
                variant_body = child.child_by_field_name("body")
                variants.append(
                    VariantNode(
                        name=self._text(child.child_by_field_name("name")),
                        fields=self._fields(variant_body) if variant_body is not None else (),
                        attrs=tuple(pending),
                        span=self._span(child),
                    )
                )
                pending = []
        return tuple(variants)

    def _fields(self, body) -> Tuple[FieldNode, ...]:  # type: ignore[no-untyped-def]
        if body.type == "field_declaration_list":
            return self._named_fields(body)
        if body.type == "ordered_field_declaration_list":
            return self._tuple_fields(body)
        return ()

    def _named_fields(self, body) -> Tuple[FieldNode, ...]:  # type: ignore[no-untyped-def]
        fields: List[FieldNode] = []
        pending: List[Attribute] = []
        for child in body.named_children:
            if child.type == "attribute_item":
                pending.append(self._attribute(child))
            elif child.type == "field_declaration":
                fields.append(
                    FieldNode(
                        ty=self._type(child.child_by_field_name("type")),
                        name=self._text(child.child_by_field_name("name")),
                        attrs=tuple(pending),
                        span=self._span(child),
                    )
                )
                pending = []
        return tuple(fields)

    def _tuple_fields(self, body) -> Tuple[FieldNode, ...]:  # type: ignore[no-untyped-def]
        type_ranges: Set[Tuple[int, int]] = {
            (node.start_byte, node.end_byte) for node in body.children_by_field_name("type")
        }
        fields: List[FieldNode] = []
        pending: List[Attribute] = []
        for child in body.named_children:
            if child.type == "attribute_item":
                pending.append(self._attribute(child))
            elif (child.start_byte, child.end_byte) in type_ranges:
                fields.append(FieldNode(ty=self._type(child), attrs=tuple(pending), span=self._span(child)))
                pending = []
        return tuple(fields)

    def _attribute(self, node) -> Attribute:  # type: ignore[no-untyped-def]
        inner = next((child for child in node.named_children if child.type == "attribute"), None)
        if inner is None or not inner.named_children:
            return Attribute(path=self._text(node).strip("#[] "), span=self._span(node))
        path = self._text(inner.named_children[0])
        arguments = inner.child_by_field_name("arguments")
        tokens = self._text(arguments)[1:-1] if arguments is not None else None
        return Attribute(path=path, tokens=tokens, span=self._span(node))

    def _generics(self, node) -> Generics:  # type: ignore[no-untyped-def]
        params_node = node.child_by_field_name("type_parameters")
        params: List[GenericParam] = []
        if params_node is not None:
            for child in params_node.named_children:
                if child.type == "attribute_item":
                    continue
                params.append(_generic_param(self._text(child)))
        where = next((child for child in node.named_children if child.type == "where_clause"), None)
        return Generics(
            params=tuple(params),
            where_clause=self._text(where) if where is not None else None,
        )

    def _type(self, node) -> TypeRef:  # type: ignore[no-untyped-def]
        return TypeRef(text=self._text(node), span=self._span(node))

    def _span(self, node) -> Span:  # type: ignore[no-untyped-def]
        start_row, start_column = node.start_point
        end_row, end_column = node.end_point
        return Span(start_row + 1, start_column + 1, end_row + 1, end_column + 1, self._origin)

    def _text(self, node) -> str:  # type: ignore[no-untyped-def]
        if node is None:
            return ""
        return self._source[node.start_byte : node.end_byte].decode("utf-8", errors="ignore")


def _generic_param(text: str) -> GenericParam:
    kind = "type"
    if text.startswith("'"):
        kind = "lifetime"
    elif text.startswith("const "):
        kind = "const"
        text = text[len("const ") :]
    head = text.split("=", 1)[0]
    name, _, bounds_text = head.partition(":")
    bounds: Tuple[str, ...] = ()
    if kind != "const" and bounds_text.strip():
        bounds = tuple(part.strip() for part in bounds_text.split("+") if part.strip())
    return GenericParam(name=name.strip(), kind=kind, bounds=bounds)


__all__ = ["RustDeclarationReader", "TREE_SITTER_AVAILABLE"]
