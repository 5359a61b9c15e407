"""Declaration nodes handed to the extractor by the host environment."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Optional, Tuple


@dataclass(frozen=True)
class Span:
    """Source location of a syntax element, 1-based lines and columns."""

    start_line: int
    start_column: int
    end_line: int
    end_column: int
    source: Optional[str] = None

    def describe(self) -> str:
        location = f"{self.start_line}:{self.start_column}"
        return f"{self.source}:{location}" if self.source else location


@dataclass(frozen=True)
class Attribute:
    """Raw annotation text such as ``#[error("...")]``.

    ``path`` is the attribute name (``error``) and ``tokens`` the text between
    the delimiters, or ``None`` for a bare attribute like ``#[source]``.
    """

    path: str
    tokens: Optional[str] = None
    span: Optional[Span] = None


@dataclass(frozen=True)
class TypeRef:
    """Declared type of a field, kept as source text."""

    text: str
    span: Optional[Span] = None


@dataclass(frozen=True)
class GenericParam:
    """One entry of a generic parameter list."""

    name: str
    kind: str = "type"
    bounds: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Generics:
    """Generic parameter list and optional where-clause of a declaration."""

    params: Tuple[GenericParam, ...] = ()
    where_clause: Optional[str] = None

    def __bool__(self) -> bool:
        return bool(self.params) or self.where_clause is not None


@dataclass(frozen=True)
class FieldNode:
    """A struct or variant member; ``name`` is ``None`` for tuple-style fields."""

    ty: TypeRef
    name: Optional[str] = None
    attrs: Tuple[Attribute, ...] = ()
    span: Optional[Span] = None


@dataclass(frozen=True)
class VariantNode:
    """One arm of an enum declaration."""

    name: str
    fields: Tuple[FieldNode, ...] = ()
    attrs: Tuple[Attribute, ...] = ()
    span: Optional[Span] = None


class DataKind(str, Enum):
    """Structural kind of a declaration."""

    STRUCT = "struct"
    ENUM = "enum"
    UNION = "union"


@dataclass(frozen=True)
class DeclarationNode:
    """Validated type declaration as supplied by the host."""

    name: str
    kind: DataKind
    attrs: Tuple[Attribute, ...] = ()
    generics: Generics = field(default_factory=Generics)
    fields: Tuple[FieldNode, ...] = ()
    variants: Tuple[VariantNode, ...] = ()
    span: Optional[Span] = None


__all__ = [
    "Attribute",
    "DataKind",
    "DeclarationNode",
    "FieldNode",
    "GenericParam",
    "Generics",
    "Span",
    "TypeRef",
    "VariantNode",
]
