"""Typed model of an error declaration consumed by code generators.

``generics`` and ``ty`` reference the objects held by the originating
:class:`~errgen.syntax.DeclarationNode`; a model must not be kept around
after the declaration it was extracted from is discarded.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Tuple, Union

from .syntax import Generics, TypeRef

if TYPE_CHECKING:  # pragma: no cover - typing aid
    from .attrs.base import Attrs


@dataclass(frozen=True)
class NamedMember:
    """Identity of a field declared with a name."""

    name: str

    def __str__(self) -> str:
        return self.name


@dataclass(frozen=True)
class IndexMember:
    """Identity of a tuple-style field, its zero-based position."""

    index: int

    def __str__(self) -> str:
        return str(self.index)


Member = Union[NamedMember, IndexMember]


@dataclass(frozen=True)
class Field:
    """A struct or variant member with its interpreted attributes."""

    attrs: Attrs
    member: Member
    ty: TypeRef

    @property
    def is_positional(self) -> bool:
        return isinstance(self.member, IndexMember)


@dataclass(frozen=True)
class Variant:
    """One arm of an error enum."""

    attrs: Attrs
    name: str
    fields: Tuple[Field, ...]

    @property
    def is_unit(self) -> bool:
        return not self.fields


@dataclass(frozen=True)
class Struct:
    """An error declared as a struct."""

    attrs: Attrs
    name: str
    generics: Generics
    fields: Tuple[Field, ...]

    @property
    def is_tuple(self) -> bool:
        return bool(self.fields) and all(field.is_positional for field in self.fields)


@dataclass(frozen=True)
class Enum:
    """An error declared as an enum of variants."""

    attrs: Attrs
    name: str
    generics: Generics
    variants: Tuple[Variant, ...]


Input = Union[Struct, Enum]


__all__ = [
    "Enum",
    "Field",
    "IndexMember",
    "Input",
    "Member",
    "NamedMember",
    "Struct",
    "Variant",
]
