"""Typed models of error declarations and toolchain capability probes."""

from __future__ import annotations

from .errors import AttributeParseError, ExtractionError, UnsupportedKind
from .extractor import extract_input
from .models import Enum, Field, IndexMember, Input, NamedMember, Struct, Variant

__all__ = [
    "AttributeParseError",
    "Enum",
    "ExtractionError",
    "Field",
    "IndexMember",
    "Input",
    "NamedMember",
    "Struct",
    "UnsupportedKind",
    "Variant",
    "extract_input",
]
