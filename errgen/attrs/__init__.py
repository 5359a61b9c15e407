"""Attribute parsers that interpret declaration annotations."""

from __future__ import annotations

from .base import AttributeParser, Attrs, Display
from .standard import StandardAttributeParser

__all__ = [
    "AttributeParser",
    "Attrs",
    "Display",
    "StandardAttributeParser",
]
