"""Exceptions raised while turning declarations into typed models."""

from __future__ import annotations

from typing import Optional

from .syntax import Span


class ExtractionError(Exception):
    """A single diagnostic tied to the source element that caused it."""

    def __init__(
        self,
        message: str,
        *,
        node: object | None = None,
        span: Optional[Span] = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.node = node
        if span is None:
            span = getattr(node, "span", None)
        self.span = span

    def format(self) -> str:
        """Render as ``location: message`` for terminal output."""
        if self.span is None:
            return self.message
        return f"{self.span.describe()}: {self.message}"


class UnsupportedKind(ExtractionError):
    """The declaration's data kind has no typed model (e.g. a union)."""


class AttributeParseError(ExtractionError):
    """An annotation could not be interpreted."""


__all__ = ["AttributeParseError", "ExtractionError", "UnsupportedKind"]
