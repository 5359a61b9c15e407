"""Contracts for attribute parsers used during extraction."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from ..syntax import Attribute


@dataclass(frozen=True)
class Display:
    """Format string and trailing arguments of an ``#[error(...)]`` attribute."""

    fmt: str
    args: Tuple[str, ...] = ()
    original: Optional[Attribute] = None


@dataclass(frozen=True)
class Attrs:
    """Interpreted annotations of a declaration, variant or field."""

    display: Optional[Display] = None
    transparent: Optional[Attribute] = None
    source: Optional[Attribute] = None
    from_: Optional[Attribute] = None
    backtrace: Optional[Attribute] = None

    def is_empty(self) -> bool:
        return not any(
            (self.display, self.transparent, self.source, self.from_, self.backtrace)
        )


class AttributeParser(ABC):
    """Interprets the raw annotations attached to one syntax element."""

    @abstractmethod
    def parse(self, attrs: Sequence[Attribute]) -> Attrs:
        """Return the interpreted attributes or raise on malformed input."""
