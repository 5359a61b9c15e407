"""Default interpretation of ``error``, ``source``, ``from`` and ``backtrace``."""

from __future__ import annotations

from typing import Dict, List, Optional, Sequence, Tuple

from ..errors import AttributeParseError
from ..syntax import Attribute
from .base import Attrs, AttributeParser, Display

_MARKER_ATTRIBUTES = ("source", "from", "backtrace")
_CLOSERS = {"(": ")", "[": "]", "{": "}"}


class StandardAttributeParser(AttributeParser):
    """Understands the error-derive annotation vocabulary and ignores the rest."""

    def parse(self, attrs: Sequence[Attribute]) -> Attrs:
        display: Optional[Display] = None
        transparent: Optional[Attribute] = None
        markers: Dict[str, Attribute] = {}

        for attr in attrs:
            if attr.path == "error":
                if display is not None or transparent is not None:
                    raise AttributeParseError("duplicate #[error(...)] attribute", node=attr)
                if _is_transparent(attr):
                    transparent = attr
                else:
                    display = _parse_display(attr)
            elif attr.path in _MARKER_ATTRIBUTES:
                if attr.path in markers:
                    raise AttributeParseError(f"duplicate #[{attr.path}] attribute", node=attr)
                if attr.tokens is not None and attr.tokens.strip():
                    raise AttributeParseError(
                        f"unexpected arguments on #[{attr.path}]", node=attr
                    )
                markers[attr.path] = attr

        return Attrs(
            display=display,
            transparent=transparent,
            source=markers.get("source"),
            from_=markers.get("from"),
            backtrace=markers.get("backtrace"),
        )


def _is_transparent(attr: Attribute) -> bool:
    return attr.tokens is not None and attr.tokens.strip() == "transparent"


def _parse_display(attr: Attribute) -> Display:
    tokens = (attr.tokens or "").strip()
    if not tokens:
        raise AttributeParseError(
            "expected attribute arguments in parentheses: #[error(...)]", node=attr
        )
    if not tokens.startswith('"'):
        raise AttributeParseError(
            "expected string literal or `transparent` in #[error(...)]", node=attr
        )
    fmt, rest = _split_string_literal(tokens, attr)
    rest = rest.strip()
    if rest and not rest.startswith(","):
        raise AttributeParseError("expected `,` after format string", node=attr)
    args = tuple(_split_arguments(rest[1:])) if rest else ()
    return Display(fmt=fmt, args=args, original=attr)


def _split_string_literal(tokens: str, attr: Attribute) -> Tuple[str, str]:
    chars: List[str] = []
    index = 1
    while index < len(tokens):
        char = tokens[index]
        if char == "\\" and index + 1 < len(tokens):
            chars.append(tokens[index : index + 2])
            index += 2
            continue
        if char == '"':
            return "".join(chars), tokens[index + 1 :]
        chars.append(char)
        index += 1
    raise AttributeParseError("unterminated format string in #[error(...)]", node=attr)


def _split_arguments(text: str) -> List[str]:
    """Split on top-level commas, leaving nested brackets and strings intact."""
    parts: List[str] = []
    current: List[str] = []
    stack: List[str] = []
    in_string = False
    escaped = False
    for char in text:
        if in_string:
            current.append(char)
            if escaped:
                escaped = False
            elif char == "\\":
                escaped = True
            elif char == '"':
                in_string = False
            continue
        if char == '"':
            in_string = True
        elif char in _CLOSERS:
            stack.append(_CLOSERS[char])
        elif stack and char == stack[-1]:
            stack.pop()
        elif char == "," and not stack:
            part = "".join(current).strip()
            if part:
                parts.append(part)
            current = []
            continue
        current.append(char)
    tail = "".join(current).strip()
    if tail:
        parts.append(tail)
    return parts


__all__ = ["StandardAttributeParser"]
