"""JSON-friendly rendering of extracted models."""

from __future__ import annotations

from typing import Any, Dict, List

from .attrs.base import Attrs
from .models import Enum, Field, IndexMember, Input, Struct, Variant
from .syntax import Generics


def input_to_dict(model: Input) -> Dict[str, Any]:
    """Render ``model`` as plain dicts and lists."""
    if isinstance(model, Struct):
        return {
            "kind": "struct",
            "name": model.name,
            "generics": _generics_to_dict(model.generics),
            "attrs": _attrs_to_dict(model.attrs),
            "fields": [_field_to_dict(field) for field in model.fields],
        }
    if isinstance(model, Enum):
        return {
            "kind": "enum",
            "name": model.name,
            "generics": _generics_to_dict(model.generics),
            "attrs": _attrs_to_dict(model.attrs),
            "variants": [_variant_to_dict(variant) for variant in model.variants],
        }
    raise TypeError(f"Unsupported model type: {type(model).__name__}")


def _variant_to_dict(variant: Variant) -> Dict[str, Any]:
    return {
        "name": variant.name,
        "attrs": _attrs_to_dict(variant.attrs),
        "fields": [_field_to_dict(field) for field in variant.fields],
    }


def _field_to_dict(field: Field) -> Dict[str, Any]:
    member: Dict[str, Any]
    if isinstance(field.member, IndexMember):
        member = {"index": field.member.index}
    else:
        member = {"name": field.member.name}
    return {"member": member, "type": field.ty.text, "attrs": _attrs_to_dict(field.attrs)}


def _generics_to_dict(generics: Generics) -> Dict[str, Any]:
    params: List[Dict[str, Any]] = [
        {"name": param.name, "kind": param.kind, "bounds": list(param.bounds)}
        for param in generics.params
    ]
    return {"params": params, "where_clause": generics.where_clause}


def _attrs_to_dict(attrs: Any) -> Dict[str, Any]:
    # Custom parsers may return their own attribute types.
    if not isinstance(attrs, Attrs):
        return {"value": repr(attrs)}
    result: Dict[str, Any] = {}
    if attrs.display is not None:
        result["display"] = {"fmt": attrs.display.fmt, "args": list(attrs.display.args)}
    for key, marker in (
        ("transparent", attrs.transparent),
        ("source", attrs.source),
        ("from", attrs.from_),
        ("backtrace", attrs.backtrace),
    ):
        if marker is not None:
            result[key] = True
    return result


__all__ = ["input_to_dict"]
