"""Render plain data values as Typst source."""

from __future__ import annotations

import dataclasses
from collections.abc import Mapping
from decimal import Decimal
from typing import Any

_INDENT = "  "


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float, Decimal)) and not isinstance(value, bool)


def _to_plain(value: Any) -> Any:
    to_dict = getattr(value, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if dataclasses.is_dataclass(value) and not isinstance(value, type):
        return dataclasses.asdict(value)
    return value


def to_typst_value(value: Any, indent: int = 0) -> str:
    """Render a JSON-like value as pretty-printed Typst syntax.

    Mappings and sequences become parenthesised Typst dictionaries and
    arrays. A mapping with a single entry whose value is a number, string or
    mapping is treated as an enum variant and its key is lower-cased.
    """
    indent_str = _INDENT * indent
    next_indent = indent + 1
    next_indent_str = _INDENT * next_indent

    if isinstance(value, Mapping):
        if len(value) == 1:
            ((variant, inner),) = value.items()
            if _is_number(inner) or isinstance(inner, (str, Mapping)):
                return (
                    f"(\n{next_indent_str}{str(variant).lower()}: "
                    f"{to_typst_value(inner, next_indent)},\n{indent_str})"
                )
        fields = ",\n".join(
            f"{next_indent_str}{key}: {to_typst_value(item, next_indent)}"
            for key, item in value.items()
        )
        return f"(\n{fields},\n{indent_str})"

    if isinstance(value, (list, tuple)):
        items = ",\n".join(
            f"{next_indent_str}{to_typst_value(item, next_indent)}" for item in value
        )
        return f"(\n{items},\n{indent_str})"

    if isinstance(value, str):
        return f'"{value}"'
    if isinstance(value, bool):
        return "true" if value else "false"
    if value is None:
        return "none"
    if _is_number(value):
        return str(value)
    raise TypeError(f"Cannot render value of type {type(value).__name__} as Typst")


def to_typst_fn(value: Any) -> str:
    """Wrap ``value`` in a Typst function ``provide()`` returning it."""
    rendered = to_typst_value(_to_plain(value), 0)
    return f"#let provide() = {{\n  {rendered}\n}}\n"