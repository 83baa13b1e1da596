"""Canonical JSON rendering of protocol objects."""

from __future__ import annotations

import json
from decimal import Decimal
from typing import TYPE_CHECKING

from .descriptors import FieldKind, descriptors_of

if TYPE_CHECKING:
    from .codecs import JsonObject
    from .wire import WireObject


def serialize(obj: WireObject) -> JsonObject:
    """Project ``obj`` onto a JSON object in declaration order.

    Absent optional fields and empty optional collections are omitted, never
    rendered as ``null``. Decimals stay ``Decimal`` in the returned object so no
    precision is lost before the caller picks a text encoding.
    """

    payload: JsonObject = {}
    for descriptor in descriptors_of(type(obj)):
        value = getattr(obj, descriptor.attr)
        if value is None:
            continue
        if descriptor.kind is FieldKind.COLLECTION and not value and not descriptor.required:
            continue
        payload[descriptor.wire] = descriptor.encode_value(value)
    return payload


def decimal_text(value: Decimal) -> str:
    """Exact JSON number text; whole numbers are written as integers (``4.00`` -> ``4``)."""

    if not value.is_finite():
        raise ValueError(f"{value} cannot be written as a JSON number")
    if value == value.to_integral_value():
        return str(int(value))
    return format(value, "f")


def _render(value: object, indent: int | None, depth: int) -> str:
    if isinstance(value, Decimal):
        return decimal_text(value)
    if isinstance(value, dict):
        colon = ": " if indent is not None else ":"
        members = [
            f"{json.dumps(key)}{colon}{_render(item, indent, depth + 1)}"
            for key, item in value.items()
        ]
        return _enclose("{", members, "}", indent, depth)
    if isinstance(value, list | tuple):
        elements = [_render(item, indent, depth + 1) for item in value]
        return _enclose("[", elements, "]", indent, depth)
    return json.dumps(value)


def _enclose(
    opening: str, parts: list[str], closing: str, indent: int | None, depth: int
) -> str:
    if not parts:
        return opening + closing
    if indent is None:
        return opening + ",".join(parts) + closing
    inner = "\n" + " " * (indent * (depth + 1))
    outer = "\n" + " " * (indent * depth)
    return opening + inner + ("," + inner).join(parts) + outer + closing


def dumps(obj: WireObject | JsonObject, *, indent: int | None = None) -> str:
    """Render canonical JSON text; key order follows the wire declaration.

    Decimals are written digit for digit, so ``parse_text`` restores the same value.
    """

    payload = serialize(obj) if not isinstance(obj, dict) else obj
    return _render(payload, indent, 0)
