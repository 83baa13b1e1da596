"""Field extractors: read one named field out of a JSON object.

Every extractor returns a ``Result``; decoder failures never escape.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final, Protocol, Self, final

from .codecs import enum_member
from .errors import FieldError
from .result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Mapping
    from enum import StrEnum

    from .codecs import Decoder
    from .result import Result


@final
class Absent:
    """Marker for a key that is not present at all (as opposed to JSON ``null``)."""

    _instance: Absent | None = None

    def __new__(cls) -> Absent:
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __bool__(self) -> bool:
        return False

    def __repr__(self) -> str:
        return "ABSENT"


ABSENT: Final = Absent()


class WireDecodable(Protocol):
    @classmethod
    def from_wire(cls, value: Any) -> Self: ...


def lookup(payload: Mapping[str, Any], key: str) -> Any:
    """Return the raw value for ``key`` or ``ABSENT``; ``None`` means explicit null."""

    return payload.get(key, ABSENT)


def decode_value[T](
    key: str,
    value: Any,
    decode: Decoder[T],
    *,
    index: int | None = None,
) -> Result[T, FieldError]:
    try:
        return Ok(decode(value))
    except FieldError as nested:
        return Err(FieldError(key, index=index, cause=nested))
    except (ValueError, TypeError, ArithmeticError) as exc:
        return Err(FieldError(key, str(exc) or type(exc).__name__, index=index))


def decode_collection[T](
    key: str,
    value: Any,
    decode: Decoder[T],
) -> Result[tuple[T, ...], FieldError]:
    if not isinstance(value, list | tuple):
        return Err(FieldError(key, f"expected a JSON array, got {type(value).__name__}"))
    items: list[T] = []
    for index, element in enumerate(value):
        result = decode_value(key, element, decode, index=index)
        if isinstance(result, Err):
            return result
        items.append(result.value)
    return Ok(tuple(items))


# -- scalars and structs ------------------------------------------------------


def mandatory[T](payload: Mapping[str, Any], key: str, decode: Decoder[T]) -> Result[T, FieldError]:
    value = lookup(payload, key)
    if value is ABSENT:
        return Err(FieldError(key, "missing"))
    if value is None:
        return Err(FieldError(key, "must not be null"))
    return decode_value(key, value, decode)


def optional[T](
    payload: Mapping[str, Any],
    key: str,
    decode: Decoder[T],
    default: T | None = None,
) -> Result[T | None, FieldError]:
    value = lookup(payload, key)
    if value is ABSENT or value is None:
        return Ok(default)
    return decode_value(key, value, decode)


def mandatory_struct[S: WireDecodable](
    payload: Mapping[str, Any],
    key: str,
    struct_type: type[S],
) -> Result[S, FieldError]:
    return mandatory(payload, key, struct_type.from_wire)


def optional_struct[S: WireDecodable](
    payload: Mapping[str, Any],
    key: str,
    struct_type: type[S],
) -> Result[S | None, FieldError]:
    return optional(payload, key, struct_type.from_wire)


def mandatory_enum[E: StrEnum](
    payload: Mapping[str, Any],
    key: str,
    enum_type: type[E],
) -> Result[E, FieldError]:
    return mandatory(payload, key, enum_member(enum_type))


def optional_enum[E: StrEnum](
    payload: Mapping[str, Any],
    key: str,
    enum_type: type[E],
) -> Result[E | None, FieldError]:
    return optional(payload, key, enum_member(enum_type))


# -- collections --------------------------------------------------------------


def mandatory_collection[T](
    payload: Mapping[str, Any],
    key: str,
    decode: Decoder[T],
) -> Result[tuple[T, ...], FieldError]:
    value = lookup(payload, key)
    if value is ABSENT:
        return Err(FieldError(key, "missing"))
    if value is None:
        return Err(FieldError(key, "must not be null"))
    return decode_collection(key, value, decode)


def optional_collection[T](
    payload: Mapping[str, Any],
    key: str,
    decode: Decoder[T],
) -> Result[tuple[T, ...], FieldError]:
    value = lookup(payload, key)
    if value is ABSENT or value is None:
        return Ok(())
    return decode_collection(key, value, decode)
