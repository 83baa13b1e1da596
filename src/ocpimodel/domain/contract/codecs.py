"""Wire codecs shared by every protocol object.

Decoders take a raw JSON value and either return the domain value or raise
``ValueError``/``TypeError``; the field extractor turns those into field errors.
"""

from __future__ import annotations

import re
from datetime import UTC, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Annotated, Any, Final

from pydantic import AnyUrl, Field, TypeAdapter, ValidationError

if TYPE_CHECKING:
    from collections.abc import Callable
    from enum import StrEnum

type JsonValue = None | bool | int | float | Decimal | str | list[JsonValue] | dict[str, JsonValue]
type JsonObject = dict[str, JsonValue]
type Decoder[T] = Callable[[Any], T]
type Encoder[T] = Callable[[T], JsonValue]

_TIMESTAMP: Final = TypeAdapter(datetime)
_URL: Final = TypeAdapter(AnyUrl)
_DECIMAL: Final = TypeAdapter(Annotated[Decimal, Field(allow_inf_nan=False)])


def _first_error(exc: ValidationError) -> str:
    errors = exc.errors()
    if not errors:
        return str(exc)
    return errors[0]["msg"]


# -- timestamps ---------------------------------------------------------------


def truncate_to_millis(value: datetime) -> datetime:
    return value.replace(microsecond=value.microsecond // 1000 * 1000)


def to_utc(value: datetime) -> datetime:
    """Normalise to an aware UTC datetime with millisecond precision (naive = UTC)."""

    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return truncate_to_millis(value.astimezone(UTC))


def utc_now() -> datetime:
    return truncate_to_millis(datetime.now(tz=UTC))


def timestamp(value: object) -> datetime:
    if not isinstance(value, str):
        raise TypeError("expected an ISO-8601 timestamp string")
    try:
        parsed = _TIMESTAMP.validate_python(value)
    except ValidationError as exc:
        raise ValueError(f"invalid timestamp '{value}': {_first_error(exc)}") from exc
    return to_utc(parsed)


def format_timestamp(value: datetime) -> str:
    value = to_utc(value)
    return f"{value:%Y-%m-%dT%H:%M:%S}.{value.microsecond // 1000:03d}Z"


# -- scalars ------------------------------------------------------------------


def text(value: object) -> str:
    if not isinstance(value, str):
        raise TypeError(f"expected a string, got {type(value).__name__}")
    return value


def non_empty_text(value: object) -> str:
    result = text(value)
    if not result.strip():
        raise ValueError("must not be empty")
    return result


def bounded_text(max_length: int) -> Decoder[str]:
    def decode(value: object) -> str:
        result = non_empty_text(value)
        if len(result) > max_length:
            raise ValueError(f"must not be longer than {max_length} characters")
        return result

    return decode


def fixed_length_text(length: int) -> Decoder[str]:
    def decode(value: object) -> str:
        result = text(value)
        if len(result) != length:
            raise ValueError(f"expected exactly {length} characters, got '{result}'")
        return result

    return decode


def currency(value: object) -> str:
    result = text(value)
    if len(result) != 3 or not result.isalpha() or not result.isupper():
        raise ValueError(f"'{result}' is not an ISO 4217 currency code")
    return result


def boolean(value: object) -> bool:
    if not isinstance(value, bool):
        raise TypeError(f"expected a boolean, got {type(value).__name__}")
    return value


def integer(value: object) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"expected an integer, got {type(value).__name__}")
    return value


def decimal_value(value: object) -> Decimal:
    if isinstance(value, bool) or not isinstance(value, int | float | Decimal):
        raise TypeError(f"expected a number, got {type(value).__name__}")
    # str() keeps the shortest float repr instead of the binary expansion
    candidate = str(value) if isinstance(value, float) else value
    try:
        return _DECIMAL.validate_python(candidate)
    except ValidationError as exc:
        raise ValueError(_first_error(exc)) from exc


def url(value: object) -> str:
    result = text(value)
    try:
        _URL.validate_python(result)
    except ValidationError as exc:
        raise ValueError(f"invalid URL '{result}': {_first_error(exc)}") from exc
    return result


def matching(pattern: str, description: str) -> Decoder[str]:
    compiled = re.compile(pattern)

    def decode(value: object) -> str:
        result = text(value)
        if compiled.fullmatch(result) is None:
            raise ValueError(f"'{result}' is not a valid {description}")
        return result

    return decode


def enum_member[E: StrEnum](enum_type: type[E]) -> Decoder[E]:
    def decode(value: object) -> E:
        if not isinstance(value, str):
            raise TypeError(f"expected a string, got {type(value).__name__}")
        try:
            return enum_type(value)
        except ValueError:
            raise ValueError(f"unsupported value '{value}'") from None

    return decode


# -- encoders -----------------------------------------------------------------


def passthrough(value: Any) -> JsonValue:
    return value


def encode_enum(value: StrEnum) -> JsonValue:
    return value.value


def encode_decimal(value: Decimal) -> JsonValue:
    return value
