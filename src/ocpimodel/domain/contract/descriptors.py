"""Field descriptors: the per-field wire contract of a protocol object.

Protocol objects are frozen dataclasses whose fields are declared through the
helpers below (``identity_field``, ``scalar``, ``enum``, ``struct``, ``collection``,
``timestamp``). Each helper stores a ``FieldDescriptor`` in the dataclass field
metadata; declaration order is the canonical wire order.
"""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from enum import StrEnum
from functools import cache
from typing import TYPE_CHECKING, Any, Final

from .codecs import (
    encode_enum,
    enum_member,
    format_timestamp,
    passthrough,
    text,
    timestamp as decode_timestamp,
    to_utc,
    utc_now,
)

if TYPE_CHECKING:
    from collections.abc import Callable

    from .codecs import Decoder, Encoder, JsonValue

METADATA_KEY: Final = "ocpi"


class FieldKind(StrEnum):
    SCALAR = "scalar"
    STRUCT = "struct"
    COLLECTION = "collection"


class Mutability(StrEnum):
    """How a field reacts to a merge patch."""

    IMMUTABLE = "immutable"
    REPLACEABLE = "replaceable"
    REPLACEABLE_OR_CLEARABLE = "replaceable_or_clearable"
    COLLECTION_REPLACE = "collection_replace"


@dataclass(frozen=True, slots=True, kw_only=True)
class FieldDescriptor:
    kind: FieldKind
    required: bool
    decode: Decoder[Any]
    encode: Encoder[Any]
    mutability: Mutability
    wire: str = ""
    attr: str = ""
    label: str = ""
    identity: bool = False
    defaults_to_now: bool = False
    coerce: Callable[[Any], Any] | None = None

    def bind(self, attr: str) -> FieldDescriptor:
        return dataclasses.replace(
            self,
            attr=attr,
            wire=self.wire or attr,
            label=self.label or attr.replace("_", " "),
        )

    @property
    def clearable(self) -> bool:
        """Whether a JSON ``null`` in a merge patch clears the field."""

        if self.mutability is Mutability.REPLACEABLE_OR_CLEARABLE:
            return True
        return self.mutability is Mutability.COLLECTION_REPLACE and not self.required

    def empty(self) -> Any:
        return () if self.kind is FieldKind.COLLECTION else None

    def coerce_value(self, value: Any) -> Any:
        if self.kind is FieldKind.COLLECTION:
            return value if isinstance(value, tuple) else tuple(value)
        if value is not None and self.coerce is not None:
            return self.coerce(value)
        return value

    def encode_value(self, value: Any) -> JsonValue:
        if self.kind is FieldKind.COLLECTION:
            return [self.encode(item) for item in value]
        return self.encode(value)


def descriptors_of(cls: type) -> tuple[FieldDescriptor, ...]:
    """Bound descriptors of a protocol object class, in declaration order."""

    return _descriptors_of(cls)


@cache
def _descriptors_of(cls: type) -> tuple[FieldDescriptor, ...]:
    bound: list[FieldDescriptor] = []
    for field in dataclasses.fields(cls):
        descriptor = field.metadata.get(METADATA_KEY)
        if descriptor is not None:
            bound.append(descriptor.bind(field.name))
    return tuple(bound)


def descriptors_by_wire(cls: type) -> dict[str, FieldDescriptor]:
    return {descriptor.wire: descriptor for descriptor in descriptors_of(cls)}


def _default_mutability(kind: FieldKind, *, required: bool) -> Mutability:
    if kind is FieldKind.COLLECTION:
        return Mutability.COLLECTION_REPLACE
    return Mutability.REPLACEABLE if required else Mutability.REPLACEABLE_OR_CLEARABLE


def _check_mutability(descriptor: FieldDescriptor) -> None:
    mutability = descriptor.mutability
    is_collection = descriptor.kind is FieldKind.COLLECTION
    if mutability is Mutability.REPLACEABLE_OR_CLEARABLE and (descriptor.required or is_collection):
        raise ValueError("only optional scalar and struct fields can be replaceable_or_clearable")
    if is_collection and mutability not in (Mutability.COLLECTION_REPLACE, Mutability.IMMUTABLE):
        raise ValueError("collections are either collection_replace or immutable")
    if not is_collection and mutability is Mutability.COLLECTION_REPLACE:
        raise ValueError("collection_replace applies to collections only")


def _declare(
    descriptor: FieldDescriptor,
    *,
    default_factory: Callable[[], Any] | None = None,
) -> Any:
    _check_mutability(descriptor)
    metadata = {METADATA_KEY: descriptor}
    if default_factory is not None:
        return dataclasses.field(default_factory=default_factory, metadata=metadata)
    if descriptor.required:
        return dataclasses.field(metadata=metadata)
    return dataclasses.field(default=descriptor.empty(), metadata=metadata)


def _encode_struct(value: Any) -> JsonValue:
    return value.to_json()


def scalar(
    decode: Decoder[Any] = text,
    encode: Encoder[Any] = passthrough,
    *,
    required: bool = True,
    wire: str = "",
    label: str = "",
    mutability: Mutability | None = None,
    coerce: Callable[[Any], Any] | None = None,
) -> Any:
    return _declare(
        FieldDescriptor(
            kind=FieldKind.SCALAR,
            required=required,
            decode=decode,
            encode=encode,
            mutability=mutability or _default_mutability(FieldKind.SCALAR, required=required),
            wire=wire,
            label=label,
            coerce=coerce,
        )
    )


def identity_field(decode: Decoder[Any] = text, *, wire: str = "", label: str = "") -> Any:
    """Component of the compound identity; never patchable."""

    return _declare(
        FieldDescriptor(
            kind=FieldKind.SCALAR,
            required=True,
            decode=decode,
            encode=passthrough,
            mutability=Mutability.IMMUTABLE,
            wire=wire,
            label=label,
            identity=True,
        )
    )


def enum(
    enum_type: type[StrEnum],
    *,
    required: bool = True,
    wire: str = "",
    label: str = "",
    mutability: Mutability | None = None,
) -> Any:
    return scalar(
        enum_member(enum_type),
        encode_enum,
        required=required,
        wire=wire,
        label=label,
        mutability=mutability,
    )


def struct(
    struct_type: Any,
    *,
    required: bool = True,
    wire: str = "",
    label: str = "",
    mutability: Mutability | None = None,
) -> Any:
    return _declare(
        FieldDescriptor(
            kind=FieldKind.STRUCT,
            required=required,
            decode=struct_type.from_wire,
            encode=_encode_struct,
            mutability=mutability or _default_mutability(FieldKind.STRUCT, required=required),
            wire=wire,
            label=label,
        )
    )


def collection(
    element: Any = text,
    *,
    required: bool = False,
    wire: str = "",
    label: str = "",
    mutability: Mutability | None = None,
) -> Any:
    """Homogeneous array. ``element`` is a decoder, an enum type or a struct type."""

    decode: Decoder[Any]
    encode: Encoder[Any]
    if isinstance(element, type) and issubclass(element, StrEnum):
        decode, encode = enum_member(element), encode_enum
    elif hasattr(element, "from_wire"):
        decode, encode = element.from_wire, _encode_struct
    else:
        decode, encode = element, passthrough
    return _declare(
        FieldDescriptor(
            kind=FieldKind.COLLECTION,
            required=required,
            decode=decode,
            encode=encode,
            mutability=mutability or Mutability.COLLECTION_REPLACE,
            wire=wire,
            label=label,
        ),
    )


def timestamp(
    *,
    required: bool = True,
    wire: str = "",
    label: str = "",
    mutability: Mutability | None = None,
) -> Any:
    return scalar(
        decode_timestamp,
        format_timestamp,
        required=required,
        wire=wire,
        label=label,
        mutability=mutability,
        coerce=to_utc,
    )


def last_updated() -> Any:
    """The ``last_updated`` stamp every entity carries; defaults to now."""

    return _declare(
        FieldDescriptor(
            kind=FieldKind.SCALAR,
            required=True,
            decode=decode_timestamp,
            encode=format_timestamp,
            mutability=Mutability.REPLACEABLE,
            label="last updated",
            defaults_to_now=True,
            coerce=to_utc,
        ),
        default_factory=utc_now,
    )
