"""Base classes every protocol object derives from.

Subclasses are frozen, slotted, keyword-only dataclasses whose fields are
declared with the helpers from ``descriptors``; the wire contract (parsing,
canonical serialization and merge patching) is provided here once.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar, Self

from . import parser, patch, serializer
from .builder import Builder
from .descriptors import descriptors_of
from .identity import Identity

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from .codecs import JsonObject
    from .errors import FieldError, ParseError
    from .parser import OutOfBand
    from .patch import PatchOutcome
    from .result import Result


class WireObject:
    """A value that round-trips through the JSON wire format."""

    __slots__ = ()

    KIND: ClassVar[str]

    def __post_init__(self) -> None:
        # collections are owned by value: copy into tuples, normalise timestamps
        for descriptor in descriptors_of(type(self)):
            value = getattr(self, descriptor.attr)
            coerced = descriptor.coerce_value(value)
            if coerced is not value:
                object.__setattr__(self, descriptor.attr, coerced)

    def validate(self) -> FieldError | None:
        """Object-specific invariants checked after generic field extraction."""

        return None

    @classmethod
    def parse(cls, payload: object, *, now: datetime | None = None) -> Result[Self, ParseError]:
        return parser.parse_object(cls, payload, now=now)

    @classmethod
    def parse_text(
        cls, text: str | bytes, *, now: datetime | None = None
    ) -> Result[Self, ParseError]:
        return parser.parse_text(cls, text, now=now)

    @classmethod
    def parse_or_raise(cls, payload: object) -> Self:
        return parser.parse_or_raise(cls, payload)

    @classmethod
    def from_wire(cls, value: object) -> Self:
        return parser.decode_nested(cls, value)

    def to_json(self) -> JsonObject:
        return serializer.serialize(self)

    def dumps(self, *, indent: int | None = None) -> str:
        return serializer.dumps(self, indent=indent)


class ProtocolEntity(WireObject):
    """A wire object with a compound identity and a ``last_updated`` stamp.

    ``IDENTITY_FIELDS`` maps identity components (``country_code``, ``party_id``,
    ``id``) to the attribute holding them; objects identified only locally
    (EVSEs, connectors) map just ``id``.
    """

    __slots__ = ()

    IDENTITY_FIELDS: ClassVar[Mapping[str, str]] = {
        "country_code": "country_code",
        "party_id": "party_id",
        "id": "id",
    }

    last_updated: datetime

    @classmethod
    def parse(
        cls,
        payload: object,
        identity: OutOfBand = None,
        *,
        now: datetime | None = None,
    ) -> Result[Self, ParseError]:
        return parser.parse_object(cls, payload, identity, now=now)

    @classmethod
    def parse_text(
        cls,
        text: str | bytes,
        identity: OutOfBand = None,
        *,
        now: datetime | None = None,
    ) -> Result[Self, ParseError]:
        return parser.parse_text(cls, text, identity, now=now)

    @classmethod
    def parse_or_raise(cls, payload: object, identity: OutOfBand = None) -> Self:
        return parser.parse_or_raise(cls, payload, identity)

    @classmethod
    def builder(cls, **values: Any) -> Builder[Self]:
        return Builder(cls, values)

    def to_builder(self) -> Builder[Self]:
        return Builder(
            type(self),
            {d.attr: getattr(self, d.attr) for d in descriptors_of(type(self))},
        )

    @property
    def identity(self) -> Identity:
        components = {
            component: getattr(self, attr) for component, attr in self.IDENTITY_FIELDS.items()
        }
        return Identity(
            country_code=components.get("country_code"),
            party_id=components.get("party_id"),
            id=components["id"],
        )

    def patch(
        self,
        changes: object,
        *,
        now: datetime | None = None,
        allow_downgrades: bool = True,
    ) -> PatchOutcome[Self]:
        return patch.apply_patch(self, changes, now=now, allow_downgrades=allow_downgrades)

    def patch_text(
        self,
        text: str | bytes,
        *,
        now: datetime | None = None,
        allow_downgrades: bool = True,
    ) -> PatchOutcome[Self]:
        return patch.apply_patch_text(self, text, now=now, allow_downgrades=allow_downgrades)
