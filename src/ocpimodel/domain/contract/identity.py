"""Compound identity (country code, party id, local id) reconciliation.

An entity's identity may arrive twice: out-of-band (e.g. from a request path)
and in-band (inside the JSON body). Both sources must agree on every component
they both carry; a component nobody carries is an error.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Final, Protocol

from .errors import ConflictingComponent, MissingComponent
from .result import Err, Ok

if TYPE_CHECKING:
    from collections.abc import Mapping, Sequence

    from .errors import IdentityError
    from .result import Result

TRIAD: Final[tuple[str, str, str]] = ("country_code", "party_id", "id")


@dataclass(frozen=True, slots=True)
class PartialIdentity:
    """Identity components as supplied by one source; any of them may be absent."""

    country_code: str | None = None
    party_id: str | None = None
    id: str | None = None

    @classmethod
    def coerce(cls, value: PartialIdentity | Mapping[str, str | None] | None) -> PartialIdentity:
        if value is None:
            return cls()
        if isinstance(value, PartialIdentity):
            return value
        unknown = set(value).difference(TRIAD)
        if unknown:
            raise ValueError(f"Unknown identity components: {', '.join(sorted(unknown))}")
        return cls(**value)


@dataclass(frozen=True, slots=True)
class Identity:
    """Resolved identity. Owner components are ``None`` for locally identified objects."""

    country_code: str | None
    party_id: str | None
    id: str

    @property
    def key(self) -> tuple[str, str, str]:
        return (self.country_code or "", self.party_id or "", self.id)

    def __str__(self) -> str:
        return "*".join(part for part in (self.country_code, self.party_id, self.id) if part)


def resolve(
    out_of_band: PartialIdentity | Mapping[str, str | None] | None,
    in_band: PartialIdentity | Mapping[str, str | None] | None,
    *,
    components: Sequence[str] = TRIAD,
    labels: Mapping[str, str] | None = None,
) -> Result[Identity, IdentityError]:
    """Reconcile both identity sources component by component, in order."""

    outer = PartialIdentity.coerce(out_of_band)
    inner = PartialIdentity.coerce(in_band)
    labels = labels or {}
    resolved: dict[str, str | None] = dict.fromkeys(TRIAD)

    for component in components:
        label = labels.get(component)
        url_value = getattr(outer, component)
        body_value = getattr(inner, component)
        if url_value is None and body_value is None:
            return Err(MissingComponent(component, label=label))
        if url_value is not None and body_value is not None and url_value != body_value:
            return Err(ConflictingComponent(component, url_value, body_value, label=label))
        resolved[component] = url_value if url_value is not None else body_value

    if resolved["id"] is None:
        return Err(MissingComponent("id", label=labels.get("id")))
    return Ok(
        Identity(
            country_code=resolved["country_code"],
            party_id=resolved["party_id"],
            id=resolved["id"],
        )
    )


class HasIdentity(Protocol):
    @property
    def identity(self) -> Identity: ...


def identity_key(entity: HasIdentity) -> tuple[str, str, str]:
    return entity.identity.key


def compare_identity(left: HasIdentity, right: HasIdentity) -> int:
    """Total order over identities only; content is ignored."""

    left_key, right_key = identity_key(left), identity_key(right)
    if left_key < right_key:
        return -1
    if left_key > right_key:
        return 1
    return 0


def same_identity(left: HasIdentity, right: HasIdentity) -> bool:
    return compare_identity(left, right) == 0
