from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import ClassVar

import pytest

from ocpimodel.domain.contract import (
    Mutability,
    ProtocolEntity,
    collection,
    identity_field,
    last_updated,
    scalar,
)
from ocpimodel.domain.contract.errors import with_article


@dataclass(frozen=True, slots=True, kw_only=True)
class Gadget(ProtocolEntity):
    KIND: ClassVar[str] = "gadget"

    country_code: str = identity_field()
    party_id: str = identity_field()
    id: str = identity_field()
    note: str | None = scalar(required=False, mutability=Mutability.REPLACEABLE)
    nickname: str | None = scalar(required=False)
    serial: str | None = scalar(required=False, mutability=Mutability.IMMUTABLE)
    labels: tuple[str, ...] = collection()
    parts: tuple[str, ...] = collection(required=True)
    last_updated: datetime = last_updated()


@pytest.fixture
def gadget() -> Gadget:
    return Gadget.parse(
        {
            "country_code": "NL",
            "party_id": "ABC",
            "id": "G1",
            "note": "fragile",
            "nickname": "Widget",
            "serial": "S-1",
            "labels": ["red"],
            "parts": ["bolt"],
        }
    ).unwrap()


def test_replaceable_optional_field_cannot_be_cleared(gadget: Gadget) -> None:
    outcome = gadget.patch({"note": None})

    assert not outcome.success
    assert outcome.error_message == "Invalid JSON merge patch of a gadget: note must not be null"
    assert outcome.patched is gadget


def test_replaceable_optional_field_can_be_replaced(gadget: Gadget) -> None:
    assert gadget.patch({"note": "handle with care"}).patched.note == "handle with care"


def test_clearable_field_is_cleared(gadget: Gadget) -> None:
    outcome = gadget.patch({"nickname": None})

    assert outcome.success
    assert outcome.patched.nickname is None


def test_immutable_optional_field_is_rejected(gadget: Gadget) -> None:
    outcome = gadget.patch({"serial": None})

    assert outcome.error_message == "Patching the 'serial' of a gadget is not allowed!"


def test_optional_collection_is_cleared_but_mandatory_is_not(gadget: Gadget) -> None:
    cleared = gadget.patch({"labels": None})
    refused = gadget.patch({"parts": None})

    assert cleared.patched.labels == ()
    assert not refused.success
    assert refused.error_message == (
        "Invalid JSON merge patch of a gadget: parts must not be null"
    )


@pytest.mark.parametrize(
    "declare",
    [
        lambda: scalar(mutability=Mutability.REPLACEABLE_OR_CLEARABLE),
        lambda: collection(mutability=Mutability.REPLACEABLE_OR_CLEARABLE),
        lambda: collection(mutability=Mutability.REPLACEABLE),
        lambda: scalar(required=False, mutability=Mutability.COLLECTION_REPLACE),
    ],
)
def test_inconsistent_mutability_is_rejected_on_declaration(declare: object) -> None:
    with pytest.raises(ValueError):  # noqa: PT011
        declare()  # type: ignore[operator]


@pytest.mark.parametrize(
    ("kind", "expected"),
    [
        ("EVSE", "an EVSE"),
        ("location", "a location"),
        ("charge detail record", "a charge detail record"),
    ],
)
def test_with_article(kind: str, expected: str) -> None:
    assert with_article(kind) == expected
