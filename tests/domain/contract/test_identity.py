from __future__ import annotations

import pytest

from ocpimodel.domain.contract import (
    ConflictingComponent,
    Err,
    Identity,
    MissingComponent,
    Ok,
    PartialIdentity,
    compare_identity,
    identity_key,
    resolve,
    same_identity,
)
from ocpimodel.domain.model import Location
from tests.support.payloads import location_payload


def test_resolve_rejects_conflicting_country() -> None:
    result = resolve({"country_code": "DE"}, {"country_code": "FR"})

    assert isinstance(result, Err)
    error = result.error
    assert isinstance(error, ConflictingComponent)
    assert error.component == "country_code"
    assert error.out_of_band == "DE"
    assert error.in_band == "FR"


def test_resolve_reports_first_missing_component() -> None:
    result = resolve({}, {})

    assert isinstance(result, Err)
    assert isinstance(result.error, MissingComponent)
    assert result.error.component == "country_code"


@pytest.mark.parametrize("component", ["country_code", "party_id", "id"])
def test_resolve_names_each_missing_component(component: str) -> None:
    supplied = {"country_code": "DE", "party_id": "GEF", "id": "LOC0001"}
    del supplied[component]

    result = resolve(None, supplied)

    assert isinstance(result, Err)
    assert isinstance(result.error, MissingComponent)
    assert result.error.component == component


def test_resolve_merges_both_sources() -> None:
    result = resolve(
        PartialIdentity(country_code="DE", party_id="GEF"),
        PartialIdentity(party_id="GEF", id="LOC0001"),
    )

    assert result == Ok(Identity(country_code="DE", party_id="GEF", id="LOC0001"))


def test_resolve_with_local_components_only() -> None:
    result = resolve(None, {"id": "3256"}, components=("id",))

    assert result == Ok(Identity(country_code=None, party_id=None, id="3256"))


def test_missing_component_uses_label_in_message() -> None:
    result = resolve({}, {}, labels={"country_code": "country code"})

    assert isinstance(result, Err)
    assert result.error.message == "The country code is missing!"


def test_conflicting_component_message() -> None:
    result = resolve({"id": "A"}, {"id": "B"}, components=("id",), labels={"id": "identification"})

    assert isinstance(result, Err)
    assert result.error.message == (
        "The optional identification given within the JSON body "
        "does not match the one given in the URL!"
    )


def test_partial_identity_rejects_unknown_components() -> None:
    with pytest.raises(ValueError, match="Unknown identity components: uid"):
        PartialIdentity.coerce({"uid": "1"})


def test_identity_order_ignores_content() -> None:
    first = Location.parse(location_payload(id="A")).unwrap()
    renamed = Location.parse(location_payload(id="A", name="Elsewhere")).unwrap()
    second = Location.parse(location_payload(id="B")).unwrap()

    assert compare_identity(first, second) == -1
    assert compare_identity(second, first) == 1
    assert compare_identity(first, renamed) == 0
    assert same_identity(first, renamed)
    assert first != renamed
    assert identity_key(first) == ("DE", "GEF", "A")
    assert sorted([second, first], key=identity_key) == [first, second]


def test_identity_renders_as_compound_key() -> None:
    assert str(Identity(country_code="DE", party_id="GEF", id="LOC0001")) == "DE*GEF*LOC0001"
    assert str(Identity(country_code=None, party_id=None, id="3256")) == "3256"
