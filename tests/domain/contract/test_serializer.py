from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone
from decimal import Decimal

from ocpimodel.domain.contract import dumps, serialize
from ocpimodel.domain.model import Location, Price, Tariff
from tests.support.payloads import location_payload, tariff_payload


def test_serialize_reproduces_canonical_payload(location: Location) -> None:
    assert serialize(location) == location_payload()


def test_keys_follow_declaration_order(location: Location) -> None:
    assert list(location.to_json()) == [
        "country_code",
        "party_id",
        "id",
        "publish",
        "name",
        "address",
        "city",
        "postal_code",
        "country",
        "coordinates",
        "parking_type",
        "evses",
        "operator",
        "facilities",
        "time_zone",
        "last_updated",
    ]


def test_absent_optionals_and_empty_collections_are_omitted() -> None:
    payload = location_payload()
    for key in ("name", "postal_code", "parking_type", "operator", "evses", "facilities"):
        del payload[key]

    rendered = Location.parse(payload).unwrap().to_json()

    assert rendered == payload
    assert None not in rendered.values()


def test_timestamps_are_rendered_in_utc_with_milliseconds() -> None:
    offset = timezone(timedelta(hours=2))
    location = Location.parse(location_payload()).unwrap()
    shifted = location.to_builder().set(
        last_updated=datetime(2020, 9, 21, 2, 0, 0, 987654, tzinfo=offset),
    )

    rendered = shifted.build().unwrap().to_json()

    assert rendered["last_updated"] == "2020-09-21T00:00:00.987Z"


def test_decimals_keep_their_value_through_text() -> None:
    tariff = Tariff.parse(tariff_payload()).unwrap()

    text = tariff.dumps()
    element = json.loads(text, parse_float=Decimal)["elements"][0]

    assert element["price_components"][0]["price"] == Decimal("0.25")
    assert element["price_components"][0]["vat"] == 10
    assert Tariff.parse_text(text).unwrap() == tariff


def test_dumps_is_compact_and_deterministic(location: Location) -> None:
    text = location.dumps()

    assert text == dumps(location)
    assert ", " not in text
    assert text.startswith('{"country_code":"DE","party_id":"GEF","id":"LOC0001"')


def test_dumps_renders_integral_decimals_as_integers() -> None:
    assert dumps(Price(excl_vat=Decimal(4), incl_vat=Decimal("4.4"))) == (
        '{"excl_vat":4,"incl_vat":4.4}'
    )


def test_dumps_with_indent() -> None:
    assert dumps(Price(excl_vat=Decimal(1)), indent=2) == '{\n  "excl_vat": 1\n}'


def test_dumps_keeps_every_decimal_digit() -> None:
    price = Price(excl_vat=Decimal("0.12345678901234567891"), incl_vat=Decimal("0.30"))

    text = dumps(price)

    assert text == '{"excl_vat":0.12345678901234567891,"incl_vat":0.30}'
    assert Price.parse_text(text).unwrap() == price


def test_dumps_writes_whole_decimals_as_integers() -> None:
    assert dumps(Price(excl_vat=Decimal("4.00"), incl_vat=Decimal("1E+2"))) == (
        '{"excl_vat":4,"incl_vat":100}'
    )


def test_dumps_never_uses_exponent_notation() -> None:
    assert dumps(Price(excl_vat=Decimal("1E-7"))) == '{"excl_vat":0.0000001}'


def test_dumps_indents_nested_containers() -> None:
    tariff = Tariff.parse(tariff_payload()).unwrap()

    text = tariff.dumps(indent=2)

    assert json.loads(text, parse_float=Decimal) == json.loads(tariff.dumps(), parse_float=Decimal)
    assert text == json.dumps(json.loads(tariff.dumps()), indent=2)
