from __future__ import annotations

import json
from decimal import Decimal

from ocpimodel.domain.contract import Err
from ocpimodel.domain.model import CDR, CdrDimensionType, ConnectorType
from tests.support.payloads import cdr_payload, charging_period_payload, signed_data_payload


def test_cdr_round_trips() -> None:
    cdr = CDR.parse(cdr_payload()).unwrap()

    assert CDR.parse(cdr.to_json()).unwrap() == cdr
    assert CDR.parse_text(cdr.dumps()).unwrap() == cdr


def test_cdr_embeds_values_and_tariffs() -> None:
    cdr = CDR.parse(cdr_payload()).unwrap()

    assert cdr.cdr_location.connector_standard is ConnectorType.IEC_62196_T2
    assert cdr.charging_periods[0].dimensions[0].type is CdrDimensionType.ENERGY
    assert cdr.total_cost.incl_vat == Decimal("4.4")
    assert [tariff.identity.key for tariff in cdr.tariffs] == [("DE", "ALL", "12")]


def test_cdr_requires_charging_periods() -> None:
    absent = cdr_payload()
    del absent["charging_periods"]

    missing = CDR.parse(absent)
    empty = CDR.parse(cdr_payload(charging_periods=[]))

    assert isinstance(missing, Err)
    assert missing.error.field == "charging_periods"
    assert isinstance(empty, Err)
    assert empty.error.message.endswith('"charging_periods": must not be empty')


def test_charging_period_requires_dimensions() -> None:
    period = charging_period_payload()
    period["dimensions"] = []

    result = CDR.parse(cdr_payload(charging_periods=[period]))

    assert isinstance(result, Err)
    assert result.error.field == "charging_periods[0].dimensions"


def test_cdr_end_must_not_precede_start() -> None:
    result = CDR.parse(cdr_payload(end_date_time="2015-06-29T20:00:00Z"))

    assert isinstance(result, Err)
    assert result.error.field == "end_date_time"


def test_embedded_tariff_errors_are_located() -> None:
    tariff = cdr_payload()["tariffs"][0]
    tariff["currency"] = "eur"

    result = CDR.parse(cdr_payload(tariffs=[tariff]))

    assert isinstance(result, Err)
    assert result.error.field == "tariffs[0].currency"


def test_cdr_identity_is_immutable() -> None:
    cdr = CDR.parse(cdr_payload()).unwrap()

    outcome = cdr.patch({"party_id": "XYZ"})

    assert outcome.error_message == (
        "Patching the 'party identification' of a charge detail record is not allowed!"
    )
    assert outcome.patched is cdr


def test_cdr_signed_data_and_reservation_cost_round_trip() -> None:
    payload = cdr_payload(
        signed_data=signed_data_payload(),
        total_reservation_cost={"excl_vat": 0.5, "incl_vat": 0.55},
        home_charging_compensation=False,
    )

    cdr = CDR.parse(payload).unwrap()

    assert json.loads(cdr.dumps()) == payload
    keys = list(cdr.to_json())
    assert keys.index("signed_data") == keys.index("charging_periods") + 1
    assert keys.index("total_reservation_cost") > keys.index("total_time_cost")
    assert keys[-2:] == ["home_charging_compensation", "last_updated"]
    assert cdr.signed_data is not None
    assert [value.nature for value in cdr.signed_data.signed_values] == ["Start", "End"]
    assert cdr.signed_data.encoding_method_version == 1
    assert cdr.total_reservation_cost is not None
    assert cdr.total_reservation_cost.incl_vat == Decimal("0.55")


def test_cdr_signed_data_requires_signed_values() -> None:
    signed = signed_data_payload()
    signed["signed_values"] = []
    unsigned = signed_data_payload()
    del unsigned["encoding_method"]

    empty = CDR.parse(cdr_payload(signed_data=signed))
    missing = CDR.parse(cdr_payload(signed_data=unsigned))

    assert isinstance(empty, Err)
    assert empty.error.field == "signed_data.signed_values"
    assert isinstance(missing, Err)
    assert missing.error.field == "signed_data.encoding_method"
