from __future__ import annotations

from decimal import Decimal

import pytest

from ocpimodel.domain.contract import Err
from ocpimodel.domain.model import AuthMethod, Session, SessionStatus
from tests.support.payloads import session_payload

SESSION_MANDATORY = [
    "start_date_time",
    "kwh",
    "cdr_token",
    "auth_method",
    "location_id",
    "evse_uid",
    "connector_id",
    "currency",
    "status",
]


def test_session_round_trips() -> None:
    session = Session.parse(session_payload()).unwrap()

    assert Session.parse(session.to_json()).unwrap() == session
    assert Session.parse_text(session.dumps()).unwrap() == session
    assert session.kwh == Decimal("15.342")
    assert session.auth_method is AuthMethod.WHITELIST
    assert session.status is SessionStatus.COMPLETED


@pytest.mark.parametrize("field", SESSION_MANDATORY)
def test_session_missing_mandatory_field(field: str) -> None:
    payload = session_payload()
    del payload[field]

    result = Session.parse(payload)

    assert isinstance(result, Err)
    assert result.error.field == field
    assert result.error.message.endswith(f'"{field}": missing')


def test_session_end_must_not_precede_start() -> None:
    result = Session.parse(session_payload(end_date_time="2020-03-09T09:00:00Z"))

    assert isinstance(result, Err)
    assert result.error.field == "end_date_time"


def test_open_session_has_no_end() -> None:
    payload = session_payload(status="ACTIVE")
    del payload["end_date_time"]

    session = Session.parse(payload).unwrap()

    assert session.end_date_time is None
    assert "end_date_time" not in session.to_json()


def test_session_patch_updates_progress() -> None:
    session = Session.parse(session_payload(status="ACTIVE")).unwrap()

    outcome = session.patch({"kwh": 20.5, "status": "COMPLETED", "total_cost": {"excl_vat": 5}})

    assert outcome.success
    assert outcome.patched.kwh == Decimal("20.5")
    assert outcome.patched.status is SessionStatus.COMPLETED
    assert outcome.patched.total_cost is not None
    assert outcome.patched.total_cost.excl_vat == Decimal(5)
    assert outcome.patched.total_cost.incl_vat == Decimal("0.11")


def test_session_token_is_a_nested_struct() -> None:
    result = Session.parse(session_payload(cdr_token={"uid": "1"}))

    assert isinstance(result, Err)
    assert result.error.field == "cdr_token.country_code"
