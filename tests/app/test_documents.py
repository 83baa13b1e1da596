from __future__ import annotations

import json
from datetime import datetime

import pytest

from ocpimodel.app import patch_document, validate_document
from ocpimodel.domain.contract import ParseError, PartialIdentity
from ocpimodel.domain.model import Location
from tests.support.payloads import location_payload, session_payload


def test_validate_document_parses_by_kind() -> None:
    entity = validate_document("location", json.dumps(location_payload()))

    assert isinstance(entity, Location)
    assert entity.id == "LOC0001"


def test_validate_document_uses_out_of_band_identity(now: datetime) -> None:
    payload = location_payload()
    del payload["id"]
    del payload["last_updated"]

    entity = validate_document(
        "location",
        json.dumps(payload),
        identity=PartialIdentity(id="LOC0002"),
        now=now,
    )

    assert entity.identity.id == "LOC0002"
    assert entity.last_updated == now


def test_validate_document_raises_parse_error() -> None:
    with pytest.raises(ParseError, match="invalid text representation"):
        validate_document("location", "{")


def test_patch_document_reads_downgrade_setting(monkeypatch: pytest.MonkeyPatch) -> None:
    document = json.dumps(session_payload())
    patch = json.dumps({"last_updated": "2019-01-01T00:00:00Z"})

    assert patch_document("session", document, patch).success

    monkeypatch.setenv("OCPIMODEL_ALLOW_DOWNGRADES", "false")
    refused = patch_document("session", document, patch)
    assert not refused.success
    assert patch_document("session", document, patch, allow_downgrades=True).success


def test_patch_document_returns_original_on_failure() -> None:
    outcome = patch_document(
        "location", json.dumps(location_payload()), json.dumps({"country_code": "FR"})
    )

    assert not outcome.success
    assert outcome.patched.to_json() == location_payload()
