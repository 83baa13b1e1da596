from __future__ import annotations

from ocpimodel.domain.contract import Err
from ocpimodel.domain.model import (
    EnergyContract,
    ProfileType,
    Token,
    TokenType,
    WhitelistType,
)
from tests.support.payloads import token_payload


def test_token_round_trips(token: Token) -> None:
    assert token.to_json() == token_payload()
    assert Token.parse_text(token.dumps()).unwrap() == token


def test_token_identity_uses_uid(token: Token) -> None:
    assert token.identity.key == ("DE", "TNM", "012345678")
    assert token.type is TokenType.RFID
    assert token.whitelist is WhitelistType.ALLOWED
    assert token.default_profile_type is ProfileType.GREEN
    assert token.energy_contract == EnergyContract(
        supplier_name="Greenpeace Energy eG", contract_id="0123456789"
    )


def test_token_uid_from_out_of_band() -> None:
    payload = token_payload()
    del payload["uid"]

    token = Token.parse(payload, {"id": "012345678"}).unwrap()

    assert token.uid == "012345678"


def test_token_uid_conflict() -> None:
    result = Token.parse(token_payload(), {"id": "999"})

    assert isinstance(result, Err)
    assert result.error.message.endswith(
        "The optional unique identification given within the JSON body "
        "does not match the one given in the URL!"
    )


def test_token_patch(token: Token) -> None:
    outcome = token.patch({"valid": False, "whitelist": "NEVER"})
    rejected = token.patch({"uid": "1"})

    assert outcome.success
    assert outcome.patched.valid is False
    assert outcome.patched.whitelist is WhitelistType.NEVER
    assert rejected.error_message == (
        "Patching the 'unique identification' of a token is not allowed!"
    )


def test_token_energy_contract_can_be_cleared(token: Token) -> None:
    outcome = token.patch({"energy_contract": None})

    assert outcome.success
    assert outcome.patched.energy_contract is None
    assert "energy_contract" not in outcome.patched.to_json()
