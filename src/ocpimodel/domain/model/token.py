"""Tokens issued by an eMSP to authorize charging."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from ocpimodel.domain.contract import (
    ProtocolEntity,
    enum,
    identity_field,
    last_updated,
    scalar,
    struct,
)
from ocpimodel.domain.contract.codecs import boolean, bounded_text
from ocpimodel.domain.model.enums import ProfileType, TokenType, WhitelistType
from ocpimodel.domain.model.values import COUNTRY_CODE, LANGUAGE, PARTY_ID, EnergyContract

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class Token(ProtocolEntity):
    KIND: ClassVar[str] = "token"
    IDENTITY_FIELDS: ClassVar[dict[str, str]] = {
        "country_code": "country_code",
        "party_id": "party_id",
        "id": "uid",
    }

    country_code: str = identity_field(COUNTRY_CODE, label="country code")
    party_id: str = identity_field(PARTY_ID, label="party identification")
    uid: str = identity_field(bounded_text(36), label="unique identification")
    type: TokenType = enum(TokenType)
    contract_id: str = scalar(bounded_text(36), label="contract identification")
    visual_number: str | None = scalar(bounded_text(64), required=False, label="visual number")
    issuer: str = scalar(bounded_text(64))
    group_id: str | None = scalar(bounded_text(36), required=False, label="group identification")
    valid: bool = scalar(boolean)
    whitelist: WhitelistType = enum(WhitelistType)
    language: str | None = scalar(LANGUAGE, required=False)
    default_profile_type: ProfileType | None = enum(
        ProfileType, required=False, label="default profile type"
    )
    energy_contract: EnergyContract | None = struct(
        EnergyContract, required=False, label="energy contract"
    )
    last_updated: datetime = last_updated()
