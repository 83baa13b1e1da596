"""Charging sessions."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from ocpimodel.domain.contract import (
    FieldError,
    ProtocolEntity,
    collection,
    enum,
    identity_field,
    last_updated,
    scalar,
    struct,
    timestamp,
)
from ocpimodel.domain.contract.codecs import bounded_text, currency, decimal_value
from ocpimodel.domain.contract.invariants import not_before
from ocpimodel.domain.model.enums import AuthMethod, SessionStatus
from ocpimodel.domain.model.values import (
    COUNTRY_CODE,
    PARTY_ID,
    CdrToken,
    ChargingPeriod,
    Price,
)

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal


@dataclass(frozen=True, slots=True, kw_only=True)
class Session(ProtocolEntity):
    KIND: ClassVar[str] = "charging session"

    country_code: str = identity_field(COUNTRY_CODE, label="country code")
    party_id: str = identity_field(PARTY_ID, label="party identification")
    id: str = identity_field(bounded_text(36), label="identification")
    start_date_time: datetime = timestamp(label="start timestamp")
    end_date_time: datetime | None = timestamp(required=False, label="end timestamp")
    kwh: Decimal = scalar(decimal_value, label="kWh")
    cdr_token: CdrToken = struct(CdrToken, label="charge detail record token")
    auth_method: AuthMethod = enum(AuthMethod, label="authentication method")
    authorization_reference: str | None = scalar(
        bounded_text(36), required=False, label="authorization reference"
    )
    location_id: str = scalar(bounded_text(36), label="location identification")
    evse_uid: str = scalar(bounded_text(36), label="EVSE unique identification")
    connector_id: str = scalar(bounded_text(36), label="connector identification")
    meter_id: str | None = scalar(bounded_text(255), required=False, label="meter identification")
    currency: str = scalar(currency)
    charging_periods: tuple[ChargingPeriod, ...] = collection(
        ChargingPeriod, label="charging periods"
    )
    total_cost: Price | None = struct(Price, required=False, label="total cost")
    status: SessionStatus = enum(SessionStatus)
    last_updated: datetime = last_updated()

    def validate(self) -> FieldError | None:
        return not_before(
            "end_date_time",
            self.end_date_time,
            self.start_date_time,
            start_field="start_date_time",
        )
