"""Charge detail records."""

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
from ocpimodel.domain.contract.codecs import boolean, bounded_text, currency, decimal_value
from ocpimodel.domain.contract.invariants import first_violation, non_empty, not_before
from ocpimodel.domain.model.enums import AuthMethod
from ocpimodel.domain.model.tariff import Tariff
from ocpimodel.domain.model.values import (
    COUNTRY_CODE,
    PARTY_ID,
    CdrLocation,
    CdrToken,
    ChargingPeriod,
    Price,
    SignedData,
)

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal


@dataclass(frozen=True, slots=True, kw_only=True)
class CDR(ProtocolEntity):
    """A charge detail record; ``tariffs`` embeds the tariffs that were applied."""

    KIND: ClassVar[str] = "charge detail record"

    country_code: str = identity_field(COUNTRY_CODE, label="country code")
    party_id: str = identity_field(PARTY_ID, label="party identification")
    id: str = identity_field(bounded_text(39), label="identification")
    start_date_time: datetime = timestamp(label="start timestamp")
    end_date_time: datetime = timestamp(label="end timestamp")
    session_id: str | None = scalar(
        bounded_text(36), required=False, label="session identification"
    )
    cdr_token: CdrToken = struct(CdrToken, label="charge detail record token")
    auth_method: AuthMethod = enum(AuthMethod, label="authentication method")
    authorization_reference: str | None = scalar(
        bounded_text(36), required=False, label="authorization reference"
    )
    cdr_location: CdrLocation = struct(CdrLocation, label="charge detail record location")
    meter_id: str | None = scalar(bounded_text(255), required=False, label="meter identification")
    currency: str = scalar(currency)
    tariffs: tuple[Tariff, ...] = collection(Tariff)
    charging_periods: tuple[ChargingPeriod, ...] = collection(
        ChargingPeriod, required=True, label="charging periods"
    )
    signed_data: SignedData | None = struct(SignedData, required=False, label="signed data")
    total_cost: Price = struct(Price, label="total cost")
    total_fixed_cost: Price | None = struct(Price, required=False, label="total fixed cost")
    total_energy: Decimal = scalar(decimal_value, label="total energy")
    total_energy_cost: Price | None = struct(Price, required=False, label="total energy cost")
    total_time: Decimal = scalar(decimal_value, label="total time")
    total_time_cost: Price | None = struct(Price, required=False, label="total time cost")
    total_parking_time: Decimal | None = scalar(
        decimal_value, required=False, label="total parking time"
    )
    total_parking_cost: Price | None = struct(Price, required=False, label="total parking cost")
    total_reservation_cost: Price | None = struct(
        Price, required=False, label="total reservation cost"
    )
    remark: str | None = scalar(bounded_text(255), required=False)
    invoice_reference_id: str | None = scalar(
        bounded_text(39), required=False, label="invoice reference identification"
    )
    credit: bool | None = scalar(boolean, required=False)
    credit_reference_id: str | None = scalar(
        bounded_text(39), required=False, label="credit reference identification"
    )
    home_charging_compensation: bool | None = scalar(
        boolean, required=False, label="home charging compensation"
    )
    last_updated: datetime = last_updated()

    def validate(self) -> FieldError | None:
        return first_violation(
            non_empty("charging_periods", self.charging_periods),
            not_before(
                "end_date_time",
                self.end_date_time,
                self.start_date_time,
                start_field="start_date_time",
            ),
        )
