"""Charging locations and the EVSEs and connectors they own."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from ocpimodel.domain.contract import (
    FieldError,
    Mutability,
    ProtocolEntity,
    collection,
    enum,
    identity_field,
    last_updated,
    scalar,
    struct,
    timestamp,
)
from ocpimodel.domain.contract.codecs import (
    boolean,
    bounded_text,
    integer,
    non_empty_text,
    url,
)
from ocpimodel.domain.contract.invariants import first_violation, non_empty
from ocpimodel.domain.model.enums import (
    Capability,
    ConnectorFormat,
    ConnectorType,
    Facility,
    ParkingRestriction,
    ParkingType,
    PowerType,
    Status,
)
from ocpimodel.domain.model.values import (
    COUNTRY_CODE,
    COUNTRY_ISO3,
    PARTY_ID,
    AdditionalGeoLocation,
    BusinessDetails,
    DisplayText,
    EnergyMix,
    GeoLocation,
    Hours,
    Image,
    PublishTokenType,
)

if TYPE_CHECKING:
    from datetime import datetime


def _unique(field: str, ids: list[str]) -> FieldError | None:
    seen: set[str] = set()
    for index, value in enumerate(ids):
        if value in seen:
            return FieldError(field, f"duplicate identification '{value}'", index=index)
        seen.add(value)
    return None


@dataclass(frozen=True, slots=True, kw_only=True)
class Connector(ProtocolEntity):
    KIND: ClassVar[str] = "connector"
    IDENTITY_FIELDS: ClassVar[dict[str, str]] = {"id": "id"}

    id: str = identity_field(bounded_text(36), label="identification")
    standard: ConnectorType = enum(ConnectorType)
    format: ConnectorFormat = enum(ConnectorFormat)
    power_type: PowerType = enum(PowerType, label="power type")
    max_voltage: int = scalar(integer, label="max voltage")
    max_amperage: int = scalar(integer, label="max amperage")
    max_electric_power: int | None = scalar(integer, required=False, label="max electric power")
    tariff_ids: tuple[str, ...] = collection(bounded_text(36), label="tariff identifications")
    terms_and_conditions: str | None = scalar(url, required=False, label="terms and conditions")
    last_updated: datetime = last_updated()


@dataclass(frozen=True, slots=True, kw_only=True)
class EVSE(ProtocolEntity):
    KIND: ClassVar[str] = "EVSE"
    IDENTITY_FIELDS: ClassVar[dict[str, str]] = {"id": "uid"}

    uid: str = identity_field(bounded_text(36), label="unique identification")
    evse_id: str | None = scalar(bounded_text(48), required=False, label="EVSE identification")
    status: Status = enum(Status)
    capabilities: tuple[Capability, ...] = collection(Capability)
    connectors: tuple[Connector, ...] = collection(Connector, required=True)
    floor_level: str | None = scalar(bounded_text(4), required=False, label="floor level")
    coordinates: GeoLocation | None = struct(GeoLocation, required=False)
    physical_reference: str | None = scalar(
        bounded_text(16), required=False, label="physical reference"
    )
    directions: tuple[DisplayText, ...] = collection(DisplayText)
    parking_restrictions: tuple[ParkingRestriction, ...] = collection(
        ParkingRestriction, label="parking restrictions"
    )
    last_updated: datetime = last_updated()

    def validate(self) -> FieldError | None:
        return first_violation(
            non_empty("connectors", self.connectors),
            _unique("connectors", [connector.id for connector in self.connectors]),
        )

    def connector(self, connector_id: str) -> Connector | None:
        return next((c for c in self.connectors if c.id == connector_id), None)


@dataclass(frozen=True, slots=True, kw_only=True)
class Location(ProtocolEntity):
    """A charging location; EVSEs are managed through their own patch endpoint."""

    KIND: ClassVar[str] = "location"

    country_code: str = identity_field(COUNTRY_CODE, label="country code")
    party_id: str = identity_field(PARTY_ID, label="party identification")
    id: str = identity_field(bounded_text(36), label="identification")
    publish: bool = scalar(boolean)
    publish_allowed_to: tuple[PublishTokenType, ...] = collection(
        PublishTokenType, label="publish allowed to"
    )
    name: str | None = scalar(bounded_text(255), required=False)
    address: str = scalar(bounded_text(45))
    city: str = scalar(bounded_text(45))
    postal_code: str | None = scalar(bounded_text(10), required=False, label="postal code")
    state: str | None = scalar(bounded_text(20), required=False)
    country: str = scalar(COUNTRY_ISO3)
    coordinates: GeoLocation = struct(GeoLocation)
    related_locations: tuple[AdditionalGeoLocation, ...] = collection(
        AdditionalGeoLocation, label="related locations"
    )
    parking_type: ParkingType | None = enum(ParkingType, required=False, label="parking type")
    evses: tuple[EVSE, ...] = collection(EVSE, mutability=Mutability.IMMUTABLE)
    directions: tuple[DisplayText, ...] = collection(DisplayText)
    operator: BusinessDetails | None = struct(BusinessDetails, required=False)
    suboperator: BusinessDetails | None = struct(BusinessDetails, required=False)
    owner: BusinessDetails | None = struct(BusinessDetails, required=False)
    facilities: tuple[Facility, ...] = collection(Facility)
    time_zone: str = scalar(non_empty_text, label="time zone")
    opening_times: Hours | None = struct(Hours, required=False, label="opening times")
    charging_when_closed: bool | None = scalar(
        boolean, required=False, label="charging when closed"
    )
    images: tuple[Image, ...] = collection(Image)
    energy_mix: EnergyMix | None = struct(EnergyMix, required=False, label="energy mix")
    created: datetime | None = timestamp(required=False, mutability=Mutability.IMMUTABLE)
    last_updated: datetime = last_updated()

    def validate(self) -> FieldError | None:
        return _unique("evses", [evse.uid for evse in self.evses])

    def evse(self, uid: str) -> EVSE | None:
        return next((evse for evse in self.evses if evse.uid == uid), None)

    def connector(self, evse_uid: str, connector_id: str) -> Connector | None:
        evse = self.evse(evse_uid)
        return evse.connector(connector_id) if evse is not None else None
