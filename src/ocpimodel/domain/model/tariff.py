"""Charging tariffs."""

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
from ocpimodel.domain.contract.codecs import bounded_text, currency, url
from ocpimodel.domain.contract.invariants import first_violation, non_empty, not_before
from ocpimodel.domain.model.enums import TariffType
from ocpimodel.domain.model.values import (
    COUNTRY_CODE,
    PARTY_ID,
    DisplayText,
    EnergyMix,
    Price,
    TariffElement,
)

if TYPE_CHECKING:
    from datetime import datetime


@dataclass(frozen=True, slots=True, kw_only=True)
class Tariff(ProtocolEntity):
    """A charging tariff.

    ``elements`` keep their wire order: the first element whose restrictions
    match is the one that applies.
    """

    KIND: ClassVar[str] = "charging tariff"

    country_code: str = identity_field(COUNTRY_CODE, label="country code")
    party_id: str = identity_field(PARTY_ID, label="party identification")
    id: str = identity_field(bounded_text(36), label="identification")
    currency: str = scalar(currency)
    type: TariffType | None = enum(TariffType, required=False, label="tariff type")
    tariff_alt_text: tuple[DisplayText, ...] = collection(
        DisplayText, label="alternative tariff text"
    )
    tariff_alt_url: str | None = scalar(url, required=False, label="alternative tariff URL")
    min_price: Price | None = struct(Price, required=False, label="minimum price")
    max_price: Price | None = struct(Price, required=False, label="maximum price")
    elements: tuple[TariffElement, ...] = collection(TariffElement, required=True)
    start_date_time: datetime | None = timestamp(required=False, label="start timestamp")
    end_date_time: datetime | None = timestamp(required=False, label="end timestamp")
    energy_mix: EnergyMix | None = struct(EnergyMix, required=False, label="energy mix")
    last_updated: datetime = last_updated()

    def validate(self) -> FieldError | None:
        return first_violation(
            non_empty("elements", self.elements),
            not_before(
                "end_date_time",
                self.end_date_time,
                self.start_date_time,
                start_field="start_date_time",
            ),
        )
