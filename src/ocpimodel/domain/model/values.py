"""Value structs embedded in OCPI 2.2.1 entities.

Value structs have no identity of their own; they are parsed as part of their
owning entity and patched as a whole (after a deep merge of the patch object).
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, ClassVar

from ocpimodel.domain.contract import (
    FieldError,
    WireObject,
    collection,
    enum,
    scalar,
    struct,
    timestamp,
)
from ocpimodel.domain.contract.codecs import (
    boolean,
    bounded_text,
    decimal_value,
    fixed_length_text,
    integer,
    matching,
    url,
)
from ocpimodel.domain.contract.invariants import non_empty, not_before
from ocpimodel.domain.model.enums import (
    CdrDimensionType,
    ConnectorFormat,
    ConnectorType,
    DayOfWeek,
    EnergySourceCategory,
    EnvironmentalImpactCategory,
    ImageCategory,
    PowerType,
    TariffDimensionType,
    TokenType,
)

if TYPE_CHECKING:
    from datetime import datetime
    from decimal import Decimal

COUNTRY_CODE = fixed_length_text(2)
COUNTRY_ISO3 = fixed_length_text(3)
PARTY_ID = fixed_length_text(3)
LANGUAGE = fixed_length_text(2)
# Alias for structs that carry a field named ``url``.
WEB_URL = url


@dataclass(frozen=True, slots=True, kw_only=True)
class GeoLocation(WireObject):
    KIND: ClassVar[str] = "geo location"

    latitude: str = scalar(matching(r"-?[0-9]{1,2}\.[0-9]{5,7}", "latitude"))
    longitude: str = scalar(matching(r"-?[0-9]{1,3}\.[0-9]{5,7}", "longitude"))


@dataclass(frozen=True, slots=True, kw_only=True)
class DisplayText(WireObject):
    KIND: ClassVar[str] = "display text"

    language: str = scalar(LANGUAGE)
    text: str = scalar(bounded_text(512))


@dataclass(frozen=True, slots=True, kw_only=True)
class BusinessDetails(WireObject):
    KIND: ClassVar[str] = "business detail"

    name: str = scalar(bounded_text(100))
    website: str | None = scalar(url, required=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class AdditionalGeoLocation(WireObject):
    """A related point of a location, such as a parking lot entrance."""

    KIND: ClassVar[str] = "additional geo location"

    latitude: str = scalar(matching(r"-?[0-9]{1,2}\.[0-9]{5,7}", "latitude"))
    longitude: str = scalar(matching(r"-?[0-9]{1,3}\.[0-9]{5,7}", "longitude"))
    name: DisplayText | None = struct(DisplayText, required=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class Image(WireObject):
    KIND: ClassVar[str] = "image"

    url: str = scalar(WEB_URL, label="URL")
    thumbnail: str | None = scalar(WEB_URL, required=False)
    category: ImageCategory = enum(ImageCategory)
    type: str = scalar(bounded_text(4), label="image type")
    width: int | None = scalar(integer, required=False)
    height: int | None = scalar(integer, required=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class PublishTokenType(WireObject):
    """Token fields a driver must match to be shown an unpublished location."""

    KIND: ClassVar[str] = "publish token type"

    uid: str | None = scalar(bounded_text(36), required=False, label="unique identification")
    type: TokenType | None = enum(TokenType, required=False, label="token type")
    visual_number: str | None = scalar(bounded_text(64), required=False, label="visual number")
    issuer: str | None = scalar(bounded_text(64), required=False)
    group_id: str | None = scalar(bounded_text(36), required=False, label="group identification")


@dataclass(frozen=True, slots=True, kw_only=True)
class EnergyContract(WireObject):
    KIND: ClassVar[str] = "energy contract"

    supplier_name: str = scalar(bounded_text(64), label="supplier name")
    contract_id: str | None = scalar(
        bounded_text(64), required=False, label="contract identification"
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class EnergySource(WireObject):
    KIND: ClassVar[str] = "energy source"

    source: EnergySourceCategory = enum(EnergySourceCategory)
    percentage: Decimal = scalar(decimal_value)

    def validate(self) -> FieldError | None:
        if not 0 <= self.percentage <= 100:
            return FieldError("percentage", "must be between 0 and 100")
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class EnvironmentalImpact(WireObject):
    KIND: ClassVar[str] = "environmental impact"

    category: EnvironmentalImpactCategory = enum(EnvironmentalImpactCategory)
    amount: Decimal = scalar(decimal_value)


@dataclass(frozen=True, slots=True, kw_only=True)
class EnergyMix(WireObject):
    """Where the delivered energy comes from; shared by locations and tariffs."""

    KIND: ClassVar[str] = "energy mix"

    is_green_energy: bool = scalar(boolean, label="green energy flag")
    energy_sources: tuple[EnergySource, ...] = collection(EnergySource, label="energy sources")
    environ_impact: tuple[EnvironmentalImpact, ...] = collection(
        EnvironmentalImpact, label="environmental impact"
    )
    supplier_name: str | None = scalar(bounded_text(64), required=False, label="supplier name")
    energy_product_name: str | None = scalar(
        bounded_text(64), required=False, label="energy product name"
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class PriceComponent(WireObject):
    KIND: ClassVar[str] = "price component"

    type: TariffDimensionType = enum(TariffDimensionType)
    price: Decimal = scalar(decimal_value)
    vat: Decimal | None = scalar(decimal_value, required=False)
    step_size: int = scalar(integer, label="step size")

    def validate(self) -> FieldError | None:
        if self.step_size < 1:
            return FieldError("step_size", "must be a positive integer")
        return None


_TIME_OF_DAY = matching(r"([0-1][0-9]|2[0-3]):[0-5][0-9]", "time of day")
_DATE = matching(r"[0-9]{4}-[0-1][0-9]-[0-3][0-9]", "date")


@dataclass(frozen=True, slots=True, kw_only=True)
class RegularHours(WireObject):
    """A weekly opening period in local time; ``weekday`` runs from 1 (Monday) to 7."""

    KIND: ClassVar[str] = "regular hours"

    weekday: int = scalar(integer)
    period_begin: str = scalar(_TIME_OF_DAY, label="period begin")
    period_end: str = scalar(_TIME_OF_DAY, label="period end")

    def validate(self) -> FieldError | None:
        if not 1 <= self.weekday <= 7:
            return FieldError("weekday", "must be between 1 and 7")
        return None


@dataclass(frozen=True, slots=True, kw_only=True)
class ExceptionalPeriod(WireObject):
    KIND: ClassVar[str] = "exceptional period"

    period_begin: datetime = timestamp(label="period begin")
    period_end: datetime = timestamp(label="period end")

    def validate(self) -> FieldError | None:
        return not_before(
            "period_end", self.period_end, self.period_begin, start_field="period_begin"
        )


@dataclass(frozen=True, slots=True, kw_only=True)
class Hours(WireObject):
    KIND: ClassVar[str] = "opening times"

    twentyfourseven: bool = scalar(boolean, label="24/7 flag")
    regular_hours: tuple[RegularHours, ...] = collection(RegularHours, label="regular hours")
    exceptional_openings: tuple[ExceptionalPeriod, ...] = collection(
        ExceptionalPeriod, label="exceptional openings"
    )
    exceptional_closings: tuple[ExceptionalPeriod, ...] = collection(
        ExceptionalPeriod, label="exceptional closings"
    )


@dataclass(frozen=True, slots=True, kw_only=True)
class TariffRestrictions(WireObject):
    KIND: ClassVar[str] = "tariff restriction"

    start_time: str | None = scalar(_TIME_OF_DAY, required=False)
    end_time: str | None = scalar(_TIME_OF_DAY, required=False)
    start_date: str | None = scalar(_DATE, required=False)
    end_date: str | None = scalar(_DATE, required=False)
    min_kwh: Decimal | None = scalar(decimal_value, required=False)
    max_kwh: Decimal | None = scalar(decimal_value, required=False)
    min_power: Decimal | None = scalar(decimal_value, required=False)
    max_power: Decimal | None = scalar(decimal_value, required=False)
    min_duration: int | None = scalar(integer, required=False)
    max_duration: int | None = scalar(integer, required=False)
    day_of_week: tuple[DayOfWeek, ...] = collection(DayOfWeek)


@dataclass(frozen=True, slots=True, kw_only=True)
class TariffElement(WireObject):
    """One tariff element; elements are matched first-to-last, order matters."""

    KIND: ClassVar[str] = "tariff element"

    price_components: tuple[PriceComponent, ...] = collection(PriceComponent, required=True)
    restrictions: TariffRestrictions | None = struct(TariffRestrictions, required=False)

    def validate(self) -> FieldError | None:
        return non_empty("price_components", self.price_components)


@dataclass(frozen=True, slots=True, kw_only=True)
class Price(WireObject):
    KIND: ClassVar[str] = "price"

    excl_vat: Decimal = scalar(decimal_value)
    incl_vat: Decimal | None = scalar(decimal_value, required=False)


@dataclass(frozen=True, slots=True, kw_only=True)
class CdrToken(WireObject):
    KIND: ClassVar[str] = "charge detail record token"

    country_code: str = scalar(COUNTRY_CODE, label="country code")
    party_id: str = scalar(PARTY_ID, label="party identification")
    uid: str = scalar(bounded_text(36), label="unique identification")
    type: TokenType = enum(TokenType)
    contract_id: str = scalar(bounded_text(36), label="contract identification")


@dataclass(frozen=True, slots=True, kw_only=True)
class CdrDimension(WireObject):
    KIND: ClassVar[str] = "charge detail record dimension"

    type: CdrDimensionType = enum(CdrDimensionType)
    volume: Decimal = scalar(decimal_value)


@dataclass(frozen=True, slots=True, kw_only=True)
class ChargingPeriod(WireObject):
    KIND: ClassVar[str] = "charging period"

    start_date_time: datetime = timestamp(label="start timestamp")
    dimensions: tuple[CdrDimension, ...] = collection(CdrDimension, required=True)
    tariff_id: str | None = scalar(bounded_text(36), required=False, label="tariff identification")

    def validate(self) -> FieldError | None:
        return non_empty("dimensions", self.dimensions)


@dataclass(frozen=True, slots=True, kw_only=True)
class CdrLocation(WireObject):
    KIND: ClassVar[str] = "charge detail record location"

    id: str = scalar(bounded_text(36), label="identification")
    name: str | None = scalar(bounded_text(255), required=False)
    address: str = scalar(bounded_text(45))
    city: str = scalar(bounded_text(45))
    postal_code: str | None = scalar(bounded_text(10), required=False, label="postal code")
    state: str | None = scalar(bounded_text(20), required=False)
    country: str = scalar(COUNTRY_ISO3)
    coordinates: GeoLocation = struct(GeoLocation)
    evse_uid: str = scalar(bounded_text(36), label="EVSE unique identification")
    evse_id: str = scalar(bounded_text(48), label="EVSE identification")
    connector_id: str = scalar(bounded_text(36), label="connector identification")
    connector_standard: ConnectorType = enum(ConnectorType, label="connector standard")
    connector_format: ConnectorFormat = enum(ConnectorFormat, label="connector format")
    connector_power_type: PowerType = enum(PowerType, label="connector power type")


@dataclass(frozen=True, slots=True, kw_only=True)
class SignedValue(WireObject):
    KIND: ClassVar[str] = "signed value"

    nature: str = scalar(bounded_text(32))
    plain_data: str = scalar(bounded_text(512), label="plain data")
    signed_data: str = scalar(bounded_text(5000), label="signed data")


@dataclass(frozen=True, slots=True, kw_only=True)
class SignedData(WireObject):
    """Calibration-law signed meter values attached to a charge detail record."""

    KIND: ClassVar[str] = "signed data"

    encoding_method: str = scalar(bounded_text(36), label="encoding method")
    encoding_method_version: int | None = scalar(
        integer, required=False, label="encoding method version"
    )
    public_key: str | None = scalar(bounded_text(512), required=False, label="public key")
    signed_values: tuple[SignedValue, ...] = collection(
        SignedValue, required=True, label="signed values"
    )
    url: str | None = scalar(bounded_text(512), required=False, label="URL")

    def validate(self) -> FieldError | None:
        return non_empty("signed_values", self.signed_values)
