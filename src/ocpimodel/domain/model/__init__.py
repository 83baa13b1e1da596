"""OCPI 2.2.1 entity family."""

from __future__ import annotations

from ocpimodel.domain.model.cdr import CDR
from ocpimodel.domain.model.enums import (
    AuthMethod,
    Capability,
    CdrDimensionType,
    ConnectorFormat,
    ConnectorType,
    DayOfWeek,
    EnergySourceCategory,
    EnvironmentalImpactCategory,
    Facility,
    ImageCategory,
    ParkingRestriction,
    ParkingType,
    PowerType,
    ProfileType,
    SessionStatus,
    Status,
    TariffDimensionType,
    TariffType,
    TokenType,
    WhitelistType,
)
from ocpimodel.domain.model.location import EVSE, Connector, Location
from ocpimodel.domain.model.registry import ENTITY_TYPES, entity_type
from ocpimodel.domain.model.session import Session
from ocpimodel.domain.model.tariff import Tariff
from ocpimodel.domain.model.token import Token
from ocpimodel.domain.model.values import (
    AdditionalGeoLocation,
    BusinessDetails,
    CdrDimension,
    CdrLocation,
    CdrToken,
    ChargingPeriod,
    DisplayText,
    EnergyContract,
    EnergyMix,
    EnergySource,
    EnvironmentalImpact,
    ExceptionalPeriod,
    GeoLocation,
    Hours,
    Image,
    Price,
    PriceComponent,
    PublishTokenType,
    RegularHours,
    SignedData,
    SignedValue,
    TariffElement,
    TariffRestrictions,
)

__all__ = [  # noqa: RUF022
    # entities
    "Location",
    "EVSE",
    "Connector",
    "Token",
    "Tariff",
    "Session",
    "CDR",
    "ENTITY_TYPES",
    "entity_type",
    # values
    "GeoLocation",
    "DisplayText",
    "BusinessDetails",
    "EnergyContract",
    "PriceComponent",
    "TariffRestrictions",
    "TariffElement",
    "Price",
    "CdrToken",
    "CdrDimension",
    "ChargingPeriod",
    "CdrLocation",
    "AdditionalGeoLocation",
    "PublishTokenType",
    "RegularHours",
    "ExceptionalPeriod",
    "Hours",
    "Image",
    "EnergySource",
    "EnvironmentalImpact",
    "EnergyMix",
    "SignedValue",
    "SignedData",
    # enums
    "AuthMethod",
    "Capability",
    "CdrDimensionType",
    "ConnectorFormat",
    "ConnectorType",
    "DayOfWeek",
    "EnergySourceCategory",
    "EnvironmentalImpactCategory",
    "Facility",
    "ImageCategory",
    "ParkingRestriction",
    "ParkingType",
    "PowerType",
    "ProfileType",
    "SessionStatus",
    "Status",
    "TariffDimensionType",
    "TariffType",
    "TokenType",
    "WhitelistType",
]
