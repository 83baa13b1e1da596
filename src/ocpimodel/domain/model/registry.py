"""Lookup of entity classes by wire kind (used by the command line)."""

from __future__ import annotations

from typing import TYPE_CHECKING, Final

from ocpimodel.domain.model.cdr import CDR
from ocpimodel.domain.model.location import EVSE, Connector, Location
from ocpimodel.domain.model.session import Session
from ocpimodel.domain.model.tariff import Tariff
from ocpimodel.domain.model.token import Token

if TYPE_CHECKING:
    from collections.abc import Mapping

    from ocpimodel.domain.contract import ProtocolEntity

ENTITY_TYPES: Final[Mapping[str, type[ProtocolEntity]]] = {
    "location": Location,
    "evse": EVSE,
    "connector": Connector,
    "token": Token,
    "tariff": Tariff,
    "session": Session,
    "cdr": CDR,
}


def entity_type(name: str) -> type[ProtocolEntity]:
    try:
        return ENTITY_TYPES[name.lower()]
    except KeyError:
        known = ", ".join(sorted(ENTITY_TYPES))
        raise ValueError(f"Unknown entity kind '{name}' (expected one of: {known})") from None
