"""Entity parser: identity resolution plus descriptor-driven field extraction.

Parsing is fail-fast: the first identity, field or invariant error is reported
and no object is constructed.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from .codecs import utc_now
from .descriptors import FieldKind, descriptors_of
from .errors import ContractError, FieldError, IdentityError, ParseError
from .fields import (
    ABSENT,
    lookup,
    mandatory,
    mandatory_collection,
    optional,
    optional_collection,
)
from .identity import PartialIdentity, resolve
from .result import Err, Ok

if TYPE_CHECKING:
    from datetime import datetime

    from .descriptors import FieldDescriptor
    from .result import Result
    from .wire import WireObject

log = logging.getLogger(__name__)

type OutOfBand = PartialIdentity | Mapping[str, str | None] | None


def extract(payload: Mapping[str, Any], descriptor: FieldDescriptor) -> Result[Any, FieldError]:
    """Run the extractor matching the descriptor's kind and requirement."""

    if descriptor.kind is FieldKind.COLLECTION:
        if descriptor.required:
            return mandatory_collection(payload, descriptor.wire, descriptor.decode)
        return optional_collection(payload, descriptor.wire, descriptor.decode)
    if descriptor.required:
        return mandatory(payload, descriptor.wire, descriptor.decode)
    return optional(payload, descriptor.wire, descriptor.decode)


def _identity_descriptors(cls: type[WireObject]) -> dict[str, FieldDescriptor]:
    components: Mapping[str, str] = getattr(cls, "IDENTITY_FIELDS", {})
    by_attr = {descriptor.attr: descriptor for descriptor in descriptors_of(cls)}
    return {component: by_attr[attr] for component, attr in components.items()}


def _read_in_band(
    payload: Mapping[str, Any],
    identity_descriptors: Mapping[str, FieldDescriptor],
) -> Result[PartialIdentity, FieldError]:
    found: dict[str, str | None] = {}
    for component, descriptor in identity_descriptors.items():
        result = optional(payload, descriptor.wire, descriptor.decode)
        if isinstance(result, Err):
            return result
        found[component] = result.value
    return Ok(PartialIdentity(**found))


def _resolve_identity(
    cls: type[WireObject],
    payload: Mapping[str, Any],
    out_of_band: OutOfBand,
) -> Result[dict[str, Any], ContractError]:
    identity_descriptors = _identity_descriptors(cls)
    in_band = _read_in_band(payload, identity_descriptors)
    if isinstance(in_band, Err):
        return in_band
    resolved = resolve(
        out_of_band,
        in_band.value,
        components=tuple(identity_descriptors),
        labels={component: d.label for component, d in identity_descriptors.items()},
    )
    if isinstance(resolved, Err):
        return resolved
    return Ok(
        {
            descriptor.attr: getattr(resolved.value, component)
            for component, descriptor in identity_descriptors.items()
        }
    )


def extract_values(
    cls: type[WireObject],
    payload: Mapping[str, Any],
    out_of_band: OutOfBand = None,
    *,
    now: datetime | None = None,
) -> Result[dict[str, Any], ContractError]:
    """Collect constructor arguments for ``cls`` from a JSON object."""

    values: dict[str, Any] = {}
    if getattr(cls, "IDENTITY_FIELDS", None):
        identity = _resolve_identity(cls, payload, out_of_band)
        if isinstance(identity, Err):
            return identity
        values.update(identity.value)

    for descriptor in descriptors_of(cls):
        if descriptor.identity:
            continue
        if descriptor.defaults_to_now and lookup(payload, descriptor.wire) is ABSENT:
            values[descriptor.attr] = now or utc_now()
            continue
        result = extract(payload, descriptor)
        if isinstance(result, Err):
            return result
        values[descriptor.attr] = result.value
    return Ok(values)


def parse_object[W: WireObject](
    cls: type[W],
    payload: object,
    out_of_band: OutOfBand = None,
    *,
    now: datetime | None = None,
) -> Result[W, ParseError]:
    if not isinstance(payload, Mapping) or not payload:
        return _failed(cls, ContractError("The given JSON object must not be null or empty!"))

    values = extract_values(cls, payload, out_of_band, now=now)
    if isinstance(values, Err):
        return _failed(cls, values.error)

    parsed = cls(**values.value)
    violation = parsed.validate()
    if violation is not None:
        return _failed(cls, violation)
    return Ok(parsed)


def parse_text[W: WireObject](
    cls: type[W],
    text: str | bytes,
    out_of_band: OutOfBand = None,
    *,
    now: datetime | None = None,
) -> Result[W, ParseError]:
    try:
        payload = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        return _failed(cls, ContractError(f"invalid text representation: {exc}"))
    return parse_object(cls, payload, out_of_band, now=now)


def decode_nested[W: WireObject](cls: type[W], value: object) -> W:
    """Decoder for objects embedded in another object; raises ``FieldError``."""

    if not isinstance(value, Mapping):
        raise TypeError(f"expected a JSON object, got {type(value).__name__}")
    values = extract_values(cls, value)
    if isinstance(values, Err):
        error = values.error
        if isinstance(error, FieldError):
            raise error
        if isinstance(error, IdentityError):
            descriptor = _identity_descriptors(cls)[error.component]
            raise FieldError(descriptor.wire, error.reason)
        raise ValueError(error.message)
    parsed = cls(**values.value)
    violation = parsed.validate()
    if violation is not None:
        raise violation
    return parsed


def parse_or_raise[W: WireObject](
    cls: type[W],
    payload: object,
    out_of_band: OutOfBand = None,
) -> W:
    """Convenience wrapper raising ``ParseError`` instead of returning it."""

    return parse_object(cls, payload, out_of_band).unwrap()


def _failed(cls: type[WireObject], cause: ContractError) -> Err[ParseError]:
    error = ParseError(cls.KIND, cause)
    log.debug("Rejected %s: %s", cls.KIND, error.message)
    return Err(error)
