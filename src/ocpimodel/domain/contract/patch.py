"""JSON merge-patch engine for protocol entities.

A patch is applied all-or-nothing: the first violation stops processing and
the original, unmodified entity is handed back together with the error.
"""

from __future__ import annotations

import dataclasses
import json
import logging
from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal
from typing import TYPE_CHECKING, Any

from .codecs import utc_now
from .descriptors import FieldKind, Mutability, descriptors_by_wire
from .errors import PatchError, with_article
from .fields import decode_collection, decode_value
from .result import Err, Ok

if TYPE_CHECKING:
    from datetime import datetime

    from .codecs import JsonObject
    from .descriptors import FieldDescriptor
    from .result import Result
    from .wire import ProtocolEntity

log = logging.getLogger(__name__)


@dataclass(frozen=True)
class PatchOutcome[E: ProtocolEntity]:
    """Result of a patch attempt; ``patched`` is always usable."""

    patched: E
    error: PatchError | None = None

    @property
    def success(self) -> bool:
        return self.error is None

    @property
    def error_message(self) -> str | None:
        return self.error.message if self.error is not None else None

    @classmethod
    def succeeded(cls, patched: E) -> PatchOutcome[E]:
        return cls(patched)

    @classmethod
    def failed(cls, original: E, error: PatchError) -> PatchOutcome[E]:
        return cls(original, error)


def merge_patch_json(target: Mapping[str, Any], patch: Mapping[str, Any]) -> JsonObject:
    """RFC 7386 merge of two JSON objects; ``null`` removes, objects merge recursively."""

    merged: JsonObject = dict(target)
    for key, value in patch.items():
        if value is None:
            merged.pop(key, None)
        elif isinstance(value, Mapping):
            current = merged.get(key)
            base = current if isinstance(current, Mapping) else {}
            merged[key] = merge_patch_json(base, value)
        else:
            merged[key] = value
    return merged


def _patched_value(
    entity: ProtocolEntity,
    descriptor: FieldDescriptor,
    value: Any,
) -> Result[Any, PatchError]:
    kind = entity.KIND
    invalid = f"Invalid JSON merge patch of {with_article(kind)}"
    if value is None:
        if not descriptor.clearable:
            return Err(
                PatchError(
                    kind,
                    f"{invalid}: {descriptor.wire} must not be null",
                    field=descriptor.wire,
                )
            )
        return Ok(descriptor.empty())

    if descriptor.mutability is Mutability.COLLECTION_REPLACE:
        if not isinstance(value, list):
            return Err(
                PatchError(
                    kind,
                    f"{invalid}: '{descriptor.wire}' must be a JSON array!",
                    field=descriptor.wire,
                )
            )
        decoded = decode_collection(descriptor.wire, value, descriptor.decode)
    elif descriptor.kind is FieldKind.STRUCT:
        if not isinstance(value, Mapping):
            return Err(
                PatchError(
                    kind,
                    f"{invalid}: '{descriptor.wire}' must be a JSON object!",
                    field=descriptor.wire,
                )
            )
        current = getattr(entity, descriptor.attr)
        merged = merge_patch_json(current.to_json(), value) if current is not None else value
        decoded = decode_value(descriptor.wire, merged, descriptor.decode)
    else:
        decoded = decode_value(descriptor.wire, value, descriptor.decode)

    if isinstance(decoded, Err):
        return Err(
            PatchError(
                kind,
                f"{invalid}: {decoded.error.message}",
                field=decoded.error.path,
            )
        )
    return decoded


def apply_patch[E: ProtocolEntity](
    entity: E,
    patch: object,
    *,
    now: datetime | None = None,
    allow_downgrades: bool = True,
) -> PatchOutcome[E]:
    """Apply a JSON merge patch to ``entity`` under its per-field mutability policy."""

    kind = entity.KIND
    invalid = f"Invalid JSON merge patch of {with_article(kind)}"
    if patch is None:
        return _reject(entity, PatchError(kind, f"The given {kind} patch must not be null!"))
    if not isinstance(patch, Mapping):
        return _reject(
            entity,
            PatchError(kind, f"The given {kind} patch must be a JSON object!"),
        )

    by_wire = descriptors_by_wire(type(entity))
    changes: dict[str, Any] = {}
    stamp: datetime | None = None

    for key, value in patch.items():
        descriptor = by_wire.get(key)
        if descriptor is None:
            log.debug("Ignoring unknown %s patch property '%s'", kind, key)
            continue
        if descriptor.mutability is Mutability.IMMUTABLE:
            target = f"'{descriptor.label}'"
            if descriptor.kind is FieldKind.COLLECTION:
                target += " array"
            return _reject(
                entity,
                PatchError(
                    kind,
                    f"Patching the {target} of {with_article(kind)} is not allowed!",
                    field=descriptor.wire,
                ),
            )
        result = _patched_value(entity, descriptor, value)
        if isinstance(result, Err):
            return _reject(entity, result.error)
        if descriptor.defaults_to_now:
            stamp = result.value
        else:
            changes[descriptor.attr] = result.value

    if not allow_downgrades and stamp is not None and stamp <= entity.last_updated:
        return _reject(
            entity,
            PatchError(
                kind,
                f"The 'last updated' timestamp of the {kind} patch must be newer "
                f"than the timestamp of the existing {kind}!",
                field="last_updated",
            ),
        )
    stamp = stamp or now or utc_now()

    patched = dataclasses.replace(entity, **changes, last_updated=stamp)
    violation = patched.validate()
    if violation is not None:
        return _reject(
            entity,
            PatchError(
                kind,
                f"{invalid}: {violation.message}",
                field=violation.path,
            ),
        )

    log.debug("Patched %s %s: %s", kind, entity.identity, ", ".join(changes) or "last_updated")
    return PatchOutcome.succeeded(patched)


def apply_patch_text[E: ProtocolEntity](
    entity: E,
    text: str | bytes,
    *,
    now: datetime | None = None,
    allow_downgrades: bool = True,
) -> PatchOutcome[E]:
    kind = entity.KIND
    invalid = f"Invalid JSON merge patch of {with_article(kind)}"
    try:
        patch = json.loads(text, parse_float=Decimal)
    except json.JSONDecodeError as exc:
        return _reject(
            entity,
            PatchError(
                kind,
                f"{invalid}: invalid text representation: {exc}",
            ),
        )
    return apply_patch(entity, patch, now=now, allow_downgrades=allow_downgrades)


def _reject[E: ProtocolEntity](entity: E, error: PatchError) -> PatchOutcome[E]:
    log.debug("Rejected %s patch for %s: %s", entity.KIND, entity.identity, error.message)
    return PatchOutcome.failed(entity, error)
