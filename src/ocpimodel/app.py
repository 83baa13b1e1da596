"""Application entry points: validate and patch JSON documents by entity kind."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from ocpimodel.config import get_contract_config
from ocpimodel.domain.model import entity_type

if TYPE_CHECKING:
    from datetime import datetime

    from ocpimodel.domain.contract import PartialIdentity, PatchOutcome, ProtocolEntity

log = getLogger(__name__)


def validate_document(
    kind: str,
    text: str | bytes,
    *,
    identity: PartialIdentity | None = None,
    now: datetime | None = None,
) -> ProtocolEntity:
    """Parse ``text`` as the given entity kind; raises ``ParseError`` when invalid."""

    cls = entity_type(kind)
    entity = cls.parse_text(text, identity, now=now).unwrap()
    log.info("Validated %s %s", entity.KIND, entity.identity)
    return entity


def patch_document(
    kind: str,
    text: str | bytes,
    patch_text: str | bytes,
    *,
    allow_downgrades: bool | None = None,
    now: datetime | None = None,
) -> PatchOutcome[ProtocolEntity]:
    """Parse an entity and apply a merge patch to it.

    ``allow_downgrades`` defaults to the ``OCPIMODEL_ALLOW_DOWNGRADES`` setting.
    """

    if allow_downgrades is None:
        allow_downgrades = get_contract_config().allow_downgrades
    entity = validate_document(kind, text)
    outcome = entity.patch_text(patch_text, now=now, allow_downgrades=allow_downgrades)
    if outcome.success:
        log.info("Patched %s %s", entity.KIND, entity.identity)
    else:
        log.warning(
            "Patch of %s %s rejected: %s", entity.KIND, entity.identity, outcome.error_message
        )
    return outcome
