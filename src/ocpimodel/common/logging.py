"""Shared logging helpers for ocpimodel."""

from __future__ import annotations

import logging

CONTRACT_LOGGER = "ocpimodel.domain.contract"


def configure_logging(
    *,
    level: int = logging.INFO,
    contract_level: int | None = None,
    force: bool = False,
) -> None:
    """Initialise the root logger with a terse format suitable for CLI output.

    Parse and patch rejections are logged at DEBUG under ``ocpimodel.domain.contract``;
    ``contract_level`` tunes that subtree without touching the rest.
    Pass ``force=True`` to reconfigure during tests or specialised entry points.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
    if contract_level is not None:
        logging.getLogger(CONTRACT_LOGGER).setLevel(contract_level)
