from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import pytest

from ocpimodel.common import configure_logging
from ocpimodel.common.logging import CONTRACT_LOGGER

if TYPE_CHECKING:
    from collections.abc import Iterator


@pytest.fixture
def _restore_logging() -> Iterator[None]:
    root = logging.getLogger()
    contract = logging.getLogger(CONTRACT_LOGGER)
    handlers, level, contract_level = root.handlers[:], root.level, contract.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)
    contract.setLevel(contract_level)


@pytest.mark.usefixtures("_restore_logging")
def test_configure_logging_sets_root_level() -> None:
    configure_logging(level=logging.WARNING, force=True)

    assert logging.getLogger().level == logging.WARNING
    assert logging.getLogger(CONTRACT_LOGGER).level == logging.NOTSET


@pytest.mark.usefixtures("_restore_logging")
def test_configure_logging_tunes_contract_loggers() -> None:
    configure_logging(level=logging.WARNING, contract_level=logging.DEBUG, force=True)

    assert logging.getLogger("ocpimodel.domain.contract.patch").isEnabledFor(logging.DEBUG)
    assert not logging.getLogger("ocpimodel.app").isEnabledFor(logging.INFO)
