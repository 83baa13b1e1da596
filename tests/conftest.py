from __future__ import annotations

from datetime import UTC, datetime

import pytest

from ocpimodel.domain.model import Location, Token
from tests.support.payloads import location_payload, token_payload


@pytest.fixture
def now() -> datetime:
    return datetime(2021, 2, 3, 4, 5, 6, 789000, tzinfo=UTC)


@pytest.fixture
def location() -> Location:
    return Location.parse(location_payload()).unwrap()


@pytest.fixture
def token() -> Token:
    return Token.parse(token_payload()).unwrap()


@pytest.fixture(autouse=True)
def _clean_contract_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("OCPIMODEL_ALLOW_DOWNGRADES", raising=False)
    monkeypatch.delenv("OCPIMODEL_LOG_LEVEL", raising=False)
