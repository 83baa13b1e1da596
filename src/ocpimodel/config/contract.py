"""Contract behaviour settings."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Final

from .env import env_flag, env_log_level

ALLOW_DOWNGRADES_VAR: Final[str] = "OCPIMODEL_ALLOW_DOWNGRADES"
LOG_LEVEL_VAR: Final[str] = "OCPIMODEL_LOG_LEVEL"


@dataclass(frozen=True, slots=True)
class ContractConfig:
    allow_downgrades: bool = True
    log_level: int = logging.INFO


def get_contract_config() -> ContractConfig:
    return ContractConfig(
        allow_downgrades=env_flag(ALLOW_DOWNGRADES_VAR, default=True),
        log_level=env_log_level(LOG_LEVEL_VAR, default=logging.INFO),
    )
