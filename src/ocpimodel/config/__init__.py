"""Application configuration helpers."""

from __future__ import annotations

from .contract import ContractConfig, get_contract_config
from .env import env_flag, env_log_level
from .errors import ConfigurationError

__all__ = [
    "ConfigurationError",
    "ContractConfig",
    "env_flag",
    "env_log_level",
    "get_contract_config",
]
