"""
lexsign_core.config
-------------------
Runtime settings. Each value is resolved from an explicit config dict first,
then the environment, then the built-in default.

    LEXSIGN_KEYS_DIR   directory holding keypair.json   (default: keys)
    LEXSIGN_KEY_TYPE   p256 | k256                       (default: p256)
    LEXSIGN_LOG_LEVEL  standard logging level name       (default: INFO)
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Any, Dict, Optional
import logging, os

from .constants import DEFAULT_KEYS_DIR, DEFAULT_KEY_TYPE, DEFAULT_LOG_LEVEL, SUPPORTED_KEY_TYPES
from .errors import UnsupportedKeyType


@dataclass(frozen=True)
class Settings:
    keys_dir: str = DEFAULT_KEYS_DIR
    key_type: str = DEFAULT_KEY_TYPE
    log_level: str = DEFAULT_LOG_LEVEL

    @property
    def log_level_no(self) -> int:
        return logging.getLevelName(self.log_level)


def resolve_log_level(config: Optional[Dict[str, Any]] = None) -> str:
    config = config or {}
    log_level = (config.get("log_level") or os.getenv("LEXSIGN_LOG_LEVEL", DEFAULT_LOG_LEVEL)).upper()
    if not isinstance(logging.getLevelName(log_level), int):
        raise ValueError(f"Unknown log level: {log_level}")
    return log_level


def load_settings(config: Optional[Dict[str, Any]] = None) -> Settings:
    config = config or {}

    keys_dir = config.get("keys_dir") or os.getenv("LEXSIGN_KEYS_DIR", DEFAULT_KEYS_DIR)
    key_type = (config.get("key_type") or os.getenv("LEXSIGN_KEY_TYPE", DEFAULT_KEY_TYPE)).lower()

    if key_type not in SUPPORTED_KEY_TYPES:
        raise UnsupportedKeyType(f"Unknown key type: {key_type}")

    return Settings(keys_dir=keys_dir, key_type=key_type, log_level=resolve_log_level(config))
