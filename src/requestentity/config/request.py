"""Request parsing configuration values."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from typing import Final

from .env import env_bool, env_int
from .errors import ConfigurationError, InvalidConfigurationValueError

DEFAULT_MAX_BODY_BYTES: Final[int] = 1024 * 1024


@dataclass(frozen=True, slots=True)
class RequestConfig:
    """Limits and switches applied when turning HTTP requests into input sources."""

    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    parse_json_body: bool = True
    log_level: int = logging.INFO


def _env_log_level(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None or not value.strip():
        return default
    level = logging.getLevelNamesMapping().get(value.strip().upper())
    if level is None:
        raise InvalidConfigurationValueError(name, value, "a logging level name")
    return level


def get_request_config() -> RequestConfig:
    max_body_bytes = env_int("REQUESTENTITY_MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)
    if max_body_bytes <= 0:
        raise ConfigurationError("REQUESTENTITY_MAX_BODY_BYTES must be positive")
    return RequestConfig(
        max_body_bytes=max_body_bytes,
        parse_json_body=env_bool("REQUESTENTITY_PARSE_JSON", default=True),
        log_level=_env_log_level("REQUESTENTITY_LOG_LEVEL", logging.INFO),
    )
