"""Application configuration helpers."""

from __future__ import annotations

from .env import env_bool, env_int
from .errors import ConfigurationError, InvalidConfigurationValueError
from .logging import QUIET_LOGGERS, configure_logging
from .request import DEFAULT_MAX_BODY_BYTES, RequestConfig, get_request_config

__all__ = [
    "DEFAULT_MAX_BODY_BYTES",
    "QUIET_LOGGERS",
    "ConfigurationError",
    "InvalidConfigurationValueError",
    "RequestConfig",
    "configure_logging",
    "env_bool",
    "env_int",
    "get_request_config",
]
