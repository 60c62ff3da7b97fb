"""Utility functions for mirror-query."""

from mirror_query.utils.logging import (
    configure_logging,
    get_logger,
    get_logger_with_context,
    request_logger,
)
from mirror_query.utils.errors import ConfigurationError, MirrorQueryError
from mirror_query.utils.config import (
    LoggingConfig,
    MirrorQueryConfig,
    QueryConfig,
    get_config,
    get_default_config,
    load_config,
    save_config,
    set_config,
)

__all__ = [
    # Logging
    "configure_logging",
    "get_logger",
    "get_logger_with_context",
    "request_logger",
    # Errors
    "MirrorQueryError",
    "ConfigurationError",
    # Config
    "MirrorQueryConfig",
    "QueryConfig",
    "LoggingConfig",
    "load_config",
    "save_config",
    "get_config",
    "get_default_config",
    "set_config",
]
