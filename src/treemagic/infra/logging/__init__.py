from __future__ import annotations

from .config import LoggingConfig
from .core import (
    PACKAGE_LOGGER,
    configure_logging,
    get_default_log_path,
    is_logging_configured,
    shutdown_logging,
)

__all__ = [
    "PACKAGE_LOGGER",
    "LoggingConfig",
    "configure_logging",
    "get_default_log_path",
    "is_logging_configured",
    "shutdown_logging",
]
