from __future__ import annotations

"""
Diagnostic Logging Settings.

Describes how the 'treemagic' logger hierarchy is wired: threshold, console
output and an optional rotating file. Defaults come from the same
environment snapshot that drives resolution.
"""

import logging
from dataclasses import dataclass
from typing import Dict, Optional

from treemagic.domain.config import MagicSettings

_LEVEL_MAP: Dict[str, int] = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "WARN": logging.WARNING,
    "ERROR": logging.ERROR,
    "CRITICAL": logging.CRITICAL,
}


@dataclass(frozen=True)
class LoggingConfig:
    """
    Immutable description of the package's diagnostic output.

    Attributes:
        level: Threshold for the 'treemagic' logger (name, e.g. 'DEBUG').
        console: Mirror records to stderr.
        log_file: Rotating log path, None to skip file output.
        max_bytes: Segment size that triggers rotation.
        backup_count: Rotated segments kept next to the live file.
        console_fmt: Format for stderr lines.
        file_fmt: Format for file lines.
        datefmt: Timestamp format for file lines.
    """
    level: str = "INFO"
    console: bool = True
    log_file: Optional[str] = None

    max_bytes: int = 256 * 1024
    backup_count: int = 2

    console_fmt: str = "treemagic %(levelname)s | %(message)s"
    file_fmt: str = "%(asctime)s | %(levelname)s | %(name)s | %(threadName)s | %(message)s"
    datefmt: str = "%Y-%m-%d %H:%M:%S"

    @property
    def level_no(self) -> int:
        """Numeric threshold; unknown names fall back to INFO."""
        if not self.level:
            return logging.INFO
        return _LEVEL_MAP.get(str(self.level).strip().upper(), logging.INFO)

    @classmethod
    def from_settings(cls, settings: MagicSettings) -> LoggingConfig:
        """Take level and file from TREE_MAGIC_LOG_LEVEL / TREE_MAGIC_LOG_FILE."""
        return cls(level=settings.log_level, log_file=settings.log_file)
