from __future__ import annotations

"""
Resolution Settings.

Captures the environment-controlled inputs of the resolution process in an
immutable snapshot. Reading the environment once keeps every stage of a
single run consistent even if the process environment changes mid-flight.
"""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from treemagic.domain import constants as const


@dataclass(frozen=True)
class MagicSettings:
    """
    Immutable specification of where to look for and fetch the database.

    Attributes:
        magic_dir: Explicit override directory (TREE_MAGIC_DIR).
        magic_url: Archive download URL (TREE_MAGIC_URL or the release default).
        xdg_data_home: Per-user data root override (XDG_DATA_HOME).
        xdg_data_dirs: Delimited list of shared-data roots (XDG_DATA_DIRS).
        home: User home directory (HOME).
        appdata: Windows roaming app-data root (APPDATA).
        retries: Download attempts before giving up.
        attempt_timeout: Seconds granted to each download attempt.
        concurrency: Maximum simultaneous file copies during extraction.
        log_level: Threshold for the package logger (TREE_MAGIC_LOG_LEVEL).
        log_file: Diagnostic log path (TREE_MAGIC_LOG_FILE), None for console only.
    """
    magic_dir: Optional[str] = None
    magic_url: str = const.DEFAULT_MAGIC_URL
    xdg_data_home: Optional[str] = None
    xdg_data_dirs: str = const.DEFAULT_XDG_DATA_DIRS
    home: Optional[str] = None
    appdata: Optional[str] = None

    retries: int = const.DOWNLOAD_RETRIES
    attempt_timeout: float = const.ATTEMPT_TIMEOUT_SECONDS
    concurrency: int = const.EXTRACT_CONCURRENCY

    log_level: str = const.DEFAULT_LOG_LEVEL
    log_file: Optional[str] = None

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> MagicSettings:
        """
        Build a settings snapshot from the process (or a supplied) environment.

        Empty values are treated as unset.

        Args:
            environ: Mapping to read instead of os.environ.

        Returns:
            MagicSettings: Frozen settings for one resolution run.
        """
        env = os.environ if environ is None else environ

        def _get(name: str) -> Optional[str]:
            value = env.get(name)
            return value if value else None

        return cls(
            magic_dir=_get(const.ENV_MAGIC_DIR),
            magic_url=_get(const.ENV_MAGIC_URL) or const.DEFAULT_MAGIC_URL,
            xdg_data_home=_get(const.ENV_XDG_DATA_HOME),
            xdg_data_dirs=_get(const.ENV_XDG_DATA_DIRS) or const.DEFAULT_XDG_DATA_DIRS,
            home=_get(const.ENV_HOME),
            appdata=_get(const.ENV_APPDATA),
            log_level=_get(const.ENV_LOG_LEVEL) or const.DEFAULT_LOG_LEVEL,
            log_file=_get(const.ENV_LOG_FILE),
        )
