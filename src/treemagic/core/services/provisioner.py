from __future__ import annotations

"""
Magic Database Provisioning Service.

Orchestrates the one-time resolution of the magic database directory.
Walks the resolution tiers in strict priority order (explicit override,
per-application default, shared system locations) and only when all of
them come up empty downloads the bundle and installs it. The outcome is
returned as an explicit MagicDbConfig; acquisition failures never escape
as exceptions, they surface as an unresolved configuration.
"""

import logging
import os
import threading
from typing import Optional

from treemagic.core.archive.extractor import extract_tree
from treemagic.core.archive.indexer import index_archive
from treemagic.core.services.searcher import find_standard_dirs
from treemagic.domain.config import MagicSettings
from treemagic.domain.constants import MIME_SUBDIR, MINGW_DATA_DIR
from treemagic.domain.errors import ArchiveStructureFailure, ExtractionFailure
from treemagic.domain.models import MagicDbConfig, ResolutionSource, ResolutionStatus
from treemagic.infra import network
from treemagic.infra.fs import get_default_magic_dir, is_valid_magic_dir, safe_mkdir

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# PROVISIONER SERVICE
# -----------------------------------------------------------------------------

class MagicDbProvisioner:
    """
    Stateful, run-once resolver for the magic database.

    The first call to initialize() performs the resolution while holding a
    lock; concurrent callers block on it and then receive the same cached
    outcome, so at most one download is ever attempted per instance.
    """

    def __init__(self, settings: Optional[MagicSettings] = None, system: Optional[str] = None) -> None:
        """
        Args:
            settings: Fixed settings; read from the environment on first run if None.
            system: Platform name override, mostly for tests.
        """
        self._settings = settings
        self._system = system
        self._status = ResolutionStatus.NOT_STARTED
        self._config: Optional[MagicDbConfig] = None
        self._lock = threading.Lock()

    @property
    def status(self) -> ResolutionStatus:
        """Get the current state of the resolution process."""
        return self._status

    @property
    def config(self) -> Optional[MagicDbConfig]:
        """Get the outcome, or None if initialize() has not completed yet."""
        return self._config

    def initialize(self, export_env: bool = False) -> MagicDbConfig:
        """
        Resolve the database directory, running the tiers at most once.

        Args:
            export_env: Also publish the directory through TREE_MAGIC_DIR.

        Returns:
            MagicDbConfig: Shared outcome of the single resolution run.
        """
        with self._lock:
            if self._config is None:
                self._config = self._run()
            config = self._config

        if export_env:
            config.export_to_environ()
        return config

    # -------------------------------------------------------------------------
    # STATE MACHINE
    # -------------------------------------------------------------------------

    def _run(self) -> MagicDbConfig:
        settings = self._settings or MagicSettings.from_env()
        try:
            config = self._resolve(settings)
        except Exception as e:
            logger.exception(f"Critical failure while resolving the magic database: {e}")
            config = MagicDbConfig.unresolved()

        self._status = config.status
        if config.resolved:
            logger.info(f"Magic database resolved ({config.source.value}): {config.magic_dir}")
        return config

    def _resolve(self, settings: MagicSettings) -> MagicDbConfig:
        # 1. Explicit override
        self._status = ResolutionStatus.CHECKING_OVERRIDE
        if settings.magic_dir and is_valid_magic_dir(settings.magic_dir):
            return MagicDbConfig(ResolutionStatus.RESOLVED, settings.magic_dir, ResolutionSource.OVERRIDE)

        # 2. Per-application default, published as the new override
        self._status = ResolutionStatus.CHECKING_DEFAULT
        default_dir = get_default_magic_dir(settings, self._system)
        if is_valid_magic_dir(default_dir):
            return MagicDbConfig(ResolutionStatus.RESOLVED, default_dir, ResolutionSource.DEFAULT)

        # 3. Shared system locations
        self._status = ResolutionStatus.SEARCHING_STANDARD_PATHS
        accepted = find_standard_dirs(settings)
        if accepted:
            magic_dir = os.path.join(MINGW_DATA_DIR, MIME_SUBDIR) if MINGW_DATA_DIR in accepted else None
            return MagicDbConfig(
                ResolutionStatus.RESOLVED,
                magic_dir,
                ResolutionSource.SYSTEM,
                tuple(os.path.join(base, MIME_SUBDIR) for base in accepted),
            )

        # 4. Download and install
        logger.warning(f"No valid paths for mime database found, start downloading from: {settings.magic_url}")
        return self._acquire(settings, default_dir)

    def _acquire(self, settings: MagicSettings, default_dir: str) -> MagicDbConfig:
        self._status = ResolutionStatus.DOWNLOADING
        data = network.fetch_archive(settings.magic_url, settings.retries, settings.attempt_timeout)
        if data is None:
            logger.error(f"Failed to download shared-mime-info from: {settings.magic_url}")
            logger.error(
                "Check your internet connection or supply your own URL "
                "to TREE_MAGIC_URL environment variable."
            )
            return MagicDbConfig.unresolved()

        magic_dir = settings.magic_dir or default_dir
        if settings.magic_dir:
            logger.info(f"Unzipping to TREE_MAGIC_DIR: {magic_dir}")
        else:
            logger.info(f"TREE_MAGIC_DIR not provided, unzipping to default location: {magic_dir}")

        self._status = ResolutionStatus.EXTRACTING
        try:
            with index_archive(data) as index:
                if index.base_dir is None:
                    return MagicDbConfig.unresolved()
                created, err = safe_mkdir(magic_dir)
                if not created:
                    logger.error(f"Cannot create magic database directory {magic_dir}: {err}")
                    return MagicDbConfig.unresolved()
                count = extract_tree(index.archive, index.trie, index.base_dir, magic_dir, settings.concurrency)
        except ArchiveStructureFailure as e:
            logger.error(str(e))
            return MagicDbConfig.unresolved()
        except ExtractionFailure as e:
            logger.error(f"Magic database installation failed: {e}")
            return MagicDbConfig.unresolved()

        logger.info(f"Installed {count} magic database files into {magic_dir}")
        return MagicDbConfig(ResolutionStatus.RESOLVED, magic_dir, ResolutionSource.DOWNLOADED)


# -----------------------------------------------------------------------------
# PROCESS-WIDE DEFAULT
# -----------------------------------------------------------------------------

_default_provisioner: Optional[MagicDbProvisioner] = None
_default_lock = threading.Lock()


def get_provisioner() -> MagicDbProvisioner:
    """Return the process-wide provisioner, creating it on first use."""
    global _default_provisioner
    with _default_lock:
        if _default_provisioner is None:
            _default_provisioner = MagicDbProvisioner()
        return _default_provisioner


def initialize(export_env: bool = False) -> MagicDbConfig:
    """Resolve the database once per process and return the shared outcome."""
    return get_provisioner().initialize(export_env=export_env)


def reset() -> None:
    """Forget the process-wide provisioner so the next call resolves again."""
    global _default_provisioner
    with _default_lock:
        _default_provisioner = None
