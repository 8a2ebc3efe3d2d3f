from __future__ import annotations

"""
Resolution Domain Data Models.

Defines the lifecycle states of the resolution process, the result object
handed to the native engine, and the archive entry DTO streamed out of a
downloaded bundle.
"""

import os
import zipfile
from dataclasses import dataclass, field
from enum import Enum
from typing import IO, MutableMapping, Optional, Tuple

from treemagic.domain.constants import ENV_MAGIC_DIR

# -----------------------------------------------------------------------------
# STATE DEFINITIONS
# -----------------------------------------------------------------------------

class ResolutionStatus(Enum):
    """Enumeration of the resolution state machine."""
    NOT_STARTED = "NOT_STARTED"
    CHECKING_OVERRIDE = "CHECKING_OVERRIDE"
    CHECKING_DEFAULT = "CHECKING_DEFAULT"
    SEARCHING_STANDARD_PATHS = "SEARCHING_STANDARD_PATHS"
    DOWNLOADING = "DOWNLOADING"
    EXTRACTING = "EXTRACTING"
    RESOLVED = "RESOLVED"
    UNRESOLVED = "UNRESOLVED"


class ResolutionSource(Enum):
    """Tier that produced a resolved database."""
    OVERRIDE = "OVERRIDE"
    DEFAULT = "DEFAULT"
    SYSTEM = "SYSTEM"
    DOWNLOADED = "DOWNLOADED"


# -----------------------------------------------------------------------------
# RESULT MODEL
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class MagicDbConfig:
    """
    Outcome of a resolution run, passed explicitly to the native engine.

    Attributes:
        status: Terminal state (RESOLVED or UNRESOLVED).
        magic_dir: Directory the engine must use, or None to let it search
                   its own standard locations.
        source: Tier that produced the outcome, None when unresolved.
        search_dirs: Accepted shared-data 'mime' directories, if any.
    """
    status: ResolutionStatus
    magic_dir: Optional[str] = None
    source: Optional[ResolutionSource] = None
    search_dirs: Tuple[str, ...] = field(default_factory=tuple)

    @property
    def resolved(self) -> bool:
        """Whether a usable database was located or installed."""
        return self.status == ResolutionStatus.RESOLVED

    def export_to_environ(self, environ: Optional[MutableMapping[str, str]] = None) -> None:
        """
        Publish the resolved directory through TREE_MAGIC_DIR.

        Only needed for engines that read the variable themselves. Does
        nothing when there is no directory to publish.

        Args:
            environ: Target mapping, defaults to os.environ.
        """
        if not self.magic_dir:
            return
        target = os.environ if environ is None else environ
        target[ENV_MAGIC_DIR] = self.magic_dir

    @classmethod
    def unresolved(cls) -> MagicDbConfig:
        """Build the explicit 'no database' marker."""
        return cls(status=ResolutionStatus.UNRESOLVED)


# -----------------------------------------------------------------------------
# ARCHIVE MODELS
# -----------------------------------------------------------------------------

@dataclass(frozen=True)
class ArchiveEntry:
    """
    A file member of a downloaded archive.

    Attributes:
        path: Slash-delimited path relative to the archive root.
        info: Zip member metadata used to open the byte stream lazily.
    """
    path: str
    info: zipfile.ZipInfo

    def open(self, archive: zipfile.ZipFile) -> IO[bytes]:
        """Open the entry's byte stream from its owning archive."""
        return archive.open(self.info, "r")
