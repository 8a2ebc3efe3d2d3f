from __future__ import annotations

"""
Archive Indexing Service.

Walks the members of a downloaded zip bundle, builds a prefix trie of all
file entries and works out which directory inside the bundle is the real
database root. Bundles may nest the database at any depth.
"""

import io
import logging
import posixpath
import zipfile
from dataclasses import dataclass, field
from typing import Iterable, Optional, Set

from treemagic.core.archive.trie import SEPARATOR, PathTrie, split_path
from treemagic.domain.constants import REQUIRED_FILES
from treemagic.domain.errors import ArchiveStructureFailure
from treemagic.domain.models import ArchiveEntry

logger = logging.getLogger(__name__)


# -----------------------------------------------------------------------------
# INDEX MODEL
# -----------------------------------------------------------------------------

@dataclass
class ArchiveIndex:
    """
    Read-only view over an opened archive.

    Base directories are expressed as prefixes: '' for the archive root,
    otherwise the directory path with a trailing slash ('data/mime/').

    Attributes:
        archive: Open zip handle the entries are read from.
        trie: Every file entry keyed by its normalized path.
        candidates: Prefixes holding at least one required file.
        base_dir: Selected database root, None if nothing qualifies.
    """
    archive: zipfile.ZipFile
    trie: PathTrie[ArchiveEntry]
    candidates: Set[str] = field(default_factory=set)
    base_dir: Optional[str] = None

    def close(self) -> None:
        """Release the underlying archive handle."""
        self.archive.close()

    def __enter__(self) -> ArchiveIndex:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()


# -----------------------------------------------------------------------------
# PUBLIC API
# -----------------------------------------------------------------------------

def index_archive(data: bytes) -> ArchiveIndex:
    """
    Open an in-memory zip bundle and index its file entries.

    Directory markers are skipped. The caller owns the returned index and
    must close it (it is a context manager).

    Args:
        data: Raw archive bytes.

    Returns:
        ArchiveIndex: Populated index; base_dir is None when the bundle does
                      not contain a usable database.

    Raises:
        ArchiveStructureFailure: If the bytes are not a readable zip archive.
    """
    try:
        archive = zipfile.ZipFile(io.BytesIO(data))
    except zipfile.BadZipFile as e:
        raise ArchiveStructureFailure(f"Downloaded bundle is not a valid zip archive: {e}") from e

    trie: PathTrie[ArchiveEntry] = PathTrie()
    candidates: Set[str] = set()

    for info in archive.infolist():
        if info.is_dir():
            continue

        segments = split_path(info.filename)
        if not segments:
            continue

        path = SEPARATOR.join(segments)
        trie.set_item(path, ArchiveEntry(path=path, info=info))

        if segments[-1] in REQUIRED_FILES:
            candidates.add(_as_prefix(posixpath.dirname(path)))

    index = ArchiveIndex(archive=archive, trie=trie, candidates=candidates)
    index.base_dir = resolve_base_dir(trie, candidates)

    if index.base_dir is None:
        logger.error("Cannot find valid magic files in downloaded archive.")
    else:
        logger.debug(f"Archive base directory: '{index.base_dir}' ({len(trie)} entries)")

    return index


def resolve_base_dir(trie: PathTrie[ArchiveEntry], candidates: Iterable[str]) -> Optional[str]:
    """
    Pick the archive's database root among candidate prefixes.

    A lone candidate is accepted as is. Otherwise only candidates whose
    direct children include every required file qualify, and the
    lexicographically smallest of them wins.

    Args:
        trie: Index of all file entries.
        candidates: Prefixes holding at least one required file.

    Returns:
        Optional[str]: Selected prefix, or None if no candidate qualifies.
    """
    pool = sorted(set(candidates))
    if len(pool) == 1:
        return pool[0]

    for prefix in pool:
        if REQUIRED_FILES.issubset(trie.children_of(prefix)):
            return prefix
    return None


def _as_prefix(directory: str) -> str:
    """Render a directory path as a prefix ending in the separator."""
    return f"{directory}{SEPARATOR}" if directory else ""
