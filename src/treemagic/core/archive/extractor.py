from __future__ import annotations

"""
Archive Extraction Engine.

Copies every entry below the archive's database root into a destination
directory, preserving relative structure. Copies run on a bounded worker
pool; the first failure cancels copies that have not started yet and
aborts the whole extraction.
"""

import logging
import os
import shutil
import zipfile
import zlib
from concurrent.futures import Future, ThreadPoolExecutor, as_completed
from typing import Dict, List

from treemagic.core.archive.trie import SEPARATOR, PathTrie
from treemagic.domain.constants import EXTRACT_CONCURRENCY
from treemagic.domain.errors import ExtractionFailure
from treemagic.domain.models import ArchiveEntry

logger = logging.getLogger(__name__)

COPY_CHUNK_SIZE = 64 * 1024


def extract_tree(
        archive: zipfile.ZipFile,
        trie: PathTrie[ArchiveEntry],
        base_dir: str,
        destination_dir: str,
        concurrency: int = EXTRACT_CONCURRENCY,
) -> int:
    """
    Rebase every entry under base_dir onto destination_dir and copy it.

    Args:
        archive: Open archive the entries belong to.
        trie: Index of the archive's file entries.
        base_dir: Prefix inside the archive to extract ('' for the root).
        destination_dir: Target directory, created as needed.
        concurrency: Maximum number of copies in flight.

    Returns:
        int: Number of files written.

    Raises:
        ExtractionFailure: On the first entry that could not be written.
    """
    plan = [(entry, _rebase(entry, base_dir, destination_dir)) for _, entry in trie.entries(base_dir)]
    logger.debug(f"Extracting {len(plan)} files to {destination_dir}")

    with ThreadPoolExecutor(
            max_workers=max(1, concurrency),
            thread_name_prefix="ExtractWorker"
    ) as executor:
        futures: Dict[Future[None], str] = {
            executor.submit(_copy_entry, archive, entry, dest_path): entry.path
            for entry, dest_path in plan
        }
        try:
            for future in as_completed(futures):
                future.result()
        except ExtractionFailure:
            _cancel_pending(futures)
            raise

    return len(plan)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _rebase(entry: ArchiveEntry, base_dir: str, destination_dir: str) -> str:
    """Map an archive path below base_dir to its path below destination_dir."""
    rel_parts: List[str] = entry.path[len(base_dir):].split(SEPARATOR)

    if any(part in (os.curdir, os.pardir) for part in rel_parts):
        raise ExtractionFailure(entry.path, ValueError("path escapes the destination directory"))

    return os.path.join(destination_dir, *rel_parts)


def _copy_entry(archive: zipfile.ZipFile, entry: ArchiveEntry, dest_path: str) -> None:
    """Stream one archive member to disk."""
    try:
        os.makedirs(os.path.dirname(dest_path), exist_ok=True)
        with entry.open(archive) as src, open(dest_path, "wb") as dst:
            shutil.copyfileobj(src, dst, COPY_CHUNK_SIZE)
    except (OSError, EOFError, RuntimeError, NotImplementedError, zipfile.BadZipFile, zlib.error) as e:
        raise ExtractionFailure(entry.path, e) from e


def _cancel_pending(futures: Dict[Future[None], str]) -> None:
    """Cancel copies that have not started; running ones finish on their own."""
    cancelled = sum(1 for f in futures if f.cancel())
    logger.debug(f"Extraction aborted: {cancelled}/{len(futures)} pending copies cancelled")
