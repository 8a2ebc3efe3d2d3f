from __future__ import annotations

"""
Database Location Discovery Service.

Enumerates the places an installed magic database may live, in priority
order, and filters them through the directory validator. Shared-data roots
(XDG style) hold the database in a 'mime' subdirectory.
"""

import logging
import os
from typing import Iterator, List, Optional

from treemagic.domain.config import MagicSettings
from treemagic.domain.constants import MIME_SUBDIR, PLATFORM_FALLBACK_DIRS
from treemagic.infra.fs import get_user_data_home, is_valid_magic_dir

logger = logging.getLogger(__name__)


# ==============================================================================
# PUBLIC API
# ==============================================================================

def iter_search_paths(settings: MagicSettings, delimiter: str = os.pathsep) -> Iterator[str]:
    """
    Yield shared-data roots in priority order.

    Order: XDG_DATA_DIRS entries, the user data directory, then the fixed
    platform fallbacks. Only XDG_DATA_DIRS is a delimited list; empty
    pieces are dropped.

    Args:
        settings: Environment snapshot.
        delimiter: List separator (':' on POSIX, ';' on Windows).

    Yields:
        str: Root directories, without the 'mime' suffix.
    """
    for base in settings.xdg_data_dirs.split(delimiter):
        if base:
            yield base

    extra: List[Optional[str]] = [get_user_data_home(settings), *PLATFORM_FALLBACK_DIRS]
    for base in extra:
        if base:
            yield base


def find_standard_dirs(settings: MagicSettings) -> List[str]:
    """
    Return the standard roots whose 'mime' subdirectory is a valid database.

    Accepted locations are reported at INFO level.

    Args:
        settings: Environment snapshot.

    Returns:
        List[str]: Accepted roots in priority order (without 'mime').
    """
    accepted = [
        base for base in iter_search_paths(settings)
        if is_valid_magic_dir(os.path.join(base, MIME_SUBDIR))
    ]

    if accepted:
        logger.info("Using shared-mime-info database from the following directories:")
        logger.info("\n".join(os.path.join(base, MIME_SUBDIR) for base in accepted))

    return accepted
