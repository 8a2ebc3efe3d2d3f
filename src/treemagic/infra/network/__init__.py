from __future__ import annotations

"""
Network Communication Infrastructure.

Orchestrates the HTTP retrieval of the magic database bundle.
"""

from treemagic.infra.network.archive_client import fetch_archive

__all__ = [
    "fetch_archive",
]
