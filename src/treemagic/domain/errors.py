from __future__ import annotations

"""
Acquisition Error Taxonomy.

Exceptions raised by the acquisition stages. None of them reach callers of
the provisioner: the orchestrator downgrades them to an unresolved outcome.
"""


class MagicDbError(Exception):
    """Base class for magic database acquisition failures."""


class NetworkFailure(MagicDbError):
    """A download attempt failed, timed out, or produced no body."""


class ArchiveStructureFailure(MagicDbError):
    """The downloaded bundle is not a readable zip archive."""


class ExtractionFailure(MagicDbError):
    """
    Copying an archive entry to the destination failed.

    Attributes:
        rel_path: Archive path of the entry whose copy failed.
    """

    def __init__(self, rel_path: str, cause: BaseException) -> None:
        super().__init__(f"Failed to extract '{rel_path}': {cause}")
        self.rel_path = rel_path
