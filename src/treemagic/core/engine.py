from __future__ import annotations

"""
Native Engine Boundary.

The byte-matching engine lives outside this package. MagicClient makes sure
the database has been resolved before every call and hands the resulting
configuration to the engine explicitly.
"""

from typing import Optional, Protocol

from treemagic.core.services.provisioner import MagicDbProvisioner, get_provisioner
from treemagic.domain.models import MagicDbConfig


class MagicEngine(Protocol):
    """Interface of a content-sniffing engine driven by a magic database."""

    def infer_from_buffer(self, config: MagicDbConfig, data: bytes) -> Optional[str]: ...

    def infer_from_path(self, config: MagicDbConfig, path: str) -> Optional[str]: ...

    def match_buffer(self, config: MagicDbConfig, mime_type: str, data: bytes) -> bool: ...

    def match_path(self, config: MagicDbConfig, mime_type: str, path: str) -> bool: ...


class MagicClient:
    """
    Facade that gates engine calls on the one-time database resolution.

    An unresolved configuration is still passed through; the engine decides
    how to fail when it has no database to work with.
    """

    def __init__(self, engine: MagicEngine, provisioner: Optional[MagicDbProvisioner] = None) -> None:
        self._engine = engine
        self._provisioner = provisioner

    @property
    def config(self) -> MagicDbConfig:
        """Resolve (once) and return the database configuration."""
        provisioner = self._provisioner or get_provisioner()
        return provisioner.initialize()

    def infer_from_buffer(self, data: bytes) -> Optional[str]:
        return self._engine.infer_from_buffer(self.config, data)

    def infer_from_path(self, path: str) -> Optional[str]:
        return self._engine.infer_from_path(self.config, path)

    def match_buffer(self, mime_type: str, data: bytes) -> bool:
        return self._engine.match_buffer(self.config, mime_type, data)

    def match_path(self, mime_type: str, path: str) -> bool:
        return self._engine.match_path(self.config, mime_type, path)
