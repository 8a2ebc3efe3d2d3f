from __future__ import annotations

"""
treemagic - locate or install the shared-mime-info magic database.

Typical use::

    import treemagic

    config = treemagic.initialize()
    if config.resolved:
        engine_call(config.magic_dir, ...)

Diagnostics are silent until the host opts in::

    treemagic.configure_logging()              # level from TREE_MAGIC_LOG_LEVEL
    treemagic.configure_logging(persist=True)  # also keep a rotating log file
"""

from treemagic.core.engine import MagicClient, MagicEngine
from treemagic.core.services.provisioner import MagicDbProvisioner, initialize
from treemagic.domain.config import MagicSettings
from treemagic.domain.models import MagicDbConfig, ResolutionSource, ResolutionStatus
from treemagic.infra.logging import LoggingConfig, configure_logging, shutdown_logging

__version__ = "0.1.0"

__all__ = [
    "initialize",
    "MagicClient",
    "MagicEngine",
    "MagicDbProvisioner",
    "MagicDbConfig",
    "MagicSettings",
    "ResolutionSource",
    "ResolutionStatus",
    "configure_logging",
    "shutdown_logging",
    "LoggingConfig",
]
