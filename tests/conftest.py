from __future__ import annotations

"""
Global Pytest Configuration and Fixtures.

This module sets up the testing environment, including:
1. Path manipulation to ensure the 'src' directory is importable.
2. Builders for magic database directories and in-memory zip bundles.
3. Isolation of the process-wide provisioner between tests.
"""

import io
import os
import sys
import zipfile
from pathlib import Path
from typing import Callable, Dict, Iterable, Iterator

import pytest

# -----------------------------------------------------------------------------
# Path Configuration
# -----------------------------------------------------------------------------
_SRC_PATH = os.path.abspath(os.path.join(os.path.dirname(__file__), "..", "src"))
if _SRC_PATH not in sys.path:
    sys.path.insert(0, _SRC_PATH)

from treemagic.core.services import provisioner  # noqa: E402

REQUIRED = ("magic", "aliases", "subclasses")


# -----------------------------------------------------------------------------
# Shared Fixtures
# -----------------------------------------------------------------------------
@pytest.fixture(autouse=True)
def reset_default_provisioner() -> Iterator[None]:
    """Make sure no test observes another test's cached resolution."""
    provisioner.reset()
    yield
    provisioner.reset()


@pytest.fixture
def make_db_dir() -> Callable[..., Path]:
    """
    Return a factory that writes database files into a directory.

    Usage: make_db_dir(path, names=REQUIRED) -> path
    """
    def _make(path: Path, names: Iterable[str] = REQUIRED) -> Path:
        path.mkdir(parents=True, exist_ok=True)
        for name in names:
            (path / name).write_bytes(f"{name}-content".encode("utf-8"))
        return path

    return _make


@pytest.fixture
def build_zip() -> Callable[[Dict[str, bytes]], bytes]:
    """
    Return a factory producing zip archive bytes from a path->content map.

    Keys ending with '/' are written as directory markers.
    """
    def _build(members: Dict[str, bytes]) -> bytes:
        buf = io.BytesIO()
        with zipfile.ZipFile(buf, "w", compression=zipfile.ZIP_DEFLATED) as zf:
            for name, content in members.items():
                if name.endswith("/"):
                    zf.writestr(zipfile.ZipInfo(name), b"")
                else:
                    zf.writestr(name, content)
        return buf.getvalue()

    return _build
