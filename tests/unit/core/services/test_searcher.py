from __future__ import annotations

"""
Unit tests for the Database Location Discovery Service.

Verifies search path ordering, delimiter handling, and validation of the
'mime' subdirectory under each shared-data root.
"""

import logging
import os
from pathlib import Path

import pytest

from treemagic.core.services.searcher import find_standard_dirs, iter_search_paths
from treemagic.domain.config import MagicSettings
from treemagic.domain.constants import MACOS_DATA_DIR, MINGW_DATA_DIR


def test_search_path_order() -> None:
    """TC-01: Verify XDG dirs, user data dir, then platform fallbacks."""
    settings = MagicSettings(xdg_data_dirs="/usr/local/share/:/usr/share/", home="/home/u")

    paths = list(iter_search_paths(settings, delimiter=":"))

    assert paths == [
        "/usr/local/share/",
        "/usr/share/",
        os.path.join("/home/u", ".local", "share"),
        MACOS_DATA_DIR,
        MINGW_DATA_DIR,
    ]


def test_search_path_semicolon_and_empty_pieces() -> None:
    """TC-02: Verify Windows-style lists and dropped empty entries."""
    settings = MagicSettings(xdg_data_dirs=r"C:\share;;D:\data;", xdg_data_home=r"E:\home")

    paths = list(iter_search_paths(settings, delimiter=";"))

    assert paths[:3] == [r"C:\share", r"D:\data", r"E:\home"]


def test_fallbacks_are_not_split() -> None:
    """TC-03: Verify the MinGW fallback survives a ':' delimiter intact."""
    paths = list(iter_search_paths(MagicSettings(xdg_data_dirs="/a"), delimiter=":"))
    assert MINGW_DATA_DIR in paths


def test_find_standard_dirs(tmp_path: Path, make_db_dir, caplog: pytest.LogCaptureFixture) -> None:
    """TC-04: Verify only roots holding a valid 'mime' database are accepted."""
    caplog.set_level(logging.INFO, logger="treemagic")
    good = tmp_path / "good"
    partial = tmp_path / "partial"
    make_db_dir(good / "mime")
    make_db_dir(partial / "mime", names=("magic", "aliases"))

    settings = MagicSettings(xdg_data_dirs=os.pathsep.join([str(partial), str(good)]))

    assert find_standard_dirs(settings) == [str(good)]
    assert str(good / "mime") in caplog.text


def test_find_standard_dirs_none(tmp_path: Path) -> None:
    """TC-05: Verify an empty result when nothing is installed."""
    settings = MagicSettings(xdg_data_dirs=str(tmp_path / "nothing"))
    assert find_standard_dirs(settings) == []
