from __future__ import annotations

"""
FileSystem Infrastructure Layer.

Provides cross-platform data directory resolution and the validation
primitive that decides whether a directory holds a usable magic database.
Acts as an abstraction over the 'os' and 'platform' modules to ensure
uniform behavior across Windows and Unix-like systems.
"""

import os
import platform
from typing import Optional, Tuple

from treemagic.domain.config import MagicSettings
from treemagic.domain.constants import DB_DIR_NAME, REQUIRED_FILES

# -----------------------------------------------------------------------------
# GLOBAL CONSTANTS
# -----------------------------------------------------------------------------

APP_DIR_NAME = "treemagic"

# -----------------------------------------------------------------------------
# PATH RESOLUTION API
# -----------------------------------------------------------------------------

def get_data_home(settings: MagicSettings, system: Optional[str] = None) -> str:
    """
    Resolve the per-user application data root following OS conventions.

    Standards:
    - XDG_DATA_HOME when set (any platform)
    - macOS: ~/Library/Application Support
    - Windows: %APPDATA% or ~/AppData/Roaming
    - Others: ~/.local/share

    Args:
        settings: Environment snapshot.
        system: Platform name override (as returned by platform.system()).

    Returns:
        str: Data root path (not created).
    """
    if settings.xdg_data_home:
        return settings.xdg_data_home

    system = system or platform.system()
    home = _home_dir(settings)

    if system == "Darwin":
        return os.path.join(home, "Library", "Application Support")
    if system == "Windows":
        return settings.appdata or os.path.join(home, "AppData", "Roaming")
    return os.path.join(home, ".local", "share")


def get_default_magic_dir(settings: MagicSettings, system: Optional[str] = None) -> str:
    """Return the per-application directory the database is installed into."""
    return os.path.join(get_data_home(settings, system), DB_DIR_NAME)


def get_user_data_home(settings: MagicSettings) -> Optional[str]:
    """
    Resolve the XDG user data directory searched alongside shared roots.

    Returns:
        Optional[str]: XDG_DATA_HOME, else $HOME/.local/share, else None.
    """
    if settings.xdg_data_home:
        return settings.xdg_data_home
    if settings.home:
        return os.path.join(settings.home, ".local", "share")
    return None


def get_user_data_dir(settings: Optional[MagicSettings] = None) -> str:
    """
    Resolve the directory holding this package's own artifacts (logs).

    Automatically creates the hierarchy if it does not exist.

    Returns:
        str: Absolute path to the application data directory.
    """
    settings = settings or MagicSettings.from_env()
    path = os.path.join(get_data_home(settings), APP_DIR_NAME)

    try:
        os.makedirs(path, exist_ok=True)
    except OSError:
        pass

    return os.path.abspath(path)


# -----------------------------------------------------------------------------
# FILESYSTEM VALIDATION API
# -----------------------------------------------------------------------------

def is_valid_magic_dir(directory: Optional[str]) -> bool:
    """
    Check that a directory holds every required database file with read access.

    Never raises: a missing directory, missing file or permission problem
    simply yields False.

    Args:
        directory: Candidate directory path.

    Returns:
        bool: True only if all required files exist and are readable.
    """
    if not directory:
        return False

    try:
        return all(
            os.access(os.path.join(directory, name), os.F_OK | os.R_OK)
            for name in REQUIRED_FILES
        )
    except (OSError, ValueError):
        return False


def safe_mkdir(path: str) -> Tuple[bool, Optional[str]]:
    """
    Attempt to recursively create a directory structure safely.

    Args:
        path: Target directory path.

    Returns:
        Tuple[bool, Optional[str]]: (Success flag, Error message if applicable).
    """
    try:
        os.makedirs(path, exist_ok=True)
        return True, None
    except OSError as e:
        return False, str(e)


# -----------------------------------------------------------------------------
# PRIVATE HELPERS
# -----------------------------------------------------------------------------

def _home_dir(settings: MagicSettings) -> str:
    """Prefer the captured HOME, falling back to the OS notion of home."""
    return settings.home or os.path.expanduser("~")
