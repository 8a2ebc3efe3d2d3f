from __future__ import annotations

"""
Domain Constants and Static Data Structures.

Centralizes the fixed facts of the magic database layout, the environment
variable names that steer resolution, and the default acquisition tunables.
"""

from typing import FrozenSet, Tuple

# -----------------------------------------------------------------------------
# DATABASE LAYOUT
# -----------------------------------------------------------------------------
REQUIRED_FILES: FrozenSet[str] = frozenset({"magic", "aliases", "subclasses"})
MIME_SUBDIR = "mime"
DB_DIR_NAME = "tree_magic_db"

# -----------------------------------------------------------------------------
# ENVIRONMENT VARIABLES
# -----------------------------------------------------------------------------
ENV_MAGIC_DIR = "TREE_MAGIC_DIR"
ENV_MAGIC_URL = "TREE_MAGIC_URL"
ENV_XDG_DATA_HOME = "XDG_DATA_HOME"
ENV_XDG_DATA_DIRS = "XDG_DATA_DIRS"
ENV_HOME = "HOME"
ENV_APPDATA = "APPDATA"
ENV_LOG_LEVEL = "TREE_MAGIC_LOG_LEVEL"
ENV_LOG_FILE = "TREE_MAGIC_LOG_FILE"

# -----------------------------------------------------------------------------
# SEARCH LOCATIONS
# -----------------------------------------------------------------------------
DEFAULT_XDG_DATA_DIRS = "/usr/local/share/:/usr/share/"
MACOS_DATA_DIR = "/opt/homebrew/share/"
MINGW_DATA_DIR = r"C:\msys64\mingw64"
PLATFORM_FALLBACK_DIRS: Tuple[str, ...] = (MACOS_DATA_DIR, MINGW_DATA_DIR)

# -----------------------------------------------------------------------------
# ACQUISITION
# -----------------------------------------------------------------------------
DEFAULT_MAGIC_URL = (
    "https://github.com/hechang27-sprt/build-shared-mime-info/"
    "releases/download/db-20251031/mime-database.zip"
)
DOWNLOAD_RETRIES = 3
ATTEMPT_TIMEOUT_SECONDS = 5.0
EXTRACT_CONCURRENCY = 8

# -----------------------------------------------------------------------------
# DIAGNOSTICS
# -----------------------------------------------------------------------------
DEFAULT_LOG_LEVEL = "INFO"
LOG_FILE_NAME = "treemagic.log"
