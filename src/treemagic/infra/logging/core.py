from __future__ import annotations

"""
Diagnostic Logging Lifecycle.

Wires the 'treemagic' logger hierarchy to stderr and, optionally, a
rotating file. The root logger is never touched, so an embedding
application keeps full control of its own handlers. Records pass through
a queue and are written on a listener thread, keeping file I/O off the
resolution and download threads.
"""

import atexit
import logging
import os
import queue
import sys
import threading
from logging.handlers import QueueHandler, QueueListener, RotatingFileHandler
from typing import List, Optional

from treemagic.domain.config import MagicSettings
from treemagic.domain.constants import LOG_FILE_NAME
from treemagic.infra.fs import get_user_data_dir
from treemagic.infra.logging.config import LoggingConfig

PACKAGE_LOGGER = "treemagic"

_state_lock = threading.Lock()
_queue_handler: Optional[QueueHandler] = None
_listener: Optional[QueueListener] = None


# ==============================================================================
# PUBLIC API
# ==============================================================================

def get_default_log_path(settings: Optional[MagicSettings] = None) -> str:
    """
    Resolve the persistent log path inside the package's data directory.

    Args:
        settings: Environment snapshot; read from os.environ if None.

    Returns:
        str: '<data home>/treemagic/logs/treemagic.log'.
    """
    return os.path.join(get_user_data_dir(settings), "logs", LOG_FILE_NAME)


def configure_logging(
        cfg: Optional[LoggingConfig] = None,
        *,
        persist: bool = False,
        force: bool = False,
) -> logging.Logger:
    """
    Attach diagnostic output to the 'treemagic' logger.

    Without cfg, level and file are taken from TREE_MAGIC_LOG_LEVEL and
    TREE_MAGIC_LOG_FILE. With persist and no file configured, records also
    go to get_default_log_path(). Later calls are no-ops unless force is set.

    Args:
        cfg: Explicit configuration.
        persist: Fall back to the default log file when none is configured.
        force: Tear down the current handlers and configure again.

    Returns:
        logging.Logger: The package logger.
    """
    global _queue_handler, _listener

    pkg_logger = logging.getLogger(PACKAGE_LOGGER)

    with _state_lock:
        if _queue_handler is not None and not force:
            return pkg_logger

        settings = MagicSettings.from_env()
        if cfg is None:
            cfg = LoggingConfig.from_settings(settings)

        log_file = cfg.log_file
        if log_file is None and persist:
            log_file = get_default_log_path(settings)

        _teardown(pkg_logger)
        pkg_logger.setLevel(cfg.level_no)

        sinks: List[logging.Handler] = []
        if cfg.console:
            sh = logging.StreamHandler(sys.stderr)
            sh.setFormatter(logging.Formatter(cfg.console_fmt))
            sinks.append(sh)

        if log_file:
            fh = _open_file_sink(log_file, cfg)
            if fh is not None:
                sinks.append(fh)

        if not sinks:
            return pkg_logger

        log_queue: queue.Queue[logging.LogRecord] = queue.Queue(-1)
        _queue_handler = QueueHandler(log_queue)
        _listener = QueueListener(log_queue, *sinks, respect_handler_level=True)
        _listener.start()
        pkg_logger.addHandler(_queue_handler)

    return pkg_logger


def shutdown_logging() -> None:
    """Flush pending records and detach everything configure_logging() installed."""
    with _state_lock:
        _teardown(logging.getLogger(PACKAGE_LOGGER))


def is_logging_configured() -> bool:
    """Tell whether configure_logging() currently has handlers attached."""
    return _queue_handler is not None


# ==============================================================================
# PRIVATE HELPERS
# ==============================================================================

def _open_file_sink(path: str, cfg: LoggingConfig) -> Optional[logging.Handler]:
    """
    Create the rotating file handler, creating its directory first.

    An unwritable location only costs the file output; console logging
    still goes ahead.
    """
    try:
        directory = os.path.dirname(os.path.abspath(path))
        os.makedirs(directory, exist_ok=True)
        fh = RotatingFileHandler(
            path,
            maxBytes=cfg.max_bytes,
            backupCount=cfg.backup_count,
            encoding="utf-8",
            delay=True,
        )
    except OSError as e:
        sys.stderr.write(f"treemagic: cannot open log file {path}: {e}\n")
        return None

    fh.setFormatter(logging.Formatter(cfg.file_fmt, datefmt=cfg.datefmt))
    return fh


def _teardown(pkg_logger: logging.Logger) -> None:
    """Stop the listener and close the queue handler. Caller holds _state_lock."""
    global _queue_handler, _listener

    if _queue_handler is not None:
        pkg_logger.removeHandler(_queue_handler)
        _queue_handler.close()
        _queue_handler = None

    if _listener is not None:
        _listener.stop()
        for h in _listener.handlers:
            h.close()
        _listener = None


atexit.register(shutdown_logging)
