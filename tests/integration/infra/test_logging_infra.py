from __future__ import annotations

"""
Integration tests for Logging Infrastructure.

Exercises the public treemagic.configure_logging entry point: handlers are
confined to the package logger, configuration is idempotent, defaults come
from the environment and the file sink rotates.
"""

import logging
import os
from logging.handlers import QueueHandler
from pathlib import Path
from typing import Iterator, List

import pytest

import treemagic
from treemagic.infra.logging import get_default_log_path, is_logging_configured


def _queue_handlers(logger: logging.Logger) -> List[logging.Handler]:
    return [h for h in logger.handlers if isinstance(h, QueueHandler)]


@pytest.fixture(autouse=True)
def reset_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Start each test unconfigured, with no log settings in the environment."""
    monkeypatch.delenv("TREE_MAGIC_LOG_LEVEL", raising=False)
    monkeypatch.delenv("TREE_MAGIC_LOG_FILE", raising=False)
    treemagic.shutdown_logging()
    yield
    treemagic.shutdown_logging()
    logging.getLogger("treemagic").setLevel(logging.NOTSET)


def test_logging_idempotency() -> None:
    """TC-01: Verify that repeated calls do not duplicate handlers."""
    pkg = treemagic.configure_logging(treemagic.LoggingConfig(level="INFO"))
    assert pkg.name == "treemagic"
    assert len(_queue_handlers(pkg)) == 1

    treemagic.configure_logging(treemagic.LoggingConfig(level="INFO"))
    assert len(_queue_handlers(pkg)) == 1, "Handlers were duplicated."


def test_root_logger_untouched() -> None:
    """TC-02: Verify the host application's root logger is left alone."""
    root = logging.getLogger()
    before = list(root.handlers)
    level_before = root.level

    treemagic.configure_logging(treemagic.LoggingConfig(level="DEBUG"))

    assert root.handlers == before
    assert root.level == level_before


def test_log_rotation(tmp_path: Path) -> None:
    """TC-03: Verify file rotation when the size limit is exceeded."""
    log_file = tmp_path / "logs" / "rotate.log"
    cfg = treemagic.LoggingConfig(
        level="DEBUG",
        console=False,
        log_file=str(log_file),
        max_bytes=100,
        backup_count=1,
    )

    treemagic.configure_logging(cfg)
    logger = logging.getLogger("treemagic.tests.rotate")
    for _ in range(10):
        logger.debug("This is a long log message to trigger rotation." * 5)

    # Stopping the listener drains the queue
    treemagic.shutdown_logging()

    assert log_file.exists()
    assert (tmp_path / "logs" / "rotate.log.1").exists(), "Rotation backup file was not created."


def test_force_reconfigure_changes_level() -> None:
    """TC-04: Verify force=True re-applies the configuration."""
    treemagic.configure_logging(treemagic.LoggingConfig(level="INFO"))
    treemagic.configure_logging(treemagic.LoggingConfig(level="ERROR"))
    assert logging.getLogger("treemagic").level == logging.INFO

    treemagic.configure_logging(treemagic.LoggingConfig(level="error"), force=True)
    assert logging.getLogger("treemagic").level == logging.ERROR
    assert len(_queue_handlers(logging.getLogger("treemagic"))) == 1


def test_defaults_from_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """TC-05: Verify level and file come from TREE_MAGIC_LOG_LEVEL / TREE_MAGIC_LOG_FILE."""
    log_file = tmp_path / "env.log"
    monkeypatch.setenv("TREE_MAGIC_LOG_LEVEL", "debug")
    monkeypatch.setenv("TREE_MAGIC_LOG_FILE", str(log_file))

    pkg = treemagic.configure_logging()
    assert pkg.level == logging.DEBUG

    logging.getLogger("treemagic.tests.env").debug("resolution trace")
    treemagic.shutdown_logging()

    assert "resolution trace" in log_file.read_text(encoding="utf-8")


def test_persist_uses_default_log_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """TC-06: Verify persist=True writes under the package data directory."""
    monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))

    treemagic.configure_logging(treemagic.LoggingConfig(level="WARNING", console=False), persist=True)
    logging.getLogger("treemagic.tests.persist").warning("kept on disk")
    treemagic.shutdown_logging()

    expected = os.path.join(str(tmp_path), "treemagic", "logs", "treemagic.log")
    assert get_default_log_path() == expected
    assert "kept on disk" in Path(expected).read_text(encoding="utf-8")


def test_shutdown_detaches_handlers() -> None:
    """TC-07: Verify shutdown_logging() removes what was installed."""
    treemagic.configure_logging(treemagic.LoggingConfig(level="INFO"))
    assert is_logging_configured()

    treemagic.shutdown_logging()

    assert not is_logging_configured()
    assert _queue_handlers(logging.getLogger("treemagic")) == []


def test_provisioner_records_reach_configured_file(tmp_path: Path) -> None:
    """TC-08: Verify records from the resolution modules land in the configured sink."""
    log_file = tmp_path / "provision.log"
    treemagic.configure_logging(treemagic.LoggingConfig(level="INFO", console=False, log_file=str(log_file)))

    logging.getLogger("treemagic.core.services.provisioner").info("Magic database resolved")
    logging.getLogger("unrelated.library").warning("not ours")
    treemagic.shutdown_logging()

    text = log_file.read_text(encoding="utf-8")
    assert "Magic database resolved" in text
    assert "not ours" not in text
