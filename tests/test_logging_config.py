"""
Tests for the root logger setup.
"""

import logging
from logging.handlers import RotatingFileHandler

import pytest

from club_points.app.core.logging_config import setup_logging


@pytest.fixture
def bare_root():
    root = logging.getLogger()
    saved_handlers, saved_level = root.handlers[:], root.level
    root.handlers = []
    yield root
    for handler in root.handlers:
        handler.close()
    root.handlers = saved_handlers
    root.setLevel(saved_level)


def test_console_only_by_default(bare_root):
    setup_logging("debug")
    assert bare_root.level == logging.DEBUG
    assert len(bare_root.handlers) == 1
    assert not isinstance(bare_root.handlers[0], RotatingFileHandler)


def test_log_file_rotates_and_creates_directory(bare_root, tmp_path):
    logfile = tmp_path / "logs" / "club.log"
    setup_logging("INFO", str(logfile), max_bytes=2048, backup_count=2)

    rotating = [h for h in bare_root.handlers if isinstance(h, RotatingFileHandler)]
    assert len(rotating) == 1
    assert rotating[0].maxBytes == 2048
    assert rotating[0].backupCount == 2

    logging.getLogger("club_points.test").info("Added member Ayse")
    rotating[0].flush()
    assert "Added member Ayse" in logfile.read_text(encoding="utf-8")


def test_second_call_adds_nothing(bare_root, tmp_path):
    setup_logging("INFO", str(tmp_path / "club.log"))
    handlers = bare_root.handlers[:]
    setup_logging("DEBUG", str(tmp_path / "other.log"))
    assert bare_root.handlers == handlers
    assert bare_root.level == logging.INFO
    assert not (tmp_path / "other.log").exists()


def test_unknown_level_falls_back_to_info(bare_root):
    setup_logging("chatty")
    assert bare_root.level == logging.INFO
