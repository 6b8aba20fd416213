"""Tests for logging configuration."""

import logging

import pytest

from article_moderation.logging import configure_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = list(root.handlers), root.level
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        if handler not in handlers:
            handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


def test_configure_logging_sets_level_and_handler():
    configure_logging("debug")

    root = logging.getLogger()
    assert root.level == logging.DEBUG
    assert len(root.handlers) == 1
    assert logging.getLogger("azure").level == logging.WARNING


def test_configure_logging_adds_file_handler(tmp_path):
    log_file = tmp_path / "moderation.log"

    configure_logging("INFO", log_file=str(log_file))
    logging.getLogger("article_moderation.test").info("hello")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert len(logging.getLogger().handlers) == 2
    assert "hello" in log_file.read_text(encoding="utf-8")
