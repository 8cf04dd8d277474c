"""Tests for logging configuration."""

import logging

import pytest

from chat_mcp.logging_config import CHAT_LOGGERS, setup_chat_logging, setup_logging


@pytest.fixture(autouse=True)
def restore_root_logger():
    root = logging.getLogger()
    handlers, level = root.handlers[:], root.level
    yield
    for handler in root.handlers[:]:
        root.removeHandler(handler)
        handler.close()
    for handler in handlers:
        root.addHandler(handler)
    root.setLevel(level)


class TestLogging:

    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "chat.log"
        setup_logging(log_level="DEBUG", log_file=str(log_file), enable_console=False)

        logging.getLogger("tests.logging").warning("hello from client")
        for handler in logging.getLogger().handlers:
            handler.flush()

        assert "hello from client" in log_file.read_text()

    def test_setup_chat_logging_levels(self):
        setup_chat_logging({"log_level": "WARNING", "log_file": None})
        for name in CHAT_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING
        assert len(logging.getLogger().handlers) == 1
