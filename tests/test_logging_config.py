"""
Tests for logging setup.
"""
import logging
from logging.handlers import RotatingFileHandler
import pytest

from logging_config import ErrorRaisingHandler, describe_handlers, get_logger, setup_logging


@pytest.fixture
def root_logger():
    """Drop the handlers setup_logging installs once the test is done."""
    root = logging.getLogger()
    saved_level = root.level
    yield root
    for handler in list(root.handlers):
        if isinstance(handler, (RotatingFileHandler, ErrorRaisingHandler)) or type(handler) is logging.StreamHandler:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(saved_level)


def test_setup_logging_writes_to_file(root_logger, test_config_manager, test_config_data):
    setup_logging(cfg=test_config_manager)
    assert root_logger.level == logging.DEBUG
    assert describe_handlers() == [{"type": "RotatingFileHandler", "level": "DEBUG"}]

    get_logger("planner.test").info("hello from the test")
    for handler in root_logger.handlers:
        handler.flush()
    log_file = test_config_data["logging"]["file"]
    with open(log_file, encoding="utf-8") as f:
        assert "planner.test - INFO - hello from the test" in f.read()


def test_setup_logging_console_handler(root_logger, test_config_manager):
    test_config_manager.set_setting("logging", "console", True)
    setup_logging(cfg=test_config_manager)
    types = [h["type"] for h in describe_handlers()]
    assert types == ["StreamHandler", "RotatingFileHandler"]
    assert describe_handlers()[0]["level"] == "CRITICAL"


def test_setup_logging_is_idempotent(root_logger, test_config_manager):
    setup_logging(cfg=test_config_manager)
    setup_logging(cfg=test_config_manager)
    assert len(root_logger.handlers) == 1


def test_raise_on_error(root_logger, test_config_manager):
    setup_logging(raise_on_error=True, cfg=test_config_manager)
    assert any(isinstance(h, ErrorRaisingHandler) for h in root_logger.handlers)
    with pytest.raises(RuntimeError, match="boom"):
        logging.getLogger("planner.test").error("boom")


def test_unwritable_log_file_is_not_fatal(root_logger, test_config_manager, tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("")
    test_config_manager.set_setting("logging", "file", str(blocker / "x.log"))
    setup_logging(cfg=test_config_manager)
    assert describe_handlers() == []
