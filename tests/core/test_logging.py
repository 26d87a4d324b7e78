import logging

import pytest

from boagent.helpers.logging import create_loggers, log_level


def test_log_level_names():
    assert log_level("debug") == logging.DEBUG
    assert log_level("WARNING") == logging.WARNING
    assert log_level(logging.INFO) == logging.INFO
    assert log_level(None) is None
    with pytest.raises(ValueError):
        log_level("loud")


def test_loggers_are_created_once(tmp_path):
    path = tmp_path / "logs" / "boa.log"
    logger = create_loggers(path, module_name="boagent.test.once", screen_level="error")
    assert len(logger.handlers) == 2
    again = create_loggers(path, module_name="boagent.test.once")
    assert again is logger
    assert len(again.handlers) == 2
    logger.debug("recorded")
    for handler in logger.handlers:
        handler.flush()
    assert "recorded" in path.read_text()


def test_screen_logging_can_be_disabled():
    logger = create_loggers(module_name="boagent.test.silent", screen_level=None)
    assert logger.handlers == []
