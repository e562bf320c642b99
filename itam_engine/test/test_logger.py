"""
Tests for the JSON logger
"""

import json
import logging

from itam_engine.utils.logger import JsonFormatter, SingletonLogger, get_logger


def test_module_loggers_nest_under_engine_logger():
    assert get_logger("routes").name == "itam_engine.routes"
    assert get_logger("itam_engine.routes").name == "itam_engine.routes"
    assert get_logger().name == "itam_engine"


def test_singleton():
    assert SingletonLogger() is SingletonLogger()


def test_json_formatter_output():
    formatter = JsonFormatter({"level": "levelname", "message": "message"})
    record = logging.LogRecord("itam_engine.test", logging.WARNING, __file__, 10,
                               "Asset %s rejected", ("AS-2024-000001",), None)

    assert json.loads(formatter.format(record)) == {
        "level": "WARNING",
        "message": "Asset AS-2024-000001 rejected",
    }


def test_configure_sets_level_and_file_handlers(tmp_path):
    logger = get_logger()
    original_level = logger.level
    original_handlers = list(logger.handlers)
    try:
        SingletonLogger().configure("DEBUG", str(tmp_path))

        assert logger.level == logging.DEBUG
        assert (tmp_path / "itam_engine.log").exists()
        assert (tmp_path / "errors.log").exists()
    finally:
        for handler in logger.handlers:
            if handler not in original_handlers:
                handler.close()
        logger.handlers[:] = original_handlers
        logger.setLevel(original_level)
