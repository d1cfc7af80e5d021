"""
🧪 test_logging_setup.py - unit-тести для єдиної схеми логування

Перевіряє:
- Ініціалізацію консольного хендлера без дублювання
- Файловий хендлер і JSON-формат з extra-полями
- Приглушення сторонніх логерів
- get_logger() з префіксом
"""

import json
import logging
from logging.handlers import TimedRotatingFileHandler

import pytest

from rate_service.shared.utils.logger import LOG_NAME, JsonFormatter, get_logger, init_logging, init_logging_from_config


@pytest.fixture(autouse=True)
def _restore_root_logger():
    root = logging.getLogger(LOG_NAME)
    saved = list(root.handlers)
    yield
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()
    for handler in saved:
        root.addHandler(handler)


def test_console_only_and_idempotent():
    logger = init_logging(level="DEBUG", file=None)
    init_logging(level="DEBUG", file=None)

    stream_handlers = [h for h in logger.handlers if type(h) is logging.StreamHandler]
    assert len(stream_handlers) == 1
    assert logger.level == logging.DEBUG
    assert not any(isinstance(h, TimedRotatingFileHandler) for h in logger.handlers)


def test_file_handler_from_config(tmp_path):
    log_file = tmp_path / "logs" / "svc.log"
    logger = init_logging_from_config({"level": "INFO", "console": False, "json": True, "file": str(log_file)})

    file_handlers = [h for h in logger.handlers if isinstance(h, TimedRotatingFileHandler)]
    assert len(file_handlers) == 1
    assert isinstance(file_handlers[0].formatter, JsonFormatter)
    assert log_file.parent.is_dir()


def test_third_party_loggers_suppressed():
    init_logging(file=None, suppress={"httpx": "ERROR"})
    assert logging.getLogger("httpx").level == logging.ERROR


def test_json_formatter_includes_extra():
    record = logging.LogRecord("rate_service.test", logging.INFO, __file__, 1, "hello %s", ("world",), None)
    record.error_code = "circuit_open"
    record.obj = object()

    payload = json.loads(JsonFormatter().format(record))

    assert payload["message"] == "hello world"
    assert payload["error_code"] == "circuit_open"
    assert isinstance(payload["obj"], str)


def test_get_logger_prefix():
    assert get_logger().name == LOG_NAME
    assert get_logger("api").name == f"{LOG_NAME}.api"
