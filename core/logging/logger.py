"""
Модуль логирования для CCNL Compare
Реализует структурированное JSON логирование
"""

import logging
import json
import sys
from datetime import datetime, timezone
from typing import Any

# Стандартные атрибуты LogRecord, не попадающие в контекст
_RESERVED_ATTRS = set(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {"message", "asctime"}


class JSONFormatter(logging.Formatter):
    """Форматтер для вывода логов в JSON формате"""

    def format(self, record: logging.LogRecord) -> str:
        """Форматирует запись лога в JSON"""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno
        }

        # Добавляем контекст, переданный через extra
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS and not key.startswith("_"):
                log_entry[key] = value

        # Добавляем exception info если есть
        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        return json.dumps(log_entry, ensure_ascii=False, default=str)


class StructuredLogger:
    """Структурированный логгер с дополнительным контекстом"""

    def __init__(self, name: str):
        self.logger = logging.getLogger(name)

    @staticmethod
    def _extra(kwargs: dict) -> dict:
        return {key: value for key, value in kwargs.items() if value is not None}

    def _log_with_context(self, level: int, message: str, **kwargs: Any) -> None:
        """Логирует сообщение с дополнительным контекстом"""
        exc_info = kwargs.pop("exc_info", False)
        self.logger.log(level, message, exc_info=exc_info, extra=self._extra(kwargs))

    def debug(self, message: str, **kwargs: Any) -> None:
        self._log_with_context(logging.DEBUG, message, **kwargs)

    def info(self, message: str, **kwargs: Any) -> None:
        self._log_with_context(logging.INFO, message, **kwargs)

    def warning(self, message: str, **kwargs: Any) -> None:
        self._log_with_context(logging.WARNING, message, **kwargs)

    def error(self, message: str, **kwargs: Any) -> None:
        self._log_with_context(logging.ERROR, message, **kwargs)

    def critical(self, message: str, **kwargs: Any) -> None:
        self._log_with_context(logging.CRITICAL, message, **kwargs)

    def exception(self, message: str, **kwargs: Any) -> None:
        """Логирует exception с traceback"""
        self.logger.exception(message, extra=self._extra(kwargs))


def setup_logging(level: str = "INFO", fmt: str = "json") -> None:
    """Настраивает логирование для приложения"""
    root_logger = logging.getLogger()
    root_logger.setLevel(level.upper())

    # Очищаем существующие handlers
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    if fmt == "json":
        console_handler.setFormatter(JSONFormatter())
    else:
        console_handler.setFormatter(
            logging.Formatter('%(asctime)s - %(name)s - %(levelname)s - %(message)s')
        )
    root_logger.addHandler(console_handler)


# Создаем основной логгер
logger = StructuredLogger("ccnlcompare")
