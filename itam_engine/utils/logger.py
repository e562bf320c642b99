import logging
import json
import os
from pathlib import Path
import threading


class SingletonLogger:
    """
    Singleton logger that ensures only one handler set is created per process.

    Module loggers (``itam_engine.<area>``) are children of the root engine
    logger and propagate to its handlers.
    """
    _instance = None
    _lock = threading.Lock()
    _logger = None
    _initialized = False

    def __new__(cls):
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = super(SingletonLogger, cls).__new__(cls)
        return cls._instance

    def __init__(self):
        if not self._initialized:
            with self._lock:
                if not self._initialized:
                    self._logger = None
                    self._initialized = True

    def get_logger(self, name: str = "itam_engine") -> logging.Logger:
        """
        Get a logger attached to the singleton handler set.

        Args:
            name (str): Dotted logger name, normally ``itam_engine.<area>``

        Returns:
            logging.Logger: The named logger
        """
        if self._logger is None:
            with self._lock:
                if self._logger is None:
                    self._logger = self._create_logger()
        if not name or name == self._logger.name:
            return self._logger
        if not name.startswith(self._logger.name + "."):
            name = f"{self._logger.name}.{name}"
        return logging.getLogger(name)

    def _create_logger(self) -> logging.Logger:
        """
        Create the root engine logger with console and optional file handlers.

        Returns:
            logging.Logger: Configured logger instance
        """
        logger = logging.getLogger("itam_engine")
        level = getattr(logging, os.environ.get("ITAM_LOG_LEVEL", "INFO").upper(), logging.INFO)
        logger.setLevel(level)

        # Clear any existing handlers
        logger.handlers.clear()

        formatter = JsonFormatter({
            "level": "levelname",
            "logger": "name",
            "module": "module",
            "function": "funcName",
            "line": "lineno",
            "message": "message"
        })

        console_handler = logging.StreamHandler()
        console_handler.setLevel(level)
        console_handler.setFormatter(formatter)
        logger.addHandler(console_handler)

        # File output only when a log directory is configured
        log_dir = os.environ.get("ITAM_LOG_DIR")
        if log_dir:
            self._add_file_handlers(logger, Path(log_dir), formatter)

        return logger

    def _add_file_handlers(self, logger: logging.Logger, logs_dir: Path, formatter: logging.Formatter):
        logs_dir.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(logs_dir / "itam_engine.log", mode='a', encoding='utf-8')
        file_handler.setLevel(logging.INFO)
        file_handler.setFormatter(formatter)
        logger.addHandler(file_handler)

        error_file_handler = logging.FileHandler(logs_dir / "errors.log", mode='a', encoding='utf-8')
        error_file_handler.setLevel(logging.ERROR)
        error_file_handler.setFormatter(formatter)
        logger.addHandler(error_file_handler)

    def configure(self, level: str = None, log_dir: str = None) -> logging.Logger:
        """
        Apply settings resolved after import time (e.g. from EngineConfig).

        Args:
            level (str): Level name such as "DEBUG"
            log_dir (str): Directory for file handlers; added once

        Returns:
            logging.Logger: The root engine logger
        """
        logger = self.get_logger()
        with self._lock:
            if level:
                resolved = getattr(logging, level.upper(), logging.INFO)
                logger.setLevel(resolved)
                for handler in logger.handlers:
                    if not isinstance(handler, logging.FileHandler):
                        handler.setLevel(resolved)

            has_file_handlers = any(isinstance(handler, logging.FileHandler) for handler in logger.handlers)
            if log_dir and not has_file_handlers:
                formatter = logger.handlers[0].formatter if logger.handlers else JsonFormatter()
                self._add_file_handlers(logger, Path(log_dir), formatter)
        return logger


class JsonFormatter(logging.Formatter):
    """
    Formatter that outputs JSON strings after parsing the LogRecord.

    @param dict fmt_dict: Key: logging format attribute pairs. Defaults to {"message": "message"}.
    @param str time_format: time.strftime() format string. Default: "%Y-%m-%dT%H:%M:%S"
    @param str msec_format: Microsecond formatting. Appended at the end. Default: "%s.%03dZ"
    """
    def __init__(self, fmt_dict: dict = None, time_format: str = "%Y-%m-%dT%H:%M:%S", msec_format: str = "%s.%03dZ"):
        super().__init__()
        self.fmt_dict = fmt_dict if fmt_dict is not None else {"message": "message"}
        self.default_time_format = time_format
        self.default_msec_format = msec_format
        self.datefmt = None

    def usesTime(self) -> bool:
        """
        Overwritten to look for the attribute in the format dict values instead of the fmt string.
        """
        return "asctime" in self.fmt_dict.values()

    def formatMessage(self, record) -> dict:
        """
        Overwritten to return a dictionary of the relevant LogRecord attributes instead of a string.
        KeyError is raised if an unknown attribute is provided in the fmt_dict.
        """
        return {fmt_key: record.__dict__[fmt_val] for fmt_key, fmt_val in self.fmt_dict.items()}

    def format(self, record) -> str:
        record.message = record.getMessage()

        if self.usesTime():
            record.asctime = self.formatTime(record, self.datefmt)

        message_dict = self.formatMessage(record)

        if record.exc_info:
            # Traceback text is constant, cache it on the record
            if not record.exc_text:
                record.exc_text = self.formatException(record.exc_info)

        if record.exc_text:
            message_dict["exc_info"] = record.exc_text

        if record.stack_info:
            message_dict["stack_info"] = self.formatStack(record.stack_info)

        return json.dumps(message_dict, default=str)


def get_logger(name: str = "itam_engine") -> logging.Logger:
    """
    Get a logger backed by the singleton handler set.

    Args:
        name (str): Logger name; bare names are nested under ``itam_engine``

    Returns:
        logging.Logger: The named logger
    """
    return SingletonLogger().get_logger(name)
