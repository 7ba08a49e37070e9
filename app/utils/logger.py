"""
Logging configuration for structured text logging.
"""
import logging
import sys
from typing import Dict
from app.config import settings


# LogRecord attributes that are not user-supplied context
_RECORD_FIELDS = {
    "name", "msg", "args", "created", "filename", "funcName",
    "levelname", "levelno", "lineno", "module", "msecs",
    "message", "pathname", "process", "processName", "relativeCreated",
    "thread", "threadName", "exc_info", "exc_text", "stack_info",
    "taskName"
}


class StructuredFormatter(logging.Formatter):
    """Formats records as `timestamp | LEVEL | logger | message | key=value ...`."""

    def format(self, record: logging.LogRecord) -> str:
        timestamp = self.formatTime(record, "%Y-%m-%d %H:%M:%S")
        base_msg = f"{timestamp}.{int(record.msecs):03d} | {record.levelname:8} | {record.name} | {record.getMessage()}"

        context = {
            key: value
            for key, value in record.__dict__.items()
            if key not in _RECORD_FIELDS
        }
        if context:
            base_msg += " | " + " ".join(f"{k}={v}" for k, v in context.items())

        if record.exc_info:
            base_msg += "\n" + self.formatException(record.exc_info)

        return base_msg


def setup_logging() -> logging.Logger:
    """
    Configure and return the application logger.

    Levels come from settings:
    - APP_LOG_LEVEL: spellcheck service logs (falls back to LOG_LEVEL)
    - UVICORN_LOG_LEVEL: uvicorn server and access logs (default: INFO)

    Returns:
        Configured "app" logger
    """
    logger = logging.getLogger("app")
    app_log_level = (settings.APP_LOG_LEVEL or settings.LOG_LEVEL).upper()
    logger.setLevel(getattr(logging, app_log_level))

    # Remove existing handlers to avoid duplicates on re-import
    logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, app_log_level))
    console_handler.setFormatter(StructuredFormatter())
    logger.addHandler(console_handler)
    logger.propagate = False

    log_config = _configure_third_party_loggers()

    logger.debug(
        "Logging configured",
        extra={"app_log_level": app_log_level, **log_config}
    )

    return logger


def _configure_third_party_loggers() -> Dict[str, str]:
    """
    Configure log levels for third-party libraries.

    Returns:
        Dictionary mapping setting names to configured levels
    """
    config = {}

    uvicorn_level = (settings.UVICORN_LOG_LEVEL or "INFO").upper()
    logging.getLogger("uvicorn").setLevel(getattr(logging, uvicorn_level))
    logging.getLogger("uvicorn.access").setLevel(getattr(logging, uvicorn_level))
    config["uvicorn_log_level"] = uvicorn_level

    return config


class StructuredLogger:
    """Wrapper around logging.Logger that supports keyword arguments for structured logging."""

    # Reserved field names in LogRecord that should be prefixed
    RESERVED_FIELDS = _RECORD_FIELDS

    def __init__(self, logger: logging.Logger):
        self._logger = logger

    @property
    def name(self) -> str:
        return self._logger.name

    def _log(self, level: int, msg: str, *args, **kwargs):
        """Log with structured extra fields."""
        exc_info = kwargs.pop("exc_info", False)

        extra = {}
        for key, value in kwargs.items():
            if key in self.RESERVED_FIELDS:
                extra[f"ctx_{key}"] = value
            else:
                extra[key] = value

        self._logger.log(level, msg, *args, extra=extra, exc_info=exc_info, stacklevel=3)

    def debug(self, msg: str, *args, **kwargs):
        self._log(logging.DEBUG, msg, *args, **kwargs)

    def info(self, msg: str, *args, **kwargs):
        self._log(logging.INFO, msg, *args, **kwargs)

    def warning(self, msg: str, *args, **kwargs):
        self._log(logging.WARNING, msg, *args, **kwargs)

    def error(self, msg: str, *args, **kwargs):
        self._log(logging.ERROR, msg, *args, **kwargs)

    def critical(self, msg: str, *args, **kwargs):
        self._log(logging.CRITICAL, msg, *args, **kwargs)


def get_logger(name: str) -> StructuredLogger:
    """
    Get a structured logger with the specified name under the app namespace.

    Args:
        name: Logger name (will be prefixed with 'app.')

    Returns:
        StructuredLogger instance
    """
    return StructuredLogger(logging.getLogger(f"app.{name}"))


# Initialize application logger
app_logger = setup_logging()
