"""Structured logging utilities."""

import logging
import logging.handlers
import json
import sys
from typing import Any, Dict
from datetime import datetime, timezone
from pathlib import Path

from .errors import UnpackerError
from .logging_config import LoggingConfig


def record_fields(record: logging.LogRecord) -> Dict[str, Any]:
    """Structured fields of a record: ``LogContext`` fields, then ``extra_fields``."""
    fields: Dict[str, Any] = {}
    fields.update(getattr(record, "context_fields", {}))
    fields.update(getattr(record, "extra_fields", {}))
    return fields


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        log_data = {
            "timestamp": datetime.fromtimestamp(record.created, timezone.utc).isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info and record.exc_info[1] is not None:
            error = record.exc_info[1]
            log_data["exception"] = {
                "type": type(error).__name__,
                "message": str(error),
                "traceback": self.formatException(record.exc_info),
            }
            if isinstance(error, UnpackerError):
                log_data["exception"]["context"] = error.context

        log_data.update(record_fields(record))

        return json.dumps(log_data, default=str, ensure_ascii=False)


class DetailedFormatter(logging.Formatter):
    """Human-readable detailed formatter; structured fields are appended as key=value."""

    def __init__(self) -> None:
        fmt = (
            "%(asctime)s | %(levelname)-8s | %(name)s:%(funcName)s:%(lineno)d | "
            "%(message)s"
        )
        super().__init__(fmt=fmt, datefmt="%Y-%m-%d %H:%M:%S")

    def format(self, record: logging.LogRecord) -> str:
        line = super().format(record)
        fields = record_fields(record)
        if fields:
            line += " | " + " ".join(f"{k}={v}" for k, v in fields.items())
        return line


class SimpleFormatter(logging.Formatter):
    """Simple formatter for console output."""

    def __init__(self) -> None:
        super().__init__(fmt="%(levelname)-8s | %(name)s | %(message)s")


_CONSOLE_FORMATTERS = {
    "simple": SimpleFormatter,
    "detailed": DetailedFormatter,
    "json": StructuredFormatter,
}


def setup_logging(config: LoggingConfig) -> None:
    """Configure the root logger from the ``[logging]`` section.

    One stderr handler in ``config.format``, plus a rotating JSON file
    handler when ``config.file`` is set.
    """
    root_logger = logging.getLogger()
    root_logger.setLevel(config.level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setFormatter(_CONSOLE_FORMATTERS[config.format]())
    root_logger.addHandler(console_handler)

    if config.file:
        log_file = Path(config.file)
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.handlers.RotatingFileHandler(
            log_file,
            maxBytes=config.max_file_size_mb * 1024 * 1024,
            backupCount=config.backup_count,
            encoding="utf-8",
        )
        file_handler.setFormatter(StructuredFormatter())
        root_logger.addHandler(file_handler)


class LogContext:
    """Context manager adding structured fields (``package``, ``guid``) to records.

    Fields live in ``record.context_fields`` so that an explicit
    ``extra={"extra_fields": ...}`` inside the block does not collide.
    """

    def __init__(self, logger: logging.Logger, **fields: Any) -> None:
        self.logger = logger
        self.fields = fields
        self.old_factory = None

    def __enter__(self) -> "LogContext":
        self.old_factory = logging.getLogRecordFactory()

        def record_factory(*args: Any, **kwargs: Any) -> logging.LogRecord:
            record = self.old_factory(*args, **kwargs)
            if not hasattr(record, "context_fields"):
                record.context_fields = {}
            record.context_fields.update(self.fields)
            return record

        logging.setLogRecordFactory(record_factory)
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        logging.setLogRecordFactory(self.old_factory)
