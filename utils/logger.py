"""
Centralized logging configuration for FindOrigin.

Log records are written as JSON lines to rotating files so that both the
webhook worker and the web-form API can be tailed by the same log shipper.
A human-readable console handler is available for local development.

Environment variables:
    LOG_LEVEL: root level (default INFO)
    LOG_DIR: directory for log files (default ./logs)
    LOG_TO_CONSOLE: "true" to also log to stderr
"""

import json
import logging
import logging.handlers
import os
import sys
from datetime import datetime, timezone
from pathlib import Path
from typing import Any

NOISY_LOGGERS = ("httpx", "httpcore", "openai", "urllib3")


class JsonFormatter(logging.Formatter):
    """Render a log record as a single JSON object."""

    def format(self, record: logging.LogRecord) -> str:
        payload: dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        if record.exc_info:
            payload["exception"] = self.formatException(record.exc_info)

        # Structured context passed as extra={"extra_fields": {...}}
        extra_fields = getattr(record, "extra_fields", None)
        if isinstance(extra_fields, dict):
            payload.update(extra_fields)

        return json.dumps(payload, ensure_ascii=False, default=str)


class LoggerConfig:
    """Process-wide logging setup, applied once on first use."""

    MAX_BYTES = 5 * 1024 * 1024
    BACKUP_COUNT = 3

    _initialized = False

    @classmethod
    def setup_logging(
        cls,
        level: str | None = None,
        log_dir: str | None = None,
        to_console: bool | None = None,
    ) -> None:
        if cls._initialized:
            return

        chosen_level = (level or os.getenv("LOG_LEVEL") or "INFO").upper()
        directory = Path(log_dir or os.getenv("LOG_DIR") or "logs")
        if to_console is None:
            to_console = os.getenv("LOG_TO_CONSOLE", "false").strip().lower() == "true"

        root_logger = logging.getLogger()
        root_logger.setLevel(getattr(logging, chosen_level, logging.INFO))

        json_formatter = JsonFormatter()

        try:
            directory.mkdir(parents=True, exist_ok=True)
        except OSError:
            # Read-only filesystems (serverless hosts): fall back to stderr only
            to_console = True
        else:
            app_handler = logging.handlers.RotatingFileHandler(
                directory / "findorigin.log",
                maxBytes=cls.MAX_BYTES,
                backupCount=cls.BACKUP_COUNT,
                encoding="utf-8",
            )
            app_handler.setFormatter(json_formatter)
            root_logger.addHandler(app_handler)

            error_handler = logging.handlers.RotatingFileHandler(
                directory / "error.log",
                maxBytes=cls.MAX_BYTES,
                backupCount=cls.BACKUP_COUNT,
                encoding="utf-8",
            )
            error_handler.setLevel(logging.ERROR)
            error_handler.setFormatter(json_formatter)
            root_logger.addHandler(error_handler)

        if to_console:
            console_handler = logging.StreamHandler(sys.stderr)
            console_handler.setFormatter(
                logging.Formatter(
                    fmt="[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s",
                    datefmt="%Y-%m-%d %H:%M:%S",
                )
            )
            root_logger.addHandler(console_handler)

        for noisy in NOISY_LOGGERS:
            logging.getLogger(noisy).setLevel(logging.WARNING)

        cls._initialized = True

        logging.getLogger(__name__).info(
            "Logging initialized",
            extra={
                "extra_fields": {
                    "log_level": chosen_level,
                    "log_dir": str(directory),
                    "console_logging": to_console,
                }
            },
        )

    @classmethod
    def get_logger(cls, name: str) -> logging.Logger:
        if not cls._initialized:
            cls.setup_logging()
        return logging.getLogger(name)


def get_logger(name: str) -> logging.Logger:
    """
    Get a configured logger instance.

    Example:
        >>> logger = get_logger(__name__)
        >>> logger.info("Search finished", extra={"extra_fields": {"results": 10}})
    """
    return LoggerConfig.get_logger(name)
