"""Structlog configuration: JSON log file plus colored console output."""

import logging
import logging.handlers
import os
from pathlib import Path

import structlog

from core.logging.processors import (
    add_process_info,
    add_request_context,
    add_service_context,
    console_renderer,
)

DEFAULT_LOG_FILE = "./logs/almanaque-service.log"
LOG_MAX_BYTES = 50 * 1024 * 1024
LOG_BACKUP_COUNT = 20


def _pre_chain(*extra) -> list:
    return [
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        add_request_context,
        *extra,
    ]


def _file_handler(path: str, level: int) -> logging.Handler:
    handler = logging.handlers.RotatingFileHandler(
        filename=path,
        maxBytes=LOG_MAX_BYTES,
        backupCount=LOG_BACKUP_COUNT,
        encoding="utf-8",
    )
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=structlog.processors.JSONRenderer(ensure_ascii=False),
            foreign_pre_chain=_pre_chain(add_service_context, add_process_info),
        )
    )
    return handler


def _console_handler(level: int) -> logging.Handler:
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        structlog.stdlib.ProcessorFormatter(
            processor=console_renderer,
            foreign_pre_chain=_pre_chain(),
        )
    )
    return handler


def setup_logging() -> None:
    """Configure structlog and the root logger.

    Every record, from structlog or from plain ``logging`` users such as
    Django and RQ, is written twice: as JSON to a rotating file and as a
    colored line on the console. Records carry the request id (or the
    scheduler tick id) of the current thread.

    Environment variables:
        LOG_FILE_PATH: Path of the JSON log file
        LOG_LEVEL: Minimum level (default INFO)
        SERVICE_NAME: Service name stamped on file records
        ENVIRONMENT: Deployment environment stamped on file records
    """
    log_file_path = os.getenv("LOG_FILE_PATH", DEFAULT_LOG_FILE)
    level_name = os.getenv("LOG_LEVEL", "INFO").upper()
    level = getattr(logging, level_name, logging.INFO)

    Path(log_file_path).parent.mkdir(parents=True, exist_ok=True)

    structlog.configure(
        processors=[
            structlog.stdlib.add_log_level,
            structlog.stdlib.add_logger_name,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            add_request_context,
            add_service_context,
            add_process_info,
            structlog.stdlib.ProcessorFormatter.wrap_for_formatter,
        ],
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )

    root_logger = logging.getLogger()
    root_logger.handlers.clear()
    root_logger.setLevel(level)
    root_logger.addHandler(_file_handler(log_file_path, level))
    root_logger.addHandler(_console_handler(level))

    structlog.get_logger(__name__).info(
        "logging_configured",
        log_file=log_file_path,
        log_level=level_name,
    )
