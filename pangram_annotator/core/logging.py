"""
structlog setup for the annotator.

Events are snake_case names with key/value fields. Each analysis session
binds its ``request_id`` and ``document_id`` through structlog's context
variables, so every event emitted while the session runs carries them.
Document text is never logged.
"""

from __future__ import annotations

import logging
import sys
import uuid
from pathlib import Path
from typing import Any

import structlog
from structlog.types import FilteringBoundLogger

_service: dict[str, str] = {}


def set_service_context(name: str, version: str, environment: str = "cli") -> None:
    """Identify the running tool in every log entry."""
    _service.update(service=name, version=version, environment=environment)


def add_service_context(
    logger: logging.Logger, method_name: str, event_dict: dict[str, Any]
) -> dict[str, Any]:
    for key, value in _service.items():
        event_dict.setdefault(key, value)
    return event_dict


def setup_logging(
    level: str = "INFO",
    log_file: str | None = None,
    json_logs: bool = True
) -> None:
    """Configure stdlib logging and the structlog processor chain."""
    # stdout is reserved for command output
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        Path(log_file).parent.mkdir(parents=True, exist_ok=True)
        handlers.append(logging.FileHandler(log_file, encoding="utf-8"))

    logging.basicConfig(
        format="%(message)s",
        handlers=handlers,
        level=getattr(logging, level.upper()),
    )

    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)

    processors: list[Any] = [
        structlog.contextvars.merge_contextvars,
        structlog.stdlib.add_log_level,
        structlog.stdlib.add_logger_name,
        add_service_context,
        structlog.processors.TimeStamper(fmt="iso", utc=True),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        structlog.processors.JSONRenderer() if json_logs else structlog.dev.ConsoleRenderer(),
    ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=True,
    )


def get_logger(name: str | None = None) -> FilteringBoundLogger:
    return structlog.get_logger(name or __name__)


def generate_request_id() -> str:
    return str(uuid.uuid4())


def set_request_context(request_id: str, document_id: str) -> None:
    """Bind session correlation fields for the current task."""
    structlog.contextvars.bind_contextvars(request_id=request_id, document_id=document_id)


def clear_request_context() -> None:
    structlog.contextvars.unbind_contextvars("request_id", "document_id")
