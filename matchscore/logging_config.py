# matchscore/logging_config.py
"""
Structured logging configuration with request-scoped scoring context.
"""

import json
import logging
import sys
import uuid
from typing import Optional
from contextvars import ContextVar
from datetime import datetime, timezone

from matchscore.config import settings

# Context variables for request tracking
request_id_var: ContextVar[Optional[str]] = ContextVar('request_id', default=None)
viewer_id_var: ContextVar[Optional[str]] = ContextVar('viewer_id', default=None)
target_id_var: ContextVar[Optional[str]] = ContextVar('target_id', default=None)

_RESERVED_ATTRS = {
    'name', 'msg', 'args', 'levelname', 'levelno', 'pathname', 'filename',
    'module', 'lineno', 'funcName', 'created', 'msecs', 'relativeCreated',
    'thread', 'threadName', 'processName', 'process', 'getMessage',
    'exc_info', 'exc_text', 'stack_info', 'taskName', 'message', 'asctime',
}


class StructuredFormatter(logging.Formatter):
    """JSON formatter for structured logging."""

    def format(self, record: logging.LogRecord) -> str:
        """Format log record as JSON."""
        log_entry = {
            'timestamp': datetime.now(timezone.utc).isoformat().replace('+00:00', 'Z'),
            'level': record.levelname,
            'logger': record.name,
            'message': record.getMessage(),
            'module': record.module,
            'function': record.funcName,
            'line': record.lineno,
        }

        # Add request context if available
        if settings.logging.include_request_id and request_id_var.get():
            log_entry['request_id'] = request_id_var.get()

        if viewer_id_var.get():
            log_entry['viewer_id'] = viewer_id_var.get()

        if target_id_var.get():
            log_entry['target_id'] = target_id_var.get()

        if record.exc_info:
            log_entry['exception'] = self.formatException(record.exc_info)

        # Add extra fields from the log record
        for key, value in record.__dict__.items():
            if key not in _RESERVED_ATTRS:
                log_entry[key] = value

        return json.dumps(log_entry, default=str)


class TextFormatter(logging.Formatter):
    """Human-readable formatter with request context."""

    def __init__(self):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(funcName)s:%(lineno)d | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )

    def format(self, record: logging.LogRecord) -> str:
        """Format log record with request context."""
        context_parts = []
        if settings.logging.include_request_id and request_id_var.get():
            context_parts.append(f"req_id={request_id_var.get()}")
        if viewer_id_var.get():
            context_parts.append(f"viewer={viewer_id_var.get()}")
        if target_id_var.get():
            context_parts.append(f"target={target_id_var.get()}")

        message = super().format(record)
        if context_parts:
            return f"[{' '.join(context_parts)}] {message}"
        return message


def setup_logging() -> None:
    """Setup application logging configuration."""
    root_logger = logging.getLogger()
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)

    console_handler = logging.StreamHandler(sys.stdout)
    console_handler.setLevel(getattr(logging, settings.logging.level))

    if settings.logging.format == 'json':
        formatter = StructuredFormatter()
    else:
        formatter = TextFormatter()

    console_handler.setFormatter(formatter)

    root_logger.setLevel(getattr(logging, settings.logging.level))
    root_logger.addHandler(console_handler)

    logger = logging.getLogger(__name__)
    logger.info("Logging configured", extra={
        'level': settings.logging.level,
        'format': settings.logging.format,
        'include_request_id': settings.logging.include_request_id,
    })


def get_logger(name: str) -> logging.Logger:
    """Get a logger instance."""
    return logging.getLogger(name)


def generate_request_id() -> str:
    """Generate a new request ID."""
    return str(uuid.uuid4())


class ScoringLoggingContext:
    """Context manager binding request, viewer and target ids to log records."""

    def __init__(
        self,
        request_id: Optional[str] = None,
        viewer_id: Optional[str] = None,
        target_id: Optional[str] = None
    ):
        self.request_id = request_id or generate_request_id()
        self.viewer_id = viewer_id
        self.target_id = target_id
        self._tokens = []

    def __enter__(self):
        self._tokens = [
            request_id_var.set(self.request_id),
            viewer_id_var.set(self.viewer_id),
            target_id_var.set(self.target_id),
        ]
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        # Restore in reverse order
        for var, token in zip(
            (target_id_var, viewer_id_var, request_id_var), reversed(self._tokens)
        ):
            var.reset(token)
        self._tokens = []
