"""
Standardized logging setup for the Pinecone API client.
Uses Python's built-in logging with per-operation context correlation.
"""

import logging
import sys
import os
from contextvars import ContextVar
from typing import Optional, Dict


class ColoredFormatter(logging.Formatter):
    """Colored logging formatter with timestamps."""

    # ANSI color codes
    COLORS = {
        'DEBUG': '\033[36m',    # Cyan
        'INFO': '\033[32m',     # Green
        'WARNING': '\033[33m',  # Yellow
        'ERROR': '\033[31m',    # Red
        'CRITICAL': '\033[35m', # Magenta
        'RESET': '\033[0m'      # Reset
    }

    def __init__(self, use_colors=True):
        super().__init__(
            fmt='%(asctime)s - %(name)s%(operation_part)s%(index_part)s - %(levelname)s - %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record):
        record.operation_part = f" {record.operation}" if getattr(record, 'operation', '') else ""
        record.index_part = f" {record.index}" if getattr(record, 'index', '') else ""

        if not self.use_colors:
            return super().format(record)

        level_color = self.COLORS.get(record.levelname, '')
        reset_color = self.COLORS['RESET']

        # Temporarily modify the record to add colors
        original_levelname = record.levelname
        record.levelname = f"{level_color}{record.levelname}{reset_color}"
        try:
            return super().format(record)
        finally:
            record.levelname = original_levelname


log_level = os.getenv('LOG_LEVEL', 'INFO').upper()
log_level_value = getattr(logging, log_level, logging.INFO)

use_colors = os.getenv('LOG_COLORS', 'true').lower() in ('true', '1', 'yes', 'on')

# Bound per asyncio task, so concurrent operations keep their own context
_operation_var: ContextVar[Optional[str]] = ContextVar('pinecone_operation', default=None)
_index_var: ContextVar[Optional[str]] = ContextVar('pinecone_index', default=None)


class OperationContextFilter(logging.Filter):
    """Add the current operation and index name to log records."""

    def filter(self, record):
        operation = _operation_var.get()
        index_name = _index_var.get()
        record.operation = f"op:{operation}" if operation else ""
        record.index = f"index:{index_name}" if index_name else ""
        return True


class PineconeHandler(logging.StreamHandler):
    """Stderr handler applying operation-aware formatting and colors."""

    def __init__(self, use_colors=True):
        super().__init__(sys.stderr)
        self.setFormatter(ColoredFormatter(use_colors=use_colors))


operation_filter = OperationContextFilter()


def get_logger(name: str) -> logging.Logger:
    """Get a logger with operation context and colored formatting."""
    logger = logging.getLogger(f"pinecone_api.{name}")
    if operation_filter not in logger.filters:
        logger.addFilter(operation_filter)
        if not any(isinstance(h, PineconeHandler) for h in logger.handlers):
            logger.addHandler(PineconeHandler(use_colors=use_colors))
            logger.propagate = False
            logger.setLevel(log_level_value)
    return logger


def set_operation_context(operation: Optional[str] = None, index_name: Optional[str] = None):
    """Set operation context for log records emitted by the current task."""
    _operation_var.set(operation)
    _index_var.set(index_name)


def get_operation_context() -> Dict[str, Optional[str]]:
    return {"operation": _operation_var.get(), "index": _index_var.get()}


def redact_headers(headers: Dict[str, str]) -> Dict[str, str]:
    """Copy of request headers safe for logging."""
    sensitive_keys = {"api-key", "authorization", "cookie"}
    return {
        key: "[REDACTED]" if key.lower() in sensitive_keys else value
        for key, value in headers.items()
    }
