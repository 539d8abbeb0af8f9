"""
Structured logging for decision_monads.

JSON lines for production, readable lines for development.
The module-level ``logger`` is the package diagnostic channel: malformed
tables, lookup misses and broken dispatch are reported through it.

Usage:
    from decision_monads.logger import logger

    logger.set_context(component="pricing")
    logger.warning("`if` condition not found: ", "vip")
"""

import logging
import json
import os
from contextvars import ContextVar
from datetime import datetime, timezone
from typing import Any, Dict, Optional

from decision_monads.settings import settings


# Context-local extra fields, isolated between threads and tasks
_extra_context_var: ContextVar[Optional[Dict[str, Any]]] = ContextVar('extra_context', default=None)


class StructuredLogger:
    """
    Structured logger with JSON and readable output.

    Features:
    - JSON format for production (LOG_FORMAT=json)
    - Readable format for development (default)
    - Keyword fields attached to every record
    - Context fields shared by all records of the current context
    """

    def __init__(self, name: str):
        self.name = name
        self.logger = logging.getLogger(name)

        if not self.logger.handlers:
            self._setup_logger()

    def _setup_logger(self) -> None:
        """Configure the logger from settings and environment"""
        level_name = settings.get_nested("logging.level", "INFO")
        level = getattr(logging, str(level_name).upper(), logging.INFO)
        self.logger.setLevel(level)

        handler = logging.StreamHandler()
        handler.setLevel(level)

        log_format = os.environ.get("LOG_FORMAT", "readable")

        if log_format == "json":
            formatter = logging.Formatter("%(message)s")
        else:
            formatter = logging.Formatter(
                "[%(asctime)s] %(levelname)s - %(message)s",
                datefmt="%H:%M:%S"
            )

        handler.setFormatter(formatter)
        self.logger.addHandler(handler)

        # Avoid duplicate records through the root logger
        self.logger.propagate = False

    @property
    def _extra_context(self) -> Dict[str, Any]:
        """Context-local extra fields"""
        ctx = _extra_context_var.get()
        if ctx is None:
            ctx = {}
            _extra_context_var.set(ctx)
        return ctx

    def set_context(self, **kwargs: Any) -> None:
        """Set extra context fields (context-local)"""
        ctx = dict(self._extra_context)
        ctx.update(kwargs)
        _extra_context_var.set(ctx)

    def clear_context(self) -> None:
        """Clear extra context fields"""
        _extra_context_var.set({})

    def _format_structured(self, level: str, message: str, *args: Any, **kwargs: Any) -> Dict[str, Any]:
        """Build a structured record"""
        log_entry = {
            "timestamp": datetime.now(timezone.utc).isoformat().replace("+00:00", "Z"),
            "level": level,
            "logger": self.name,
            "message": message,
        }

        if args:
            log_entry["args"] = list(args)

        if self._extra_context:
            log_entry.update(self._extra_context)

        if kwargs:
            log_entry.update(kwargs)

        return log_entry

    def _should_use_json(self) -> bool:
        """Whether JSON output is requested"""
        return os.environ.get("LOG_FORMAT", "readable") == "json"

    def _log(self, level: str, message: str, log_method, *args: Any, **kwargs: Any) -> None:
        """Common logging path; positional args follow the message directly"""
        if self._should_use_json():
            structured = self._format_structured(level, message, *args, **kwargs)
            # Table cells may hold functions and other non-JSON values
            log_method(json.dumps(structured, ensure_ascii=False, default=repr))
        else:
            if args:
                message = _append_args(message, args)
            fields = dict(self._extra_context)
            fields.update(kwargs)
            if fields:
                extras = ", ".join(f"{k}={v!r}" for k, v in fields.items())
                full_message = f"{message} [{extras}]"
            else:
                full_message = message

            log_method(full_message)

    def debug(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log debug message"""
        self._log("DEBUG", message, self.logger.debug, *args, **kwargs)

    def info(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log info message"""
        self._log("INFO", message, self.logger.info, *args, **kwargs)

    def warning(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log warning message"""
        self._log("WARNING", message, self.logger.warning, *args, **kwargs)

    def error(self, message: str, *args: Any, **kwargs: Any) -> None:
        """Log error message"""
        self._log("ERROR", message, self.logger.error, *args, **kwargs)

    def is_enabled_for(self, level: int) -> bool:
        """Check whether records of ``level`` would be emitted"""
        return self.logger.isEnabledFor(level)


def _append_args(message: str, args: tuple) -> str:
    """Render positional args after the message, strings unquoted"""
    rendered = " ".join(a if isinstance(a, str) else repr(a) for a in args)
    separator = "" if message.endswith(" ") else " "
    return f"{message}{separator}{rendered}"


# Package-wide logger instance
logger = StructuredLogger("decision_monads")


def create_test_logger(name: str = "test") -> StructuredLogger:
    """Create an isolated logger for tests"""
    return StructuredLogger(f"decision_monads.{name}")
