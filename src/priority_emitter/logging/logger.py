"""
Priority Emitter Logging Subsystem

Purpose
-------
Provide the logging conventions shared by every emitter module:

- Structured JSON logs for aggregation and analysis.
- LogContext-based propagation of dispatch context via ContextVars.
- Correlation IDs so nested emits can be traced back to the outer call.
- Console output: JSON in production, colored human text on a dev tty.

Responsibilities
----------------
- Configure (and tear down) a console handler on the root logger.
- Enrich all log records with contextual fields:
  - event_name
  - component, operation
  - correlation_id
- Provide simple helper APIs:
  - get_logger()
  - LogContext (sync context manager)
  - set_log_context() / clear_log_context()

Design Decisions
----------------
- The emitter is a library: importing it never installs handlers. Host
  applications call `setup_logging()` when they want this formatting.
- JSONFormatter is the canonical representation.
- ContextFilter reads a ContextVar so nested dispatch passes see the context
  of the innermost emit and get the outer one back when it returns.
- Extra fields passed via `logger.info("msg", extra={...})` are merged into JSON.

Dependencies
------------
- priority_emitter.config.Config
"""

from __future__ import annotations

import json
import logging
import sys
import uuid
from contextvars import ContextVar, Token
from dataclasses import dataclass
from datetime import datetime, timezone
from logging import Logger
from typing import Any, Dict, Optional

from priority_emitter.config import Config


# ============================================================================
# Dispatch Context (ContextVars)
# ============================================================================

_log_context: ContextVar[Dict[str, Any]] = ContextVar("priority_emitter_log_context")


# ============================================================================
# Config / Environment
# ============================================================================


@dataclass(frozen=True, slots=True)
class LoggerConfig:
    """Configuration for the logging subsystem."""

    CONSOLE_FORMAT: str = "%(asctime)s | %(levelname)-8s | %(name)-30s | %(message)s"
    DATE_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    @property
    def environment(self) -> str:
        return Config.ENVIRONMENT

    @property
    def is_production(self) -> bool:
        return Config.is_production()

    @property
    def log_level(self) -> int:
        return getattr(logging, Config.LOG_LEVEL.upper(), logging.INFO)

    @property
    def use_json(self) -> bool:
        if Config.LOG_JSON is None:
            return self.is_production
        return bool(Config.LOG_JSON)

    @property
    def use_colors(self) -> bool:
        if self.is_production or self.use_json:
            return False
        return Config.LOG_COLORS and sys.stdout.isatty()


LOGGER_CONFIG = LoggerConfig()


# ============================================================================
# Filters & Formatters
# ============================================================================


class ContextFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:  # type: ignore[override]
        context: Dict[str, Any] = _log_context.get({})

        # An explicit extra={"event_name": ...} wins over the ambient context.
        if getattr(record, "event_name", None) is None:
            record.event_name = context.get("event_name", "N/A")
        record.correlation_id = context.get("correlation_id") or "N/A"
        record.component = context.get("component") or record.name.split(".", 1)[0]
        record.operation = context.get("operation", "N/A")

        return True


class ColoredFormatter(logging.Formatter):
    COLORS: Dict[str, str] = {
        "DEBUG": "\033[90m",
        "INFO": "\033[94m",
        "WARNING": "\033[93m",
        "ERROR": "\033[91m",
        "CRITICAL": "\033[91m\033[1m",
        "RESET": "\033[0m",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        original = record.levelname
        prefix = self.COLORS.get(original, "")
        reset = self.COLORS["RESET"] if prefix else ""

        if prefix:
            record.levelname = f"{prefix}{original}{reset}"

        try:
            return super().format(record)
        finally:
            record.levelname = original


class JSONFormatter(logging.Formatter):
    STANDARD_ATTRS = {
        "name",
        "msg",
        "args",
        "levelname",
        "levelno",
        "pathname",
        "filename",
        "module",
        "exc_info",
        "exc_text",
        "stack_info",
        "lineno",
        "funcName",
        "created",
        "msecs",
        "relativeCreated",
        "thread",
        "threadName",
        "processName",
        "process",
        "taskName",
    }

    CONTEXT_ATTRS = {
        "event_name",
        "correlation_id",
        "component",
        "operation",
    }

    def format(self, record: logging.LogRecord) -> str:  # type: ignore[override]
        created_dt = datetime.fromtimestamp(record.created, tz=timezone.utc)

        log_data: Dict[str, Any] = {
            "timestamp": created_dt.isoformat(),
            "level": record.levelname,
            "logger": record.name,
            "message": record.getMessage(),
            "module": record.module,
            "function": record.funcName,
            "line": record.lineno,
        }

        for attr in self.CONTEXT_ATTRS:
            value = getattr(record, attr, None)
            if value not in (None, "N/A"):
                log_data[attr] = value

        if record.exc_info:
            log_data["exception"] = self.formatException(record.exc_info)

        extra: Dict[str, Any] = {}
        for key, val in record.__dict__.items():
            if key in self.STANDARD_ATTRS or key in self.CONTEXT_ATTRS:
                continue
            if key.startswith("_"):
                continue
            if key in {"levelname", "name", "message", "asctime"}:
                continue
            extra[key] = val

        if extra:
            log_data["extra"] = extra

        return json.dumps(log_data, ensure_ascii=False, default=repr)


# ============================================================================
# Global Setup
# ============================================================================

_INITIALIZED_FLAG = "_priority_emitter_logging_initialized"


def _build_console_handler() -> logging.Handler:
    handler = logging.StreamHandler(sys.stdout)
    handler.setLevel(LOGGER_CONFIG.log_level)

    if LOGGER_CONFIG.use_json:
        handler.setFormatter(JSONFormatter())
    elif LOGGER_CONFIG.use_colors:
        handler.setFormatter(
            ColoredFormatter(
                fmt=LOGGER_CONFIG.CONSOLE_FORMAT,
                datefmt=LOGGER_CONFIG.DATE_FORMAT,
            )
        )
    else:
        handler.setFormatter(
            logging.Formatter(
                fmt=LOGGER_CONFIG.CONSOLE_FORMAT,
                datefmt=LOGGER_CONFIG.DATE_FORMAT,
            )
        )

    handler.addFilter(ContextFilter())
    return handler


def setup_logging() -> None:
    root = logging.getLogger()

    if getattr(root, _INITIALIZED_FLAG, False):
        return

    root.setLevel(LOGGER_CONFIG.log_level)
    root.addHandler(_build_console_handler())

    setattr(root, _INITIALIZED_FLAG, True)

    logging.getLogger(__name__).info(
        "Logging initialized",
        extra={
            "environment": LOGGER_CONFIG.environment,
            "log_level": logging.getLevelName(LOGGER_CONFIG.log_level),
            "json": LOGGER_CONFIG.use_json,
            "colors": LOGGER_CONFIG.use_colors,
        },
    )


def shutdown_logging() -> None:
    root = logging.getLogger()

    if not getattr(root, _INITIALIZED_FLAG, False):
        return

    logging.getLogger(__name__).info("Shutting down logging subsystem.")

    for handler in list(root.handlers):
        if not any(isinstance(f, ContextFilter) for f in handler.filters):
            continue
        handler.flush()
        handler.close()
        root.removeHandler(handler)

    setattr(root, _INITIALIZED_FLAG, False)


# ============================================================================
# Public API
# ============================================================================


def get_logger(name: str) -> Logger:
    return logging.getLogger(name)


class LogContext:
    """
    Push log fields for the duration of a ``with`` block.

    Fields are layered over the enclosing context, so a nested emit keeps the
    outer correlation id while replacing the event name.
    """

    def __init__(
        self,
        event_name: Optional[str] = None,
        component: Optional[str] = None,
        operation: Optional[str] = None,
        correlation_id: Optional[str] = None,
        **extra: Any,
    ) -> None:
        self.context: Dict[str, Any] = dict(extra)
        if event_name is not None:
            self.context["event_name"] = event_name
        if component is not None:
            self.context["component"] = component
        if operation is not None:
            self.context["operation"] = operation
        if correlation_id:
            self.context["correlation_id"] = correlation_id

        self._token: Optional[Token[Dict[str, Any]]] = None

    @staticmethod
    def _generate_correlation_id() -> str:
        return str(uuid.uuid4())[:8]

    def __enter__(self) -> "LogContext":
        merged = {**_log_context.get({}), **self.context}
        if "correlation_id" not in merged:
            merged["correlation_id"] = self._generate_correlation_id()
        self._token = _log_context.set(merged)
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        if self._token is not None:
            _log_context.reset(self._token)
            self._token = None


def get_log_context() -> Dict[str, Any]:
    return dict(_log_context.get({}))


def set_log_context(
    event_name: Optional[str] = None,
    component: Optional[str] = None,
    operation: Optional[str] = None,
    correlation_id: Optional[str] = None,
    **extra: Any,
) -> None:

    current = _log_context.get({}).copy()

    if event_name is not None:
        current["event_name"] = event_name
    if component is not None:
        current["component"] = component
    if operation is not None:
        current["operation"] = operation
    if correlation_id:
        current["correlation_id"] = correlation_id

    current.update(extra)
    _log_context.set(current)


def clear_log_context() -> None:
    _log_context.set({})
