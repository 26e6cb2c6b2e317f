"""
Centralized observability utilities for the greeter Lambda function.

This module provides the structured logger factory together with the configured
AWS Lambda Powertools tracer and metrics instances.
"""

import logging
import sys
from typing import IO, Any, Dict, Optional

from aws_lambda_powertools import Logger
from aws_lambda_powertools.logging.formatter import RESERVED_LOG_ATTRS
from aws_lambda_powertools.metrics import Metrics
from aws_lambda_powertools.tracing import Tracer

from greeter.handlers.models.env_vars import Configuration
from greeter.handlers.utils.errors import InvalidLogLevelError

# Metrics namespace for business KPIs
METRICS_NAMESPACE = 'Greeter'

LOG_LEVELS: Dict[str, int] = {
    'debug': logging.DEBUG,
    'info': logging.INFO,
    'warn': logging.WARNING,
    'error': logging.ERROR,
    'fatal': logging.CRITICAL,
}

LOG_RECORD_ORDER = ['timestamp', 'level', 'message', 'correlation_id']

# Field names the logging module refuses in `extra` or the Powertools formatter drops
RESERVED_FIELDS = frozenset(vars(logging.makeLogRecord({}))) | {'message', 'asctime'} | frozenset(RESERVED_LOG_ATTRS)

# Service name can be set by environment variable "POWERTOOLS_SERVICE_NAME"
# Disabled by setting POWERTOOLS_TRACE_DISABLED to "True"
tracer: Tracer = Tracer()

# Namespace and service name can be set by environment variables:
# - POWERTOOLS_METRICS_NAMESPACE
# - POWERTOOLS_SERVICE_NAME
metrics = Metrics(namespace=METRICS_NAMESPACE)


def parse_log_level(level: str) -> int:
    """Map a level name (debug/info/warn/error/fatal, any case) to a logging level."""
    name = level.strip().lower() or 'info'
    try:
        return LOG_LEVELS[name]
    except KeyError:
        raise InvalidLogLevelError(level) from None


def safe_fields(fields: Dict[str, Any]) -> Dict[str, Any]:
    """Rename fields that collide with log record attributes, e.g. name -> name_."""
    return {f'{key}_' if key in RESERVED_FIELDS else key: value for key, value in fields.items()}


class StructuredLogger:
    """
    Powertools logger with fixed per-logger fields.

    Child loggers created with bind() share the parent's Powertools logger but
    carry their own copy of the fixed fields, so binding never changes the parent.
    """

    def __init__(self, logger: Logger, fields: Optional[Dict[str, Any]] = None):
        self._logger = logger
        self._fields: Dict[str, Any] = safe_fields(fields or {})

    @property
    def level(self) -> int:
        return self._logger.log_level

    @property
    def fields(self) -> Dict[str, Any]:
        return dict(self._fields)

    def bind(self, **fields: Any) -> 'StructuredLogger':
        return StructuredLogger(self._logger, {**self._fields, **safe_fields(fields)})

    def is_enabled_for(self, level: int) -> bool:
        return self._logger.isEnabledFor(level)

    def debug(self, msg: str, **fields: Any) -> None:
        self._log('debug', msg, fields)

    def info(self, msg: str, **fields: Any) -> None:
        self._log('info', msg, fields)

    def warning(self, msg: str, **fields: Any) -> None:
        self._log('warning', msg, fields)

    def error(self, msg: str, **fields: Any) -> None:
        self._log('error', msg, fields)

    def critical(self, msg: str, **fields: Any) -> None:
        self._log('critical', msg, fields)

    def exception(self, msg: str, **fields: Any) -> None:
        """Log at error level and attach the active exception's traceback."""
        self._log('exception', msg, fields)

    def flush(self) -> None:
        self._logger.registered_handler.flush()

    def _log(self, method: str, msg: str, fields: Dict[str, Any]) -> None:
        # stacklevel points "location" at the caller of debug()/info()/...
        getattr(self._logger, method)(msg, stacklevel=4, extra={**self._fields, **safe_fields(fields)})


def build_logger(config: Configuration, stream: Optional[IO[str]] = None) -> StructuredLogger:
    """
    Build a structured logger from the handler configuration.

    Powertools keeps one logger per service name. Building again for the same
    service reapplies the level and stream to it, so the latest build wins.

    Args:
        config: Handler configuration providing the level and service name
        stream: Output stream, standard output when omitted

    Returns:
        Logger writing one JSON record per line

    Raises:
        InvalidLogLevelError: If the configured level is unknown
    """
    level = parse_log_level(config.LOG_LEVEL)
    stream = stream if stream is not None else sys.stdout

    logger = Logger(
        service=config.POWERTOOLS_SERVICE_NAME,
        level=level,
        stream=stream,
        log_record_order=LOG_RECORD_ORDER,
        utc=True,
        use_rfc3339=True,
    )

    # a reused service logger keeps its first level and stream otherwise
    logger.setLevel(level)
    handler = logger.registered_handler
    handler.acquire()
    try:
        handler.stream = stream
    finally:
        handler.release()

    return StructuredLogger(logger)
