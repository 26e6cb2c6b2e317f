"""
Composition root for the greeter Lambda function.

Configuration, logger and router are built here and handed explicitly to the
orchestrator. A warm Lambda execution environment reuses the same instances
across invocations; they are read-only after construction.
"""

import threading
from dataclasses import dataclass
from typing import IO, Mapping, Optional

from greeter.handlers.models.env_vars import Configuration, load_configuration
from greeter.handlers.routes import build_router
from greeter.handlers.utils.errors import (
    ConfigurationError,
    InvalidLogLevelError,
    RouteConfigurationError,
    StartupError,
)
from greeter.handlers.utils.observability import StructuredLogger, build_logger
from greeter.handlers.utils.router import Router


@dataclass(frozen=True)
class AppContext:
    """Shared, read-only components for all invocations of one process."""

    config: Configuration
    logger: StructuredLogger
    router: Router


# Process-wide instance, built on first invocation
_app_context: Optional[AppContext] = None
_app_context_lock = threading.Lock()


def build_app_context(environ: Optional[Mapping[str, str]] = None, stream: Optional[IO[str]] = None) -> AppContext:
    """
    Build configuration, logger and router.

    Args:
        environ: Explicit environment mapping, the process environment when omitted
        stream: Log output stream, standard output when omitted

    Raises:
        StartupError: If any component cannot be constructed
    """
    try:
        config = load_configuration(environ)
        logger = build_logger(config, stream=stream)
        router = build_router()
    except (ConfigurationError, InvalidLogLevelError, RouteConfigurationError) as exc:
        raise StartupError(f'application startup failed: {exc.message}') from exc

    logger.debug('Application context initialized', log_level=config.LOG_LEVEL)
    return AppContext(config=config, logger=logger, router=router)


def get_app_context() -> AppContext:
    """Return the process-wide context, building it on first use."""
    global _app_context

    if _app_context is None:
        with _app_context_lock:
            if _app_context is None:
                _app_context = build_app_context()

    return _app_context


def reset_app_context() -> None:
    """Drop the process-wide context so the next invocation rebuilds it."""
    global _app_context

    with _app_context_lock:
        _app_context = None
