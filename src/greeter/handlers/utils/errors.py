"""
Error taxonomy for the greeter Lambda function.

Startup errors (configuration, logger, route table) are fatal to the
invocation and surface to the Lambda runtime. Per-request errors are
recovered by the orchestrator and turned into a generic 500 response.
Routing outcomes are expected control flow, converted to 404/405 responses.
"""

from typing import Iterable, Optional


class GreeterError(Exception):
    """Base exception class for greeter errors."""

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class ConfigurationError(GreeterError):
    """Raised when environment variables cannot be mapped onto the configuration model."""


class InvalidLogLevelError(GreeterError):
    """Raised when the configured log level is not a known severity."""

    def __init__(self, level: str):
        super().__init__(f"invalid log level: {level!r}")
        self.level = level


class RouteConfigurationError(GreeterError):
    """Raised when a route rule is malformed or registered twice."""


class StartupError(GreeterError):
    """Raised when the application context cannot be constructed."""


class HandlerError(GreeterError):
    """Raised when a route handler fails; the original exception is chained as __cause__."""

    def __init__(self, message: str, route: Optional[str] = None):
        super().__init__(message)
        self.route = route


class RoutingError(GreeterError):
    """Base class for requests that do not resolve to a route."""

    status_code = 500

    def __init__(self, message: str, method: str, path: str):
        super().__init__(message)
        self.method = method
        self.path = path


class NotFoundError(RoutingError):
    status_code = 404

    def __init__(self, method: str, path: str):
        super().__init__("Not found", method=method, path=path)


class MethodNotAllowedError(RoutingError):
    status_code = 405

    def __init__(self, method: str, path: str, allowed_methods: Iterable[str]):
        super().__init__("Method not allowed", method=method, path=path)
        self.allowed_methods = sorted(set(allowed_methods))
