"""
Greeter Lambda function.

A single-route HTTP function behind API Gateway:

- handlers: composition root, orchestration, routing and observability
- models: request and response models

Configuration is read from environment variables, logs are JSON records on
standard output, and tracing and metrics go through AWS Lambda Powertools.
"""

__version__ = "1.0.0"

from greeter.handlers.app_context import AppContext, build_app_context, get_app_context
from greeter.handlers.hello_handler import handle_event, handle_request
from greeter.models.input import Request
from greeter.models.output import Response

__all__ = [
    "AppContext",
    "Request",
    "Response",
    "build_app_context",
    "get_app_context",
    "handle_event",
    "handle_request",
]
