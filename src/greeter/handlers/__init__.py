"""
AWS Lambda Handlers Module.

1. Composition root (app_context): builds configuration, logger and router once per process
2. Orchestration (hello_handler): per-invocation logging, dispatch and error mapping
3. Routes (routes): the API's route table

Shared utilities live in utils: structured logging, tracing and metrics
(observability), the path router (router) and the error taxonomy (errors).
"""

from greeter.handlers.utils.observability import metrics, tracer
from greeter.handlers.utils.router import Router

__all__ = [
    "Router",
    "metrics",
    "tracer",
]
