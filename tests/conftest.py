"""
Pytest configuration and shared fixtures for the greeter function.

This module provides common test fixtures used across the unit tests and the
entry point tests.
"""

import io
import json
import os
from typing import Any, Dict, List
from unittest.mock import Mock

import pytest
from aws_lambda_powertools.utilities.typing import LambdaContext

# Set before the handler modules create the Powertools tracer and metrics
os.environ.update({
    "AWS_DEFAULT_REGION": "us-east-1",
    "POWERTOOLS_SERVICE_NAME": "test-greeter",
    "POWERTOOLS_METRICS_NAMESPACE": "TestGreeter",
    "POWERTOOLS_TRACE_DISABLED": "true",  # Disable X-Ray in tests
    "LOG_LEVEL": "DEBUG",
})

from greeter.handlers.app_context import AppContext, build_app_context, reset_app_context  # noqa: E402

TEST_ENVIRON = {
    "LOG_LEVEL": "debug",
    "POWERTOOLS_SERVICE_NAME": "test-greeter",
}


@pytest.fixture
def api_gateway_event() -> Dict[str, Any]:
    """Create a sample API Gateway REST event for GET /."""
    return {
        "resource": "/",
        "path": "/",
        "httpMethod": "GET",
        "headers": {
            "Accept": "text/plain",
            "User-Agent": "test-agent/1.0",
        },
        "multiValueHeaders": {},
        "queryStringParameters": None,
        "multiValueQueryStringParameters": None,
        "pathParameters": None,
        "stageVariables": None,
        "requestContext": {
            "requestId": "test-request-id-123",
            "accountId": "123456789012",
            "stage": "test",
            "resourcePath": "/",
            "httpMethod": "GET",
            "path": "/test/",
            "protocol": "HTTP/1.1",
            "requestTime": "01/Jan/2024:12:00:00 +0000",
            "requestTimeEpoch": 1704110400000,
            "identity": {
                "sourceIp": "127.0.0.1",
                "userAgent": "test-agent/1.0",
            },
        },
        "body": None,
        "isBase64Encoded": False,
    }


@pytest.fixture
def http_api_event() -> Dict[str, Any]:
    """Create a sample API Gateway HTTP API (payload v2) event for GET /."""
    return {
        "version": "2.0",
        "routeKey": "$default",
        "rawPath": "/",
        "rawQueryString": "",
        "headers": {"accept": "text/plain"},
        "requestContext": {
            "accountId": "123456789012",
            "apiId": "api-id",
            "http": {
                "method": "GET",
                "path": "/",
                "protocol": "HTTP/1.1",
                "sourceIp": "127.0.0.1",
                "userAgent": "test-agent/1.0",
            },
            "requestId": "http-api-request-id",
            "stage": "$default",
        },
        "isBase64Encoded": False,
    }


@pytest.fixture
def lambda_context():
    """Create a mock Lambda context for testing."""
    context = Mock(spec=LambdaContext)
    context.function_name = "test-greeter-function"
    context.function_version = "$LATEST"
    context.invoked_function_arn = "arn:aws:lambda:us-east-1:123456789012:function:test-greeter-function"
    context.memory_limit_in_mb = 128
    context.aws_request_id = "lambda-request-id-456"
    context.log_group_name = "/aws/lambda/test-greeter-function"
    context.log_stream_name = "2024/01/01/[$LATEST]test123"
    context.get_remaining_time_in_millis.return_value = 30000
    return context


@pytest.fixture
def log_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def app(log_stream) -> AppContext:
    """Application context logging at debug level into log_stream."""
    return build_app_context(environ=TEST_ENVIRON, stream=log_stream)


def read_records(stream: io.StringIO) -> List[Dict[str, Any]]:
    """Parse the JSON log records written to a stream."""
    return [json.loads(line) for line in stream.getvalue().splitlines() if line.strip()]


@pytest.fixture
def log_records(log_stream):
    """Callable returning the records written to log_stream so far."""
    return lambda: read_records(log_stream)


# Pytest configuration
def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")


def pytest_collection_modifyitems(config, items):
    """Automatically mark tests based on their location."""
    for item in items:
        if "unit" in str(item.fspath):
            item.add_marker(pytest.mark.unit)


@pytest.fixture(autouse=True)
def reset_singletons():
    """Reset the process-wide application context between tests."""
    reset_app_context()
    yield
    reset_app_context()
