"""
Unit tests for Pydantic models.

This module tests parsing of API Gateway events into requests and the
serialisation of responses.
"""

import json

import pytest
from pydantic import ValidationError

from greeter.models.input import Request
from greeter.models.output import Response, internal_error_response, method_not_allowed_response, not_found_response


class TestRequest:
    """Test cases for Request model."""

    def test_from_rest_api_event(self, api_gateway_event):
        """Test parsing an API Gateway REST proxy event."""
        request = Request.from_event(api_gateway_event)

        assert request.method == "GET"
        assert request.path == "/"
        assert request.headers["User-Agent"] == "test-agent/1.0"
        assert request.query_parameters == {}
        assert request.body is None
        assert request.request_id == "test-request-id-123"

    def test_from_http_api_event(self, http_api_event):
        """Test parsing an API Gateway HTTP API (payload v2) event."""
        request = Request.from_event(http_api_event)

        assert request.method == "GET"
        assert request.path == "/"
        assert request.request_id == "http-api-request-id"

    def test_request_id_falls_back_to_lambda_context(self, api_gateway_event, lambda_context):
        """Test that the Lambda request id is used when the event has none."""
        del api_gateway_event["requestContext"]

        request = Request.from_event(api_gateway_event, lambda_context)

        assert request.request_id == "lambda-request-id-456"

    def test_event_request_id_wins_over_context(self, api_gateway_event, lambda_context):
        request = Request.from_event(api_gateway_event, lambda_context)

        assert request.request_id == "test-request-id-123"

    def test_missing_path_defaults_to_root(self):
        request = Request.from_event({"httpMethod": "GET", "path": None})

        assert request.path == "/"

    def test_method_is_upper_cased(self):
        request = Request(method="get", path="/")

        assert request.method == "GET"

    def test_missing_method_is_rejected(self):
        """Test that an event without an HTTP method fails validation."""
        with pytest.raises(ValidationError):
            Request.from_event({"path": "/"})

    def test_query_parameters(self):
        request = Request.from_event({
            "httpMethod": "GET",
            "path": "/",
            "queryStringParameters": {"name": "World"},
        })

        assert request.query_parameters == {"name": "World"}

    def test_request_is_immutable(self):
        request = Request(method="GET", path="/")

        with pytest.raises(ValidationError):
            request.path = "/other"


class TestResponse:
    """Test cases for Response model."""

    def test_text_response(self):
        response = Response.from_text("Hello, World!")

        assert response.status_code == 200
        assert response.body == "Hello, World!"
        assert response.headers["Content-Type"] == "text/plain"

    def test_json_response(self):
        response = Response.from_json({"message": "hi"}, status_code=201)

        assert response.status_code == 201
        assert json.loads(response.body) == {"message": "hi"}
        assert response.headers["Content-Type"] == "application/json"

    @pytest.mark.parametrize("status_code", [0, 99, 600, -1])
    def test_invalid_status_code(self, status_code):
        """Test that responses never carry an invalid status code."""
        with pytest.raises(ValidationError):
            Response(status_code=status_code)

    def test_to_api_gateway(self):
        response = Response.from_text("Hello, World!")

        assert response.to_api_gateway() == {
            "statusCode": 200,
            "headers": {"Content-Type": "text/plain"},
            "body": "Hello, World!",
            "isBase64Encoded": False,
        }

    def test_not_found_response(self):
        response = not_found_response()

        assert response.status_code == 404
        assert json.loads(response.body)["message"] == "Not found"

    def test_method_not_allowed_response(self):
        response = method_not_allowed_response(["GET", "PUT"])

        assert response.status_code == 405
        assert response.headers["Allow"] == "GET, PUT"

    def test_internal_error_response(self):
        response = internal_error_response("req-1")

        assert response.status_code == 500
        assert json.loads(response.body) == {"message": "Internal server error", "request_id": "req-1"}

    def test_internal_error_response_without_request_id(self):
        body = json.loads(internal_error_response().body)

        assert body["request_id"] == "unknown"
