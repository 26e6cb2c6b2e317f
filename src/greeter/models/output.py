"""
Output models for API responses using Pydantic.

This module defines the response model returned by route handlers and its
serialisation to the API Gateway proxy response format.
"""

import json
from typing import Annotated, Any, Dict, Optional

from pydantic import BaseModel, ConfigDict, Field

TEXT_CONTENT_TYPE = 'text/plain'
JSON_CONTENT_TYPE = 'application/json'


class Response(BaseModel):
    """HTTP response produced by a route handler."""

    model_config = ConfigDict(frozen=True)

    status_code: Annotated[int, Field(
        ge=100,
        le=599,
        description='HTTP status code',
        examples=[200, 404, 500],
    )]

    body: Annotated[str, Field(
        description='Response body',
        examples=['Hello, World!'],
    )] = ''

    headers: Annotated[Dict[str, str], Field(
        description='Response headers',
    )] = {}

    @classmethod
    def from_text(cls, body: str, status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> 'Response':
        return cls(
            status_code=status_code,
            body=body,
            headers={'Content-Type': TEXT_CONTENT_TYPE, **(headers or {})},
        )

    @classmethod
    def from_json(cls, payload: Any, status_code: int = 200, headers: Optional[Dict[str, str]] = None) -> 'Response':
        return cls(
            status_code=status_code,
            body=json.dumps(payload),
            headers={'Content-Type': JSON_CONTENT_TYPE, **(headers or {})},
        )

    def to_api_gateway(self) -> Dict[str, Any]:
        """Serialise to the API Gateway proxy integration response format."""
        return {
            'statusCode': self.status_code,
            'headers': dict(self.headers),
            'body': self.body,
            'isBase64Encoded': False,
        }


def not_found_response() -> Response:
    return Response.from_json({'statusCode': 404, 'message': 'Not found'}, status_code=404)


def method_not_allowed_response(allowed_methods: list) -> Response:
    return Response.from_json(
        {'statusCode': 405, 'message': 'Method not allowed'},
        status_code=405,
        headers={'Allow': ', '.join(allowed_methods)},
    )


def internal_error_response(request_id: Optional[str] = None) -> Response:
    """Generic failure response; never carries internal error detail."""
    return Response.from_json(
        {'message': 'Internal server error', 'request_id': request_id or 'unknown'},
        status_code=500,
    )
