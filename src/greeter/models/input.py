"""
Input models for inbound requests using Pydantic.

This module defines the request model built from API Gateway proxy events.
Both REST API (payload v1) and HTTP API (payload v2) events are accepted.
"""

from typing import Annotated, Any, Dict, Mapping, Optional

from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import AliasChoices, AliasPath, BaseModel, ConfigDict, Field, field_validator


class Request(BaseModel):
    """An inbound HTTP request for one invocation."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    method: Annotated[str, Field(
        min_length=1,
        validation_alias=AliasChoices('method', 'httpMethod', AliasPath('requestContext', 'http', 'method')),
        description='HTTP method',
        examples=['GET'],
    )]

    path: Annotated[str, Field(
        validation_alias=AliasChoices('path', 'rawPath'),
        description='Request path',
        examples=['/'],
    )] = '/'

    headers: Annotated[Dict[str, str], Field(
        description='Request headers',
    )] = {}

    query_parameters: Annotated[Dict[str, str], Field(
        validation_alias=AliasChoices('query_parameters', 'queryStringParameters'),
        description='Query string parameters',
    )] = {}

    body: Annotated[Optional[str], Field(
        description='Raw request body',
    )] = None

    request_id: Annotated[Optional[str], Field(
        validation_alias=AliasChoices('request_id', AliasPath('requestContext', 'requestId')),
        description='Request identifier assigned by API Gateway',
        examples=['c6af9ac6-7b61-11e6-9a41-93e8deadbeef'],
    )] = None

    @field_validator('method')
    @classmethod
    def normalize_method(cls, v: str) -> str:
        return v.upper()

    @field_validator('path', mode='before')
    @classmethod
    def default_path(cls, v: Any) -> Any:
        return v or '/'

    @field_validator('headers', 'query_parameters', mode='before')
    @classmethod
    def null_mapping(cls, v: Any) -> Any:
        # API Gateway sends null rather than {} for absent headers and query strings
        return v or {}

    @classmethod
    def from_event(cls, event: Mapping[str, Any], context: Optional[LambdaContext] = None) -> 'Request':
        """
        Build a request from an API Gateway proxy event.

        Args:
            event: Lambda event payload
            context: Lambda context, supplies the request id when the event has none

        Returns:
            Parsed request

        Raises:
            pydantic.ValidationError: If the event carries no HTTP method
        """
        request = cls.model_validate(dict(event))
        if request.request_id is None and context is not None:
            request = request.model_copy(update={'request_id': context.aws_request_id})
        return request
