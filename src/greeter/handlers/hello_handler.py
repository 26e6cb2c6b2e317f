"""
Hello Handler - per-invocation orchestration for the greeter API.

This module binds the request's correlation id to the logger, dispatches the
request through the router and converts every per-request failure into a
generic 500 response. Startup failures are not handled here.
"""

from typing import Any, Dict, Mapping, Optional

from aws_lambda_powertools.utilities.typing import LambdaContext
from pydantic import ValidationError

from greeter.handlers.app_context import AppContext
from greeter.models.input import Request
from greeter.models.output import Response, internal_error_response


def handle_request(request: Request, app: AppContext) -> Response:
    """
    Handle one request.

    Args:
        request: Parsed inbound request
        app: Shared application components

    Returns:
        The router's response unchanged, or a generic 500 response on failure
    """
    logger = app.logger.bind(correlation_id=request.request_id)

    try:
        logger.info('Request received', http_method=request.method, path=request.path)
        response = app.router.dispatch(request)
    except Exception as exc:
        logger.exception('Request failed', error=str(exc), error_type=type(exc).__name__)
        return internal_error_response(request.request_id)

    logger.info('Request completed', status_code=response.status_code)
    return response


def handle_event(event: Mapping[str, Any], context: Optional[LambdaContext], app: AppContext) -> Dict[str, Any]:
    """
    Handle one API Gateway proxy event.

    Args:
        event: Lambda event payload
        context: Lambda context object
        app: Shared application components

    Returns:
        API Gateway response
    """
    if app.config.POWERTOOLS_LOGGER_LOG_EVENT:
        app.logger.bind(correlation_id=_event_request_id(event, context)).debug('Inbound event', event=dict(event))

    try:
        request = Request.from_event(event, context)
    except ValidationError as exc:
        request_id = _event_request_id(event, context)
        logger = app.logger.bind(correlation_id=request_id)
        logger.info('Request received', http_method=None, path=event.get('path') or event.get('rawPath'))
        logger.error('Request failed', error=f'malformed event: {exc.error_count()} validation error(s)', error_type='ValidationError')
        return internal_error_response(request_id).to_api_gateway()

    return handle_request(request, app).to_api_gateway()


def _event_request_id(event: Mapping[str, Any], context: Optional[LambdaContext]) -> Optional[str]:
    request_context = event.get('requestContext') or {}
    request_id = request_context.get('requestId') if isinstance(request_context, Mapping) else None
    if request_id is None and context is not None:
        request_id = context.aws_request_id
    return request_id
