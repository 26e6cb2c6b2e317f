"""
Route table for the greeter API.
"""

from greeter.handlers.utils.router import Router
from greeter.models.input import Request
from greeter.models.output import Response

# API path constants
ROOT_PATH = '/'

GREETING = 'Hello, World!'


def hello(request: Request) -> Response:
    return Response.from_text(GREETING)


def build_router() -> Router:
    """Build the router with every route of the API registered."""
    router = Router()
    router.register('GET', ROOT_PATH, hello)
    return router
