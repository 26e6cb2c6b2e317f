"""
Path-based request router for the greeter Lambda function.

Rules use the same syntax as the Powertools REST resolver: literal segments and
named parameters written ``<name>``, e.g. ``/greetings/<name>``. A parameter
matches exactly one non-empty path segment and is passed to the handler as a
keyword argument.

When several routes match a request, the one with the fewest parameter segments
wins; ties go to the route registered first. A path that matches under another
method yields 405, a path that matches nothing yields 404.
"""

import re
from typing import Any, Callable, Dict, List, Optional, Tuple

from greeter.handlers.utils.errors import (
    HandlerError,
    MethodNotAllowedError,
    NotFoundError,
    RouteConfigurationError,
    RoutingError,
)
from greeter.models.input import Request
from greeter.models.output import Response, method_not_allowed_response, not_found_response

RouteHandler = Callable[..., Any]

_PARAMETER_SEGMENT = re.compile(r'^<(?P<name>[A-Za-z_]\w*)>$')


class Route:
    """A registered (method, rule) pair and its handler."""

    def __init__(self, method: str, rule: str, func: RouteHandler, order: int):
        self.method = method.upper()
        self.rule = rule
        self.func = func
        self.order = order
        self.parameters: List[str] = []

        parts = []
        for segment in _split(rule):
            parameter = _PARAMETER_SEGMENT.match(segment)
            if parameter:
                name = parameter.group('name')
                if name in self.parameters:
                    raise RouteConfigurationError(f'duplicate parameter <{name}> in rule {rule!r}')
                self.parameters.append(name)
                parts.append(f'(?P<{name}>[^/\n]+)')
            elif '<' in segment or '>' in segment:
                raise RouteConfigurationError(f'malformed segment {segment!r} in rule {rule!r}')
            else:
                parts.append(re.escape(segment))
        self._pattern = re.compile('/' + '/'.join(parts))

    @property
    def key(self) -> Tuple[str, str]:
        """Method plus rule shape; rules differing only in parameter names share a key."""
        shape = '/'.join('<>' if _PARAMETER_SEGMENT.match(s) else s for s in _split(self.rule))
        return self.method, '/' + shape

    @property
    def specificity(self) -> Tuple[int, int]:
        return len(self.parameters), self.order

    def match(self, path: str) -> Optional[Dict[str, str]]:
        found = self._pattern.fullmatch(path)
        return found.groupdict() if found else None

    def __repr__(self) -> str:
        return f'Route({self.method} {self.rule})'


class Router:
    """Registry of routes with deterministic dispatch."""

    def __init__(self):
        self._routes: List[Route] = []
        self._keys: Dict[Tuple[str, str], Route] = {}

    @property
    def routes(self) -> List[Route]:
        return list(self._routes)

    def register(self, method: str, rule: str, func: RouteHandler) -> Route:
        """
        Register a handler for a method and path rule.

        Raises:
            RouteConfigurationError: If the rule is malformed or the pair is already registered
        """
        if not rule.startswith('/'):
            raise RouteConfigurationError(f'rule must start with "/": {rule!r}')
        route = Route(method, rule, func, order=len(self._routes))
        existing = self._keys.get(route.key)
        if existing is not None:
            raise RouteConfigurationError(f'{route.method} {rule} conflicts with {existing.method} {existing.rule}')
        self._keys[route.key] = route
        self._routes.append(route)
        return route

    def route(self, rule: str, method: str = 'GET') -> Callable[[RouteHandler], RouteHandler]:
        def register_route(func: RouteHandler) -> RouteHandler:
            self.register(method, rule, func)
            return func

        return register_route

    def get(self, rule: str) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(rule, 'GET')

    def post(self, rule: str) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(rule, 'POST')

    def put(self, rule: str) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(rule, 'PUT')

    def patch(self, rule: str) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(rule, 'PATCH')

    def delete(self, rule: str) -> Callable[[RouteHandler], RouteHandler]:
        return self.route(rule, 'DELETE')

    def resolve(self, request: Request) -> Tuple[Route, Dict[str, str]]:
        """
        Find the route serving a request.

        Returns:
            The best-matching route and its extracted path parameters

        Raises:
            NotFoundError: If no rule matches the path
            MethodNotAllowedError: If rules match the path but none for this method
        """
        path = request.path or '/'
        method = request.method.upper()

        matches = []
        for route in self._routes:
            params = route.match(path)
            if params is not None:
                matches.append((route, params))

        if not matches:
            raise NotFoundError(method=method, path=path)

        candidates = [(route, params) for route, params in matches if route.method == method]
        if not candidates:
            raise MethodNotAllowedError(method=method, path=path, allowed_methods=[route.method for route, _ in matches])

        return min(candidates, key=lambda candidate: candidate[0].specificity)

    def dispatch(self, request: Request) -> Response:
        """
        Execute the handler of the best-matching route.

        Unmatched requests get a synthesized 404 or 405 response.

        Raises:
            HandlerError: If the handler raises or returns something that is not a response
        """
        try:
            route, params = self.resolve(request)
        except MethodNotAllowedError as exc:
            return method_not_allowed_response(exc.allowed_methods)
        except RoutingError:
            return not_found_response()

        try:
            result = route.func(request, **params)
        except Exception as exc:
            raise HandlerError(f'{route.method} {route.rule} failed: {exc}', route=route.rule) from exc

        return _to_response(result, route)


def _split(rule: str) -> List[str]:
    stripped = rule[1:] if rule.startswith('/') else rule
    return stripped.split('/') if stripped else []


def _to_response(result: Any, route: Route) -> Response:
    if isinstance(result, Response):
        return result
    if isinstance(result, dict):
        return Response.from_json(result)
    if isinstance(result, str):
        return Response.from_text(result)
    raise HandlerError(
        f'{route.method} {route.rule} returned {type(result).__name__}, expected Response',
        route=route.rule,
    )
