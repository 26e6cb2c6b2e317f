"""
Data models for the greeter function.

- input: Request parsed from API Gateway proxy events
- output: Response and its API Gateway serialisation
"""

from greeter.models.input import Request
from greeter.models.output import Response

__all__ = [
    "Request",
    "Response",
]
