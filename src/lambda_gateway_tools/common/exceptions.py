"""Exceptions raised while adapting API Gateway events.

None of these are caught inside this package. They propagate to the Lambda
runtime (or to whatever invoked the handler) unchanged.
"""

__all__ = [
    "GatewayToolsError",
    "DeserializationError",
    "SerializationError",
]

from aibs_informatics_core.exceptions import ApplicationException


class GatewayToolsError(ApplicationException):
    """Base class for errors raised by lambda_gateway_tools."""


class DeserializationError(GatewayToolsError):
    """The request body is missing, malformed, or does not match the expected type."""


class SerializationError(GatewayToolsError):
    """A value could not be encoded as JSON."""
