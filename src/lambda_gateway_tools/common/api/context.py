"""Request/response context for API Gateway backed Lambda functions.

An ``ApiGatewayContext`` pairs the typed, deserialized body of one incoming
request with the response that is built while handling it.
"""

__all__ = [
    "ApiGatewayContext",
    "ApiGatewayEvent",
    "as_proxy_event",
    "get_event_body",
    "receive_request",
    "send_response",
]

import base64
import logging
from http import HTTPStatus
from typing import Any, Dict, Generic, Mapping, Optional, Type, TypeVar, Union

from aws_lambda_powertools.utilities.data_classes import APIGatewayProxyEvent

from lambda_gateway_tools.common.api.model import ApiGatewayProxyResponse, StatusCode
from lambda_gateway_tools.common.exceptions import DeserializationError
from lambda_gateway_tools.common.serialization import deserialize_json, serialize_json

logger = logging.getLogger(__name__)

API_REQUEST = TypeVar("API_REQUEST")
API_RESPONSE = TypeVar("API_RESPONSE")

ApiGatewayEvent = Union[APIGatewayProxyEvent, Dict[str, Any]]


def as_proxy_event(event: ApiGatewayEvent) -> APIGatewayProxyEvent:
    if isinstance(event, APIGatewayProxyEvent):
        return event
    return APIGatewayProxyEvent(event)


def get_event_body(event: APIGatewayProxyEvent) -> Optional[Union[str, bytes]]:
    body = event.get("body")
    if body and event.get("isBase64Encoded"):
        try:
            return base64.b64decode(body, validate=True)
        except ValueError as e:
            raise DeserializationError(f"Body is not valid base64: {e}") from e
    return body


def receive_request(event: ApiGatewayEvent, request_cls: Type[API_REQUEST]) -> API_REQUEST:
    """Deserialize the body of an API Gateway event without building a context.

    Args:
        event (ApiGatewayEvent): The incoming API Gateway event.
        request_cls (Type[API_REQUEST]): The expected type of the request body.

    Raises:
        DeserializationError: If the body is missing, malformed or of the wrong shape.

    Returns:
        API_REQUEST: The deserialized body.
    """
    return deserialize_json(get_event_body(as_proxy_event(event)), request_cls)


def send_response(
    payload: Any,
    status_code: StatusCode = HTTPStatus.OK,
    headers: Optional[Mapping[str, str]] = None,
) -> ApiGatewayProxyResponse:
    """Build a standalone response.

    Args:
        payload (Any): The value to serialize as the response body.
        status_code (StatusCode): The HTTP status code. Defaults to 200.
        headers (Optional[Mapping[str, str]]): Response headers. None means no headers.

    Raises:
        SerializationError: If the payload cannot be encoded as JSON.

    Returns:
        ApiGatewayProxyResponse: The response to hand back to API Gateway.
    """
    return ApiGatewayProxyResponse(
        status_code=status_code,
        headers=dict(headers or {}),
        body=serialize_json(payload),
    )


class ApiGatewayContext(Generic[API_REQUEST, API_RESPONSE]):
    """Context for a single API Gateway request/response cycle.

    The request body is deserialized once, when the context is created. The
    response starts out with a 200 status and no headers, and is completed by
    ``send``. Builder methods return the context so calls can be chained::

        return context.add_header("X-Test", "1").set_status(201).send({"result": 42})

    Attributes:
        request: The incoming API Gateway event. Passed through untouched.
        body: The deserialized request body.
        response: The response being built.
    """

    def __init__(self, event: ApiGatewayEvent, request_cls: Type[API_REQUEST]):
        self._request = as_proxy_event(event)
        self._body: API_REQUEST = deserialize_json(get_event_body(self._request), request_cls)
        self.response = ApiGatewayProxyResponse()

    @classmethod
    def from_api_gateway(
        cls, event: ApiGatewayEvent, request_cls: Type[API_REQUEST]
    ) -> "ApiGatewayContext[API_REQUEST, API_RESPONSE]":
        return cls(event, request_cls)

    @property
    def request(self) -> APIGatewayProxyEvent:
        return self._request

    @property
    def body(self) -> API_REQUEST:
        return self._body

    def add_header(self, name: str, value: Any) -> "ApiGatewayContext[API_REQUEST, API_RESPONSE]":
        """Add a header to the response, replacing any existing value.

        Non-string values are serialized to JSON first.

        Args:
            name (str): The header name.
            value (Any): The header value.

        Raises:
            SerializationError: If a non-string value cannot be encoded as JSON.

        Returns:
            The current context.
        """
        if not isinstance(value, str):
            value = serialize_json(value)
        self.response.headers[name] = value
        return self

    def set_status(
        self, status_code: StatusCode
    ) -> "ApiGatewayContext[API_REQUEST, API_RESPONSE]":
        """Overwrite the response status code.

        Args:
            status_code (StatusCode): The HTTP status code to send to the client.

        Returns:
            The current context.
        """
        self.response.status_code = int(status_code)
        return self

    def send(
        self, payload: API_RESPONSE, status_code: Optional[StatusCode] = None
    ) -> ApiGatewayProxyResponse:
        """Serialize the payload into the response body and return the response.

        Args:
            payload (API_RESPONSE): The value to send as the response body.
            status_code (Optional[StatusCode]): Overrides the current status code if given.

        Raises:
            SerializationError: If the payload cannot be encoded as JSON.

        Returns:
            ApiGatewayProxyResponse: The completed response.
        """
        if status_code is not None:
            self.set_status(status_code)
        self.response.body = serialize_json(payload)
        logger.debug(f"Sending response with status {self.response.status_code}")
        return self.response

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"method={self._request.get('httpMethod')}, "
            f"path={self._request.get('path')}, "
            f"status={self.response.status_code}"
            ")"
        )
