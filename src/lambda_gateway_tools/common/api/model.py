"""Response model returned to API Gateway."""

__all__ = [
    "ApiGatewayProxyResponse",
    "StatusCode",
]

from dataclasses import dataclass, field
from http import HTTPStatus
from typing import Any, Dict, Mapping, Optional, Union

StatusCode = Union[int, HTTPStatus]


@dataclass
class ApiGatewayProxyResponse:
    """An API Gateway (REST proxy integration) response.

    Attributes:
        status_code: The HTTP status code. Defaults to 200.
        headers: Response headers. Names are unique and the last write wins.
        body: The serialized response body, set when the response is sent.
    """

    status_code: int = HTTPStatus.OK.value
    headers: Dict[str, str] = field(default_factory=dict)
    body: Optional[str] = None

    def __post_init__(self):
        self.status_code = int(self.status_code)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to the dictionary shape the Lambda runtime hands back to API Gateway."""
        return {
            "statusCode": self.status_code,
            "headers": dict(self.headers),
            "body": self.body,
            "isBase64Encoded": False,
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ApiGatewayProxyResponse":
        return cls(
            status_code=data.get("statusCode", HTTPStatus.OK.value),
            headers=dict(data.get("headers") or {}),
            body=data.get("body"),
        )
