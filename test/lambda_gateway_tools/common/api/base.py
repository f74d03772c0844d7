from dataclasses import dataclass
from http import HTTPStatus
from typing import Any, ClassVar, Dict, Generic, List, Optional, TypeVar

from aibs_informatics_core.models.base import SchemaModel
from aws_lambda_powertools.utilities.typing import LambdaContext

from lambda_gateway_tools.common.api.context import ApiGatewayContext
from lambda_gateway_tools.common.api.handler import ApiGatewayFunction
from lambda_gateway_tools.common.api.model import ApiGatewayProxyResponse

# ------------------------------
#           Models
# ------------------------------


@dataclass
class GreetRequest(SchemaModel):
    name: str


@dataclass
class GreetResponse(SchemaModel):
    message: str


@dataclass
class ResultResponse(SchemaModel):
    result: int


@dataclass
class ItemsRequest(SchemaModel):
    items: List[str]
    limit: Optional[int] = None


# ------------------------------
#          Functions
# ------------------------------


class GreetFunction(ApiGatewayFunction[GreetRequest, GreetResponse]):
    def execute(
        self,
        context: ApiGatewayContext[GreetRequest, GreetResponse],
        lambda_context: LambdaContext,
    ) -> ApiGatewayProxyResponse:
        self.log.info(f"Greeting {context.body.name}")
        return context.send(GreetResponse(message=f"Hello, {context.body.name}!"))


class CreatedResultFunction(ApiGatewayFunction[GreetRequest, ResultResponse]):
    def execute(
        self,
        context: ApiGatewayContext[GreetRequest, ResultResponse],
        lambda_context: LambdaContext,
    ) -> ApiGatewayProxyResponse:
        return context.add_header("X-Test", "1").set_status(201).send(ResultResponse(result=42))


class RaisingFunction(ApiGatewayFunction[GreetRequest, GreetResponse]):
    def execute(
        self,
        context: ApiGatewayContext[GreetRequest, GreetResponse],
        lambda_context: LambdaContext,
    ) -> ApiGatewayProxyResponse:
        raise ValueError(f"Cannot greet {context.body.name}")


class EchoFunction(ApiGatewayFunction[Dict[str, Any], Dict[str, Any]]):
    """Echoes the request body along with the request path and invocation id"""

    def execute(
        self,
        context: ApiGatewayContext[Dict[str, Any], Dict[str, Any]],
        lambda_context: LambdaContext,
    ) -> ApiGatewayProxyResponse:
        return context.add_header("X-Request-Id", lambda_context.aws_request_id).send(
            {"path": context.request.path, "body": context.body}, HTTPStatus.ACCEPTED
        )


API_REQUEST = TypeVar("API_REQUEST")
API_RESPONSE = TypeVar("API_RESPONSE")


class StatusFunction(
    ApiGatewayFunction[API_REQUEST, API_RESPONSE], Generic[API_REQUEST, API_RESPONSE]
):
    """Responds with whatever `build_response` returns, under a fixed status"""

    status_code: ClassVar[HTTPStatus] = HTTPStatus.OK

    def build_response(self, request: API_REQUEST) -> API_RESPONSE:
        raise NotImplementedError()

    def execute(
        self,
        context: ApiGatewayContext[API_REQUEST, API_RESPONSE],
        lambda_context: LambdaContext,
    ) -> ApiGatewayProxyResponse:
        return context.send(self.build_response(context.body), self.status_code)


class CreatedGreetFunction(StatusFunction[GreetRequest, Dict[str, str]]):
    status_code = HTTPStatus.CREATED

    def build_response(self, request: GreetRequest) -> Dict[str, str]:
        return {"greeting": f"Hello, {request.name}!"}


RESPONSE = TypeVar("RESPONSE")


class GreetingStatusFunction(StatusFunction[GreetRequest, RESPONSE], Generic[RESPONSE]):
    """Binds only the request type"""


class ListGreetingFunction(GreetingStatusFunction[List[str]]):
    def build_response(self, request: GreetRequest) -> List[str]:
        return [request.name]
