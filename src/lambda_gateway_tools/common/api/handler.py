"""Base class for Lambda functions invoked through API Gateway.

Provides ``ApiGatewayFunction``, a strongly-typed function contract that
turns an API Gateway proxy event into an ``ApiGatewayContext`` and delegates
to a user supplied ``execute`` method.
"""

__all__ = [
    "ApiGatewayFunction",
    "LambdaEvent",
    "LambdaHandlerType",
]

from dataclasses import dataclass
from typing import (
    Any,
    Callable,
    ClassVar,
    Dict,
    Generic,
    Optional,
    Tuple,
    TypeVar,
    Union,
    get_args,
    get_origin,
)

from aibs_informatics_core.utils.json import JSON
from aws_lambda_powertools.utilities.typing import LambdaContext

from lambda_gateway_tools.common.api.context import ApiGatewayContext, ApiGatewayEvent
from lambda_gateway_tools.common.api.model import ApiGatewayProxyResponse
from lambda_gateway_tools.common.logging import LoggingMixins

LambdaEvent = Union[JSON]  # type: ignore  # https://github.com/python/mypy/issues/7866

LambdaHandlerType = Callable[[LambdaEvent, LambdaContext], Dict[str, Any]]

API_REQUEST = TypeVar("API_REQUEST")
API_RESPONSE = TypeVar("API_RESPONSE")


def _resolve_function_type_args(
    klass: type, substitutions: Dict[Any, Any]
) -> Optional[Tuple[Any, ...]]:
    """Find the arguments bound to ``ApiGatewayFunction[...]`` in the bases of ``klass``.

    Type variables of intermediate generic classes are substituted on the way
    up, so ``Concrete(Base[Req, Resp])`` with ``Base(ApiGatewayFunction[REQ, RESP])``
    resolves to ``(Req, Resp)``.
    """
    for base in klass.__dict__.get("__orig_bases__", klass.__bases__):
        origin = get_origin(base) or base
        if not (isinstance(origin, type) and issubclass(origin, ApiGatewayFunction)):
            continue
        args = tuple(substitutions.get(_, _) for _ in get_args(base))
        if origin is ApiGatewayFunction:
            return args if len(args) == 2 else None
        base_substitutions = dict(zip(getattr(origin, "__parameters__", ()), args))
        resolved = _resolve_function_type_args(origin, base_substitutions)
        if resolved is not None:
            return resolved
    return None


@dataclass  # type: ignore[misc] # mypy #5374
class ApiGatewayFunction(LoggingMixins, Generic[API_REQUEST, API_RESPONSE]):
    """Base class for strongly-typed API Gateway Lambda functions.

    Subclasses declare the request and response body types as generic
    parameters and implement ``execute``. The request body is deserialized into
    ``API_REQUEST`` before ``execute`` is called. Errors are never caught here:
    a malformed body or an exception raised by ``execute`` reaches the Lambda
    runtime unchanged.

    Type Parameters:
        API_REQUEST: The request body type (a ``ModelProtocol`` class or a JSON type).
        API_RESPONSE: The response body type.

    Example:
        ```python
        @dataclass
        class GreetRequest(SchemaModel):
            name: str

        @dataclass
        class GreetResponse(SchemaModel):
            message: str

        class GreetFunction(ApiGatewayFunction[GreetRequest, GreetResponse]):
            def execute(self, context, lambda_context):
                return context.send(GreetResponse(message=f"Hello, {context.body.name}!"))

        handler = GreetFunction.get_handler()
        ```
    """

    # Whether the incoming event is logged when the Lambda context is injected
    log_event: ClassVar[bool] = False

    def execute(
        self,
        context: ApiGatewayContext[API_REQUEST, API_RESPONSE],
        lambda_context: LambdaContext,
    ) -> ApiGatewayProxyResponse:
        """Process one request.

        Read ``context.body``, populate the response through the builder
        methods of ``context`` and return it, usually via ``context.send(...)``.

        Args:
            context (ApiGatewayContext[API_REQUEST, API_RESPONSE]): The request/response context.
            lambda_context (LambdaContext): The AWS Lambda execution context.

        Returns:
            ApiGatewayProxyResponse: The response to return to API Gateway.
        """
        raise NotImplementedError(f"{self.__class__.__name__} must implement execute()")

    def handle(
        self, event: ApiGatewayEvent, lambda_context: LambdaContext
    ) -> ApiGatewayProxyResponse:
        """Wrap an API Gateway event into a context and delegate to ``execute``.

        Args:
            event (ApiGatewayEvent): The API Gateway proxy event.
            lambda_context (LambdaContext): The AWS Lambda execution context.

        Raises:
            DeserializationError: If the request body cannot be deserialized.

        Returns:
            ApiGatewayProxyResponse: Whatever ``execute`` returns.
        """
        self.lambda_context = lambda_context
        context: ApiGatewayContext[API_REQUEST, API_RESPONSE] = ApiGatewayContext(
            event, self.get_request_cls()
        )
        self.log.debug(f"Constructed {context}. Calling execute...")
        return self.execute(context, lambda_context)

    @classmethod
    def _get_type_args(cls) -> Tuple[Any, Any]:
        if cls is ApiGatewayFunction:
            return Any, Any
        type_args = _resolve_function_type_args(cls, {})
        if type_args is None:
            return Any, Any
        unresolved = [_ for _ in type_args if isinstance(_, TypeVar)]
        if unresolved:
            raise TypeError(
                f"{cls.__name__} does not bind the type parameters {unresolved} "
                "of ApiGatewayFunction. Subclass it with concrete request/response types."
            )
        return type_args[0], type_args[1]

    @classmethod
    def get_request_cls(cls) -> Any:
        """Get the request body type, or ``Any`` if the class is not parameterized.

        Raises:
            TypeError: If a generic subclass leaves the request or response type unbound.
        """
        return cls._get_type_args()[0]

    @classmethod
    def get_response_cls(cls) -> Any:
        """Get the response body type, or ``Any`` if the class is not parameterized.

        Raises:
            TypeError: If a generic subclass leaves the request or response type unbound.
        """
        return cls._get_type_args()[1]

    # --------------------------------------------------------------------
    # Handler provider methods
    # --------------------------------------------------------------------

    @classmethod
    def get_handler(cls, *args, **kwargs) -> LambdaHandlerType:
        """Create the entry point the Lambda runtime invokes.

        The returned function:
        - injects the Lambda context into the structured logger
        - instantiates this class with the given arguments
        - calls ``handle`` with the event
        - returns the response as an API Gateway proxy response dictionary

        Args:
            *args: Positional arguments passed to the class constructor.
            **kwargs: Keyword arguments passed to the class constructor.

        Returns:
            A callable Lambda handler function.

        Example:
            ```python
            # In your Lambda module
            handler = GreetFunction.get_handler()
            ```
        """
        logger = cls.get_logger()

        @logger.inject_lambda_context(log_event=cls.log_event)
        def handler(event: LambdaEvent, context: LambdaContext) -> Dict[str, Any]:
            function = cls(*args, **kwargs)  # type: ignore[call-arg]
            function.log = logger
            function.add_logger_to_root()

            function.log.info(f"Invoking {function}")
            response = function.handle(event, context)  # type: ignore[arg-type]
            function.log.info(f"{function} responded with status {response.status_code}")
            return response.to_dict()

        return handler

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"request: {self.get_request_cls()}, "
            f"response: {self.get_response_cls()}"
            ")"
        )
