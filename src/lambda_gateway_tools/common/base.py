from aws_lambda_powertools.utilities.typing import LambdaContext

LAMBDA_CONTEXT_ATTR = "_lambda_context"


class HandlerMixins:
    """Mixin class providing common function utilities.

    Gives access to the Lambda execution context of the current invocation and
    to the names used when logging.

    Attributes:
        lambda_context: The AWS Lambda context object for the current invocation.
    """

    @property
    def lambda_context(self) -> LambdaContext:
        """Get the Lambda context for the current invocation.

        Raises:
            ValueError: If no invocation has set the context yet.
        """
        if not hasattr(self, LAMBDA_CONTEXT_ATTR):
            raise ValueError(f"Lambda context has not been set for {self.__class__.__name__}")
        return getattr(self, LAMBDA_CONTEXT_ATTR)

    @lambda_context.setter
    def lambda_context(self, value: LambdaContext):
        setattr(self, LAMBDA_CONTEXT_ATTR, value)

    @classmethod
    def service_name(cls) -> str:
        """Get the service name used by the structured logger.

        Returns:
            The class name as the service identifier.
        """
        return cls.__name__
