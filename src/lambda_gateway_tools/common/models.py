"""Lambda execution context for running functions outside of AWS Lambda."""

from dataclasses import dataclass, field

from aibs_informatics_aws_utils.constants.lambda_ import (
    AWS_LAMBDA_FUNCTION_ARN_KEY,
    AWS_LAMBDA_FUNCTION_MEMORY_SIZE_KEY,
    AWS_LAMBDA_FUNCTION_NAME_KEY,
    AWS_LAMBDA_FUNCTION_REQUEST_ID_KEY,
    AWS_LAMBDA_FUNCTION_VERSION_KEY,
    AWS_LAMBDA_LOG_GROUP_NAME_KEY,
    AWS_LAMBDA_LOG_STREAM_NAME_KEY,
    DEFAULT_AWS_LAMBDA_FUNCTION_NAME,
)
from aibs_informatics_core.utils.hashing import uuid_str
from aibs_informatics_core.utils.os_operations import get_env_var
from aws_lambda_powertools.utilities.typing import LambdaContext
from aws_lambda_powertools.utilities.typing.lambda_client_context import LambdaClientContext
from aws_lambda_powertools.utilities.typing.lambda_cognito_identity import LambdaCognitoIdentity

AWS_REGION_KEY = "AWS_REGION"
AWS_ACCOUNT_ID_KEY = "AWS_ACCOUNT_ID"


@dataclass
class DefaultLambdaContext(LambdaContext):
    """LambdaContext populated from the standard ``AWS_LAMBDA_*`` environment variables.

    Used to invoke functions locally, in containers or in tests, where the
    Lambda runtime does not provide a context.
    """

    _function_name: str = field(
        default_factory=lambda: get_env_var(AWS_LAMBDA_FUNCTION_NAME_KEY)
        or DEFAULT_AWS_LAMBDA_FUNCTION_NAME
    )
    _function_version: str = field(
        default_factory=lambda: get_env_var(AWS_LAMBDA_FUNCTION_VERSION_KEY, default_value="1.0")
    )
    _invoked_function_arn: str = field(
        default_factory=lambda: get_env_var(AWS_LAMBDA_FUNCTION_ARN_KEY, default_value="")
    )
    _memory_limit_in_mb: int = field(
        default_factory=lambda: int(
            get_env_var(AWS_LAMBDA_FUNCTION_MEMORY_SIZE_KEY, default_value="1024")
        )
    )
    _aws_request_id: str = field(
        default_factory=lambda: get_env_var(AWS_LAMBDA_FUNCTION_REQUEST_ID_KEY, default_value="")
    )
    _log_group_name: str = field(
        default_factory=lambda: get_env_var(AWS_LAMBDA_LOG_GROUP_NAME_KEY, default_value="")
    )
    _log_stream_name: str = field(
        default_factory=lambda: get_env_var(AWS_LAMBDA_LOG_STREAM_NAME_KEY, default_value="")
    )
    _identity: LambdaCognitoIdentity = field(default_factory=lambda: LambdaCognitoIdentity())
    _client_context: LambdaClientContext = field(default_factory=lambda: LambdaClientContext())

    def __post_init__(self):
        if not self._aws_request_id:
            self._aws_request_id = uuid_str()
        if not self._invoked_function_arn:
            region = get_env_var(AWS_REGION_KEY, default_value="us-west-2")
            account_id = get_env_var(AWS_ACCOUNT_ID_KEY, default_value="000000000000")
            self._invoked_function_arn = (
                f"arn:aws:lambda:{region}:{account_id}:function:{self.function_name}"
            )
        if not self._log_group_name:
            self._log_group_name = f"/aws/lambda/{self.function_name}"
        if not self._log_stream_name:
            self._log_stream_name = f"{self.aws_request_id}"
