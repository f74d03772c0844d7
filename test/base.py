__all__ = [
    "BaseTest",
    "does_not_raise",
]

from contextlib import nullcontext as does_not_raise
from typing import Optional

from aibs_informatics_test_resources import BaseTest as _BaseTest


class BaseTest(_BaseTest):
    maxDiff: Optional[int] = None

    def set_lambda_env_vars(self, function_name: str = "test-function"):
        self.set_env_vars(
            ("AWS_LAMBDA_FUNCTION_NAME", function_name),
            ("AWS_REGION", "us-west-2"),
            ("AWS_ACCOUNT_ID", "123456789012"),
        )
