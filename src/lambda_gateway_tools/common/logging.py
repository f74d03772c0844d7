"""Structured logging for API Gateway functions.

Each function class logs as its own powertools service. The JSON handler of
that service can be shared with standard library loggers, so records from
other modules come out in the same format during an invocation.
"""

import logging
from typing import Optional

from aibs_informatics_core.utils.logging import get_all_handlers
from aws_lambda_powertools.logging import Logger

from lambda_gateway_tools.common.base import HandlerMixins


class LoggingMixins(HandlerMixins):
    """Mixin class giving a function a lazily created powertools ``Logger``.

    Attributes:
        log: Alias for the logger property.
        logger: The logger of this function's service.
    """

    @property
    def log(self) -> Logger:
        return self.logger

    @log.setter
    def log(self, value: Logger):
        self.logger = value

    @property
    def logger(self) -> Logger:
        try:
            return self._logger
        except AttributeError:
            self.logger = self.get_logger()
        return self.logger

    @logger.setter
    def logger(self, value: Logger):
        self._logger = value

    @classmethod
    def get_logger(cls) -> Logger:
        """Create a Logger for this class, named after ``service_name()``."""
        return Logger(service=cls.service_name())

    def add_logger_to_root(self):
        """Route records of other modules through this function's log handler."""
        share_log_handler(self.logger)


def share_log_handler(source_logger: Logger, target: Optional[str] = None) -> logging.Logger:
    """Attach the handler of a powertools logger to a standard library logger.

    The target level is lowered to the source level when the source is more
    verbose. A handler already reachable from the target is not added again.

    Args:
        source_logger (Logger): The powertools logger whose handler is shared.
        target (Optional[str]): Name of the target logger. None means the root logger.

    Returns:
        logging.Logger: The target logger.
    """
    handler = source_logger.registered_handler
    target_logger = logging.getLogger(target)
    target_logger.setLevel(min(source_logger.log_level, target_logger.getEffectiveLevel()))

    if handler not in get_all_handlers(target_logger):
        target_logger.addHandler(handler)
    return target_logger
