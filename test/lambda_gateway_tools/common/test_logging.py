import logging
from test.base import BaseTest
from test.lambda_gateway_tools.common.api.base import GreetFunction

from aws_lambda_powertools.logging import Logger

from lambda_gateway_tools.common.logging import LoggingMixins, share_log_handler


class Greeter(LoggingMixins):
    pass


class LoggingTests(BaseTest):
    def keep_logger_state(self, target: logging.Logger):
        handlers, level = list(target.handlers), target.level

        def restore():
            target.handlers = handlers
            target.setLevel(level)

        self.addCleanup(restore)

    def test__logger__is_created_for_service(self):
        greeter = Greeter()
        self.assertIsInstance(greeter.log, Logger)
        self.assertIs(greeter.log, greeter.logger)
        self.assertEqual(greeter.logger.service, "Greeter")

    def test__get_logger__uses_function_class_name(self):
        self.assertEqual(GreetFunction.get_logger().service, "GreetFunction")

    def test__log__can_be_replaced(self):
        greeter = Greeter()
        logger = Logger(service="other")
        greeter.log = logger
        self.assertIs(greeter.logger, logger)

    def test__share_log_handler__adds_handler_once(self):
        source = Logger(service="source")
        target = logging.getLogger("lambda_gateway_tools.test.target")
        self.keep_logger_state(target)

        share_log_handler(source, target.name)
        actual = share_log_handler(source, target.name)

        self.assertIs(actual, target)
        self.assertEqual(target.handlers.count(source.registered_handler), 1)

    def test__share_log_handler__lowers_target_level(self):
        source = Logger(service="verbose", level="DEBUG")
        target = logging.getLogger("lambda_gateway_tools.test.quiet")
        self.keep_logger_state(target)
        target.setLevel(logging.WARNING)

        share_log_handler(source, target.name)

        self.assertEqual(target.level, logging.DEBUG)

    def test__add_logger_to_root__routes_root_records(self):
        root = logging.getLogger()
        self.keep_logger_state(root)
        function = GreetFunction()

        function.add_logger_to_root()

        self.assertIn(function.logger.registered_handler, root.handlers)
