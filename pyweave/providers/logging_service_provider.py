"""
Logging Service Provider
Initializes application-wide structured logging
"""
import logging
from pyweave.defaults import DEFAULT_LOGGERS
from pyweave.logging.logger_config import LoggerConfig
from pyweave.service_provider import ServiceProvider
from pyweave.support import Config


class LoggingServiceProvider(ServiceProvider):
    """Logging service provider - sets up structured logging"""

    def register(self):
        self.setup_framework_logger()
        self.setup_application_loggers()

    def setup_framework_logger(self):
        """
        Handlers for the 'pyweave' logger, parent of every framework module logger
        """
        LoggerConfig.setup_logger(name='pyweave', file_name='framework')

    def setup_application_loggers(self):
        """
        Setup each logger configured in app.LOGGERS
        """
        allowed_handlers = Config.get('app.LOGGERS', DEFAULT_LOGGERS)

        for handler_config in allowed_handlers.values():
            LoggerConfig.setup_logger(
                name=handler_config.get('name'),
                format_type=handler_config.get('format', 'json'),
                filter_sensitive=handler_config.get('filter_sensitive', True),
                redact=handler_config.get('redact'),
                file_name=handler_config.get('file_name')
            )

        # Keep Sanic's console output out of our handlers
        for logger_name in ('sanic.root', 'sanic.error', 'sanic.access', 'sanic.server'):
            logging.getLogger(logger_name).propagate = False
