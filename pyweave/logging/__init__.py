"""
Logging Package
Structured logging with sensitive data filtering

Framework modules log through getLogger('pyweave.<component>'); those names
are children of the 'pyweave' logger, which LoggingServiceProvider wires
to the configured handlers.
"""
from pyweave.logging.logger_config import (
    LoggerConfig,
    JSONFormatter,
    SensitiveDataFilter
)
import logging
from typing import Optional

__all__ = [
    'LoggerConfig',
    'JSONFormatter',
    'SensitiveDataFilter',
    'getLogger',
    'INFO',
    'DEBUG',
    'WARNING',
    'ERROR',
    'CRITICAL',
]

INFO = logging.INFO
DEBUG = logging.DEBUG
WARNING = logging.WARNING
ERROR = logging.ERROR
CRITICAL = logging.CRITICAL


def getLogger(name: Optional[str] = None) -> logging.Logger:
    """
    Get a logger instance (drop-in replacement for logging.getLogger)

    Only allows logger names that are:
    - None (root logger)
    - Configured in app.LOGGERS (e.g., 'application')
    - Module-based names (containing '.') like 'pyweave.hooks'

    Example:
        from pyweave.logging import getLogger
        logger = getLogger('pyweave.router')

        logger.info("Route cache written")
        logger.warning("Hook callback rejected", extra={'event': 'on_404'})
    """
    if name and name.startswith('sanic.'):
        return logging.getLogger(name)

    if name is not None and '.' not in name:
        from pyweave.defaults import DEFAULT_LOGGERS
        from pyweave.support import Config
        allowed_handlers = Config.get('app.LOGGERS', DEFAULT_LOGGERS)

        allowed_names = [
            handler_config.get('name')
            for handler_config in allowed_handlers.values()
            if handler_config.get('name') is not None
        ]

        if name not in allowed_names and name != 'pyweave':
            # Force arbitrary names to use root logger
            name = None

    return logging.getLogger(name)
