"""
Exceptions Package
Centralized error handling and reporting
"""
from pyweave.exceptions.custom import (
    FrameworkException,
    RegistrationError,
    HookNotFoundError,
    InvalidHandlerError,
    RouteNotFoundException,
    HandlerMissingException,
    HookFailure,
    ModelNotFoundError,
    JobException,
)
from pyweave.exceptions.error_handler import ErrorHandler

__all__ = [
    # Error handling
    'ErrorHandler',

    # Custom exceptions
    'FrameworkException',
    'RegistrationError',
    'HookNotFoundError',
    'InvalidHandlerError',
    'RouteNotFoundException',
    'HandlerMissingException',
    'HookFailure',
    'ModelNotFoundError',
    'JobException',
]
