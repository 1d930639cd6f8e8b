"""
Custom Exception Classes
Framework-specific exceptions with HTTP status codes
"""
from typing import Optional


class FrameworkException(Exception):
    """Base exception for all framework exceptions"""
    status_code = 500
    message = "An error occurred"

    def __init__(self, message: Optional[str] = None, status_code: Optional[int] = None):
        self.message = message or self.__class__.message
        self.status_code = status_code or self.__class__.status_code
        super().__init__(self.message)


class RegistrationError(FrameworkException):
    """
    Invalid hook or route registration

    Example:
        raise RegistrationError("Hook callback for 'on_404' is not callable")
    """
    message = "Invalid registration"


class HookNotFoundError(RegistrationError):
    """
    A route references a named hook alias that was never registered

    Raised at dispatch time so the request fails closed with a 500.
    """
    message = "Named hook not found"

    def __init__(self, alias: str, message: Optional[str] = None):
        self.alias = alias
        super().__init__(message or f"Hook '{alias}' is attached to a route but not registered")


class InvalidHandlerError(FrameworkException):
    """
    Handler string is not of the form 'Controller@action'

    Example:
        Route.get('/', 'HomeIndex')  # raises InvalidHandlerError
    """
    message = "Invalid route handler"

    def __init__(self, handler: str = '', message: Optional[str] = None):
        self.handler = handler
        super().__init__(
            message or f"Invalid handler '{handler}', expected 'Controller@action'"
        )


class RouteNotFoundException(FrameworkException):
    """No route matched the request method and path"""
    status_code = 404
    message = "404 - Route not found"


class HandlerMissingException(FrameworkException):
    """
    The matched controller class or action method could not be resolved

    Example:
        raise HandlerMissingException("Controller 'Blog' not found")
    """
    status_code = 500
    message = "Handler not found"


class HookFailure(FrameworkException):
    """
    A hook raised while an event was being triggered

    The original exception is kept on `original` and as __cause__.
    """
    status_code = 500
    message = "Hook failed"

    def __init__(self, event: str, hook_name: str, original: Exception):
        self.event = event
        self.hook_name = hook_name
        self.original = original
        super().__init__(f"Hook '{hook_name}' failed during '{event}': {original}")


class ModelNotFoundError(FrameworkException):
    """Requested model name is not in the model registry"""
    message = "Model not found"

    def __init__(self, name: str, message: Optional[str] = None):
        self.name = name
        super().__init__(message or f"Model '{name}' not found")


class JobException(FrameworkException):
    """
    Job could not be queued, loaded or executed

    Example:
        raise JobException("Job class 'SendEmailJob' not found")
    """
    message = "Job failed"
