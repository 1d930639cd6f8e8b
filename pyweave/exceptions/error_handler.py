"""
Centralized Error Handler
Renders the minimal 404/500 pages and reports errors to the application log
"""
from pyweave.logging import getLogger
import html
import traceback
from typing import Optional
from sanic import Request
from sanic.exceptions import SanicException
from sanic.response import HTTPResponse, html as html_response

NOT_FOUND_BODY = "404 - Route not found"
SERVER_ERROR_BODY = "500 - Internal Server Error"


class ErrorHandler:
    """
    Provides the framework error pages and error reporting
    """
    def __init__(self, debug: bool = False):
        """
        Args:
            debug: Include exception message and trace in 500 pages
        """
        self.debug = debug
        self.logger = getLogger('pyweave.errors')

    def not_found(self, method: str = '', uri: str = '') -> HTTPResponse:
        self.logger.warning(
            "404 Route not found",
            extra={'status_code': 404, 'method': method, 'path': uri}
        )
        return html_response(NOT_FOUND_BODY, status=404)

    def server_error(
        self,
        error: Exception,
        method: str = '',
        uri: str = '',
        trace: Optional[str] = None
    ) -> HTTPResponse:
        """
        Build the 500 page

        The message and trace are only shown in debug mode, HTML-escaped.
        """
        self._log_error(error, method, uri, 500)

        if not self.debug:
            return html_response(SERVER_ERROR_BODY, status=500)

        if trace is None:
            trace = ''.join(traceback.format_exception(type(error), error, error.__traceback__))

        body = (
            f"<h1>{SERVER_ERROR_BODY}</h1>"
            f"<p>{html.escape(str(error))}</p>"
            f"<pre>{html.escape(trace)}</pre>"
        )
        return html_response(body, status=500)

    async def handle_error(self, request: Request, error: Exception) -> HTTPResponse:
        """
        Sanic error handler for exceptions raised outside the dispatcher
        """
        status_code = self._get_status_code(error)

        if status_code == 404:
            return self.not_found(request.method, request.path)

        if status_code >= 500:
            return self.server_error(error, request.method, request.path)

        self._log_error(error, request.method, request.path, status_code)
        return html_response(html.escape(str(error)), status=status_code)

    def _get_status_code(self, error: Exception) -> int:
        # Sanic exceptions have status_code
        if isinstance(error, SanicException):
            return error.status_code

        # Custom exceptions with status_code attribute
        if hasattr(error, 'status_code'):
            return error.status_code

        return 500

    def _log_error(self, error: Exception, method: str, uri: str, status_code: int):
        log_data = {
            'error_type': error.__class__.__name__,
            'error_message': str(error),
            'status_code': status_code,
            'method': method,
            'path': uri,
        }

        if status_code >= 500:
            self.logger.error(
                f"{status_code} Error: {error.__class__.__name__}",
                extra=log_data,
                exc_info=(type(error), error, error.__traceback__)
            )
        else:
            self.logger.warning(
                f"{status_code} Error: {error.__class__.__name__}",
                extra=log_data
            )
