"""
Response Helpers
Conversion of controller return values into Sanic responses
"""
from typing import Any, Dict, Optional
from sanic.response import (
    HTTPResponse,
    empty as sanic_empty,
    html as sanic_html,
    json as sanic_json,
    redirect as sanic_redirect,
    text as sanic_text,
)


class ResponseHelper:
    """
    Response helpers used by controllers and the dispatcher

    Controller actions may return an HTTPResponse, a str (sent as HTML),
    a dict or list (sent as JSON) or None (empty 204).

    Example:
        return ResponseHelper.json({'id': 5}, status=201)
        return ResponseHelper.redirect('/login')
    """

    @staticmethod
    def to_response(value: Any) -> HTTPResponse:
        if isinstance(value, HTTPResponse):
            return value
        if value is None:
            return sanic_empty()
        if isinstance(value, (dict, list)):
            return sanic_json(value)
        if isinstance(value, bytes):
            return HTTPResponse(value, content_type='application/octet-stream')
        return sanic_html(str(value))

    @staticmethod
    def json(data: Any, status: int = 200, headers: Optional[Dict[str, str]] = None) -> HTTPResponse:
        return sanic_json(data, status=status, headers=headers)

    @staticmethod
    def html(body: str, status: int = 200, headers: Optional[Dict[str, str]] = None) -> HTTPResponse:
        return sanic_html(body, status=status, headers=headers)

    @staticmethod
    def text(body: str, status: int = 200, headers: Optional[Dict[str, str]] = None) -> HTTPResponse:
        return sanic_text(body, status=status, headers=headers)

    @staticmethod
    def redirect(to: str, status: int = 302, headers: Optional[Dict[str, str]] = None) -> HTTPResponse:
        return sanic_redirect(to, status=status, headers=headers)

    @staticmethod
    def empty(status: int = 204) -> HTTPResponse:
        return sanic_empty(status=status)

    @staticmethod
    def with_headers(response: HTTPResponse, headers: Dict[str, str]) -> HTTPResponse:
        """Add headers the response does not already set"""
        for name, value in headers.items():
            if name not in response.headers:
                response.headers[name] = value
        return response
