"""
Controller Base Class
"""
import html
from typing import Any, Dict, Optional
from sanic import Request
from sanic.response import HTTPResponse
from pyweave.http.response_helper import ResponseHelper
from pyweave.http.view import ViewNotFound


class Controller:
    """
    Base class for application controllers

    Controllers live in the controllers package; 'Blog@show' resolves to
    class Blog in controllers/blog.py. A new instance is created for each
    request. Route parameters are passed to the action positionally.

    Example:
        # controllers/blog.py
        class Blog(Controller):
            def show(self, post_id):
                post = self.models.post_model.find(post_id)
                return self.show('blog/show', {'post': post})
    """

    def __init__(self, app, request: Optional[Request] = None):
        self.app = app
        self.request = request

    @property
    def models(self):
        """The application's lazy model loader"""
        return self.app.make('models')

    def model(self, name: str):
        return self.models.get(name)

    def show(self, template: str, data: Optional[Dict[str, Any]] = None, status: int = 200) -> HTTPResponse:
        """
        Render a view into an HTML response

        Returns a 404 response when the view does not exist.
        """
        try:
            output = self.app.make('view').render(template, data)
        except ViewNotFound:
            return ResponseHelper.html("404 - View not found", status=404)
        return ResponseHelper.html(output, status=status)

    def json(self, data: Any, status: int = 200) -> HTTPResponse:
        return ResponseHelper.json(data, status=status)

    def redirect(self, to: str, status: int = 302) -> HTTPResponse:
        return ResponseHelper.redirect(to, status=status)

    @staticmethod
    def safe(value: Any) -> str:
        """HTML-escape a value for output"""
        return html.escape(str(value), quote=True)
