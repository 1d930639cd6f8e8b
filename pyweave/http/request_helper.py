"""
Request Helpers
Method override and URI normalization for route matching
"""
from sanic import Request
from pyweave.defaults import METHOD_OVERRIDE_FIELD
from pyweave.routing.pattern import normalize_path


class RequestHelper:

    @staticmethod
    def method(request: Request) -> str:
        """
        Effective request method

        A POST whose form body carries _method is treated as that method,
        so HTML forms can reach PUT, PATCH and DELETE routes.
        """
        method = request.method.upper()
        if method != 'POST':
            return method

        content_type = request.content_type or ''
        if not content_type.startswith(('application/x-www-form-urlencoded', 'multipart/form-data')):
            return method

        override = request.form.get(METHOD_OVERRIDE_FIELD)
        if override and override.strip().isalpha():
            return override.strip().upper()
        return method

    @staticmethod
    def uri(path: str, base_url: str = '/') -> str:
        """
        Normalize a request path for matching

        Removes the query string and the base URL prefix, ensures a leading
        '/' and strips the trailing '/' except for the root.

        Example:
            RequestHelper.uri('/app/blog/5/?page=2', '/app')  # '/blog/5'
        """
        path = (path or '').split('?', 1)[0]

        if base_url and base_url != '/':
            prefix = '/' + base_url.strip('/')
            if path == prefix or path.startswith(prefix + '/'):
                path = path[len(prefix):]

        return normalize_path(path)
