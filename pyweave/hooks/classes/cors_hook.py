"""
CORS Hook
Adds Cross-Origin Resource Sharing headers to the routes it is attached to
"""
import re
from typing import List, Optional, Pattern, Union
from sanic.response import empty
from pyweave.defaults import DEFAULT_CORS_HEADERS, DEFAULT_CORS_MAX_AGE, DEFAULT_CORS_METHODS
from pyweave.hooks.base_hook import BaseHook
from pyweave.logging import getLogger

logger = getLogger('pyweave.hooks')


class CorsHook(BaseHook):
    """
    CORS headers for a route, answering OPTIONS preflight requests itself

    Registered by default as the 'cors' named hook at before_action_execute.
    Bound params override the defaults, in order: origins, methods, headers,
    credentials, max_age.

    Example:
        Hook.register_class('api_cors', CorsHook, params=[['https://*.example.com'], None, None, True])
        Route.group({'prefix': '/api', 'hooks': ['api_cors']}, routes)
    """

    def handle(
        self,
        data,
        origins: Union[str, List[str], None] = None,
        methods: Optional[List[str]] = None,
        headers: Optional[List[str]] = None,
        credentials: Optional[bool] = None,
        max_age: Optional[int] = None
    ):
        from pyweave.support.facades import Hook

        context = data['context']
        request = data['request']

        origin_patterns = self._parse_origins(origins or '*')
        wildcard = any(pattern.pattern == '.*' for pattern in origin_patterns)
        origin = request.headers.get('origin', '')

        cors_headers = {}
        if wildcard and not credentials:
            cors_headers['Access-Control-Allow-Origin'] = '*'
        elif origin and any(pattern.match(origin) for pattern in origin_patterns):
            cors_headers['Access-Control-Allow-Origin'] = origin
            cors_headers['Vary'] = 'Origin'

        cors_headers['Access-Control-Allow-Methods'] = ', '.join(
            method.upper() for method in (methods or DEFAULT_CORS_METHODS)
        )
        cors_headers['Access-Control-Allow-Headers'] = ', '.join(headers or DEFAULT_CORS_HEADERS)
        if credentials:
            cors_headers['Access-Control-Allow-Credentials'] = 'true'
        cors_headers['Access-Control-Max-Age'] = str(max_age if max_age is not None else DEFAULT_CORS_MAX_AGE)

        context.response_headers.update(cors_headers)
        logger.debug(f"CORS headers set for origin: {origin or '-'}")

        if request.method == 'OPTIONS':
            logger.debug("Answering CORS preflight request")
            Hook.halt(empty(status=204))

        return data

    @staticmethod
    def _parse_origins(origins: Union[str, List[str], Pattern]) -> List[Pattern]:
        """
        Parse origins into regex patterns (supports wildcards)

        Examples:
            '*' -> matches any origin
            'https://example.com' -> exact match
            'https://*.example.com' -> matches any subdomain with https
        """
        if isinstance(origins, Pattern):
            return [origins]

        if isinstance(origins, str):
            origins = [origins]

        patterns = []
        for origin in origins:
            if origin == '*':
                patterns.append(re.compile(r'.*'))
            elif '*' in origin:
                pattern = re.escape(origin).replace(r'\*', '.*')
                patterns.append(re.compile(f'^{pattern}$'))
            else:
                patterns.append(re.compile(f'^{re.escape(origin)}$'))

        return patterns
