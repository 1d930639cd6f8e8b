"""
Route Class
Represents a single route with a fluent hook API
"""
from typing import Dict, List, Optional, Union
from pyweave.defaults import ROUTE_METHODS
from pyweave.exceptions import RegistrationError
from pyweave.routing.pattern import CompiledPattern, compile_pattern, normalize_path, parse_handler


class Route:
    """
    Route class with fluent API for attaching named hooks

    Usage:
        route = Route('GET', '/blog/:id:', 'Blog@show')
        route.hook('auth').hook(['cors', 'log'])
    """

    def __init__(self, method: str, pattern: str, handler: str, hooks: Optional[List[str]] = None):
        """
        Args:
            method: HTTP method (GET, POST, PUT, PATCH, DELETE or ANY)
            pattern: Route pattern with ':name:' placeholders
            handler: 'Controller@action'
            hooks: Named hook aliases inherited from enclosing groups
        """
        self.method = str(method).upper()
        if self.method not in ROUTE_METHODS:
            raise RegistrationError(f"Unsupported route method '{method}'")
        self.pattern = normalize_path(pattern)
        self.handler = handler
        self.controller, self.action = parse_handler(handler)
        self._hooks: List[str] = []

        if hooks:
            self.hook(hooks)

    def hook(self, names: Union[str, List[str]]) -> 'Route':
        """
        Attach named hooks to the route

        Aliases keep attachment order; attaching the same alias twice is a no-op.

        Returns:
            Self for method chaining
        """
        if isinstance(names, str):
            names = [names]

        for name in names:
            if name not in self._hooks:
                self._hooks.append(name)
        return self

    @property
    def hooks(self) -> List[str]:
        return list(self._hooks)

    @property
    def compiled(self) -> CompiledPattern:
        return compile_pattern(self.pattern)

    @property
    def parameter_names(self) -> List[str]:
        return self.compiled.parameter_names

    def allows(self, method: str) -> bool:
        return self.method == 'ANY' or self.method == method.upper()

    def matches(self, path: str) -> Optional[List[str]]:
        """Match a normalized request path against the pattern, ignoring method"""
        return self.compiled.match(path)

    def to_dict(self) -> Dict:
        return {
            'method': self.method,
            'pattern': self.pattern,
            'handler': self.handler,
            'hooks': self.hooks,
        }

    @classmethod
    def from_dict(cls, data: Dict) -> 'Route':
        return cls(data['method'], data['pattern'], data['handler'], data.get('hooks') or [])

    def __repr__(self):
        return f"<Route {self.method} {self.pattern} -> {self.handler}>"
