"""
Router
Main routing class that manages route registration and resolution
"""
from pathlib import Path
from typing import Callable, Dict, List, Optional, Union
from pyweave.exceptions import InvalidHandlerError, RegistrationError
from pyweave.logging import getLogger
from pyweave.routing.pattern import join_paths, normalize_path, parse_handler
from pyweave.routing.route import Route
from pyweave.routing.route_cache import RouteCache
from pyweave.routing.route_collection import RouteCollection

logger = getLogger('pyweave.routing')


class Router:
    def __init__(self):
        self.routes = RouteCollection()
        self._group_stack: List[Dict] = []
        self._cache: Optional[RouteCache] = None
        self.loaded_from_cache = False

    # =========================================================================
    # Route Registration Methods
    # =========================================================================

    def get(self, pattern: str, handler: str) -> Route:
        """
        Register a GET route

        Example:
            Route.get('/blog/:id:', 'Blog@show')
            Route.get('/admin', 'Admin@dashboard').hook('auth')
        """
        return self.add_route('GET', pattern, handler)

    def post(self, pattern: str, handler: str) -> Route:
        return self.add_route('POST', pattern, handler)

    def put(self, pattern: str, handler: str) -> Route:
        """Register a PUT route (reachable from forms through _method)"""
        return self.add_route('PUT', pattern, handler)

    def patch(self, pattern: str, handler: str) -> Route:
        return self.add_route('PATCH', pattern, handler)

    def delete(self, pattern: str, handler: str) -> Route:
        """Register a DELETE route (reachable from forms through _method)"""
        return self.add_route('DELETE', pattern, handler)

    def any(self, pattern: str, handler: str) -> Route:
        """Register a route that answers every method"""
        return self.add_route('ANY', pattern, handler)

    def add_route(self, method: str, pattern: str, handler: str) -> Route:
        """
        Create a route with the active group attributes applied and add it

        Raises:
            InvalidHandlerError: If the handler is not 'Controller@action'
        """
        prefix = ''
        hooks: List[str] = []

        # Outermost group first, so prefixes concatenate and hooks accumulate in order
        for group in self._group_stack:
            if group.get('prefix'):
                prefix = join_paths(prefix, group['prefix'])

            group_hooks = group.get('hooks') or []
            if isinstance(group_hooks, str):
                group_hooks = [group_hooks]
            hooks.extend(group_hooks)

        full_pattern = join_paths(prefix, pattern) if prefix else normalize_path(pattern)
        route = Route(method, full_pattern, handler, hooks)
        return self.routes.add(route)

    # =========================================================================
    # Route Grouping
    # =========================================================================

    def group(self, attributes: Dict, routes: Callable):
        """
        Apply a prefix and hook set to every route registered in the callback

        Usage:
            Route.group({'prefix': '/api', 'hooks': ['cors']}, lambda: [
                Route.get('/users', 'Api@users'),
            ])
        """
        self._group_stack.append(attributes)
        try:
            routes()
        finally:
            self._group_stack.pop()

    def prefix(self, prefix: str) -> 'RouteRegistrar':
        """Create a route registrar with prefix"""
        return RouteRegistrar(self, {'prefix': prefix})

    def hooks(self, hooks: Union[str, List[str]]) -> 'RouteRegistrar':
        """Create a route registrar with hooks"""
        if isinstance(hooks, str):
            hooks = [hooks]
        return RouteRegistrar(self, {'hooks': hooks})

    # =========================================================================
    # Resolution
    # =========================================================================

    def match(self, method: str, path: str):
        """
        Match a request method and path

        Returns:
            RouteMatch or RouteNotFound
        """
        return self.routes.match(method, normalize_path(path))

    @staticmethod
    def parse_handler(handler: str):
        """Split 'Controller@action' into (controller, action)"""
        return parse_handler(handler)

    def get_routes(self) -> List[Route]:
        return self.routes.get_routes()

    def get_collection(self) -> RouteCollection:
        return self.routes

    def clear(self):
        self.routes.clear()
        self.loaded_from_cache = False

    # =========================================================================
    # Route Cache
    # =========================================================================

    def enable_cache(self, path: Union[str, Path]) -> 'Router':
        self._cache = RouteCache(path)
        return self

    @property
    def cache(self) -> Optional[RouteCache]:
        return self._cache

    def load_from_cache(self) -> bool:
        """
        Replace the route table with the cached one

        Returns:
            True if routes were loaded, False when there is no valid cache
        """
        if self._cache is None:
            return False

        definitions = self._cache.load()
        if definitions is None:
            return False

        try:
            routes = [Route.from_dict(definition) for definition in definitions]
        except (InvalidHandlerError, RegistrationError) as e:
            logger.warning(f"Ignoring route cache: {e.message}")
            return False

        self.routes.clear()
        for route in routes:
            self.routes.add(route)

        self.loaded_from_cache = True
        logger.debug(f"Loaded {len(routes)} routes from cache")
        return True

    def save_to_cache(self) -> bool:
        if self._cache is None:
            return False
        return self._cache.save(self.get_routes())

    def clear_cache(self) -> bool:
        if self._cache is None:
            return False
        return self._cache.clear()


class RouteRegistrar:
    """
    Route registrar for fluent API with route groups

    Usage:
        Route.prefix('/admin').hooks(['auth']).group(lambda: [
            Route.get('/dashboard', 'Admin@dashboard')
        ])
    """

    def __init__(self, router: Router, attributes: Dict):
        self.router = router
        self.attributes = attributes

    def group(self, callback: Callable):
        """Execute the group"""
        self.router.group(self.attributes, callback)
        return self

    def prefix(self, prefix: str):
        self.attributes['prefix'] = prefix
        return self

    def hooks(self, hooks: Union[str, List[str]]):
        if isinstance(hooks, str):
            hooks = [hooks]
        self.attributes['hooks'] = hooks
        return self
