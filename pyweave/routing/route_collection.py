"""
Route Collection
Ordered collection of routes with first-match lookup
"""
from dataclasses import dataclass, field
from typing import Dict, List, Optional
from pyweave.routing.route import Route


@dataclass
class RouteMatch:
    """Result of a successful match"""
    route: Route
    params: List[str] = field(default_factory=list)
    named_params: Dict[str, str] = field(default_factory=dict)

    @property
    def found(self) -> bool:
        return True


@dataclass
class RouteNotFound:
    """
    Result of a failed match

    method_not_allowed is True when some route matched the path under a
    different method. Both cases answer 404.
    """
    method: str
    path: str
    method_not_allowed: bool = False

    @property
    def found(self) -> bool:
        return False


class RouteCollection:
    """
    Routes in registration order

    Matching walks the list in order and the first route whose method
    matches (or is ANY) and whose pattern matches wins, so more specific
    literal routes must be registered before parameterized ones.
    """

    def __init__(self):
        self._routes: List[Route] = []

    def add(self, route: Route) -> Route:
        self._routes.append(route)
        return route

    def match(self, method: str, path: str):
        """
        Find the first route matching the method and normalized path

        Returns:
            RouteMatch or RouteNotFound
        """
        method = method.upper()
        path_matched = False

        for route in self._routes:
            values = route.matches(path)
            if values is None:
                continue

            if route.allows(method):
                return RouteMatch(
                    route=route,
                    params=values,
                    named_params=dict(zip(route.parameter_names, values)),
                )
            path_matched = True

        return RouteNotFound(method=method, path=path, method_not_allowed=path_matched)

    def get_routes(self) -> List[Route]:
        return list(self._routes)

    def get_by_handler(self, handler: str) -> Optional[Route]:
        for route in self._routes:
            if route.handler == handler:
                return route
        return None

    def count(self) -> int:
        return len(self._routes)

    def clear(self):
        self._routes.clear()

    def __iter__(self):
        return iter(self._routes)

    def __len__(self):
        return len(self._routes)

    def to_dict(self) -> Dict[str, any]:
        """
        Convert route collection to a dictionary representation

        Returns:
            Dict with the route list and per-method counts
        """
        routes_list = []
        by_method: Dict[str, int] = {}

        for route in self._routes:
            route_dict = route.to_dict()
            route_dict['parameters'] = route.parameter_names
            routes_list.append(route_dict)
            by_method[route.method] = by_method.get(route.method, 0) + 1

        return {
            'total': len(self._routes),
            'routes': routes_list,
            'by_method': by_method,
        }

    def __repr__(self):
        return f"<RouteCollection ({len(self._routes)} routes)>"
