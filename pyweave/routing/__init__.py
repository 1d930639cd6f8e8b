"""
Routing Package
Ordered route table with ':name:' placeholder patterns
"""
from pyweave.routing.pattern import CompiledPattern, compile_pattern, normalize_path, parse_handler
from pyweave.routing.route import Route
from pyweave.routing.route_collection import RouteCollection, RouteMatch, RouteNotFound
from pyweave.routing.route_cache import RouteCache
from pyweave.routing.router import Router, RouteRegistrar

__all__ = [
    'CompiledPattern',
    'compile_pattern',
    'normalize_path',
    'parse_handler',
    'Route',
    'RouteCollection',
    'RouteMatch',
    'RouteNotFound',
    'RouteCache',
    'Router',
    'RouteRegistrar',
]
