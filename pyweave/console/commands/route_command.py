"""
Route Commands
List, cache and clear the route table
"""
from pyweave.console.command import Command
from pyweave.support import Config


class RouteListCommand(Command):
    """List all registered routes"""

    name = "route:list"
    description = "List all registered routes"

    async def handle(self, **kwargs):
        self.app.boot()
        routes = self.app.router.get_routes()

        if not routes:
            self.error("No routes registered")
            return 1

        rows = [
            (
                route.method,
                route.pattern,
                route.handler,
                ', '.join(route.hooks) if route.hooks else '-',
            )
            for route in routes
        ]

        # Registration order is match order, so no sorting
        self.table(['Method', 'Pattern', 'Handler', 'Hooks'], rows)
        self.line()
        source = 'cache' if self.app.router.loaded_from_cache else 'routes file'
        self.success(f"Showing {len(routes)} routes (from {source})")
        return 0


class RouteCacheCommand(Command):
    """Write the route table to the cache file"""

    name = "route:cache"
    description = "Build the route cache from the routes file"

    async def handle(self, **kwargs):
        # Always read the routes file, never an older cache
        Config.set('routing.CACHE_ENABLED', False)
        self.app.boot()
        router = self.app.router

        if not router.save_to_cache():
            self.error(f"Failed to write route cache to {router.cache.path}")
            return 1

        self.success(f"Cached {len(router.get_routes())} routes in {router.cache.path}")
        return 0


class RouteClearCommand(Command):
    """Delete the route cache file"""

    name = "route:clear"
    description = "Remove the route cache file"

    async def handle(self, **kwargs):
        router = self.app.router
        if router.clear_cache():
            self.success("Route cache cleared")
        else:
            self.info("No route cache to clear")
        return 0
