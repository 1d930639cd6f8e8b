"""
Routing Service Provider
Creates the router and loads routes.py or the route cache
"""
import importlib.util
import sys
from pyweave.defaults import DEFAULT_ROUTE_CACHE_FILE, DEFAULT_ROUTES_FILE
from pyweave.logging import getLogger
from pyweave.routing import Router
from pyweave.service_provider import ServiceProvider
from pyweave.support import Config, Storage

logger = getLogger('pyweave.routing')


class RoutingServiceProvider(ServiceProvider):

    def register(self):
        router = Router()
        router.enable_cache(Storage.resolve(Config.get('routing.CACHE_FILE', DEFAULT_ROUTE_CACHE_FILE)))
        self.app.singleton('router', router)

    def boot(self):
        router = self.app.make('router')
        hooks = self.app.make('hooks')

        hooks.trigger('before_router_init', {'router': router})

        cache_enabled = Config.get('routing.CACHE_ENABLED', False)
        if not (cache_enabled and router.load_from_cache()):
            self.load_routes_file()
            if cache_enabled:
                router.save_to_cache()

        hooks.trigger('after_routes_registered', {
            'router': router,
            'routes': router.get_routes(),
            'from_cache': router.loaded_from_cache,
        })

    def load_routes_file(self) -> bool:
        """
        Execute routes.py, which registers routes through the Route facade

        Returns:
            True if the file exists
        """
        path = Storage.base(Config.get('routing.ROUTES_FILE', DEFAULT_ROUTES_FILE))
        if not path.is_file():
            logger.debug(f"No routes file at {path}")
            return False

        spec = importlib.util.spec_from_file_location('pyweave_routes', path)
        module = importlib.util.module_from_spec(spec)
        sys.modules['pyweave_routes'] = module
        spec.loader.exec_module(module)

        register = getattr(module, 'register', None)
        if callable(register):
            register(self.app.make('router'))

        logger.debug(f"Loaded {len(self.app.make('router').get_routes())} routes from {path}")
        return True
