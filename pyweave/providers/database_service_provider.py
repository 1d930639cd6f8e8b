"""
Database Service Provider
Optional connection factory and lazy model loading
"""
from pyweave.database import LazyModelLoader, ModelDiscovery
from pyweave.defaults import DEFAULT_MODELS_PACKAGE
from pyweave.logging import getLogger
from pyweave.service_provider import ServiceProvider
from pyweave.support import ClassLoader, Config

logger = getLogger('pyweave.database')


class DatabaseServiceProvider(ServiceProvider):

    def register(self):
        self.app.singleton('models', LazyModelLoader(self.app))

    def boot(self):
        hooks = self.app.make('hooks')

        hooks.trigger('before_db_connection', {'app': self.app})
        self.connect()
        hooks.trigger('after_db_connection', {'app': self.app, 'connection': self.app.make('db') if self.app.has('db') else None})

        package = Config.get('app.MODELS', DEFAULT_MODELS_PACKAGE)
        hooks.trigger('before_models_load', {'package': package})
        registry = ModelDiscovery.discover(package)
        self.app.make('models').set_registry(registry)
        hooks.trigger('after_models_load', {'package': package, 'models': sorted(registry)})

    def connect(self):
        """
        Bind 'db' to the connection built by database.CONNECTION_FACTORY

        The factory is a callable (or dotted path to one) taking the app.
        Database drivers are not part of the framework.
        """
        factory = Config.get('database.CONNECTION_FACTORY')
        if not factory:
            return

        if isinstance(factory, str):
            factory = ClassLoader.load_callable(factory)

        self.app.singleton('db', factory(self.app))
        logger.info("Database connection ready")
