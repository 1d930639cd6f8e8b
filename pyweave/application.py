"""
Framework Application Class
"""
from sanic import Sanic
from pathlib import Path
from typing import Any, Dict, List, Optional
import inspect
import os
import re
import sys


class Application:
    """
    Main application class - owns the container and the request lifecycle

    A fresh Application gets its own router, hook manager, model loader and
    queue, and becomes the target of the facades.

    Usage:
        app = Application('/path/to/project')
        app.boot()     # framework_start ... after_routes_registered
        app.run()      # serve through Sanic
    """

    def __init__(self, base_path: Optional[str] = None, providers: Optional[List[type]] = None):
        from pyweave.defaults import DEFAULT_APP_NAME
        from pyweave.providers import DEFAULT_PROVIDERS
        from pyweave.support import Config, EnvHelper, Storage
        from pyweave.support.facades import Facade

        self.base_path = str(Path(base_path or os.getcwd()).resolve())

        # Add base path to Python path so config/, controllers/, models/ import
        if self.base_path not in sys.path:
            sys.path.insert(0, self.base_path)

        Storage.initialize(self.base_path)
        EnvHelper.load(Storage.base('.env'))
        Facade.set_app(self)

        self.name = Config.get('app.NAME', EnvHelper.get('APP_NAME', DEFAULT_APP_NAME))
        self.debug = bool(Config.get('app.DEBUG', EnvHelper.get_bool('APP_DEBUG', False)))

        self.sanic_app = Sanic(self._sanic_name(self.name))
        self.sanic_app.config.AUTO_EXTEND = False

        self.providers: List[Any] = []
        self.bindings: Dict[str, Any] = {}
        self.booted = False

        self.singleton('app', self)

        for provider_class in (DEFAULT_PROVIDERS if providers is None else providers):
            self.register_provider(provider_class)

    @staticmethod
    def _sanic_name(name: str) -> str:
        from pyweave.support import Str
        cleaned = re.sub(r'[^A-Za-z0-9_\-]', '_', Str.snake(str(name)))
        if not cleaned or not cleaned[0].isalpha():
            cleaned = f"pyweave_{cleaned}"
        return cleaned

    # =========================================================================
    # Container
    # =========================================================================

    def singleton(self, key: str, factory_or_instance):
        """
        Register a singleton binding
        If factory: Will be called once with the app and cached
        If instance: Will be stored directly
        """
        if inspect.isfunction(factory_or_instance) or inspect.ismethod(factory_or_instance):
            self.bindings[key] = {'type': 'singleton', 'factory': factory_or_instance, 'instance': None}
        else:
            self.bindings[key] = {'type': 'singleton', 'factory': None, 'instance': factory_or_instance}

    def bind(self, key: str, factory: callable):
        """Register a factory binding (called every time)"""
        self.bindings[key] = {'type': 'factory', 'factory': factory}

    def make(self, key: str) -> Any:
        """Resolve a binding from the container"""
        if key not in self.bindings:
            raise KeyError(f"Binding '{key}' not found in container")

        binding = self.bindings[key]

        if binding['type'] == 'singleton':
            if binding['instance'] is None:
                binding['instance'] = binding['factory'](self)
            return binding['instance']

        return binding['factory'](self)

    def has(self, key: str) -> bool:
        return key in self.bindings

    def get_bindings(self) -> Dict[str, Dict[str, Any]]:
        return {
            key: {
                'type': binding['type'],
                'instantiated': binding.get('instance') is not None if binding['type'] == 'singleton' else None
            }
            for key, binding in self.bindings.items()
        }

    # Shortcuts for the framework services
    @property
    def router(self):
        return self.make('router')

    @property
    def hooks(self):
        return self.make('hooks')

    @property
    def models(self):
        return self.make('models')

    @property
    def queue(self):
        return self.make('queue')

    # =========================================================================
    # Providers and lifecycle
    # =========================================================================

    def register_provider(self, provider_class):
        """Register a service provider"""
        provider = provider_class(self)
        provider.register()
        self.providers.append(provider)
        return provider

    def boot(self):
        """
        Boot all service providers

        Fires framework_start, then each provider's boot events in order:
        before/after_db_connection, before/after_models_load,
        before_router_init, after_routes_registered.
        """
        if self.booted:
            return

        hooks = self.make('hooks') if self.has('hooks') else None

        if hooks is not None:
            hooks.begin_request()
            hooks.trigger('framework_start', {'app': self})

        for provider in self.providers:
            provider.boot()

        # Halts during boot do not carry over to requests
        if hooks is not None:
            hooks.begin_request()

        self.booted = True

    def run(self, host=None, port=None, **kwargs):
        """Run the Sanic server"""
        from pyweave.defaults import DEFAULT_HOST, DEFAULT_PORT
        from pyweave.support import Config

        self.boot()

        host = host or Config.get('app.HOST', DEFAULT_HOST)
        port = port or Config.get('app.PORT', DEFAULT_PORT)
        kwargs.setdefault('debug', self.debug)
        # The app is built in-process, so workers cannot re-import it
        kwargs.setdefault('single_process', True)
        self.sanic_app.run(host=host, port=int(port), **kwargs)
