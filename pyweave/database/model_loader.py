"""
Lazy Model Loader
Constructs each model on first access and caches the instance
"""
import threading
from typing import Dict, Iterator, List, Optional, Type
from pyweave.database.model import Model
from pyweave.exceptions import ModelNotFoundError
from pyweave.logging import getLogger

logger = getLogger('pyweave.database')


class LazyModelLoader:
    """
    Name to model instance registry with lazy, once-only construction

    get() is the canonical accessor. Attribute access, subscript access and
    the model() helper all go through it, so every surface shares one cache.
    Construction is guarded by a lock per model, which protects threads of
    one process only.

    Usage:
        loader = LazyModelLoader(app, ModelDiscovery.discover('models'))
        users = loader.get('user_model')
        assert loader.user_model is users
        assert loader['UserModel'] is users
    """

    def __init__(self, app=None, registry: Optional[Dict[str, Type[Model]]] = None):
        # Attributes are set through __dict__ to keep __getattr__ simple
        self.__dict__['_app'] = app
        self.__dict__['_registry'] = dict(registry or {})
        self.__dict__['_instances'] = {}
        self.__dict__['_locks'] = {}
        self.__dict__['_locks_guard'] = threading.Lock()

    # =========================================================================
    # Canonical accessor
    # =========================================================================

    def get(self, name: str) -> Model:
        """
        Return the instance for a model name, constructing it on first use

        Raises:
            ModelNotFoundError: If no model is registered under the name
        """
        model_class = self._registry.get(name)
        if model_class is None:
            raise ModelNotFoundError(name)

        instance = self._instances.get(model_class)
        if instance is not None:
            return instance

        with self._lock_for(model_class):
            instance = self._instances.get(model_class)
            if instance is None:
                instance = model_class(self._app)
                instance.setup()
                self._instances[model_class] = instance
                logger.debug(f"Model '{name}' loaded")

        return instance

    def _lock_for(self, model_class: Type[Model]) -> threading.Lock:
        lock = self._locks.get(model_class)
        if lock is None:
            with self._locks_guard:
                lock = self._locks.setdefault(model_class, threading.Lock())
        return lock

    # =========================================================================
    # Registry
    # =========================================================================

    def register(self, name: str, model_class: Type[Model]):
        self._registry[name] = model_class

    def set_registry(self, registry: Dict[str, Type[Model]]):
        """Replace the name to class mapping (loaded instances are kept)"""
        self.__dict__['_registry'] = dict(registry)

    def names(self) -> List[str]:
        return sorted(self._registry)

    def loaded(self) -> List[str]:
        """Names whose model has been constructed"""
        return sorted(name for name, model_class in self._registry.items() if model_class in self._instances)

    def is_loaded(self, name: str) -> bool:
        model_class = self._registry.get(name)
        return model_class is not None and model_class in self._instances

    # =========================================================================
    # Convenience surfaces
    # =========================================================================

    def __getattr__(self, name: str) -> Model:
        if name.startswith('_'):
            raise AttributeError(name)
        try:
            return self.get(name)
        except ModelNotFoundError as e:
            raise AttributeError(e.message) from e

    def __setattr__(self, name, value):
        raise TypeError("Models are loaded automatically and cannot be assigned")

    def __getitem__(self, name: str) -> Model:
        return self.get(name)

    def __setitem__(self, name, value):
        raise TypeError("Models are loaded automatically and cannot be assigned")

    def __delitem__(self, name):
        raise TypeError("Models are loaded automatically and cannot be removed")

    def __contains__(self, name) -> bool:
        return name in self._registry

    def __len__(self) -> int:
        return len(self._registry)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())

    def __repr__(self):
        return f"<LazyModelLoader ({len(self._registry)} models, {len(self._instances)} loaded)>"


def model(name: str) -> Model:
    """
    Look up a model through the current application's loader

    Example:
        users = model('user_model')
    """
    from pyweave.support.facades import Models
    return Models.get(name)
