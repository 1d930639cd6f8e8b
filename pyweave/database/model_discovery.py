"""
Model Auto-Discovery
Finds Model subclasses in the application's models package
"""
import importlib
import pkgutil
from typing import Dict, List, Type
from pyweave.database.model import Model
from pyweave.logging import getLogger

logger = getLogger('pyweave.database')


class ModelDiscovery:
    """
    Maps model names to classes by scanning a package

    Every public module contributes the Model subclasses defined in it
    (not merely imported). Each class is reachable by its class name, and
    by its module name when the module defines exactly one model.

    Example:
        models/
        ├── __init__.py
        ├── user_model.py   → 'user_model' and 'UserModel'
        └── blog.py         → 'Post', 'Comment'
    """

    @classmethod
    def discover(cls, package_name: str) -> Dict[str, Type[Model]]:
        """
        Returns:
            Name to class mapping; empty when the package does not exist
        """
        registry: Dict[str, Type[Model]] = {}

        for module_path in cls.discover_modules(package_name):
            module = importlib.import_module(module_path)
            classes = cls._model_classes(module)

            for model_class in classes:
                registry[model_class.__name__] = model_class

            if len(classes) == 1:
                registry[module_path.rsplit('.', 1)[-1]] = classes[0]
            elif len(classes) > 1:
                logger.debug(
                    f"Module {module_path} defines {len(classes)} models; use class names to access them"
                )

        logger.debug(f"Discovered {len(set(registry.values()))} models in '{package_name}'")
        return registry

    @classmethod
    def discover_modules(cls, package_name: str) -> List[str]:
        """
        Public, non-package modules of a package

        Returns:
            Module paths; empty when the package itself is missing
        """
        try:
            package = importlib.import_module(package_name)
        except ModuleNotFoundError as e:
            if e.name == package_name or package_name.startswith(f"{e.name}."):
                return []
            raise

        # Check if it has a path (is a package, not just a module)
        if not hasattr(package, '__path__'):
            return []

        return [
            f"{package_name}.{name}"
            for _, name, ispkg in pkgutil.iter_modules(package.__path__)
            if not ispkg and not name.startswith('_')
        ]

    @classmethod
    def _model_classes(cls, module) -> List[Type[Model]]:
        classes = []
        for attr_name in dir(module):
            if attr_name.startswith('_'):
                continue
            attr = getattr(module, attr_name, None)
            if cls._is_model_class(attr) and cls._is_defined_in_module(attr, module):
                classes.append(attr)
        return classes

    @classmethod
    def _is_model_class(cls, obj) -> bool:
        return isinstance(obj, type) and issubclass(obj, Model) and obj is not Model

    @classmethod
    def _is_defined_in_module(cls, obj, module) -> bool:
        """
        Check if a class is actually defined in the given module
        (not just imported into it)
        """
        return getattr(obj, '__module__', None) == module.__name__
