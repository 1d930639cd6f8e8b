"""
Class Loader
Dynamic class loading utility for importing classes and functions from dotted paths
"""
import importlib
from typing import Type, Callable, Union


class ClassLoader:
    """
    Utility for dynamically loading classes and functions from string paths

    Example:
        cls = ClassLoader.load('pyweave.hooks.classes.CorsHook')
        func = ClassLoader.load_callable('hooks.auth.check_login')
    """

    @staticmethod
    def load(class_path: str) -> Type:
        """
        Load a class from a dotted path string

        Raises:
            ImportError: If module cannot be imported
            AttributeError: If class doesn't exist in module
        """
        module_path, class_name = class_path.rsplit('.', 1)
        module = importlib.import_module(module_path)
        return getattr(module, class_name)

    @staticmethod
    def load_callable(callable_path: str) -> Union[Callable, Type]:
        """Load a function or class from a dotted path string"""
        return ClassLoader.load(callable_path)

    @staticmethod
    def try_import(module_path: str):
        """
        Import a module, returning None only when that module itself is missing

        Errors raised while executing an existing module propagate.
        """
        try:
            return importlib.import_module(module_path)
        except ModuleNotFoundError as e:
            if e.name == module_path or module_path.startswith(f"{e.name}."):
                return None
            raise
