"""
Facade System
Static-like access to services resolved from the current application container
"""
from typing import Any, Optional

# Global application instance storage
_app_instance: Optional[Any] = None


class FacadeMeta(type):
    """Metaclass for Facade to proxy class attribute access to the facade root"""

    def __getattr__(cls, name: str) -> Any:
        instance = cls.get_facade_root()
        return getattr(instance, name)


class Facade(metaclass=FacadeMeta):
    """
    Base Facade class

    Subclasses implement get_facade_accessor() to name the container binding
    they proxy to.

    Example:
        class Route(Facade):
            @classmethod
            def get_facade_accessor(cls):
                return 'router'

        # routes.py
        Route.get('/blog/:id:', 'Blog@show').hook('auth')
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        raise NotImplementedError(
            f"Facade {cls.__name__} does not implement get_facade_accessor()"
        )

    @classmethod
    def get_facade_root(cls) -> Any:
        """
        Get the root object behind the facade

        Raises:
            RuntimeError: If application is not set
        """
        accessor = cls.get_facade_accessor()
        app = cls.get_app()

        if not app:
            raise RuntimeError(
                f"Facade {cls.__name__} cannot access application. "
                "Create an Application (it calls Facade.set_app) before using facades."
            )

        return app.make(accessor)

    @classmethod
    def get_app(cls):
        return _app_instance

    @classmethod
    def set_app(cls, app):
        """
        Set the application instance (called by Application on construction)
        """
        global _app_instance
        _app_instance = app

    @classmethod
    def clear_app(cls):
        global _app_instance
        _app_instance = None
