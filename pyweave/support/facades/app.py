"""
App Facade
Provides static access to the application container
"""
from pyweave.support.facades.facade import Facade


class App(Facade):
    """
    Application Facade

    Example:
        router = App.make('router')
        if App.has('queue'):
            App.make('queue').push('SendEmailJob', {'to': 'a@b.c'})
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return 'app'

    @classmethod
    def get_facade_root(cls):
        """Return the application itself instead of resolving a binding"""
        app = cls.get_app()
        if not app:
            raise RuntimeError("No application has been created yet.")
        return app

    @classmethod
    def get_sanic(cls):
        return cls.get_facade_root().sanic_app
