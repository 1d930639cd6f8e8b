"""
Service Provider Base Class
Service providers register framework services and boot them in order
"""
from abc import ABC
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pyweave.application import Application


class ServiceProvider(ABC):
    """
    Base Service Provider class

    register() binds services in the container and runs when the application
    is constructed. boot() runs from Application.boot(), after every provider
    is registered, in registration order.
    """

    def __init__(self, app: 'Application'):
        self.app = app

    def register(self):
        """
        Register services in the container

        Example:
            self.app.singleton('queue', lambda app: JobQueue(Storage.queue()))
        """
        pass

    def boot(self):
        """Bootstrap services (after all providers are registered)"""
        pass
