"""
Facades Package
Static access to services of the current application
"""
from pyweave.support.facades.facade import Facade
from pyweave.support.facades.app import App
from pyweave.support.facades.route import Route
from pyweave.support.facades.hook import Hook
from pyweave.support.facades.models import Models
from pyweave.support.facades.queue import Queue

__all__ = [
    'Facade',
    'App',
    'Route',
    'Hook',
    'Models',
    'Queue',
]
