"""
PyWeave Framework Package
Export the classes applications build on for easy import
"""

from pyweave.application import Application
from pyweave.http import Controller, ResponseHelper as response
from pyweave.hooks import BaseHook
from pyweave.database import Model, model
from pyweave.queue import Job
from pyweave.support.facades import App, Route, Hook, Models, Queue

__version__ = '0.1.0'

__all__ = [
    'Application',
    # Base classes
    'Controller',
    'BaseHook',
    'Model',
    'Job',
    # Helpers
    'response',
    'model',
    # Facades
    'App',
    'Route',
    'Hook',
    'Models',
    'Queue',
]
