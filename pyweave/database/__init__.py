"""
Database Package
Model base class, discovery and the lazy model loader
"""
from pyweave.database.model import Model
from pyweave.database.model_discovery import ModelDiscovery
from pyweave.database.model_loader import LazyModelLoader, model

__all__ = [
    'Model',
    'ModelDiscovery',
    'LazyModelLoader',
    'model',
]
