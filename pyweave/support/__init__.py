"""
Framework Support Classes
"""

from pyweave.support.storage import Storage
from pyweave.support.env_helper import EnvHelper
from pyweave.support.config import Config
from pyweave.support.class_loader import ClassLoader
from pyweave.support.str import Str

__all__ = [
    'Storage',
    'EnvHelper',
    'Config',
    'ClassLoader',
    'Str',
]
