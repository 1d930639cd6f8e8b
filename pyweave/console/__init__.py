"""
Console Package
Artisan-style command line interface
"""
from pyweave.console.command import Command
from pyweave.console.artisan import Artisan, main

__all__ = [
    'Command',
    'Artisan',
    'main',
]
