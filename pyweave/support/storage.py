"""
Storage - Centralized path management
Provides consistent path resolution across the application
"""

import os
from pathlib import Path
from typing import Union


class Storage:
    """
    Centralized path management helper

    Directory structure:
    /
    ├── config/             # Configuration modules (app.py, routing.py, ...)
    ├── controllers/        # Controller classes
    ├── hooks/              # Hook registration files
    ├── jobs/               # Queue job classes
    ├── models/             # Data-access models
    ├── views/              # View modules exposing render(data)
    ├── storage/            # Writable state
    │   ├── cache/          # routes.json
    │   ├── queue/          # pending jobs, failed/ jobs
    │   └── logs/           # Log files
    └── routes.py           # Route definitions
    """

    _base_path: Path = None
    _storage_path: Path = None

    @classmethod
    def initialize(cls, base_path: Union[str, Path] = None):
        """
        Initialize paths (called by Application on construction)

        Args:
            base_path: Application base directory (defaults to current working directory)
        """
        if base_path is None:
            base_path = os.getcwd()

        cls._base_path = Path(base_path).resolve()
        cls._storage_path = cls._base_path / 'storage'

    @classmethod
    def base(cls, *paths: str) -> Path:
        """
        Get application base path

        Example:
            Storage.base('controllers')  # /project/controllers
        """
        if cls._base_path is None:
            cls.initialize()

        if paths:
            clean_paths = [p.lstrip('/') for p in paths]
            return cls._base_path.joinpath(*clean_paths)
        return cls._base_path

    @classmethod
    def config(cls, *paths: str) -> Path:
        """Get config path (config/)"""
        return cls.base('config', *paths)

    @classmethod
    def hooks(cls, *paths: str) -> Path:
        """Get hooks path (hooks/)"""
        return cls.base('hooks', *paths)

    @classmethod
    def views(cls, *paths: str) -> Path:
        """Get views path (views/)"""
        return cls.base('views', *paths)

    # === Storage Paths ===

    @classmethod
    def storage(cls, *paths: str) -> Path:
        """
        Get storage path

        Example:
            Storage.storage('queue', 'failed')  # storage/queue/failed
        """
        if cls._storage_path is None:
            cls.initialize()

        if paths:
            clean_paths = [p.lstrip('/') for p in paths]
            return cls._storage_path.joinpath(*clean_paths)
        return cls._storage_path

    @classmethod
    def cache(cls, *paths: str) -> Path:
        return cls.storage('cache', *paths)

    @classmethod
    def queue(cls, *paths: str) -> Path:
        return cls.storage('queue', *paths)

    @classmethod
    def logs(cls, *paths: str) -> Path:
        """Get logs path (storage/logs/)"""
        return cls.storage('logs', *paths)

    # === Helpers ===

    @classmethod
    def ensure_directory(cls, path: Union[str, Path]) -> Path:
        """
        Ensure directory exists, create if it doesn't

        Returns:
            Path object
        """
        path_obj = Path(path)
        path_obj.mkdir(parents=True, exist_ok=True)
        return path_obj

    @classmethod
    def resolve(cls, path: Union[str, Path], root: Path = None) -> Path:
        """Resolve a relative path against root (storage/ by default)"""
        path_obj = Path(path)
        if path_obj.is_absolute():
            return path_obj
        return (root or cls.storage()) / path_obj
