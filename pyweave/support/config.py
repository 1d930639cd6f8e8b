"""
Config Manager - configuration access with dot notation
"""

import importlib
import threading
from typing import Any, Optional, Dict


class Config:
    """
    Configuration manager with dot notation access

    Usage:
        debug = Config.get('app.DEBUG', False)
        cache_file = Config.get('routing.cache_file')

        # Set runtime value
        Config.set('app.debug', True)

    Config files are plain python modules in config/:
        config/
        ├── app.py        # NAME, DEBUG, ENV, BASE_URL, HOST, PORT, LOGGERS
        ├── routing.py    # CACHE_ENABLED, CACHE_FILE
        ├── hooks.py      # DIRECTORY, NAMED
        ├── queue.py      # DIRECTORY, WORKER_SLEEP
        └── database.py   # CONNECTION_FACTORY
    """

    _lock = threading.Lock()
    _loaded: Dict[str, Any] = {}
    _runtime_overrides: Dict[str, Any] = {}

    @classmethod
    def get(cls, key: str, default: Any = None) -> Any:
        """
        Get configuration value using dot notation (case-insensitive)

        Args:
            key: Config key in dot notation (e.g., 'app.name', 'routing.cache_file')
            default: Default value if key not found

        Returns:
            Configuration value or default
        """
        key_lower = key.lower()

        if key_lower in cls._runtime_overrides:
            return cls._runtime_overrides[key_lower]

        parts = key_lower.split('.')
        file_name = parts[0]
        path = parts[1:]

        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        value = cls._loaded.get(file_name)

        if value is None:
            return default

        for part in path:
            if isinstance(value, dict):
                value = cls._lookup_key(value, part)
            else:
                value = cls._lookup_attribute(value, part)

            if value is _MISSING:
                return default

        return value

    @staticmethod
    def _lookup_key(mapping: Dict, part: str) -> Any:
        for dict_key in mapping.keys():
            if str(dict_key).lower() == part:
                return mapping[dict_key]
        return _MISSING

    @staticmethod
    def _lookup_attribute(obj: Any, part: str) -> Any:
        for attr_name in dir(obj):
            if attr_name.lower() == part:
                return getattr(obj, attr_name)
        return _MISSING

    @classmethod
    def _load_config_file(cls, file_name: str):
        """
        Load a config module from the config/ package

        Args:
            file_name: Config module name (without .py extension)
        """
        with cls._lock:
            if file_name in cls._loaded:
                return

            try:
                module = importlib.import_module(f'config.{file_name}')
                cls._loaded[file_name] = module
            except ImportError:
                # Config file doesn't exist
                cls._loaded[file_name] = None

    @classmethod
    def set(cls, key: str, value: Any):
        """
        Set configuration value at runtime (does not persist to file)

        Example:
            Config.set('app.debug', True)
        """
        cls._runtime_overrides[key.lower()] = value

    @classmethod
    def has(cls, key: str) -> bool:
        return cls.get(key) is not None

    @classmethod
    def all(cls, file_name: str) -> Optional[Any]:
        """Get the whole config module for a file, or None"""
        if file_name not in cls._loaded:
            cls._load_config_file(file_name)

        return cls._loaded.get(file_name)

    @classmethod
    def reload(cls, file_name: Optional[str] = None):
        """
        Reload configuration file(s)

        Args:
            file_name: Specific file to reload, or None to forget every loaded file
        """
        with cls._lock:
            if file_name:
                cls._loaded.pop(file_name, None)
            else:
                cls._loaded.clear()

    @classmethod
    def clear_runtime_overrides(cls):
        """Clear all runtime configuration overrides"""
        cls._runtime_overrides.clear()


class _Missing:
    def __repr__(self):
        return '<missing>'


_MISSING = _Missing()
