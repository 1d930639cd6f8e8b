"""
EnvHelper - Read .env files into the process environment
"""

import os
import threading
from pathlib import Path
from typing import Optional, Any, Dict
from dotenv import load_dotenv


class EnvHelper:
    """
    Environment variable access backed by a .env file

    Usage:
        value = EnvHelper.get('APP_NAME', 'Default App')
        debug = EnvHelper.get_bool('APP_DEBUG', False)
        EnvHelper.load('/path/to/.env')
    """

    _lock = threading.Lock()
    _env_path: Optional[Path] = None
    _loaded: bool = False

    @classmethod
    def initialize(cls, env_path=None):
        """
        Args:
            env_path: Path to .env file (defaults to .env in project root)
        """
        if env_path is None:
            from pyweave.support.storage import Storage
            env_path = Storage.base('.env')

        cls._env_path = Path(env_path)

    @classmethod
    def load(cls, env_path=None, override: bool = False) -> bool:
        """
        Load .env file into environment

        Args:
            env_path: Path to .env file (defaults to initialized path)
            override: Whether to override existing environment variables

        Returns:
            bool: True if a file was loaded
        """
        with cls._lock:
            if env_path:
                cls._env_path = Path(env_path)

            if cls._env_path is None:
                cls.initialize()

            cls._loaded = True
            if not cls._env_path.exists():
                return False

            return load_dotenv(cls._env_path, override=override)

    @classmethod
    def get(cls, key: str, default: Any = None) -> Optional[str]:
        """
        Get environment variable value

        Example:
            app_name = EnvHelper.get('APP_NAME', 'PyWeave')
        """
        if not cls._loaded:
            cls.load()

        return os.getenv(key, default)

    @classmethod
    def get_bool(cls, key: str, default: bool = False) -> bool:
        """Get boolean environment variable ('true', '1', 'yes', 'on')"""
        value = cls.get(key)
        if value is None:
            return default

        return value.lower() in ('true', '1', 'yes', 'on')

    @classmethod
    def get_int(cls, key: str, default: int = 0) -> int:
        value = cls.get(key)
        if value is None:
            return default

        try:
            return int(value)
        except ValueError:
            return default

    @classmethod
    def has(cls, key: str) -> bool:
        if not cls._loaded:
            cls.load()

        return key in os.environ

    @classmethod
    def all(cls) -> Dict[str, str]:
        if not cls._loaded:
            cls.load()

        return dict(os.environ)

    @classmethod
    def reset(cls):
        """Forget the loaded state so the next access reloads"""
        with cls._lock:
            cls._env_path = None
            cls._loaded = False
