"""
Route Cache
Persists the route table as JSON so boot can skip executing routes.py
"""
import json
import os
import tempfile
import threading
from datetime import datetime
from pathlib import Path
from typing import Dict, Iterable, List, Optional, Union
from pyweave.logging import getLogger

CACHE_VERSION = 1

logger = getLogger('pyweave.routing')


class RouteCache:
    """
    File-backed route table cache

    Writes go to a temporary file in the cache directory and are moved into
    place with os.replace, so readers see either the old table or the new one.

    Usage:
        cache = RouteCache(Storage.cache('routes.json'))
        cache.save(router.get_routes())
        definitions = cache.load()  # None when missing or unreadable
    """

    _write_lock = threading.Lock()

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)

    def exists(self) -> bool:
        return self.path.is_file()

    def save(self, routes: Iterable) -> bool:
        """
        Write the route table

        Args:
            routes: Route instances (or dicts with method/pattern/handler/hooks)

        Returns:
            True on success, False when the table could not be written
        """
        payload = {
            'version': CACHE_VERSION,
            'created_at': datetime.now().isoformat(),
            'routes': [
                route if isinstance(route, dict) else route.to_dict()
                for route in routes
            ],
        }

        with self._write_lock:
            tmp_name = None
            try:
                self.path.parent.mkdir(parents=True, exist_ok=True)
                fd, tmp_name = tempfile.mkstemp(
                    prefix='.routes-', suffix='.tmp', dir=str(self.path.parent)
                )
                with os.fdopen(fd, 'w', encoding='utf-8') as handle:
                    json.dump(payload, handle, indent=2)
                os.replace(tmp_name, self.path)
            except (OSError, TypeError, ValueError) as e:
                logger.error(f"Failed to write route cache {self.path}: {e}")
                if tmp_name and os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                return False

        logger.info(f"Route cache written: {len(payload['routes'])} routes", extra={'path': str(self.path)})
        return True

    def load(self) -> Optional[List[Dict]]:
        """
        Read the route table

        Returns:
            List of route definitions, or None when the cache is missing,
            unreadable or not a route table
        """
        if not self.exists():
            return None

        try:
            with open(self.path, 'r', encoding='utf-8') as handle:
                payload = json.load(handle)
        except (OSError, ValueError) as e:
            logger.warning(f"Ignoring unreadable route cache {self.path}: {e}")
            return None

        if not isinstance(payload, dict) or payload.get('version') != CACHE_VERSION:
            logger.warning(f"Ignoring route cache with unknown format: {self.path}")
            return None

        routes = payload.get('routes')
        if not isinstance(routes, list):
            return None

        for definition in routes:
            if not isinstance(definition, dict) or not {'method', 'pattern', 'handler'} <= definition.keys():
                logger.warning(f"Ignoring route cache with malformed entry: {self.path}")
                return None

        return routes

    def clear(self) -> bool:
        """
        Delete the cache file

        Returns:
            True if a file was removed
        """
        with self._write_lock:
            try:
                self.path.unlink()
            except FileNotFoundError:
                return False

        logger.info("Route cache cleared", extra={'path': str(self.path)})
        return True
