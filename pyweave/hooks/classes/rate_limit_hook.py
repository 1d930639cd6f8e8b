"""
Rate Limit Hook
Fixed-window request limiting per client IP
"""
import threading
import time
from typing import Dict, Optional, Tuple
from sanic.response import text
from pyweave.defaults import DEFAULT_RATE_LIMIT, DEFAULT_RATE_LIMIT_WINDOW
from pyweave.hooks.base_hook import BaseHook
from pyweave.hooks.classes.client_ip import client_ip
from pyweave.logging import getLogger

logger = getLogger('pyweave.hooks')


class RateLimitHook(BaseHook):
    """
    Limit requests per client within a fixed time window

    Registered by default as the 'throttle' named hook. Params: max requests,
    window in seconds. Over the limit the request is halted with a 429.

    Counters live in process memory, so each worker process counts separately.

    Example:
        Route.post('/login', 'Auth@login').hook('throttle')
    """

    def __init__(self):
        self._windows: Dict[Tuple[str, str], Tuple[float, int]] = {}
        self._lock = threading.Lock()

    def handle(self, data, max_requests: Optional[int] = None, window: Optional[int] = None):
        from pyweave.support.facades import Hook

        max_requests = int(max_requests or DEFAULT_RATE_LIMIT)
        window = int(window or DEFAULT_RATE_LIMIT_WINDOW)

        request = data['request']
        key = (client_ip(request), data['context'].route.pattern if data['context'].route else request.path)

        allowed, retry_after = self.hit(key, max_requests, window)
        if not allowed:
            logger.warning(
                "Rate limit exceeded",
                extra={'ip': key[0], 'path': request.path, 'limit': max_requests}
            )
            Hook.halt(text(
                "429 - Too Many Requests",
                status=429,
                headers={'Retry-After': str(retry_after)}
            ))

        return data

    def hit(self, key, max_requests: int, window: int, now: Optional[float] = None) -> Tuple[bool, int]:
        """
        Count one request for key

        Returns:
            (allowed, seconds until the window resets)
        """
        now = time.time() if now is None else now

        with self._lock:
            started, count = self._windows.get(key, (now, 0))
            if now - started >= window:
                started, count = now, 0

            retry_after = max(1, int(started + window - now))
            if count >= max_requests:
                return False, retry_after

            self._windows[key] = (started, count + 1)
            return True, retry_after
