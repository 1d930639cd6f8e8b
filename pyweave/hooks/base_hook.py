"""
Base Hook
Base class for class-based hooks
"""
from abc import ABC, abstractmethod
from typing import Any


class BaseHook(ABC):
    """
    Base class for class-based hooks

    A hook receives the event data (plus any parameters bound at registration)
    and returns the data for the next hook. Returning None keeps the data
    unchanged. Call Hook.halt() to stop every remaining hook of the request.

    One instance is created per hook manager and reused across requests, so
    per-request state belongs in the data, not on the instance.

    Example:
        class AuthHook(BaseHook):
            def handle(self, data, redirect_to='/login'):
                if not data['request'].cookies.get('session'):
                    Hook.halt(redirect(redirect_to))
                return data

        Hook.register_class('auth', AuthHook, params=['/signin'])
    """

    @abstractmethod
    def handle(self, data: Any, *params) -> Any:
        pass

    def __repr__(self):
        return f"<{self.__class__.__name__}>"
