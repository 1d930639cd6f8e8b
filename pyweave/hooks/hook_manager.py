"""
Hook Manager
Priority-ordered lifecycle hooks with a request-scoped halt signal
"""
import importlib.util
import inspect
import itertools
import sys
import threading
import time
from collections import deque
from contextvars import ContextVar
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Callable, Deque, Dict, List, Optional, Tuple, Union
from pyweave.exceptions import HookFailure, HookNotFoundError
from pyweave.hooks.events import LIFECYCLE_EVENTS, available_hooks
from pyweave.logging import getLogger

logger = getLogger('pyweave.hooks')

# Trigger records kept in debug mode, oldest dropped first
EXECUTION_LOG_SIZE = 500


@dataclass
class HookEntry:
    """A callback registered against an event"""
    event: str
    callback: Any
    priority: int
    sequence: int
    params: Tuple = ()

    @property
    def key(self) -> str:
        return f"{self.event}#{self.sequence}"

    @property
    def name(self) -> str:
        return _callback_name(self.callback)


@dataclass
class NamedHook:
    """A hook registered under an alias for attachment to routes"""
    alias: str
    hook: Any
    hook_point: str
    priority: int
    params: Tuple = ()

    @property
    def name(self) -> str:
        return _callback_name(self.hook)


@dataclass
class HaltState:
    """Halt signal of the request being dispatched"""
    halted: bool = False
    response: Any = None
    halted_by: Optional[str] = None


@dataclass
class _ScopedEntry:
    named: NamedHook
    position: int


_halt_state: ContextVar[Optional[HaltState]] = ContextVar('pyweave_hook_halt_state', default=None)


def _callback_name(callback: Any) -> str:
    if isinstance(callback, type):
        return callback.__name__
    name = getattr(callback, '__qualname__', None) or getattr(callback, '__name__', None)
    if name:
        return name
    return type(callback).__name__


def is_invokable(callback: Any) -> bool:
    """
    Plain callables, objects with a callable handle(), and classes defining handle()
    """
    if isinstance(callback, type):
        return callable(getattr(callback, 'handle', None))
    return callable(getattr(callback, 'handle', None)) or callable(callback)


class HookManager:
    """
    Registry and dispatcher for lifecycle hooks

    Entries for an event run in ascending priority; equal priorities run in
    registration order. The sorted list is computed on first trigger and
    cached until the next registration for that event.

    Usage:
        hooks = HookManager()
        hooks.register('before_action_execute', check_csrf, priority=5)
        hooks.register_class('auth', AuthHook)

        hooks.begin_request()
        data = await hooks.trigger_async('before_action_execute', data, route=route)
        if hooks.is_halted():
            return hooks.halted_response()
    """

    def __init__(self, debug: bool = False):
        self.debug = debug
        self._hooks: Dict[str, List[HookEntry]] = {}
        self._sorted: Dict[str, List[HookEntry]] = {}
        self._named: Dict[str, NamedHook] = {}
        self._sequence = itertools.count()
        self._lock = threading.RLock()
        self.resolved_hooks: Dict[str, Any] = {}
        self.execution_log: Deque[Dict[str, Any]] = deque(maxlen=EXECUTION_LOG_SIZE)

    # =========================================================================
    # Registration
    # =========================================================================

    def register(
        self,
        event: str,
        callback: Any,
        priority: int = 10,
        params: Union[List, Tuple] = ()
    ) -> bool:
        """
        Register a callback for an event

        Args:
            event: Lifecycle event name (see LIFECYCLE_EVENTS)
            callback: Function, object with handle(), or class with handle()
            priority: Lower runs first
            params: Extra positional arguments passed after the data

        Returns:
            True if registered, False if the callback was rejected
        """
        if not isinstance(event, str) or not event:
            logger.warning(f"Hook registration skipped: invalid event name {event!r}")
            return False

        if not is_invokable(callback):
            logger.warning(
                f"Hook registration skipped: callback for '{event}' is not callable",
                extra={'event': event, 'callback': repr(callback)}
            )
            return False

        if event not in LIFECYCLE_EVENTS:
            logger.debug(f"Registering hook for custom event '{event}'")

        with self._lock:
            entry = HookEntry(
                event=event,
                callback=callback,
                priority=int(priority),
                sequence=next(self._sequence),
                params=tuple(params or ()),
            )
            self._hooks.setdefault(event, []).append(entry)
            self._sorted.pop(event, None)

        return True

    def listen(self, event: str, priority: int = 10, params: Union[List, Tuple] = ()):
        """
        Decorator form of register()

        Example:
            @Hook.listen('on_404')
            def not_found_page(data):
                Hook.halt(html('Nothing here', status=404))
        """
        def decorator(callback):
            self.register(event, callback, priority, params)
            return callback
        return decorator

    def register_class(
        self,
        alias: str,
        hook: Any,
        hook_point: str = 'before_action_execute',
        priority: int = 10,
        params: Union[List, Tuple] = ()
    ) -> bool:
        """
        Register a named hook that routes attach with .hook(alias)

        Args:
            alias: Name used in Route.get(...).hook(alias)
            hook: Class with handle(), object with handle(), or function
            hook_point: Lifecycle event at which the hook runs for its routes
            priority: Order among the route's hooks for the same event
            params: Extra positional arguments passed after the data

        Returns:
            True if registered, False if the hook was rejected
        """
        if not alias or not isinstance(alias, str):
            logger.warning(f"Named hook registration skipped: invalid alias {alias!r}")
            return False

        if not is_invokable(hook):
            logger.warning(
                f"Named hook registration skipped: '{alias}' is not callable",
                extra={'alias': alias, 'hook': repr(hook)}
            )
            return False

        with self._lock:
            if alias in self._named:
                logger.debug(f"Named hook '{alias}' replaced")
            self._named[alias] = NamedHook(
                alias=alias,
                hook=hook,
                hook_point=hook_point,
                priority=int(priority),
                params=tuple(params or ()),
            )
            self.resolved_hooks.pop(alias, None)

        return True

    # =========================================================================
    # Halt
    # =========================================================================

    def begin_request(self) -> HaltState:
        """Reset the halt signal for a new request"""
        state = HaltState()
        _halt_state.set(state)
        return state

    def _state(self) -> HaltState:
        state = _halt_state.get()
        if state is None:
            state = self.begin_request()
        return state

    def halt(self, response: Any = None):
        """
        Stop every remaining hook for the current request

        Args:
            response: Optional response the dispatcher sends instead of
                running the rest of the pipeline (e.g. a redirect)
        """
        state = self._state()
        state.halted = True
        if response is not None:
            state.response = response

    def is_halted(self) -> bool:
        return self._state().halted

    def halted_response(self) -> Any:
        return self._state().response

    # =========================================================================
    # Triggering
    # =========================================================================

    def trigger(self, event: str, data: Any = None, route=None, ignore_halt: bool = False) -> Any:
        """
        Run the hooks for an event, threading data through them

        Global hooks run first, then the named hooks of `route` whose hook
        point is this event. A hook returning a non-None value replaces the
        data for the next hook.

        Used for boot and view events, which fire outside the event loop.
        Coroutine hooks are only awaited by trigger_async().

        Args:
            event: Event name
            data: Value passed to the first hook
            route: Matched route whose named hooks should also run
            ignore_halt: Run even if the request was halted (error reporting)

        Returns:
            The data after the last hook ran

        Raises:
            HookNotFoundError: If the route references an unregistered alias
            HookFailure: If a hook raised, or returned an awaitable
        """
        state = self._state()
        if state.halted and not ignore_halt:
            return data

        for key, name, callback, params in self._calls(event, route):
            if state.halted and not ignore_halt:
                break

            result = self._call(event, key, name, callback, data, params)
            if inspect.isawaitable(result):
                if inspect.iscoroutine(result):
                    result.close()
                raise self._failure(event, name, TypeError(
                    f"async hook cannot run during synchronous event '{event}'"
                ))

            data = self._after_call(state, event, name, data, result)

        return data

    async def trigger_async(self, event: str, data: Any = None, route=None, ignore_halt: bool = False) -> Any:
        """
        trigger() for request events, awaiting hooks defined with async def

        Example:
            @Hook.listen('before_action_execute')
            async def auth(data):
                if not await tokens.valid(data['request']):
                    Hook.halt(text('Unauthorized', status=401))
        """
        state = self._state()
        if state.halted and not ignore_halt:
            return data

        for key, name, callback, params in self._calls(event, route):
            if state.halted and not ignore_halt:
                break

            result = self._call(event, key, name, callback, data, params)
            if inspect.isawaitable(result):
                try:
                    result = await result
                except Exception as e:
                    raise self._failure(event, name, e) from e

            data = self._after_call(state, event, name, data, result)

        return data

    def _calls(self, event: str, route) -> List[Tuple[str, str, Any, Tuple]]:
        calls = [
            (entry.key, entry.name, entry.callback, entry.params)
            for entry in self._sorted_entries(event)
        ]
        if route is not None:
            calls.extend(
                (scoped.named.alias, scoped.named.alias, scoped.named.hook, scoped.named.params)
                for scoped in self._scoped_entries(route, event)
            )

        if calls and self.debug:
            self.execution_log.append({
                'hook': event,
                'time': time.time(),
                'callbacks': len(calls),
            })
        return calls

    def _call(self, event: str, key: str, name: str, callback: Any, data: Any, params: Tuple) -> Any:
        target = self._resolve(key, callback)
        try:
            return target(data, *params)
        except Exception as e:
            raise self._failure(event, name, e) from e

    @staticmethod
    def _failure(event: str, name: str, error: Exception) -> HookFailure:
        logger.error(
            f"Hook '{name}' failed during '{event}': {error}",
            extra={'event': event, 'hook_name': name}
        )
        return HookFailure(event, name, error)

    @staticmethod
    def _after_call(state: HaltState, event: str, name: str, data: Any, result: Any) -> Any:
        if state.halted and state.halted_by is None:
            state.halted_by = name
            logger.debug(f"Hook '{name}' halted the request during '{event}'")
        return data if result is None else result

    def _sorted_entries(self, event: str) -> List[HookEntry]:
        entries = self._sorted.get(event)
        if entries is not None:
            return entries

        with self._lock:
            entries = sorted(
                self._hooks.get(event, []),
                key=lambda entry: (entry.priority, entry.sequence)
            )
            self._sorted[event] = entries
        return entries

    def _scoped_entries(self, route, event: str) -> List[_ScopedEntry]:
        scoped = []
        for position, alias in enumerate(route.hooks):
            named = self._named.get(alias)
            if named is None:
                raise HookNotFoundError(alias)
            if named.hook_point == event:
                scoped.append(_ScopedEntry(named=named, position=position))

        scoped.sort(key=lambda item: (item.named.priority, item.position))
        return scoped

    def _resolve(self, key: str, callback: Any) -> Callable:
        """
        Turn a registered callback into something callable

        Classes are instantiated once per key and cached in resolved_hooks.
        """
        if isinstance(callback, type):
            instance = self.resolved_hooks.get(key)
            if instance is None:
                with self._lock:
                    instance = self.resolved_hooks.get(key)
                    if instance is None:
                        instance = callback()
                        self.resolved_hooks[key] = instance
            return instance.handle

        handle = getattr(callback, 'handle', None)
        if callable(handle):
            return handle
        return callback

    # =========================================================================
    # Inspection
    # =========================================================================

    def has(self, event: str) -> bool:
        return bool(self._hooks.get(event))

    def count(self, event: str) -> int:
        return len(self._hooks.get(event, []))

    def clear(self, event: str):
        with self._lock:
            self._hooks.pop(event, None)
            self._sorted.pop(event, None)

    def clear_all(self):
        with self._lock:
            self._hooks.clear()
            self._sorted.clear()
            self._named.clear()
            self.resolved_hooks.clear()
            self.execution_log.clear()

    def get_all(self) -> Dict[str, List[HookEntry]]:
        """Registered entries per event, in execution order"""
        return {event: list(self._sorted_entries(event)) for event in self._hooks}

    def get_named_hooks(self) -> Dict[str, NamedHook]:
        return dict(self._named)

    def has_named(self, alias: str) -> bool:
        return alias in self._named

    def get_route_hooks(self, route) -> List[str]:
        return route.hooks

    def get_execution_log(self) -> List[Dict[str, Any]]:
        return list(self.execution_log)

    @staticmethod
    def get_available_hooks() -> Dict[str, str]:
        return available_hooks()

    # =========================================================================
    # Hook Files
    # =========================================================================

    def load_hook_files(self, directory: Union[str, Path]) -> List[str]:
        """
        Import every hooks/*.py file

        A file registers its hooks through the Hook facade at import time, or
        defines register(hooks) which is called with this manager.

        Returns:
            Names of the files loaded
        """
        directory = Path(directory)
        if not directory.is_dir():
            return []

        loaded = []
        for path in sorted(directory.glob('*.py')):
            if path.name.startswith('_'):
                continue

            module_name = f"pyweave_hooks_{path.stem}"
            spec = importlib.util.spec_from_file_location(module_name, path)
            module = importlib.util.module_from_spec(spec)
            sys.modules[module_name] = module
            try:
                spec.loader.exec_module(module)
            except Exception:
                sys.modules.pop(module_name, None)
                logger.error(f"Error loading hook file '{path}'", exc_info=True)
                raise

            register = getattr(module, 'register', None)
            if callable(register):
                register(self)

            loaded.append(path.name)

        logger.debug(f"Loaded {len(loaded)} hook files from {directory}")
        return loaded
