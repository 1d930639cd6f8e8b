"""
Hooks Package
Lifecycle events, hook registry and built-in named hooks
"""
from pyweave.hooks.events import LIFECYCLE_EVENTS, BOOT_EVENTS, available_hooks
from pyweave.hooks.base_hook import BaseHook
from pyweave.hooks.hook_manager import HookManager, HookEntry, NamedHook, HaltState, is_invokable

__all__ = [
    'LIFECYCLE_EVENTS',
    'BOOT_EVENTS',
    'available_hooks',
    'BaseHook',
    'HookManager',
    'HookEntry',
    'NamedHook',
    'HaltState',
    'is_invokable',
]
