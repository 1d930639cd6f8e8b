"""
Built-in named hooks
"""
from pyweave.hooks.classes.cors_hook import CorsHook
from pyweave.hooks.classes.log_hook import LogHook
from pyweave.hooks.classes.rate_limit_hook import RateLimitHook

# Aliases registered by HookServiceProvider unless hooks.NAMED overrides them
BUILTIN_NAMED_HOOKS = {
    'cors': {'class': CorsHook, 'hook_point': 'before_action_execute', 'priority': 5},
    'log': {'class': LogHook, 'hook_point': 'before_action_execute', 'priority': 10},
    'throttle': {'class': RateLimitHook, 'hook_point': 'before_action_execute', 'priority': 1},
}

__all__ = [
    'CorsHook',
    'LogHook',
    'RateLimitHook',
    'BUILTIN_NAMED_HOOKS',
]
