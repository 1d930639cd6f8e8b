"""
Hook Service Provider
Creates the hook manager, registers named hooks and loads hooks/*.py
"""
from pyweave.defaults import DEFAULT_HOOK_POINT, DEFAULT_HOOK_PRIORITY, DEFAULT_HOOKS_DIRECTORY
from pyweave.hooks import HookManager
from pyweave.hooks.classes import BUILTIN_NAMED_HOOKS
from pyweave.service_provider import ServiceProvider
from pyweave.support import ClassLoader, Config, Storage


class HookServiceProvider(ServiceProvider):
    """
    Hooks are loaded at register time so hook files see framework_start
    """

    def register(self):
        hooks = HookManager(debug=self.app.debug)
        self.app.singleton('hooks', hooks)

        self.register_named_hooks(hooks)
        hooks.load_hook_files(Storage.base(Config.get('hooks.DIRECTORY', DEFAULT_HOOKS_DIRECTORY)))

    def register_named_hooks(self, hooks: HookManager):
        """
        Register the built-in aliases, then those from hooks.NAMED

        Example config/hooks.py:
            NAMED = {
                'auth': {'class': 'hooks.classes.auth_hook.AuthHook', 'priority': 5},
                'throttle': {'class': 'pyweave.hooks.classes.RateLimitHook', 'params': [10, 60]},
            }
        """
        named = dict(BUILTIN_NAMED_HOOKS)
        named.update(Config.get('hooks.NAMED', {}) or {})

        for alias, definition in named.items():
            hook = definition.get('class')
            if isinstance(hook, str):
                hook = ClassLoader.load(hook)

            # Rejected aliases are logged by register_class; routes using them fail closed
            hooks.register_class(
                alias,
                hook,
                hook_point=definition.get('hook_point', DEFAULT_HOOK_POINT),
                priority=definition.get('priority', DEFAULT_HOOK_PRIORITY),
                params=definition.get('params', ()),
            )
