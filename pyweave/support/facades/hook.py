"""
Hook Facade
Provides static access to the HookManager instance
"""
from pyweave.support.facades.facade import Facade


class Hook(Facade):
    """
    Hook Facade

    Example:
        from pyweave.support.facades import Hook

        def log_action(data):
            logger.info("Executing %s@%s", data['controller'], data['action'])
            return data

        Hook.register('before_action_execute', log_action, 5)
        Hook.register_class('auth', AuthHook, 'before_action_execute', 5)
    """

    @classmethod
    def get_facade_accessor(cls) -> str:
        return 'hooks'
