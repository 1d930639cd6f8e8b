"""
Hook List Command
"""
from pyweave.console.command import Command


class HookListCommand(Command):
    """Show registered hooks per event and the named hook aliases"""

    name = "hook:list"
    description = "List registered lifecycle hooks and named hooks"

    async def handle(self, **kwargs):
        self.app.boot()
        hooks = self.app.hooks

        rows = []
        for event, description in hooks.get_available_hooks().items():
            for entry in hooks.get_all().get(event, []):
                rows.append((event, entry.priority, entry.name))
            if not hooks.has(event) and kwargs.get('all'):
                rows.append((event, '-', f"({description})"))

        custom = [event for event in hooks.get_all() if event not in hooks.get_available_hooks()]
        for event in custom:
            for entry in hooks.get_all()[event]:
                rows.append((event, entry.priority, entry.name))

        if rows:
            self.table(['Event', 'Priority', 'Callback'], rows)
        else:
            self.info("No global hooks registered")
        self.line()

        named = sorted(hooks.get_named_hooks().values(), key=lambda item: item.alias)
        if named:
            self.table(
                ['Alias', 'Hook Point', 'Priority', 'Class'],
                [(item.alias, item.hook_point, item.priority, item.name) for item in named]
            )
        return 0
