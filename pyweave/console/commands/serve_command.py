"""
Serve Command
Runs the application on Sanic
"""
from pyweave.console.command import Command


class ServeCommand(Command):

    name = "serve"
    description = "Serve the application (--host=, --port=)"

    def handle(self, host: str = None, port: int = None, **kwargs):
        # Synchronous: Sanic starts and owns the event loop
        self.app.run(host=host, port=port)
        return 0
