"""
Base Command Class
Laravel-style command base class for the pyweave CLI
"""
from abc import ABC, abstractmethod
from typing import Optional


class Command(ABC):

    # Command name (e.g., "route:list", "queue:work")
    name: str = ""

    # Command description
    description: str = ""

    # Command signature (for help display)
    signature: Optional[str] = None

    def __init__(self):
        if not self.signature:
            self.signature = self.name
        self.base_path = None  # Injected by Artisan (--path)
        self._app = None

    @abstractmethod
    async def handle(self, *args, **kwargs):
        """
        Execute the command logic

        Returns:
            int: Exit code (0 for success, non-zero for error)
        """
        pass

    @property
    def app(self):
        """Application for the project at base_path, created on first use"""
        if self._app is None:
            from pyweave.application import Application
            self._app = Application(self.base_path)
        return self._app

    # Output helpers
    def info(self, message: str):
        print(f"ℹ {message}")

    def success(self, message: str):
        print(f"✅ {message}")

    def error(self, message: str):
        print(f"❌ {message}")

    def warning(self, message: str):
        print(f"⚠ {message}")

    def line(self, message: str = ""):
        print(message)

    def table(self, headers: list, rows: list):
        """Print a simple table"""
        widths = [len(h) for h in headers]
        for row in rows:
            for i, cell in enumerate(row):
                widths[i] = max(widths[i], len(str(cell)))

        header_line = " | ".join(h.ljust(widths[i]) for i, h in enumerate(headers))
        self.line(header_line)
        self.line("-" * len(header_line))

        for row in rows:
            self.line(" | ".join(str(cell).ljust(widths[i]) for i, cell in enumerate(row)))
