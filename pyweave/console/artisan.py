"""
Artisan-style CLI
Discovers Command subclasses and runs them by name
"""
import asyncio
import importlib.util
import inspect
import os
import sys
import traceback
from pathlib import Path
from typing import Dict, List, Optional, Tuple
from pyweave.console.command import Command
from pyweave.logging import getLogger

logger = getLogger('pyweave.console')


class Artisan:
    # Framework built-in commands
    FRAMEWORK_COMMANDS = Path(__file__).resolve().parent / 'commands'

    # User's application commands, relative to the project
    APP_COMMANDS = Path('console') / 'commands'

    def __init__(self, base_path: Optional[str] = None):
        self.base_path = str(Path(base_path or os.getcwd()).resolve())
        self.commands: Dict[str, Command] = {}
        self.command_files: Dict[str, str] = {}
        self._discover_commands()

    @property
    def command_paths(self) -> List[Path]:
        return [self.FRAMEWORK_COMMANDS, Path(self.base_path) / self.APP_COMMANDS]

    def _discover_commands(self):
        """Auto-discover commands"""
        for command_path in self.command_paths:
            if not command_path.is_dir():
                continue

            for py_file in sorted(command_path.glob('*.py')):
                if py_file.name.startswith('__'):
                    continue

                try:
                    module = self._load_module(py_file)
                except Exception as e:
                    logger.warning(f"Skipping command file '{py_file}': {e}")
                    continue

                for _, obj in inspect.getmembers(module, inspect.isclass):
                    if issubclass(obj, Command) and obj is not Command and obj.name and not inspect.isabstract(obj):
                        self.register(obj(), str(py_file))

    @staticmethod
    def _load_module(py_file: Path):
        module_name = f"pyweave_command_{py_file.stem}"
        spec = importlib.util.spec_from_file_location(module_name, py_file)
        module = importlib.util.module_from_spec(spec)
        spec.loader.exec_module(module)
        return module

    def register(self, command: Command, source: str = ''):
        command.base_path = self.base_path

        # A list signature registers every subcommand against one instance
        if isinstance(command.signature, list):
            for sig in command.signature:
                self.commands[sig['command']] = command
                self.command_files[sig['command']] = source
        else:
            self.commands[command.name] = command
            self.command_files[command.name] = source

    def show_help(self):
        """Show available commands"""
        print("PyWeave command line")
        print()

        if not self.commands:
            print("No commands available.")
            return

        categories: Dict[str, List[Tuple[str, str, str]]] = {}
        for name, cmd in sorted(self.commands.items()):
            category = name.split(':')[0] if ':' in name else 'general'
            if isinstance(cmd.signature, list):
                sig = next(s for s in cmd.signature if s['command'] == name)
                entry = (name, sig.get('args', ''), sig['description'])
            else:
                entry = (cmd.signature, '', cmd.description)
            categories.setdefault(category, []).append(entry)

        for category in sorted(categories):
            print(f"{category.upper()}:")
            for name, args, description in categories[category]:
                usage = f"{name} {args}".strip()
                print(f"  {usage:<35} {description}")
            print()

        print("Run 'pyweave help <command>' for detailed information")

    def run(self, argv: List[str]) -> int:
        """Run the CLI application"""
        if len(argv) < 2:
            self.show_help()
            return 0

        command_name = argv[1]

        if command_name in ['help', '--help', '-h']:
            if len(argv) > 2:
                cmd_name = argv[2]
                if cmd_name in self.commands:
                    cmd = self.commands[cmd_name]
                    print(f"\nCommand: {cmd_name}")
                    print(f"Description: {cmd.description}")
                    return 0
                print(f"Unknown command: {cmd_name}\n")
                self.show_help()
                return 1
            self.show_help()
            return 0

        if command_name not in self.commands:
            print(f"❌ Unknown command: {command_name}\n")
            self.show_help()
            return 1

        command = self.commands[command_name]
        args, kwargs = self._parse_args(argv[2:])

        try:
            if isinstance(command.signature, list):
                # Extract action from command name (queue:work -> work)
                result = command.handle(command_name.split(':')[-1], *args, **kwargs)
            else:
                result = command.handle(*args, **kwargs)

            # serve runs Sanic's own loop, so it handles synchronously
            if inspect.isawaitable(result):
                result = asyncio.run(result)

            return result if result is not None else 0

        except KeyboardInterrupt:
            print("\n\n⚠ Command interrupted by user")
            return 130
        except Exception as e:
            print(f"\n❌ Error executing command: {e}\n")
            traceback.print_exc()
            return 1

    def _parse_args(self, argv: List[str]):
        """
        Parse command line arguments
        Returns tuple of (positional_args, keyword_args)
        """
        args = []
        kwargs = {}

        for arg in argv:
            if arg.startswith('--'):
                if '=' in arg:
                    key, value = arg[2:].split('=', 1)
                    key = key.replace('-', '_')
                    try:
                        kwargs[key] = int(value)
                    except ValueError:
                        if value.lower() in ('true', 'false'):
                            kwargs[key] = value.lower() == 'true'
                        else:
                            kwargs[key] = value
                else:
                    kwargs[arg[2:].replace('-', '_')] = True
            elif arg.startswith('-'):
                kwargs[arg[1:]] = True
            else:
                args.append(arg)

        return args, kwargs


def _split_path_option(argv: List[str]) -> Tuple[Optional[str], List[str]]:
    """Take --path=<project> out of argv; every command shares it"""
    base_path = None
    rest = []
    for arg in argv:
        if arg.startswith('--path='):
            base_path = arg.split('=', 1)[1]
        else:
            rest.append(arg)
    return base_path, rest


def main(argv: Optional[List[str]] = None):
    """Console entry point: pyweave <command> [args] [--path=<project>]"""
    base_path, argv = _split_path_option(list(sys.argv if argv is None else argv))
    sys.exit(Artisan(base_path).run(argv))
