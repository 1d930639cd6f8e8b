"""
View Renderer
Views are python modules in views/ exposing render(data) -> str
"""
import importlib.util
import threading
from pathlib import Path
from typing import Any, Dict, Optional, Union
from pyweave.logging import getLogger

logger = getLogger('pyweave.views')


class ViewNotFound(LookupError):
    """No view module exists for the template name"""


class View:
    """
    Renders views with the before/after_view_render hooks around them

    A view is views/<name>.py defining render(data). Template names may use
    '/' for sub-directories; URL schemes, '..', NUL bytes, backslashes and
    surrounding slashes are stripped so a name cannot escape views/.

    Example:
        # views/blog/show.py
        def render(data):
            return f"<h1>{escape(data['title'])}</h1>"

        View(Storage.views(), hooks).render('blog/show', {'title': 'Hello'})
    """

    def __init__(self, views_dir: Union[str, Path], hooks=None, reload: bool = False):
        """
        Args:
            views_dir: Directory holding the view modules
            hooks: HookManager that receives the view render events
            reload: Re-import view modules on every render (debug mode)
        """
        self.views_dir = Path(views_dir)
        self.hooks = hooks
        self.reload = reload
        self._modules: Dict[Path, Any] = {}
        self._lock = threading.Lock()

    @staticmethod
    def sanitize(template: str) -> str:
        for token in ('https://', 'http://', '.py'):
            template = template.replace(token, '')
        template = template.replace('..', '').replace('\0', '').replace('\\', '/')
        while '//' in template:
            template = template.replace('//', '/')
        return template.strip('/')

    def path_for(self, template: str) -> Path:
        return self.views_dir / f"{self.sanitize(template)}.py"

    def exists(self, template: str) -> bool:
        name = self.sanitize(template)
        return bool(name) and self.path_for(name).is_file()

    def render(self, template: str, data: Optional[Dict] = None) -> str:
        """
        Raises:
            ViewNotFound: If there is no view module for the template
        """
        name = self.sanitize(template)
        path = self.path_for(name)
        if not name or not path.is_file():
            raise ViewNotFound(f"View not found: {template}")

        data = data if data is not None else {}

        if self.hooks is not None:
            hook_data = self.hooks.trigger('before_view_render', {
                'template': name,
                'data': data,
                'path': str(path),
            })
            if isinstance(hook_data, dict) and 'data' in hook_data:
                data = hook_data['data']

        output = str(self._load(path).render(data))

        if self.hooks is not None:
            hook_data = self.hooks.trigger('after_view_render', {
                'template': name,
                'data': data,
                'output': output,
            })
            if isinstance(hook_data, dict) and isinstance(hook_data.get('output'), str):
                output = hook_data['output']

        return output

    def _load(self, path: Path):
        module = None if self.reload else self._modules.get(path)
        if module is not None:
            return module

        with self._lock:
            module = None if self.reload else self._modules.get(path)
            if module is None:
                module_name = f"pyweave_view_{'_'.join(path.relative_to(self.views_dir).with_suffix('').parts)}"
                spec = importlib.util.spec_from_file_location(module_name, path)
                module = importlib.util.module_from_spec(spec)
                spec.loader.exec_module(module)

                if not callable(getattr(module, 'render', None)):
                    raise AttributeError(f"View {path} does not define render(data)")

                self._modules[path] = module
                logger.debug(f"View loaded: {path}")

        return module
