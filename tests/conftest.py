import importlib
import sys
import textwrap

import pytest
from sanic import Sanic

from pyweave.support import Config, EnvHelper, Storage
from pyweave.support.facades import Facade

# Every test builds its own Application, and with it a Sanic app
Sanic.test_mode = True

# Application packages imported from each test project
APP_PACKAGES = ('config', 'controllers', 'models', 'jobs')
LOADED_FILE_PREFIXES = ('pyweave_hooks_', 'pyweave_routes', 'pyweave_view_', 'pyweave_command_')


def _purge_project_modules():
    for name in list(sys.modules):
        if name.split('.')[0] in APP_PACKAGES or name.startswith(LOADED_FILE_PREFIXES):
            del sys.modules[name]


@pytest.fixture(autouse=True)
def isolated_framework():
    """Forget project modules, config and the facade app between tests"""
    saved_path = list(sys.path)
    _purge_project_modules()
    Config.reload()
    Config.clear_runtime_overrides()
    EnvHelper.reset()
    importlib.invalidate_caches()

    yield

    _purge_project_modules()
    Config.reload()
    Config.clear_runtime_overrides()
    EnvHelper.reset()
    Facade.clear_app()
    Storage._base_path = None
    Storage._storage_path = None
    sys.path[:] = saved_path


@pytest.fixture
def project(tmp_path):
    """
    Write a project tree under tmp_path

    Usage:
        base = project({'routes.py': '...', 'controllers/blog.py': '...'})
    """
    def write(files=None):
        for package in APP_PACKAGES:
            (tmp_path / package).mkdir(exist_ok=True)
            (tmp_path / package / '__init__.py').touch()

        for relative, content in (files or {}).items():
            path = tmp_path / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(textwrap.dedent(content).lstrip(), encoding='utf-8')

        if str(tmp_path) not in sys.path:
            sys.path.insert(0, str(tmp_path))
        importlib.invalidate_caches()
        return tmp_path

    return write


@pytest.fixture
def make_app(project):
    """Build and boot an Application over a project tree"""
    from pyweave.application import Application

    def build(files=None, boot=True):
        app = Application(str(project(files)))
        if boot:
            app.boot()
        return app

    return build


@pytest.fixture
def client():
    """ASGI test client for an application's Sanic app"""
    from sanic_testing.testing import SanicASGITestClient

    def build(app):
        return SanicASGITestClient(app.sanic_app)

    return build


BLOG_CONTROLLER = '''
from pyweave import Controller


class Blog(Controller):
    def index(self):
        return 'blog index'

    def show(self, post_id):
        return f'post {post_id}'

    def comment(self, user_id, post_id):
        return {'user': user_id, 'post': post_id}

    def destroy(self, post_id):
        return f'deleted {post_id}'

    def fail(self):
        raise RuntimeError('<boom>')

    def _secret(self):
        return 'hidden'
'''


@pytest.fixture
def blog_controller():
    return BLOG_CONTROLLER
