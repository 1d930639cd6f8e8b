import os

from pyweave.support import Config, EnvHelper, Storage, Str


def test_config_reads_project_modules_with_dot_notation(project):
    project({'config/app.py': '''
        NAME = 'Blog Engine'
        LOGGERS = {'audit': {'name': 'audit', 'format': 'text'}}
    '''})

    assert Config.get('app.NAME') == 'Blog Engine'
    assert Config.get('app.name') == 'Blog Engine'
    assert Config.get('app.loggers.audit.format') == 'text'
    assert Config.get('app.MISSING', 'fallback') == 'fallback'
    assert Config.get('nofile.KEY', 3) == 3
    assert Config.all('nofile') is None


def test_runtime_overrides_win(project):
    project({'config/routing.py': 'CACHE_ENABLED = False\n'})

    Config.set('routing.cache_enabled', True)
    assert Config.get('routing.CACHE_ENABLED') is True

    Config.clear_runtime_overrides()
    assert Config.get('routing.CACHE_ENABLED') is False


def test_env_helper_loads_dotenv(tmp_path, monkeypatch):
    monkeypatch.delenv('PYWEAVE_TEST_FLAG', raising=False)
    monkeypatch.delenv('PYWEAVE_TEST_PORT', raising=False)
    env_file = tmp_path / '.env'
    env_file.write_text('PYWEAVE_TEST_FLAG=yes\nPYWEAVE_TEST_PORT=8080\n')

    assert EnvHelper.load(env_file)
    try:
        assert EnvHelper.get_bool('PYWEAVE_TEST_FLAG') is True
        assert EnvHelper.get_int('PYWEAVE_TEST_PORT') == 8080
        assert EnvHelper.get('PYWEAVE_TEST_MISSING', 'x') == 'x'
    finally:
        os.environ.pop('PYWEAVE_TEST_FLAG', None)
        os.environ.pop('PYWEAVE_TEST_PORT', None)


def test_env_helper_missing_file(tmp_path):
    assert EnvHelper.load(tmp_path / '.env') is False


def test_storage_paths(tmp_path):
    Storage.initialize(tmp_path)

    assert Storage.base('controllers') == tmp_path.resolve() / 'controllers'
    assert Storage.cache('routes.json') == tmp_path.resolve() / 'storage' / 'cache' / 'routes.json'
    assert Storage.resolve('queue') == tmp_path.resolve() / 'storage' / 'queue'
    assert Storage.resolve('/abs/path').as_posix() == '/abs/path'


def test_str_helpers():
    assert Str.snake('UserProfile') == 'user_profile'
    assert Str.snake('SendEmailJob') == 'send_email_job'
    assert Str.studly('user_profile') == 'UserProfile'
