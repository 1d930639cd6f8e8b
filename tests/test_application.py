import pytest

from pyweave import App, Hook, Models, Queue, Route
from pyweave.application import Application
from pyweave.hooks import BOOT_EVENTS
from pyweave.support.facades import Facade

RECORD_BOOT = '''
EVENTS = []


def register(hooks):
    for event in (
        'framework_start',
        'before_db_connection',
        'after_db_connection',
        'before_models_load',
        'after_models_load',
        'before_router_init',
        'after_routes_registered',
    ):
        hooks.register(event, lambda data, name=event: EVENTS.append(name))
'''


def test_boot_fires_events_in_order(make_app):
    make_app({'hooks/record.py': RECORD_BOOT})

    import pyweave_hooks_record
    assert pyweave_hooks_record.EVENTS == list(BOOT_EVENTS)


def test_boot_runs_once(make_app):
    app = make_app({'hooks/record.py': RECORD_BOOT})
    app.boot()

    import pyweave_hooks_record
    assert len(pyweave_hooks_record.EVENTS) == len(BOOT_EVENTS)


def test_boot_halt_does_not_leak_into_requests(make_app):
    app = make_app({'hooks/stop.py': '''
        def register(hooks):
            hooks.register('framework_start', lambda data: hooks.halt())
    '''})

    assert not app.hooks.is_halted()


def test_container_singletons_and_factories(project):
    app = Application(str(project()))
    built = []

    def factory(app):
        built.append(1)
        return object()

    app.singleton('thing', factory)
    assert app.make('thing') is app.make('thing')
    assert len(built) == 1

    app.bind('fresh', lambda app: object())
    assert app.make('fresh') is not app.make('fresh')

    assert app.has('thing')
    assert app.get_bindings()['thing'] == {'type': 'singleton', 'instantiated': True}
    with pytest.raises(KeyError):
        app.make('unknown')


def test_core_services_are_bound(project):
    app = Application(str(project()))

    for key in ('app', 'hooks', 'router', 'models', 'queue', 'dispatcher', 'view', 'error_handler'):
        assert app.has(key), key
    assert app.make('app') is app


def test_facades_follow_the_latest_application(project):
    first = Application(str(project()))
    second = Application(str(project()))

    assert App.get_facade_root() is second
    assert Route.get_facade_root() is second.router
    assert Hook.get_facade_root() is second.hooks
    assert Models.get_facade_root() is second.models
    assert Queue.get_facade_root() is second.queue
    assert first.router is not second.router
    assert first.hooks is not second.hooks


def test_facade_without_application():
    Facade.clear_app()

    with pytest.raises(RuntimeError):
        Route.get('/', 'Home@index')


def test_debug_and_name_from_config(project):
    app = Application(str(project({'config/app.py': "NAME = 'My Blog!'\nDEBUG = True\n"})))

    assert app.debug is True
    assert app.name == 'My Blog!'
    assert app.sanic_app.name == 'my_blog_'


def test_debug_from_env_file(project, monkeypatch):
    # Recorded as set, so teardown removes what load_dotenv() adds
    monkeypatch.setenv('APP_DEBUG', '')
    monkeypatch.delenv('APP_DEBUG')
    base = project({'.env': 'APP_DEBUG=true\n'})

    app = Application(str(base))

    assert app.debug is True


def test_custom_provider_list(project):
    from pyweave.providers import HookServiceProvider

    app = Application(str(project()), providers=[HookServiceProvider])
    app.boot()

    assert app.has('hooks')
    assert not app.has('router')
