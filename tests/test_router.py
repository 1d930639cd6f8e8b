import pytest

from pyweave.exceptions import InvalidHandlerError, RegistrationError
from pyweave.routing import Route, Router


@pytest.fixture
def router():
    return Router()


def test_first_registered_route_wins(router):
    router.get('/blog/new', 'Blog@create')
    router.get('/blog/:id:', 'Blog@show')

    match = router.match('GET', '/blog/new')
    assert match.found
    assert match.route.handler == 'Blog@create'

    match = router.match('GET', '/blog/12')
    assert match.route.handler == 'Blog@show'
    assert match.params == ['12']
    assert match.named_params == {'id': '12'}


def test_parameterized_route_registered_first_shadows_literal(router):
    router.get('/blog/:id:', 'Blog@show')
    router.get('/blog/new', 'Blog@create')

    assert router.match('GET', '/blog/new').route.handler == 'Blog@show'


def test_method_must_match(router):
    router.post('/blog', 'Blog@store')

    match = router.match('GET', '/blog')
    assert not match.found
    assert match.method_not_allowed

    assert router.match('post', '/blog').found


def test_any_matches_every_method(router):
    router.any('/ping', 'Health@ping')

    for method in ('GET', 'POST', 'PUT', 'PATCH', 'DELETE', 'OPTIONS'):
        assert router.match(method, '/ping').found


def test_unknown_path_is_not_found(router):
    router.get('/', 'Home@index')

    match = router.match('GET', '/missing')
    assert not match.found
    assert not match.method_not_allowed


def test_trailing_slash_is_ignored(router):
    router.get('/about/', 'Pages@about')

    assert router.get_routes()[0].pattern == '/about'
    assert router.match('GET', '/about/').found


def test_invalid_handler_is_rejected_at_registration(router):
    with pytest.raises(InvalidHandlerError):
        router.get('/', 'HomeIndex')
    assert router.get_routes() == []


def test_unsupported_method_is_rejected():
    with pytest.raises(RegistrationError):
        Route('TRACE', '/', 'Home@index')


def test_group_applies_prefix_and_hooks(router):
    router.group({'prefix': '/api', 'hooks': ['cors']}, lambda: [
        router.get('/users', 'Api@users').hook('log'),
        router.group({'prefix': 'v2', 'hooks': 'throttle'}, lambda: [
            router.get('/users/:id:', 'Api@user'),
        ]),
    ])
    router.get('/outside', 'Home@index')

    users, user, outside = router.get_routes()
    assert users.pattern == '/api/users'
    assert users.hooks == ['cors', 'log']
    assert user.pattern == '/api/v2/users/:id:'
    assert user.hooks == ['cors', 'throttle']
    assert outside.pattern == '/outside'
    assert outside.hooks == []


def test_group_stack_is_restored_when_callback_raises(router):
    def broken():
        router.get('/inside', 'Home@index')
        raise ValueError('broken routes file')

    with pytest.raises(ValueError):
        router.group({'prefix': '/admin'}, broken)

    assert router.get('/after', 'Home@index').pattern == '/after'


def test_registrar_chains_prefix_and_hooks(router):
    router.prefix('/admin').hooks(['auth']).group(lambda: [
        router.get('/dashboard', 'Admin@dashboard'),
    ])

    route = router.get_routes()[0]
    assert route.pattern == '/admin/dashboard'
    assert route.hooks == ['auth']


def test_hook_aliases_are_deduplicated_in_attachment_order():
    route = Route('GET', '/', 'Home@index').hook(['b', 'a']).hook('b').hook('c')
    assert route.hooks == ['b', 'a', 'c']


def test_collection_summary(router):
    router.get('/', 'Home@index')
    router.post('/blog/:id:', 'Blog@update')
    router.get('/blog', 'Blog@index')

    summary = router.get_collection().to_dict()
    assert summary['total'] == 3
    assert summary['by_method'] == {'GET': 2, 'POST': 1}
    assert summary['routes'][1]['parameters'] == ['id']
    assert router.get_collection().get_by_handler('Blog@index').pattern == '/blog'
