import json

from pyweave.routing import RouteCache, Router


def _router_with_routes(cache_path):
    router = Router().enable_cache(cache_path)
    router.get('/', 'Home@index')
    router.group({'prefix': '/api', 'hooks': ['cors']}, lambda: [
        router.get('/user/:user_id:/post/:post_id:', 'Api@post').hook('log'),
    ])
    return router


def test_cached_table_matches_like_the_original(tmp_path):
    cache_path = tmp_path / 'cache' / 'routes.json'
    original = _router_with_routes(cache_path)
    assert original.save_to_cache()

    restored = Router().enable_cache(cache_path)
    assert restored.load_from_cache()
    assert restored.loaded_from_cache

    assert [r.to_dict() for r in restored.get_routes()] == [r.to_dict() for r in original.get_routes()]
    match = restored.match('GET', '/api/user/42/post/7')
    assert match.params == ['42', '7']
    assert match.route.hooks == ['cors', 'log']


def test_cache_file_format(tmp_path):
    cache_path = tmp_path / 'routes.json'
    _router_with_routes(cache_path).save_to_cache()

    payload = json.loads(cache_path.read_text())
    assert payload['version'] == 1
    assert payload['routes'][0] == {'method': 'GET', 'pattern': '/', 'handler': 'Home@index', 'hooks': []}
    # No temporary files left behind
    assert [p.name for p in tmp_path.iterdir()] == ['routes.json']


def test_missing_or_corrupt_cache_is_ignored(tmp_path):
    cache = RouteCache(tmp_path / 'routes.json')
    assert cache.load() is None

    cache.path.write_text('{not json')
    assert cache.load() is None

    cache.path.write_text(json.dumps({'version': 99, 'routes': []}))
    assert cache.load() is None

    cache.path.write_text(json.dumps({'version': 1, 'routes': [{'method': 'GET'}]}))
    assert cache.load() is None

    router = Router().enable_cache(cache.path)
    router.get('/', 'Home@index')
    assert not router.load_from_cache()
    assert len(router.get_routes()) == 1


def test_cache_with_invalid_handler_keeps_current_table(tmp_path):
    cache_path = tmp_path / 'routes.json'
    cache_path.write_text(json.dumps({
        'version': 1,
        'routes': [{'method': 'GET', 'pattern': '/', 'handler': 'broken'}],
    }))

    router = Router().enable_cache(cache_path)
    router.get('/keep', 'Home@index')
    assert not router.load_from_cache()
    assert router.get_routes()[0].pattern == '/keep'


def test_clear(tmp_path):
    router = _router_with_routes(tmp_path / 'routes.json')
    router.save_to_cache()

    assert router.clear_cache()
    assert not router.cache.exists()
    assert not router.clear_cache()


def test_boot_uses_cache_when_enabled(make_app):
    files = {
        'config/routing.py': 'CACHE_ENABLED = True\n',
        'routes.py': '''
            from pyweave import Route

            Route.get('/', 'Home@index')
        ''',
    }

    first = make_app(files)
    assert not first.router.loaded_from_cache
    assert first.router.cache.exists()

    # Changes to routes.py are not seen while the cache exists
    (first.router.cache.path.parents[2] / 'routes.py').write_text(
        "from pyweave import Route\nRoute.get('/changed', 'Home@index')\n"
    )
    second = make_app()
    assert second.router.loaded_from_cache
    assert [r.pattern for r in second.router.get_routes()] == ['/']
