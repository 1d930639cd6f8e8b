import asyncio
import sys

import pytest
from sanic.response import text

from pyweave import Hook

ROUTES = '''
from pyweave import Route

Route.get('/', 'Blog@index')
Route.get('/blog/:post_id:', 'Blog@show')
Route.get('/user/:user_id:/post/:post_id:', 'Blog@comment')
Route.delete('/blog/:post_id:', 'Blog@destroy')
Route.get('/fail', 'Blog@fail')
Route.get('/secret', 'Blog@_secret')
Route.get('/nocontroller', 'Missing@index')
Route.get('/noaction', 'Blog@nothing')
Route.get('/guarded', 'Blog@index').hook('missing_alias')
Route.get('/tasks', 'Tasks@start')

Route.group({'prefix': '/api', 'hooks': ['cors']}, lambda: [
    Route.get('/posts/:post_id:', 'Blog@show'),
    Route.any('/posts', 'Blog@index'),
])
'''

TASKS_CONTROLLER = '''
from pyweave import Controller, Queue

DONE = []


class Tasks(Controller):
    def start(self):
        Queue.defer(DONE.append, 'ran')
        return 'started'
'''


@pytest.fixture
def blog_app(make_app, blog_controller):
    def build(**extra_files):
        files = {
            'routes.py': ROUTES,
            'controllers/blog.py': blog_controller,
            'controllers/tasks.py': TASKS_CONTROLLER,
        }
        files.update({name.replace('__', '/') + '.py': content for name, content in extra_files.items()})
        return make_app(files)
    return build


async def test_params_are_passed_in_pattern_order(blog_app, client):
    app = blog_app()
    _, response = await client(app).get('/user/42/post/7')

    assert response.status == 200
    assert response.json == {'user': '42', 'post': '7'}


async def test_string_result_is_html(blog_app, client):
    app = blog_app()
    _, response = await client(app).get('/blog/5/')

    assert response.status == 200
    assert response.text == 'post 5'
    assert response.headers['content-type'].startswith('text/html')


async def test_unmatched_path_is_404(blog_app, client):
    app = blog_app()
    _, response = await client(app).get('/nothing/here')

    assert response.status == 404
    assert response.text == '404 - Route not found'


async def test_wrong_method_is_404(blog_app, client):
    app = blog_app()
    _, response = await client(app).put('/blog/5')

    assert response.status == 404


async def test_action_exception_is_500_without_details(blog_app, client):
    app = blog_app()
    _, response = await client(app).get('/fail')

    assert response.status == 500
    assert response.text == '500 - Internal Server Error'


async def test_debug_error_page_escapes_message(blog_app, client):
    app = blog_app(config__app='DEBUG = True\n')
    _, response = await client(app).get('/fail')

    assert response.status == 500
    assert '&lt;boom&gt;' in response.text
    assert '<boom>' not in response.text
    assert '<pre>' in response.text


@pytest.mark.parametrize('path', ['/secret', '/nocontroller', '/noaction'])
async def test_unresolvable_handler_is_500(blog_app, client, path):
    app = blog_app()
    _, response = await client(app).get(path)

    assert response.status == 500


async def test_unregistered_named_hook_fails_closed(blog_app, client):
    app = blog_app()
    ran = []
    app.hooks.register('before_action_execute', lambda data: ran.append('action hook'))

    _, response = await client(app).get('/guarded')

    assert response.status == 500
    assert ran == []


async def test_request_events_fire_in_order(blog_app, client):
    app = blog_app()
    events = []
    for event in ('before_route_match', 'after_route_match', 'before_controller_load',
                  'after_controller_instantiate', 'before_action_execute',
                  'after_action_execute', 'framework_shutdown', 'on_404'):
        app.hooks.register(event, lambda data, name=event: events.append(name))

    await client(app).get('/blog/1')

    assert events == [
        'before_route_match',
        'after_route_match',
        'before_controller_load',
        'after_controller_instantiate',
        'before_action_execute',
        'after_action_execute',
        'framework_shutdown',
    ]


async def test_before_action_data(blog_app, client):
    app = blog_app()
    seen = {}
    app.hooks.register('before_action_execute', lambda data: seen.update(data))

    await client(app).get('/blog/5')

    assert seen['method'] == 'GET'
    assert seen['uri'] == '/blog/5'
    assert seen['controller'] == 'Blog'
    assert seen['action'] == 'show'
    assert type(seen['instance']).__name__ == 'Blog'
    assert seen['params'] == ['5']
    assert seen['named_params'] == {'post_id': '5'}
    assert seen['context'].matched_route.pattern == '/blog/:post_id:'


async def test_before_action_hook_can_replace_params(blog_app, client):
    app = blog_app()

    def rewrite(data):
        data['params'] = ['99']
        return data

    app.hooks.register('before_action_execute', rewrite)
    _, response = await client(app).get('/blog/5')

    assert response.text == 'post 99'


async def test_halt_before_action_skips_action_and_after_hooks(blog_app, client):
    app = blog_app()
    calls = []

    def guard(data):
        calls.append('guard')
        Hook.halt(text('denied', status=403))

    app.hooks.register('before_action_execute', guard)
    app.hooks.register('before_action_execute', lambda data: calls.append('later hook'), priority=20)
    app.hooks.register('after_action_execute', lambda data: calls.append('after'))

    _, response = await client(app).get('/tasks')

    assert response.status == 403
    assert response.text == 'denied'
    assert calls == ['guard']
    assert sys.modules['controllers.tasks'].DONE == []


async def test_halt_without_response_is_empty(blog_app, client):
    app = blog_app()
    app.hooks.register('after_controller_instantiate', lambda data: app.hooks.halt())

    _, response = await client(app).get('/blog/5')

    assert response.status == 204
    assert response.text == ''


async def test_halt_is_reset_between_requests(blog_app, client):
    app = blog_app()

    def halt_first(data):
        if data['uri'] == '/blog/1':
            app.hooks.halt('halted')

    app.hooks.register('before_route_match', halt_first)
    test_client = client(app)

    _, first = await test_client.get('/blog/1')
    _, second = await test_client.get('/blog/2')

    assert first.text == 'halted'
    assert second.text == 'post 2'


async def test_after_action_hook_can_replace_response(blog_app, client):
    app = blog_app()

    def wrap(data):
        data['response'] = f"[{data['response']}]"
        return data

    app.hooks.register('after_action_execute', wrap)
    _, response = await client(app).get('/blog/3')

    assert response.text == '[post 3]'


async def test_hook_exception_is_500(blog_app, client):
    app = blog_app()

    def broken(data):
        raise KeyError('nope')

    app.hooks.register('after_route_match', broken)
    _, response = await client(app).get('/blog/3')

    assert response.status == 500


async def test_on_404_can_render_custom_page(blog_app, client):
    app = blog_app()
    seen = []

    def custom(data):
        seen.append(data['uri'])
        Hook.halt(text('custom missing page', status=404))

    app.hooks.register('on_404', custom)
    _, response = await client(app).get('/unknown')

    assert response.status == 404
    assert response.text == 'custom missing page'
    assert seen == ['/unknown']


async def test_on_error_receives_exception_and_can_replace_page(blog_app, client):
    app = blog_app()
    errors = []

    def report(data):
        errors.append(type(data['exception']).__name__)
        data['response'] = text('custom error page', status=500)
        return data

    app.hooks.register('on_error', report)
    _, response = await client(app).get('/fail')

    assert errors == ['RuntimeError']
    assert response.status == 500
    assert response.text == 'custom error page'


async def test_async_hook_is_awaited_and_can_halt(blog_app, client):
    app = blog_app()

    async def guard(data):
        await asyncio.sleep(0)
        Hook.halt(text('denied', status=403))

    app.hooks.register('before_action_execute', guard)
    _, response = await client(app).get('/tasks')

    assert response.status == 403
    assert response.text == 'denied'
    assert sys.modules['controllers.tasks'].DONE == []


async def test_async_hook_result_replaces_data(blog_app, client):
    app = blog_app()

    async def rewrite(data):
        data['params'] = ['12']
        return data

    app.hooks.register('before_action_execute', rewrite)
    _, response = await client(app).get('/blog/5')

    assert response.text == 'post 12'


async def test_on_error_can_halt_with_page(blog_app, client):
    app = blog_app()
    app.hooks.register('on_error', lambda data: Hook.halt(text('custom error via halt', status=503)))

    _, response = await client(app).get('/fail')

    assert response.status == 503
    assert response.text == 'custom error via halt'


async def test_halt_response_before_error_is_not_reused(blog_app, client):
    app = blog_app()

    def halt_then_fail(data):
        Hook.halt(text('too early', status=202))
        raise RuntimeError('failed after halting')

    app.hooks.register('before_action_execute', halt_then_fail)
    _, response = await client(app).get('/blog/1')

    assert response.status == 500
    assert response.text == '500 - Internal Server Error'


async def test_method_override_from_form(blog_app, client):
    app = blog_app()
    _, response = await client(app).post('/blog/9', data={'_method': 'DELETE'})

    assert response.status == 200
    assert response.text == 'deleted 9'


async def test_method_override_ignored_without_form_body(blog_app, client):
    app = blog_app()
    _, response = await client(app).post('/blog/9', json={'_method': 'DELETE'})

    assert response.status == 404


async def test_cors_group_sets_headers_before_action(blog_app, client):
    app = blog_app()
    order = []
    app.hooks.register('before_action_execute', lambda data: order.append(
        dict(data['context'].response_headers).get('Access-Control-Allow-Origin')
    ), priority=1)
    app.hooks.register('after_action_execute', lambda data: order.append(
        data['context'].response_headers.get('Access-Control-Allow-Origin')
    ))

    _, response = await client(app).get('/api/posts/3', headers={'Origin': 'https://example.com'})

    assert response.text == 'post 3'
    assert response.headers['access-control-allow-origin'] == '*'
    # Global hooks run before the route's named hooks at the same event
    assert order == [None, '*']


async def test_cors_preflight_is_answered_by_hook(blog_app, client):
    app = blog_app()
    _, response = await client(app).options('/api/posts')

    assert response.status == 204
    assert 'GET' in response.headers['access-control-allow-methods']


async def test_routes_outside_group_have_no_cors(blog_app, client):
    app = blog_app()
    _, response = await client(app).get('/blog/3')

    assert 'access-control-allow-origin' not in response.headers


async def test_base_url_is_stripped(blog_app, client):
    app = blog_app(config__app="BASE_URL = '/app'\n")
    _, response = await client(app).get('/app/blog/5')

    assert response.text == 'post 5'


async def test_shutdown_sees_final_response(blog_app, client):
    app = blog_app()
    statuses = []
    app.hooks.register('framework_shutdown', lambda data: statuses.append(data['response'].status))

    await client(app).get('/missing')

    assert statuses == [404]


async def test_deferred_callbacks_run_after_response(blog_app, client):
    app = blog_app()
    _, response = await client(app).get('/tasks')
    assert response.text == 'started'

    done = sys.modules['controllers.tasks'].DONE
    for _ in range(100):
        if done:
            break
        await asyncio.sleep(0.01)

    assert done == ['ran']


async def test_hook_files_are_loaded_on_boot(blog_app, client):
    app = blog_app(hooks__banner='''
        from pyweave import Hook


        @Hook.listen('after_action_execute')
        def banner(data):
            data['response'] = 'banner: ' + data['response']
            return data
    ''')
    _, response = await client(app).get('/')

    assert response.text == 'banner: blog index'
