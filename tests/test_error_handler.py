from types import SimpleNamespace

import pytest
from sanic.exceptions import NotFound

from pyweave.exceptions import ErrorHandler, HandlerMissingException, HookFailure, HookNotFoundError, RegistrationError


def test_not_found_page():
    response = ErrorHandler().not_found('GET', '/missing')

    assert response.status == 404
    assert response.body == b'404 - Route not found'


def test_server_error_hides_details_outside_debug():
    response = ErrorHandler(debug=False).server_error(RuntimeError('secret detail'), 'GET', '/')

    assert response.status == 500
    assert response.body == b'500 - Internal Server Error'


def test_debug_server_error_shows_escaped_message_and_trace():
    try:
        raise ValueError('<script>alert(1)</script>')
    except ValueError as e:
        response = ErrorHandler(debug=True).server_error(e, 'GET', '/')

    body = response.body.decode()
    assert response.status == 500
    assert '&lt;script&gt;' in body
    assert '<script>' not in body
    assert 'Traceback' in body


@pytest.mark.parametrize('error, status', [
    (NotFound('gone'), 404),
    (HandlerMissingException('no controller'), 500),
    (RuntimeError('crash'), 500),
])
async def test_handle_error_status(error, status):
    request = SimpleNamespace(method='GET', path='/x')

    response = await ErrorHandler().handle_error(request, error)
    assert response.status == status


def test_exception_hierarchy():
    assert issubclass(HookNotFoundError, RegistrationError)

    failure = HookFailure('on_404', 'page', KeyError('k'))
    assert failure.status_code == 500
    assert 'on_404' in failure.message
