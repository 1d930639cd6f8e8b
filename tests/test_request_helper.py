from types import SimpleNamespace

import pytest

from pyweave.http import RequestHelper


def form_request(method='POST', content_type='application/x-www-form-urlencoded', form=None):
    return SimpleNamespace(method=method, content_type=content_type, form=form or {})


@pytest.mark.parametrize('form, expected', [
    ({'_method': 'delete'}, 'DELETE'),
    ({'_method': ' put '}, 'PUT'),
    ({'_method': 'DEL;ETE'}, 'POST'),
    ({}, 'POST'),
])
def test_method_override(form, expected):
    assert RequestHelper.method(form_request(form=form)) == expected


def test_override_only_applies_to_post_forms():
    assert RequestHelper.method(form_request(method='GET', form={'_method': 'DELETE'})) == 'GET'
    assert RequestHelper.method(form_request(content_type='application/json', form={'_method': 'DELETE'})) == 'POST'
    assert RequestHelper.method(form_request(content_type='multipart/form-data; boundary=x', form={'_method': 'PATCH'})) == 'PATCH'


@pytest.mark.parametrize('path, base_url, expected', [
    ('/blog/5/', '/', '/blog/5'),
    ('/blog/5?page=2', '/', '/blog/5'),
    ('/app/blog/5', '/app', '/blog/5'),
    ('/app', '/app/', '/'),
    ('/application/x', '/app', '/application/x'),
    ('', '/', '/'),
])
def test_uri(path, base_url, expected):
    assert RequestHelper.uri(path, base_url) == expected
