import pytest

from pyweave.exceptions import InvalidHandlerError
from pyweave.routing import CompiledPattern, compile_pattern, normalize_path, parse_handler
from pyweave.routing.pattern import join_paths


def test_placeholders_are_captured_in_pattern_order():
    compiled = CompiledPattern('/user/:user_id:/post/:post_id:')

    assert compiled.match('/user/42/post/7') == ['42', '7']
    assert compiled.parameter_names == ['user_id', 'post_id']
    assert compiled.match_named('/user/42/post/7') == {'user_id': '42', 'post_id': '7'}


def test_placeholder_matches_exactly_one_segment():
    compiled = CompiledPattern('/blog/:id:')

    assert compiled.match('/blog/5') == ['5']
    assert compiled.match('/blog/5/edit') is None
    assert compiled.match('/blog/') is None
    assert compiled.match('/blog') is None


def test_literal_text_is_not_treated_as_regex():
    compiled = CompiledPattern('/files/report.pdf')

    assert compiled.is_static
    assert compiled.match('/files/report.pdf') == []
    assert compiled.match('/files/reportXpdf') is None


def test_placeholder_inside_segment():
    compiled = CompiledPattern('/archive/:year:-:month:')
    assert compiled.match('/archive/2024-05') is not None
    assert compiled.parameter_names == ['year', 'month']


def test_compiled_patterns_are_cached():
    assert compile_pattern('/cached/:id:') is compile_pattern('/cached/:id:')


@pytest.mark.parametrize('path, expected', [
    ('', '/'),
    ('/', '/'),
    ('blog', '/blog'),
    ('/blog/', '/blog'),
    ('/blog//', '/blog'),
])
def test_normalize_path(path, expected):
    assert normalize_path(path) == expected


def test_join_paths():
    assert join_paths('/api', '/users') == '/api/users'
    assert join_paths('/api/', 'v1/') == '/api/v1'
    assert join_paths('/api', '/') == '/api'


def test_parse_handler():
    assert parse_handler('Blog@show') == ('Blog', 'show')


@pytest.mark.parametrize('handler', ['Blog', 'Blog@', '@show', 'Blog@show@x', '', None])
def test_parse_handler_rejects_malformed(handler):
    with pytest.raises(InvalidHandlerError):
        parse_handler(handler)
