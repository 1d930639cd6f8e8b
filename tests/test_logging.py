import json
import logging

from pyweave.logging import JSONFormatter, LoggerConfig, SensitiveDataFilter


def make_record(msg, args=(), **extra):
    record = logging.LogRecord('pyweave.requests', logging.INFO, __file__, 1, msg, args, None)
    for key, value in extra.items():
        setattr(record, key, value)
    return record


def test_form_and_json_secrets_are_redacted():
    record = make_record('POST /login body: user=ann&password=hunter2 {"token": "abc123"}')

    SensitiveDataFilter().filter(record)

    assert 'hunter2' not in record.msg
    assert 'abc123' not in record.msg
    assert 'user=ann' in record.msg
    assert '"token": "[REDACTED]"' in record.msg


def test_authorization_header_is_redacted():
    record = make_record('headers: %s', ('Authorization: Bearer eyJhbGciOi.x.y',))

    SensitiveDataFilter().filter(record)

    assert record.getMessage() == 'headers: Authorization: Bearer [REDACTED]'


def test_extra_params_are_redacted():
    record = make_record('GET /reset', params={'password': 'hunter2', 'user_id': '7'}, api_key='k-1')

    SensitiveDataFilter().filter(record)

    assert record.params == {'password': '[REDACTED]', 'user_id': '7'}
    assert record.api_key == '[REDACTED]'


def test_additional_keys():
    record = make_record('ssn=123-45-6789', params={'SSN': '123'})

    SensitiveDataFilter(['ssn']).filter(record)

    assert record.msg == 'ssn=[REDACTED]'
    assert record.params == {'SSN': '[REDACTED]'}


def test_json_formatter_includes_extra_fields():
    record = make_record('GET /blog/1', controller='Blog', action='show')

    payload = json.loads(JSONFormatter().format(record))

    assert payload['message'] == 'GET /blog/1'
    assert payload['level'] == 'INFO'
    assert payload['logger'] == 'pyweave.requests'
    assert payload['controller'] == 'Blog'
    assert payload['action'] == 'show'


def test_level_by_environment():
    assert LoggerConfig.get_level_by_environment('production') == logging.WARNING
    assert LoggerConfig.get_level_by_environment('Local') == logging.DEBUG
    assert LoggerConfig.get_level_by_environment('unknown') == logging.INFO


def test_setup_logger_writes_under_storage(tmp_path):
    from pyweave.support import Storage

    Storage.initialize(str(tmp_path))
    logger = LoggerConfig.setup_logger('pyweave_test_audit', format_type='text', file_name='audit')
    try:
        logger.warning('reset for password=hunter2')
        for handler in logger.handlers:
            handler.flush()

        content = (tmp_path / 'storage' / 'logs' / 'audit.log').read_text(encoding='utf-8')
        assert 'password=[REDACTED]' in content
        assert logger.propagate is False
    finally:
        for handler in list(logger.handlers):
            logger.removeHandler(handler)
            handler.close()
