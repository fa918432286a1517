import logging

import pytest

from jobspark.utils import env, logs
from jobspark.utils.tracing import add_span_metadata, get_current_span, trace_span


def test_spans_nest_and_close():
    with trace_span('outer', {'user_id': 'u1'}) as outer:
        with trace_span('inner') as inner:
            add_span_metadata('awarded', 2)
            assert get_current_span() is inner
        assert get_current_span() is outer

    assert get_current_span() is None
    assert inner.parent is outer
    assert outer.children == [inner]
    assert inner.root is outer
    assert inner.metadata == {'awarded': 2}
    assert outer.duration is not None


def test_span_marks_failure_and_reraises(caplog):
    caplog.set_level(logging.INFO, logger='jobspark.utils.tracing')
    with pytest.raises(ValueError):
        with trace_span('broken') as span:
            raise ValueError('boom')

    assert span.failed is True
    assert 'broken' in caplog.text and 'FAILED' in caplog.text


def test_add_span_metadata_outside_span_is_ignored():
    add_span_metadata('key', 'value')
    assert get_current_span() is None


def test_require_env(monkeypatch):
    monkeypatch.setenv('GUILD_ID', '123')
    assert env.require_env('GUILD_ID') == '123'
    monkeypatch.setenv('GUILD_ID', '')
    with pytest.raises(RuntimeError, match='GUILD_ID not set'):
        env.require_env('GUILD_ID')


@pytest.mark.parametrize(
    'variables, expected',
    [
        ({}, '.env.local'),
        ({'ENV': 'production'}, '.env.prod'),
        ({'PYTHON_ENV': 'prod'}, '.env.prod'),
        ({'ENV': 'prod', 'ENV_FILE': 'custom.env'}, 'custom.env'),
    ],
)
def test_env_filename(monkeypatch, variables, expected):
    for name in ('ENV', 'PYTHON_ENV', 'ENV_FILE'):
        monkeypatch.delenv(name, raising=False)
    for name, value in variables.items():
        monkeypatch.setenv(name, value)
    assert env._resolve_env_filename() == expected


def test_load_env_reads_dotenv_file(tmp_path, monkeypatch):
    (tmp_path / 'pyproject.toml').write_text('')
    (tmp_path / '.env.local').write_text('ACHIEVEMENTS_TEST_VALUE=loaded\n')
    monkeypatch.delenv('ENV', raising=False)
    monkeypatch.delenv('PYTHON_ENV', raising=False)
    monkeypatch.delenv('ENV_FILE', raising=False)
    monkeypatch.setenv('ACHIEVEMENTS_TEST_VALUE', 'stale')
    monkeypatch.setattr(env, '_find_project_root', lambda: tmp_path)

    assert env.load_env(override=True) == tmp_path / '.env.local'
    assert env.require_env('ACHIEVEMENTS_TEST_VALUE') == 'loaded'


def test_resolve_level(monkeypatch):
    monkeypatch.setenv('LOG_LEVEL', 'debug')
    assert logs.resolve_level() == logging.DEBUG
    monkeypatch.setenv('LOG_LEVEL', 'chatty')
    assert logs.resolve_level(logging.WARNING) == logging.WARNING
    monkeypatch.delenv('LOG_LEVEL')
    assert logs.resolve_level() == logging.INFO
