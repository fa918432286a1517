import psycopg
import pytest

from jobspark.database.db_manager import DBManager


def test_queries_require_a_context():
    with pytest.raises(RuntimeError, match='not in a context'):
        DBManager().fetchall('SELECT 1')


def test_missing_database_url(monkeypatch):
    monkeypatch.delenv('DATABASE_URL', raising=False)
    with pytest.raises(RuntimeError, match='DATABASE_URL'):
        with DBManager():
            pass


def test_retry_once_after_dropped_connection(monkeypatch):
    db = DBManager()
    reconnects = []
    monkeypatch.setattr(db, '_reconnect', lambda: reconnects.append(True))
    attempts = []

    def flaky():
        attempts.append(True)
        if len(attempts) == 1:
            raise psycopg.OperationalError('server closed the connection')
        return 'ok'

    assert db._run_with_retry(flaky) == 'ok'
    assert len(attempts) == 2
    assert len(reconnects) == 1


def test_other_errors_are_not_retried(monkeypatch):
    db = DBManager()
    monkeypatch.setattr(db, '_reconnect', lambda: pytest.fail('reconnected'))

    def broken():
        raise psycopg.errors.UniqueViolation('duplicate key')

    with pytest.raises(psycopg.errors.UniqueViolation):
        db._run_with_retry(broken)
