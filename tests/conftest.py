import contextlib
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Iterator

import pytest

from jobspark.achievements.catalog import AchievementCatalog, default_catalog
from jobspark.achievements.engine import AchievementsEngine
from jobspark.achievements.types import MetricsSnapshot, UserAchievement

NOW = datetime(2026, 2, 7, 15, 30, tzinfo=timezone.utc)  # a Saturday


@dataclass
class FakeDB:
    fetchone_results: list[Any] = field(default_factory=list)
    fetchall_results: list[Any] = field(default_factory=list)
    executed: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    queries: list[tuple[str, tuple[Any, ...]]] = field(default_factory=list)
    last_query: str | None = None
    last_params: tuple[Any, ...] | None = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        return False

    def _record(self, query: str, params) -> None:
        self.last_query = query
        self.last_params = tuple(params or ())
        self.queries.append((query, self.last_params))

    def fetchone(self, query: str, params=None):
        self._record(query, params)
        if self.fetchone_results:
            return self.fetchone_results.pop(0)

    def fetchall(self, query: str, params=None):
        self._record(query, params)
        if self.fetchall_results:
            return self.fetchall_results.pop(0)
        return []

    def execute(self, query: str, params=None) -> None:
        self.executed.append((query, tuple(params or ())))


class FakeDBManager:
    def __init__(self, db: FakeDB):
        self._db = db

    def __call__(self):
        return self._db


@contextlib.contextmanager
def patched_dbmanager(monkeypatch, target_module, db: FakeDB) -> Iterator[FakeDB]:
    monkeypatch.setattr(target_module, 'DBManager', FakeDBManager(db))
    yield db


class InMemoryStore:
    '''AchievementStore keeping rows in a dict keyed like the unique constraint.'''

    def __init__(self) -> None:
        self.rows: dict[tuple[str, str], UserAchievement] = {}
        self.insert_calls = 0
        self.fail_for: set[str] = set()

    def for_user(self, user_id):
        return [ua for (uid, _), ua in self.rows.items() if uid == str(user_id)]

    def insert_if_absent(self, award: UserAchievement) -> bool:
        self.insert_calls += 1
        if award.achievement_id in self.fail_for:
            raise RuntimeError('database unavailable')
        key = (award.user_id, award.achievement_id)
        if key in self.rows:
            return False
        self.rows[key] = award
        return True


class StaticMetrics:
    '''MetricsProvider returning a fixed snapshot; counts snapshot() calls.'''

    def __init__(self, snapshot: MetricsSnapshot | None = None) -> None:
        self.current = snapshot
        self.calls = 0

    def snapshot(self, user_id):
        self.calls += 1
        if self.current is None:
            return MetricsSnapshot(user_id=str(user_id), taken_at=NOW)
        return self.current


class RecordingNotifier:
    def __init__(self, fail: bool = False) -> None:
        self.sent: list[tuple[str, str, int]] = []
        self.fail = fail

    def notify_achievement(self, user_id, name, points) -> None:
        if self.fail:
            raise RuntimeError('notification service down')
        self.sent.append((str(user_id), name, points))


@pytest.fixture()
def fake_db() -> FakeDB:
    return FakeDB()


@pytest.fixture()
def catalog() -> AchievementCatalog:
    return default_catalog()


@pytest.fixture()
def store() -> InMemoryStore:
    return InMemoryStore()


@pytest.fixture()
def metrics() -> StaticMetrics:
    return StaticMetrics()


@pytest.fixture()
def notifier() -> RecordingNotifier:
    return RecordingNotifier()


@pytest.fixture()
def engine(catalog, store, metrics, notifier) -> AchievementsEngine:
    return AchievementsEngine(catalog, store, metrics, notifier)


def snapshot_with(**kwargs) -> MetricsSnapshot:
    kwargs.setdefault('user_id', 'u1')
    kwargs.setdefault('taken_at', NOW)
    return MetricsSnapshot(**kwargs)
