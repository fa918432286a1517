from __future__ import annotations

from typing import Protocol, runtime_checkable

from jobspark.achievements.types import MetricsSnapshot, UserAchievement


@runtime_checkable
class MetricsProvider(Protocol):
    def snapshot(self, user_id: int | str) -> MetricsSnapshot:
        '''
        Return every counter plus the session and event history for a user in
        one read. The engine calls this once per pass.
        '''
        pass


@runtime_checkable
class AchievementStore(Protocol):
    def for_user(self, user_id: int | str) -> list[UserAchievement]:
        pass

    def insert_if_absent(self, award: UserAchievement) -> bool:
        '''
        Persist the award unless (user_id, achievement_id) already exists.
        Return True if a row was created, False if it was already there. A
        concurrent duplicate must land on False, never on a second row.
        '''
        pass


@runtime_checkable
class Notifier(Protocol):
    def notify_achievement(self, user_id: int | str, name: str, points: int) -> None:
        pass
