from __future__ import annotations

from typing import Any, Mapping

from jobspark.achievements.streaks import as_utc
from jobspark.achievements.types import UserAchievement
from jobspark.models.user_achievement import UserAchievementRecord


def award_from_row(row: Mapping[str, Any]) -> UserAchievement:
    return UserAchievement(
        user_id=str(row['user_id']),
        achievement_id=row['achievement_id'],
        earned_at=as_utc(row['earned_at']),
        progress=float(row.get('progress') or 0),
        metadata=row.get('metadata') or {},
    )


class PostgresAchievementStore:
    '''user_achievements table; UNIQUE (user_id, achievement_id) guards awards.'''

    def for_user(self, user_id: int | str) -> list[UserAchievement]:
        return [award_from_row(r) for r in UserAchievementRecord.for_user(user_id)]

    def insert_if_absent(self, award: UserAchievement) -> bool:
        row = UserAchievementRecord.insert_if_absent(
            award.user_id,
            award.achievement_id,
            earned_at=award.earned_at,
            progress=award.progress,
            metadata=award.metadata,
        )
        return row is not None
