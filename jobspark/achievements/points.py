from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, Mapping

from jobspark.achievements.catalog import AchievementCatalog
from jobspark.achievements.interface import AchievementStore
from jobspark.achievements.types import UserAchievement

logger = logging.getLogger(__name__)


class PointsLedger:
    '''Lifetime points, derived from the user's earned achievements.

    There is no separate points table: a user's total is the catalog points of
    every UserAchievement they hold. Since the store keeps at most one row per
    (user, achievement), recording the same achievement twice cannot count
    twice.
    '''

    def __init__(self, store: AchievementStore, catalog: AchievementCatalog) -> None:
        self.store = store
        self.catalog = catalog

    def record_points(
        self,
        user_id: int | str,
        achievement_id: str,
        points: int,
        progress: float = 1,
        metadata: Mapping[str, Any] | None = None,
        earned_at: datetime | None = None,
    ) -> bool:
        '''Record the award behind `points`. False if it was already recorded.'''
        award = UserAchievement(
            user_id=str(user_id),
            achievement_id=achievement_id,
            earned_at=earned_at or datetime.now(timezone.utc),
            progress=progress,
            metadata={**(metadata or {}), 'points': int(points)},
        )
        created = self.store.insert_if_absent(award)
        if not created:
            logger.info(
                f'Achievement {achievement_id} already recorded for user {user_id}'
            )
        return created

    def has_recorded(self, user_id: int | str, achievement_id: str) -> bool:
        return any(
            ua.achievement_id == achievement_id for ua in self.store.for_user(user_id)
        )

    def total_for(self, awards: list[UserAchievement]) -> int:
        total = 0
        for ua in awards:
            achievement = self.catalog.by_id(ua.achievement_id)
            if achievement is None:
                logger.debug(f'Award {ua.achievement_id} is not in the catalog')
                continue
            total += achievement.points
        return total

    def total_points(self, user_id: int | str) -> int:
        return self.total_for(self.store.for_user(user_id))
