from datetime import datetime
from typing import Any, Mapping, Optional

from jobspark.models.base import BaseModel


class UserAchievementRecord(BaseModel):
    table = 'user_achievements'

    @classmethod
    def for_user(cls, user_id: int | str) -> list[dict[str, Any]]:
        return cls.get_many(
            where='user_id = %s', params=(str(user_id),), order_by='earned_at ASC'
        )

    @classmethod
    def insert_if_absent(
        cls,
        user_id: int | str,
        achievement_id: str,
        earned_at: datetime,
        progress: float,
        metadata: Optional[Mapping[str, Any]] = None,
    ) -> Optional[dict[str, Any]]:
        '''Insert one award; None if (user_id, achievement_id) already exists.'''
        return cls.create_if_absent(
            ('user_id', 'achievement_id'),
            {
                'user_id': str(user_id),
                'achievement_id': achievement_id,
                'earned_at': earned_at,
                'progress': progress,
                'metadata': dict(metadata or {}),
            },
        )
