from __future__ import annotations

import logging

from jobspark.models.notification import Notification
from jobspark.utils.constants import NOTIFICATION_TITLE

logger = logging.getLogger(__name__)


def achievement_message(name: str, points: int) -> str:
    return f'{name} (+{points} points)'


class NotificationTableNotifier:
    '''Queues an in-app notification row; delivery is someone else's job.'''

    def notify_achievement(self, user_id: int | str, name: str, points: int) -> None:
        Notification.push(
            user_id,
            title=NOTIFICATION_TITLE,
            message=achievement_message(name, points),
            type_='achievement',
            priority='medium',
            action_data={'points': points},
        )
        logger.debug(f'Queued achievement notification for user {user_id}: {name}')
