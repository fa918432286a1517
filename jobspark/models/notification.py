from typing import Any, Literal, Mapping, Optional

from jobspark.models.base import BaseModel

NotificationType = Literal[
    'job_match', 'interview_reminder', 'profile_tip', 'achievement', 'system'
]
Priority = Literal['low', 'medium', 'high', 'urgent']


class Notification(BaseModel):
    table = 'notifications'

    @classmethod
    def push(
        cls,
        user_id: int | str,
        title: str,
        message: str,
        type_: NotificationType,
        priority: Priority = 'medium',
        action_data: Optional[Mapping[str, Any]] = None,
    ) -> dict[str, Any]:
        return cls.create(
            {
                'user_id': str(user_id),
                'title': title,
                'message': message,
                'type': type_,
                'priority': priority,
                'read': False,
                'action_data': dict(action_data or {}),
            }
        )
