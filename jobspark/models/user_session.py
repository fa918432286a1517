from datetime import datetime
from typing import cast

from jobspark.database.db_manager import DBManager
from jobspark.models.base import BaseModel


class UserSession(BaseModel):
    table = 'user_sessions'

    @classmethod
    def starts_since(cls, user_id: int | str, since: datetime) -> list[datetime]:
        with DBManager() as db:
            rows = db.fetchall(
                'SELECT session_start FROM user_sessions '
                'WHERE user_id = %s AND session_start >= %s '
                'ORDER BY session_start DESC',
                (str(user_id), since),
            )
        return [cast(datetime, r['session_start']) for r in rows]
