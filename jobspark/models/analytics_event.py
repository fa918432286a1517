from typing import Any, Iterable, cast

from jobspark.database.db_manager import DBManager
from jobspark.models.base import BaseModel


class AnalyticsEvent(BaseModel):
    table = 'analytics_events'

    @classmethod
    def counts_by_type(
        cls, user_id: int | str, event_types: Iterable[str]
    ) -> dict[str, int]:
        types = list(event_types)
        counts = {t: 0 for t in types}
        if not types:
            return counts
        with DBManager() as db:
            rows = db.fetchall(
                'SELECT event_type, COUNT(*) AS cnt FROM analytics_events '
                'WHERE user_id = %s AND event_type = ANY(%s) '
                'GROUP BY event_type',
                (str(user_id), types),
            )
        for row in rows:
            counts[row['event_type']] = int(row['cnt'])
        return counts

    @classmethod
    def history(cls, user_id: int | str) -> list[dict[str, Any]]:
        '''All events for a user, oldest first.'''
        with DBManager() as db:
            rows = db.fetchall(
                'SELECT event_type, event_data, timestamp FROM analytics_events '
                'WHERE user_id = %s ORDER BY timestamp ASC',
                (str(user_id),),
            )
        return cast(list[dict[str, Any]], rows)
