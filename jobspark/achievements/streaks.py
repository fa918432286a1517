from __future__ import annotations

from datetime import date, datetime, timedelta, timezone
from typing import Iterable

from jobspark.achievements.types import ActivityEvent
from jobspark.utils.constants import EARLY_MORNING_HOUR, LATE_NIGHT_HOUR

# date.weekday(): Monday is 0
WEEKEND_DAYS = {5, 6}


def as_utc(moment: datetime) -> datetime:
    '''Naive datetimes are taken to already be UTC.'''
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment.astimezone(timezone.utc)


def utc_day(moment: datetime) -> date:
    return as_utc(moment).date()


def current_login_streak(
    user_id: int | str, sessions: Iterable[datetime], today: date
) -> int:
    '''Count consecutive days with a session, walking back from `today`.

    A day without a session ends the walk, so a user who has not been seen
    today has a streak of 0 regardless of their history.
    '''
    days_with_session = {utc_day(s) for s in sessions}
    streak = 0
    cur = today
    while cur in days_with_session:
        streak += 1
        cur = cur - timedelta(days=1)
    return streak


def weekend_activity_count(events: Iterable[ActivityEvent]) -> int:
    return sum(1 for e in events if utc_day(e.timestamp).weekday() in WEEKEND_DAYS)


def early_morning_count(
    events: Iterable[ActivityEvent], before_hour: int = EARLY_MORNING_HOUR
) -> int:
    return sum(1 for e in events if as_utc(e.timestamp).hour < before_hour)


def late_night_count(
    events: Iterable[ActivityEvent], from_hour: int = LATE_NIGHT_HOUR
) -> int:
    return sum(1 for e in events if as_utc(e.timestamp).hour >= from_hour)
