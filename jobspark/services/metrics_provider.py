from __future__ import annotations

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Mapping, Optional

from jobspark.achievements.streaks import as_utc
from jobspark.achievements.types import ActivityEvent, MetricsSnapshot
from jobspark.models.analytics_event import AnalyticsEvent
from jobspark.models.profile import Profile
from jobspark.models.skill import Skill
from jobspark.models.user_session import UserSession
from jobspark.utils.constants import (
    EVENT_CV_GENERATED,
    EVENT_INTERVIEW_COMPLETED,
    EVENT_JOB_APPLIED,
    LOGIN_STREAK_LOOKBACK_DAYS,
)
from jobspark.utils.tracing import trace_span

logger = logging.getLogger(__name__)

# Score used for a profile that exists but is not marked complete
PARTIAL_PROFILE_SCORE = 60


def profile_counters(
    profile: Optional[Mapping[str, Any]], now: datetime
) -> dict[str, float]:
    if not profile:
        return {
            'profile_basic_info': 0,
            'profile_completion': 0,
            'profile_completion_100': 0,
        }

    has_basics = bool(profile.get('first_name')) and bool(profile.get('last_name'))
    completed = bool(profile.get('profile_completed'))
    completed_at = profile.get('completed_at')
    days_complete = 0
    if completed and completed_at is not None:
        days_complete = max(0, (now - as_utc(completed_at)).days)

    return {
        'profile_basic_info': 1 if has_basics else 0,
        'profile_completion': 100 if completed else PARTIAL_PROFILE_SCORE,
        'profile_completion_100': days_complete,
    }


def event_from_row(row: Mapping[str, Any]) -> ActivityEvent:
    return ActivityEvent(
        event_type=row['event_type'],
        timestamp=as_utc(row['timestamp']),
        data=row.get('event_data') or {},
    )


class PostgresMetricsProvider:
    '''Builds a MetricsSnapshot from the analytics tables.'''

    def __init__(self, streak_lookback_days: int = LOGIN_STREAK_LOOKBACK_DAYS) -> None:
        self.streak_lookback_days = streak_lookback_days

    def snapshot(self, user_id: int | str) -> MetricsSnapshot:
        now = datetime.now(timezone.utc)
        with trace_span('metrics.snapshot', {'user_id': user_id}):
            counts = AnalyticsEvent.counts_by_type(
                user_id,
                (EVENT_CV_GENERATED, EVENT_INTERVIEW_COMPLETED, EVENT_JOB_APPLIED),
            )
            counters: dict[str, float] = {
                'cv_generated': counts[EVENT_CV_GENERATED],
                'interview_completed': counts[EVENT_INTERVIEW_COMPLETED],
                'job_applied': counts[EVENT_JOB_APPLIED],
                'skills_added': Skill.count_for_user(user_id),
                'languages_added': Skill.count_for_user(user_id, 'languages'),
            }
            counters.update(profile_counters(Profile.for_user(user_id), now))

            since = now - timedelta(days=self.streak_lookback_days)
            sessions = tuple(
                as_utc(s) for s in UserSession.starts_since(user_id, since)
            )
            events = tuple(event_from_row(r) for r in AnalyticsEvent.history(user_id))

        logger.debug(
            f'Snapshot for user {user_id}: {counters}, '
            f'{len(sessions)} sessions, {len(events)} events'
        )
        return MetricsSnapshot(
            user_id=str(user_id),
            taken_at=now,
            counters=counters,
            sessions=sessions,
            events=events,
        )
