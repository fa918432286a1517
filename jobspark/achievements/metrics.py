'''
Requirement evaluation.

Metric names are resolved against a MetricsSnapshot through a lookup table of
resolver functions. Every resolver is a pure function of the snapshot, so the
same snapshot always yields the same value. Names missing from the table
resolve to 0 and therefore read as "not yet satisfied" for any positive
target. So do values that cannot be read as numbers, and resolvers that fail.
'''

from __future__ import annotations

import logging
import operator as op
from typing import Any, Callable, Iterable, Mapping

from jobspark.achievements import streaks
from jobspark.achievements.types import MetricsSnapshot, Requirement
from jobspark.utils.constants import (
    EVENT_CV_GENERATED,
    EVENT_INTERVIEW_COMPLETED,
    EVENT_JOB_APPLIED,
    HIGH_MATCH_SCORE,
)

logger = logging.getLogger(__name__)

Resolver = Callable[[MetricsSnapshot], float]

COMPARATORS: dict[str, Callable[[float, float], bool]] = {
    'gte': op.ge,
    'lte': op.le,
    'eq': op.eq,
    'gt': op.gt,
    'lt': op.lt,
}


def _counter(name: str) -> Resolver:
    def resolve(snapshot: MetricsSnapshot) -> float:
        return _number(snapshot.counters.get(name))

    return resolve


def _number(value: Any) -> float:
    try:
        return float(value or 0)
    except (TypeError, ValueError):
        return 0


def _scores(snapshot: MetricsSnapshot, event_type: str, key: str) -> list[float]:
    # event_data is free-form JSON; anything but a mapping carries no score
    return [
        _number(e.data.get(key))
        for e in snapshot.events
        if e.event_type == event_type and isinstance(e.data, Mapping)
    ]


def _best_cv_score(snapshot: MetricsSnapshot) -> float:
    return max(_scores(snapshot, EVENT_CV_GENERATED, 'completion_score'), default=0)


def _best_interview_score(snapshot: MetricsSnapshot) -> float:
    return max(_scores(snapshot, EVENT_INTERVIEW_COMPLETED, 'score'), default=0)


def _average_interview_score(snapshot: MetricsSnapshot) -> float:
    scores = _scores(snapshot, EVENT_INTERVIEW_COMPLETED, 'score')
    return sum(scores) / len(scores) if scores else 0


def _high_match_applications(snapshot: MetricsSnapshot) -> float:
    match_scores = _scores(snapshot, EVENT_JOB_APPLIED, 'match_score')
    return sum(1 for s in match_scores if s >= HIGH_MATCH_SCORE)


def _daily_login(snapshot: MetricsSnapshot) -> float:
    today = streaks.utc_day(snapshot.taken_at)
    return streaks.current_login_streak(snapshot.user_id, snapshot.sessions, today)


METRIC_RESOLVERS: dict[str, Resolver] = {
    # Counters supplied directly by the metrics provider
    'profile_basic_info': _counter('profile_basic_info'),
    'profile_completion': _counter('profile_completion'),
    'profile_completion_100': _counter('profile_completion_100'),
    'cv_generated': _counter('cv_generated'),
    'interview_completed': _counter('interview_completed'),
    'job_applied': _counter('job_applied'),
    'skills_added': _counter('skills_added'),
    'languages_added': _counter('languages_added'),
    # Derived from the event history
    'cv_completion_score': _best_cv_score,
    'interview_best_score': _best_interview_score,
    'interview_average_score': _average_interview_score,
    'high_match_applications': _high_match_applications,
    'weekend_activities': lambda s: streaks.weekend_activity_count(s.events),
    'early_morning_activity': lambda s: streaks.early_morning_count(s.events),
    'late_night_activity': lambda s: streaks.late_night_count(s.events),
    # Derived from sessions
    'daily_login': _daily_login,
    # Filled in from the points ledger before a pass
    'total_points': lambda s: float(s.total_points),
}


def resolve_metric(metric: str, user_id: int | str, snapshot: MetricsSnapshot) -> float:
    resolver = METRIC_RESOLVERS.get(metric)
    if resolver is None:
        logger.debug(f'Unknown metric {metric!r} for user {user_id}, using 0')
        return 0
    try:
        return resolver(snapshot)
    except Exception:
        logger.exception(f'Resolving {metric!r} failed for user {user_id}, using 0')
        return 0


def compare(current: float, target: float, operator: str) -> bool:
    comparator = COMPARATORS.get(operator)
    if comparator is None:
        logger.warning(f'Unknown operator {operator!r}, requirement not satisfied')
        return False
    return bool(comparator(current, target))


def requirement_met(
    requirement: Requirement, user_id: int | str, snapshot: MetricsSnapshot
) -> bool:
    current = resolve_metric(requirement.metric, user_id, snapshot)
    return compare(current, requirement.value, requirement.operator)


def requirements_met(
    requirements: Iterable[Requirement], user_id: int | str, snapshot: MetricsSnapshot
) -> bool:
    '''True when every requirement holds (logical AND).'''
    return all(requirement_met(r, user_id, snapshot) for r in requirements)


def known_metrics() -> frozenset[str]:
    return frozenset(METRIC_RESOLVERS)
