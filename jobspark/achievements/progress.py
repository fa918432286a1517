from __future__ import annotations

from jobspark.achievements.metrics import resolve_metric
from jobspark.achievements.types import Achievement, MetricsSnapshot


def progress_for(
    achievement: Achievement,
    user_id: int | str,
    snapshot: MetricsSnapshot,
    earned: bool = False,
) -> tuple[float, float]:
    '''Return (progress, max_progress) for one achievement.

    Earned achievements are always complete (1, 1), whatever the live metrics
    say now. For unearned ones only the first requirement is previewed; an
    achievement with several requirements can show a full bar and still be
    locked until the others hold too.
    '''
    if earned:
        return 1, 1

    requirement = achievement.primary_requirement
    max_progress = requirement.value
    current = resolve_metric(requirement.metric, user_id, snapshot)
    progress = max(0, min(current, max_progress))
    return progress, max_progress
