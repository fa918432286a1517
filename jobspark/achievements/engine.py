from __future__ import annotations

import dataclasses
import logging
from datetime import datetime, timezone

from jobspark.achievements.catalog import AchievementCatalog
from jobspark.achievements.interface import AchievementStore, MetricsProvider, Notifier
from jobspark.achievements.metrics import requirements_met, resolve_metric
from jobspark.achievements.points import PointsLedger
from jobspark.achievements.progress import progress_for
from jobspark.achievements.types import (
    Achievement,
    AchievementProgress,
    MetricsSnapshot,
    UserAchievement,
)
from jobspark.utils.tracing import add_span_metadata, trace_span

logger = logging.getLogger(__name__)


class AchievementsEngine:
    def __init__(
        self,
        catalog: AchievementCatalog,
        store: AchievementStore,
        metrics: MetricsProvider,
        notifier: Notifier,
    ) -> None:
        self.catalog = catalog
        self.store = store
        self.metrics = metrics
        self.notifier = notifier
        self.ledger = PointsLedger(store, catalog)

    def _snapshot(
        self, user_id: int | str, awards: list[UserAchievement]
    ) -> MetricsSnapshot:
        snapshot = self.metrics.snapshot(user_id)
        return dataclasses.replace(
            snapshot, total_points=self.ledger.total_for(awards)
        )

    def check_and_award(self, user_id: int | str) -> list[Achievement]:
        '''Award every catalog achievement the user now qualifies for.

        Safe to call after any user action: already-earned achievements are
        skipped and a pass with nothing new is a no-op. Failures are logged
        and never raised to the caller.
        '''
        with trace_span(
            'achievements.check_and_award',
            {'user_id': user_id, 'catalog': self.catalog.version},
        ):
            try:
                awards = self.store.for_user(user_id)
                snapshot = self._snapshot(user_id, awards)
            except Exception:
                logger.exception(f'Could not load achievement state for user {user_id}')
                return []

            earned_ids = {ua.achievement_id for ua in awards}
            newly_earned: list[Achievement] = []

            for achievement in self.catalog:
                if achievement.id in earned_ids:
                    continue

                with trace_span(
                    'achievements.evaluate', {'achievement_id': achievement.id}
                ):
                    try:
                        qualifies = requirements_met(
                            achievement.requirements, user_id, snapshot
                        )
                    except Exception:
                        logger.exception(
                            f'Evaluating {achievement.id} failed for user {user_id}'
                        )
                        continue
                    if not qualifies:
                        continue

                    if self._award(user_id, achievement, snapshot):
                        newly_earned.append(achievement)

            add_span_metadata('awarded', len(newly_earned))
            return newly_earned

    def _award(
        self, user_id: int | str, achievement: Achievement, snapshot: MetricsSnapshot
    ) -> bool:
        with trace_span('achievements.award', {'achievement_id': achievement.id}):
            _, max_progress = progress_for(achievement, user_id, snapshot, earned=True)
            seen = {
                r.metric: resolve_metric(r.metric, user_id, snapshot)
                for r in achievement.requirements
            }
            try:
                created = self.ledger.record_points(
                    user_id,
                    achievement.id,
                    achievement.points,
                    progress=max_progress,
                    metadata={'metrics': seen},
                    earned_at=datetime.now(timezone.utc),
                )
            except Exception:
                logger.exception(
                    f'Recording {achievement.id} failed for user {user_id}; '
                    f'will retry on the next pass'
                )
                return False
            if not created:
                # Lost a race with a concurrent pass; the other one owns it
                return False

            logger.info(
                f'User {user_id} earned {achievement.id} '
                f'({achievement.name}) +{achievement.points} points'
            )
            try:
                self.notifier.notify_achievement(
                    user_id, achievement.name, achievement.points
                )
            except Exception:
                logger.error(
                    f'Notifying user {user_id} about {achievement.id} failed',
                    exc_info=True,
                )
            return True

    def progress_report(self, user_id: int | str) -> list[AchievementProgress]:
        '''Progress for every achievement the user may see.

        Hidden achievements only show up once earned.
        '''
        with trace_span('achievements.progress_report', {'user_id': user_id}):
            awards = self.store.for_user(user_id)
            snapshot = self._snapshot(user_id, awards)
            earned_by_id = {ua.achievement_id: ua for ua in awards}

            report: list[AchievementProgress] = []
            for achievement in self.catalog:
                award = earned_by_id.get(achievement.id)
                if award is None and achievement.hidden:
                    continue
                progress, max_progress = progress_for(
                    achievement, user_id, snapshot, earned=award is not None
                )
                report.append(
                    AchievementProgress(
                        achievement=achievement,
                        earned=award is not None,
                        progress=progress,
                        max_progress=max_progress,
                        earned_at=award.earned_at if award else None,
                    )
                )
            return report

    def total_points(self, user_id: int | str) -> int:
        return self.ledger.total_points(user_id)
