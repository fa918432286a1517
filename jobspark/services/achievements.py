from __future__ import annotations

import logging
from typing import Optional

from jobspark.achievements.catalog import AchievementCatalog, get_catalog
from jobspark.achievements.engine import AchievementsEngine
from jobspark.services.achievement_store import PostgresAchievementStore
from jobspark.services.metrics_provider import PostgresMetricsProvider
from jobspark.services.notifier import NotificationTableNotifier

logger = logging.getLogger(__name__)


def create_engine(catalog: Optional[AchievementCatalog] = None) -> AchievementsEngine:
    '''Wire the engine to the Postgres-backed collaborators.'''
    if catalog is None:
        catalog = get_catalog()
    logger.info(f'Achievements engine using {catalog!r}')
    return AchievementsEngine(
        catalog=catalog,
        store=PostgresAchievementStore(),
        metrics=PostgresMetricsProvider(),
        notifier=NotificationTableNotifier(),
    )
