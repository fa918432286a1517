from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping

from jobspark.achievements.definitions import ACHIEVEMENTS
from jobspark.achievements.types import Achievement, Requirement
from jobspark.utils.constants import (
    CATALOG_VERSION,
    CATEGORIES,
    OPERATORS,
    RARITIES,
    REQUIREMENT_TYPES,
)

logger = logging.getLogger(__name__)


class CatalogError(ValueError):
    '''Raised when an achievement definition can never be evaluated.'''


def _validate(achievement: Achievement) -> None:
    where = f'achievement {achievement.id!r}'
    if not achievement.id:
        raise CatalogError('achievement id must not be empty')
    if not achievement.requirements:
        raise CatalogError(f'{where} has no requirements')
    points = achievement.points
    if isinstance(points, bool) or not isinstance(points, int):
        raise CatalogError(f'{where} has non-integer points {points!r}')
    if points < 0:
        raise CatalogError(f'{where} has negative points')
    if achievement.category not in CATEGORIES:
        raise CatalogError(f'{where} has unknown category {achievement.category!r}')
    if achievement.rarity not in RARITIES:
        raise CatalogError(f'{where} has unknown rarity {achievement.rarity!r}')
    if not isinstance(achievement.hidden, bool):
        raise CatalogError(f'{where} has a non-boolean hidden flag')
    for req in achievement.requirements:
        if req.type not in REQUIREMENT_TYPES:
            raise CatalogError(f'{where} has unknown requirement type {req.type!r}')
        if req.operator not in OPERATORS:
            raise CatalogError(f'{where} has unknown operator {req.operator!r}')
        if not req.metric:
            raise CatalogError(f'{where} has a requirement without a metric')
        if isinstance(req.value, bool) or not isinstance(req.value, (int, float)):
            raise CatalogError(f'{where} has a non-numeric target for {req.metric!r}')
        if req.value < 0:
            raise CatalogError(f'{where} has a negative target for {req.metric!r}')


class AchievementCatalog:
    '''Immutable, validated set of achievement definitions.'''

    def __init__(
        self, achievements: Iterable[Achievement], version: str = CATALOG_VERSION
    ) -> None:
        ordered: list[Achievement] = []
        by_id: dict[str, Achievement] = {}
        for achievement in achievements:
            _validate(achievement)
            if achievement.id in by_id:
                raise CatalogError(f'duplicate achievement id {achievement.id!r}')
            by_id[achievement.id] = achievement
            ordered.append(achievement)
        self._achievements: tuple[Achievement, ...] = tuple(ordered)
        self._by_id: Mapping[str, Achievement] = by_id
        self.version = version

    def by_id(self, achievement_id: str) -> Achievement | None:
        return self._by_id.get(achievement_id)

    def by_category(self, category: str) -> list[Achievement]:
        return [a for a in self._achievements if a.category == category]

    def all(self) -> list[Achievement]:
        return list(self._achievements)

    def visible(self) -> list[Achievement]:
        return [a for a in self._achievements if not a.hidden]

    def __len__(self) -> int:
        return len(self._achievements)

    def __iter__(self) -> Iterator[Achievement]:
        return iter(self._achievements)

    def __contains__(self, achievement_id: object) -> bool:
        return achievement_id in self._by_id

    def __repr__(self) -> str:
        return f'AchievementCatalog(version={self.version!r}, size={len(self)})'


def achievement_from_dict(entry: Mapping[str, Any]) -> Achievement:
    if not isinstance(entry, Mapping):
        raise CatalogError(f'achievement entry must be an object, got {entry!r}')
    try:
        requirements = tuple(
            Requirement(
                type=r['type'],
                metric=r['metric'],
                value=r['value'],
                operator=r.get('operator', 'gte'),
            )
            for r in entry.get('requirements') or ()
        )
        return Achievement(
            id=entry['id'],
            name=entry['name'],
            description=entry.get('description', ''),
            icon=entry.get('icon', ''),
            category=entry['category'],
            points=entry.get('points', 0),
            requirements=requirements,
            rarity=entry.get('rarity', 'common'),
            hidden=entry.get('hidden', False),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise CatalogError(f'malformed achievement entry {entry!r}: {e}') from e


def load_catalog(
    entries: Iterable[Mapping[str, Any]], version: str = CATALOG_VERSION
) -> AchievementCatalog:
    return AchievementCatalog((achievement_from_dict(e) for e in entries), version)


def load_catalog_file(path: str | os.PathLike[str]) -> AchievementCatalog:
    '''Load a catalog document of the form {"version": ..., "achievements": [...]}.'''
    data = json.loads(Path(path).read_text(encoding='utf-8'))
    if not isinstance(data, dict) or not isinstance(data.get('achievements'), list):
        raise CatalogError(f'{path}: expected an object with an "achievements" list')
    version = str(data.get('version', CATALOG_VERSION))
    catalog = load_catalog(data['achievements'], version)
    logger.info(f'Loaded achievements catalog {catalog.version} from {path}')
    return catalog


def default_catalog() -> AchievementCatalog:
    return AchievementCatalog(ACHIEVEMENTS)


def get_catalog() -> AchievementCatalog:
    '''Resolve the process catalog: ACHIEVEMENTS_CATALOG_PATH or the built-in one.'''
    path = os.getenv('ACHIEVEMENTS_CATALOG_PATH')
    if path:
        return load_catalog_file(path)
    return default_catalog()
