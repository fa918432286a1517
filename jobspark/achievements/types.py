from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Literal, Mapping

Category = Literal['profile', 'cv', 'interview', 'jobs', 'skills', 'engagement']
Rarity = Literal['common', 'uncommon', 'rare', 'epic', 'legendary']
RequirementType = Literal['count', 'score', 'streak', 'time', 'completion']
Operator = Literal['gte', 'lte', 'eq', 'gt', 'lt']


@dataclass(frozen=True)
class Requirement:
    type: RequirementType
    metric: str
    value: float
    operator: Operator = 'gte'


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    description: str
    icon: str
    category: Category
    points: int
    requirements: tuple[Requirement, ...]
    rarity: Rarity = 'common'
    hidden: bool = False

    @property
    def primary_requirement(self) -> Requirement:
        return self.requirements[0]


@dataclass(frozen=True)
class UserAchievement:
    '''One earned achievement. At most one per (user_id, achievement_id).'''

    user_id: str
    achievement_id: str
    earned_at: datetime
    progress: float = 1
    metadata: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class AchievementProgress:
    achievement: Achievement
    earned: bool
    progress: float
    max_progress: float
    earned_at: datetime | None = None

    @property
    def ratio(self) -> float:
        if self.max_progress <= 0:
            return 1.0 if self.earned else 0.0
        return self.progress / self.max_progress


@dataclass(frozen=True)
class ActivityEvent:
    event_type: str
    timestamp: datetime
    data: Mapping[str, Any] = field(default_factory=dict)


@dataclass(frozen=True)
class MetricsSnapshot:
    '''Point-in-time view of a user's behaviour, the input of one pass.'''

    user_id: str
    taken_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    counters: Mapping[str, float] = field(default_factory=dict)
    sessions: tuple[datetime, ...] = ()
    events: tuple[ActivityEvent, ...] = ()
    total_points: int = 0
