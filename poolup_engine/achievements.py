"""Achievement badge evaluation.

Badges are unlocked when one of the user's cumulative activity counters
(friends invited, pools created, money saved, ...) reaches a fixed
threshold.  The engine only evaluates: it never stores which badges were
awarded.  Callers that want "newly unlocked" badges pass in the last
snapshot they persisted and :meth:`AchievementEngine.diff_newly_earned`
compares the two.

The catalog is injected when the engine is built.  It is immutable, so a
catalog update is done by building a new engine (``with_catalog``) rather
than editing entries in place.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Iterable, Iterator, List, Mapping, Optional

import pandas as pd

from .catalogs import load_config
from .formatting import format_requirement
from .parsing import parse_count

logger = logging.getLogger(__name__)


class Rarity(str, Enum):
    COMMON = 'common'
    RARE = 'rare'
    EPIC = 'epic'
    LEGENDARY = 'legendary'


class RequirementType(str, Enum):
    FRIENDS_INVITED = 'friends_invited'
    POOLS_CREATED = 'pools_created'
    TOTAL_SAVED = 'total_saved'
    GROUP_SIZE = 'group_size'
    GROUP_SAVINGS = 'group_savings'


# Counter read for each requirement type.  Every RequirementType must have
# an entry naming an ActivityCounters field.
REQUIREMENT_FIELDS: Dict[RequirementType, str] = {
    RequirementType.FRIENDS_INVITED: 'friends_invited',
    RequirementType.POOLS_CREATED: 'pools_created',
    RequirementType.TOTAL_SAVED: 'total_saved_cents',
    RequirementType.GROUP_SIZE: 'largest_group_size',
    RequirementType.GROUP_SAVINGS: 'total_group_savings_cents',
}


@dataclass(frozen=True)
class Achievement:
    id: str
    name: str
    rarity: Rarity
    category: str
    requirement_type: RequirementType
    requirement_value: int
    description: str = ''


@dataclass
class ActivityCounters:
    """Snapshot of a user's cumulative activity, owned by the caller."""

    friends_invited: int = 0
    pools_created: int = 0
    total_saved_cents: int = 0
    largest_group_size: int = 0
    total_group_savings_cents: int = 0

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "ActivityCounters":
        """Build counters from loosely typed data (e.g. form or API text)."""
        return cls(**{name: parse_count(data.get(name)) for name in REQUIREMENT_FIELDS.values()})

    def counter_for(self, requirement_type: RequirementType) -> int:
        return getattr(self, REQUIREMENT_FIELDS[RequirementType(requirement_type)])


@dataclass(frozen=True)
class AchievementProgress:
    current: int
    required: int
    percentage: float

    @property
    def remaining(self) -> int:
        return max(0, self.required - self.current)


@dataclass(frozen=True)
class AchievementStatus:
    achievement: Achievement
    earned: bool
    current: int
    required: int
    percentage: float


class AchievementCatalog:
    """Ordered, read-only collection of badge definitions."""

    def __init__(self, achievements: Iterable[Achievement], version: Optional[int] = None):
        entries = tuple(achievements)
        by_id: Dict[str, Achievement] = {}
        for achievement in entries:
            if achievement.id in by_id:
                raise ValueError(f"Duplicate achievement id '{achievement.id}'")
            if achievement.requirement_value <= 0:
                raise ValueError(
                    f"Achievement '{achievement.id}' needs a positive requirement, "
                    f"got {achievement.requirement_value}"
                )
            by_id[achievement.id] = achievement
        self._entries = entries
        self._by_id = MappingProxyType(by_id)
        self.version = version

    @classmethod
    def from_config(cls, config: Mapping[str, Any]) -> "AchievementCatalog":
        """Build a catalog from parsed ``achievements.json`` data.

        Raises:
            ValueError: On unknown rarities or requirement types, duplicate
                ids or non-positive requirements.
        """
        achievements = [
            Achievement(
                id=entry['id'],
                name=entry['name'],
                rarity=Rarity(entry['rarity']),
                category=entry.get('category', 'special'),
                requirement_type=RequirementType(entry['requirement_type']),
                requirement_value=int(entry['requirement_value']),
                description=entry.get('description', ''),
            )
            for entry in config.get('achievements', [])
        ]
        return cls(achievements, version=config.get('version'))

    @property
    def entries(self) -> tuple:
        return self._entries

    def __iter__(self) -> Iterator[Achievement]:
        return iter(self._entries)

    def __len__(self) -> int:
        return len(self._entries)

    def __contains__(self, achievement_id: object) -> bool:
        return achievement_id in self._by_id

    def get(self, achievement_id: str) -> Optional[Achievement]:
        return self._by_id.get(achievement_id)

    def by_category(self, category: str) -> List[Achievement]:
        return [a for a in self._entries if a.category == category]

    def by_rarity(self, rarity: Rarity) -> List[Achievement]:
        rarity = Rarity(rarity)
        return [a for a in self._entries if a.rarity is rarity]


def load_achievement_catalog(directory: Optional[Path] = None) -> AchievementCatalog:
    catalog = AchievementCatalog.from_config(load_config('achievements', directory))
    logger.debug("Loaded %d achievements (version %s)", len(catalog), catalog.version)
    return catalog


@lru_cache(maxsize=1)
def default_achievement_catalog() -> AchievementCatalog:
    """The shipped badge catalog, loaded once."""
    return load_achievement_catalog()


class AchievementEngine:
    """Evaluates activity counters against an achievement catalog."""

    def __init__(self, catalog: AchievementCatalog):
        self._catalog = catalog

    @classmethod
    def default(cls) -> "AchievementEngine":
        return cls(default_achievement_catalog())

    @property
    def catalog(self) -> AchievementCatalog:
        return self._catalog

    def with_catalog(self, catalog: AchievementCatalog) -> "AchievementEngine":
        """A new engine over ``catalog``; this engine is left untouched."""
        return AchievementEngine(catalog)

    def list_achievements(self) -> List[Achievement]:
        return list(self._catalog)

    def progress(self, achievement: Achievement, counters: ActivityCounters) -> AchievementProgress:
        """Progress of ``counters`` towards a single achievement.

        ``percentage`` is capped at 100 and floored at 0.
        """
        current = counters.counter_for(achievement.requirement_type)
        required = achievement.requirement_value
        if required <= 0:
            percentage = 100.0
        else:
            percentage = min(100.0, max(0.0, 100.0 * current / required))
        return AchievementProgress(current=current, required=required, percentage=percentage)

    def status(self, achievement: Achievement, counters: ActivityCounters) -> AchievementStatus:
        progress = self.progress(achievement, counters)
        return AchievementStatus(
            achievement=achievement,
            earned=progress.current >= progress.required,
            current=progress.current,
            required=progress.required,
            percentage=progress.percentage,
        )

    def evaluate(self, counters: ActivityCounters) -> List[AchievementStatus]:
        """Status of every catalog entry, in catalog order.

        Each entry is checked against its own threshold only; several badges
        sharing a requirement type are independent of each other.
        """
        return [self.status(achievement, counters) for achievement in self._catalog]

    def earned(self, counters: ActivityCounters) -> List[Achievement]:
        return [status.achievement for status in self.evaluate(counters) if status.earned]

    def diff_newly_earned(
        self, previous: ActivityCounters, current: ActivityCounters
    ) -> List[Achievement]:
        """Achievements earned under ``current`` but not ``previous``, in catalog order."""
        previously_earned = {achievement.id for achievement in self.earned(previous)}
        return [a for a in self.earned(current) if a.id not in previously_earned]

    def next_achievements(self, counters: ActivityCounters) -> List[AchievementStatus]:
        """The closest unearned badge for each requirement type.

        For every requirement type with something left to unlock, returns the
        unearned entry with the lowest threshold, ordered by catalog position.
        """
        closest: Dict[RequirementType, AchievementStatus] = {}
        for status in self.evaluate(counters):
            if status.earned:
                continue
            kind = status.achievement.requirement_type
            best = closest.get(kind)
            if best is None or status.required < best.required:
                closest[kind] = status
        order = {a.id: index for index, a in enumerate(self._catalog)}
        return sorted(closest.values(), key=lambda status: order[status.achievement.id])

    def status_frame(self, counters: ActivityCounters) -> pd.DataFrame:
        """Badge gallery table: one row per achievement, catalog order."""
        rows = [
            {
                'ID': status.achievement.id,
                'Name': status.achievement.name,
                'Category': status.achievement.category,
                'Rarity': status.achievement.rarity.value,
                'Requirement': format_requirement(status.achievement),
                'Earned': status.earned,
                'Current': status.current,
                'Required': status.required,
                'Percentage': status.percentage,
            }
            for status in self.evaluate(counters)
        ]
        return pd.DataFrame(
            rows,
            columns=['ID', 'Name', 'Category', 'Rarity', 'Requirement', 'Earned', 'Current', 'Required', 'Percentage'],
        )
