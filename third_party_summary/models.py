"""Data models for the third-party summary audit."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

SCRIPT_RESOURCE_TYPE = "Script"


class ThrottlingMethod(str, Enum):
    SIMULATE = "simulate"
    DEVTOOLS = "devtools"
    PROVIDED = "provided"


class ScoreDisplayMode(str, Enum):
    INFORMATIVE = "informative"


@dataclass
class TransferRecord:
    url: str
    transfer_size: int
    resource_type: str = "Other"


@dataclass
class ExecutionTask:
    self_time: float
    attributable_urls: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class Entity:
    name: str
    homepage: str | None = None
    category: str | None = None
    domains: tuple[str, ...] = ()

    @property
    def id(self) -> str:
        """Stable identity used as the aggregation key.

        Entity names are unique within a knowledge base, so the name itself
        is the key; it is never normalized.
        """
        return self.name


@dataclass
class EntityStats:
    transfer_size: int = 0
    main_thread_time: float = 0.0


@dataclass
class RankedRow:
    entity_name: str
    entity_homepage: str | None
    transfer_size: int
    main_thread_time: float

    @property
    def sort_value(self) -> float:
        # 1KB ~= 1 ms
        return self.transfer_size / 1024 + self.main_thread_time


@dataclass
class Summary:
    wasted_bytes: int = 0
    wasted_ms: float = 0.0


class Aggregate:
    """Per-entity totals for one audit run.

    Keyed by ``Entity.id`` with a side table back to the Entity. Once
    frozen, further accumulation raises ``RuntimeError``.
    """

    def __init__(self) -> None:
        self._stats: dict[str, EntityStats] = {}
        self._entities: dict[str, Entity] = {}
        self._frozen = False

    def _stats_for(self, entity: Entity) -> EntityStats:
        if self._frozen:
            raise RuntimeError("Aggregate is frozen")
        key = entity.id
        stats = self._stats.get(key)
        if stats is None:
            stats = self._stats[key] = EntityStats()
            self._entities[key] = entity
        return stats

    def add_transfer_size(self, entity: Entity, transfer_size: int) -> None:
        self._stats_for(entity).transfer_size += transfer_size

    def add_main_thread_time(self, entity: Entity, ms: float) -> None:
        self._stats_for(entity).main_thread_time += ms

    def freeze(self) -> Aggregate:
        self._frozen = True
        return self

    @property
    def frozen(self) -> bool:
        return self._frozen

    def items(self):
        """Yield (Entity, EntityStats) pairs in insertion order."""
        for key, stats in self._stats.items():
            yield self._entities[key], stats

    def __len__(self) -> int:
        return len(self._stats)
