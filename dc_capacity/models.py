"""Core data structures for data-center capacity estimation.

This module defines:
    PositionKey    -- (position, machine_id) pair keying the occurrence map.
    Topology       -- immutable groups x machines matrix of machine ids.
    Reduction      -- rule turning the aggregate map into a scalar RPS.
    CapacityParams -- tunable constants of one computation.
    CapacityResult -- outcome of one computation run.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType
from typing import Mapping, NamedTuple

UNIT_WEIGHT = 1000.0
PRESENCE_WEIGHT = 0.0001
MAX_GROUP_RPS = 100
MAX_DIMENSION = 1000


class PositionKey(NamedTuple):
    """Slot index within a group plus the machine id placed there."""

    position: int
    machine_id: str


OccurrenceMap = dict[PositionKey, float]
AggregateMap = dict[str, float]


@dataclass(frozen=True)
class Topology:
    """Immutable representation of one data-center layout.

    Attributes:
        groups: Number of groups (rows).
        machines_per_group: Number of machine slots per group (columns).
        matrix: matrix[i][j] -> machine id at position j of group i.
    """

    groups: int
    machines_per_group: int
    matrix: tuple[tuple[str, ...], ...]


class Reduction(str, Enum):
    MIN_COUNT = "min_count"
    PRESENCE_SEEDED = "presence_seeded"
    GROUP_CEILING = "group_ceiling"

    @classmethod
    def parse(cls, value: "str | Reduction") -> "Reduction":
        if isinstance(value, Reduction):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            names = ", ".join(r.value for r in cls)
            raise ValueError(f"Unknown reduction: {value!r} (expected one of: {names})") from None


@dataclass(slots=True)
class CapacityParams:
    """Bundle of the constants driving tally and aggregation.

    ``presence_weight`` is only applied by ``Reduction.PRESENCE_SEEDED``.
    """

    max_group_rps: float = MAX_GROUP_RPS
    unit_weight: float = UNIT_WEIGHT
    presence_weight: float = PRESENCE_WEIGHT
    reduction: Reduction = Reduction.MIN_COUNT
    max_dimension: int = MAX_DIMENSION


@dataclass(frozen=True)
class CapacityResult:
    """Outcome of a single capacity computation.

    Fields:
        total_rps: Estimated aggregate requests per second.
        groups: Echo of the topology's group count.
        machines_per_group: Echo of the topology's machines per group.
        reduction: Reduction used to obtain ``total_rps``.
        occurrences: Read-only view of the run's occurrence map.
        aggregate: Read-only view of the run's aggregate map.
    """

    total_rps: float
    groups: int
    machines_per_group: int
    reduction: Reduction
    occurrences: Mapping[PositionKey, float] = field(
        default_factory=lambda: MappingProxyType({})
    )
    aggregate: Mapping[str, float] = field(default_factory=lambda: MappingProxyType({}))
