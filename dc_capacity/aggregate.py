"""Position aggregator: per-machine minimum and the scalar RPS reduction.

Concepts
--------
Aggregate map
    For each machine id, the smallest accumulated weight observed at any
    position it has an occurrence entry for. The least represented position
    limits how much of that id's capacity is usable.
Reduction
    ``MIN_COUNT`` / ``PRESENCE_SEEDED`` turn each aggregate weight back into an
    integer occurrence count and credit ``max_group_rps`` per count.
    ``GROUP_CEILING`` ignores the per-id detail and credits every group with
    ``max_group_rps``.
"""

from __future__ import annotations

from typing import Mapping, Optional

from dc_capacity.models import (
    AggregateMap,
    CapacityParams,
    PositionKey,
    Reduction,
)
from dc_capacity.tally import occurrence_count
from dc_capacity.validation import InvalidTopology


def reduce_minimum(occurrences: Mapping[PositionKey, float]) -> AggregateMap:
    aggregate: AggregateMap = {}
    for (_, machine_id), value in occurrences.items():
        current = aggregate.get(machine_id)
        if current is None or value < current:
            aggregate[machine_id] = value
    return aggregate


def subset_capacity(max_group_rps: float, machines_per_group: int) -> float:
    """Per-machine share of one group's RPS ceiling."""
    if machines_per_group < 1:
        raise InvalidTopology(f"machines_per_group must be >= 1, got {machines_per_group}")
    return max_group_rps / machines_per_group


def aggregate(
    occurrences: Mapping[PositionKey, float],
    machines_per_group: int,
    groups: int,
    params: Optional[CapacityParams] = None,
) -> tuple[AggregateMap, float]:
    """Reduce an occurrence map to ``(aggregate_map, total_rps)``.

    Args:
        occurrences: Output of :func:`dc_capacity.tally.tally`.
        machines_per_group: Slots per group; must be >= 1.
        groups: Number of groups; only read by ``GROUP_CEILING``.
        params: Constants and reduction; defaults to ``CapacityParams()``.

    Returns:
        The aggregate map (built once, not mutated afterwards) and the
        estimated total RPS.

    Raises:
        InvalidTopology: If ``machines_per_group`` or ``groups`` is below 1.
    """
    if params is None:
        params = CapacityParams()
    share = subset_capacity(params.max_group_rps, machines_per_group)
    if groups < 1:
        raise InvalidTopology(f"groups must be >= 1, got {groups}")

    minimums = reduce_minimum(occurrences)

    if params.reduction is Reduction.GROUP_CEILING:
        return minimums, float(groups * params.max_group_rps)

    total_rps = 0.0
    for value in minimums.values():
        unit_count = occurrence_count(value, params.unit_weight)
        total_rps += unit_count * share * machines_per_group
    return minimums, total_rps
