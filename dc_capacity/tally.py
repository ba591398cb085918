"""Occurrence tally over a topology matrix."""

from __future__ import annotations

from collections import Counter
from typing import Optional

from dc_capacity.models import UNIT_WEIGHT, OccurrenceMap, PositionKey, Topology


def tally(
    topology: Topology,
    unit_weight: float = UNIT_WEIGHT,
    presence_weight: Optional[float] = None,
) -> OccurrenceMap:
    """Accumulate weighted (position, machine_id) occurrences.

    Every cell ``matrix[i][j]`` adds ``unit_weight`` under key
    ``(j, matrix[i][j])``, so each value ends up as ``unit_weight`` times the
    number of groups placing that id at that position.

    Args:
        topology: Validated topology (shape is not re-checked here).
        unit_weight: Weight added per real occurrence.
        presence_weight: When set, each occurrence of an id also adds this
            weight at every position ``0..machines_per_group-1`` for that id,
            so every id has an entry at every position.

    Returns:
        A new occurrence map; the topology is left untouched.
    """
    occurrences: OccurrenceMap = {}
    positions = range(topology.machines_per_group)
    for row in topology.matrix:
        for j, machine_id in enumerate(row):
            key = PositionKey(j, machine_id)
            occurrences[key] = occurrences.get(key, 0.0) + unit_weight
    if presence_weight is None:
        return occurrences

    # one seed per occurrence of an id, at every position
    seen = Counter(machine_id for row in topology.matrix for machine_id in row)
    for machine_id, n in seen.items():
        for x in positions:
            seed_key = PositionKey(x, machine_id)
            occurrences[seed_key] = occurrences.get(seed_key, 0.0) + n * presence_weight
    return occurrences


def occurrence_count(value: float, unit_weight: float = UNIT_WEIGHT) -> int:
    # exact for whole-number unit weights while seeds total less than one unit
    return int(value // unit_weight)
