"""Tests for the occurrence tally and the position aggregator."""

from __future__ import annotations

import pytest

from dc_capacity.aggregate import aggregate, reduce_minimum, subset_capacity
from dc_capacity.models import CapacityParams, PositionKey, Reduction
from dc_capacity.tally import occurrence_count, tally
from dc_capacity.validation import InvalidTopology, build_topology


def test_tally_single_cell(single) -> None:
    assert tally(single) == {PositionKey(0, "A1"): 1000.0}


def test_tally_distinct_ids_count_once(distinct_3x4) -> None:
    occ = tally(distinct_3x4)
    assert len(occ) == 12
    assert set(occ.values()) == {1000.0}


def test_tally_shared_ids_accumulate(shared_2x2) -> None:
    occ = tally(shared_2x2)
    assert occ == {PositionKey(0, "A1"): 2000.0, PositionKey(1, "B1"): 2000.0}


def test_tally_does_not_touch_matrix(shared_2x2) -> None:
    before = shared_2x2.matrix
    tally(shared_2x2, presence_weight=0.0001)
    assert shared_2x2.matrix == before


def test_tally_presence_seeds_every_position(shared_2x2) -> None:
    occ = tally(shared_2x2, presence_weight=0.0001)
    assert set(occ) == {
        PositionKey(0, "A1"),
        PositionKey(1, "A1"),
        PositionKey(0, "B1"),
        PositionKey(1, "B1"),
    }
    assert occ[PositionKey(1, "A1")] == pytest.approx(0.0002)
    assert occ[PositionKey(0, "A1")] == pytest.approx(2000.0002)
    assert occurrence_count(occ[PositionKey(0, "A1")]) == 2


def test_reduce_minimum_keeps_smallest_per_id() -> None:
    occ = {
        PositionKey(0, "A"): 3000.0,
        PositionKey(1, "A"): 1000.0,
        PositionKey(2, "A"): 2000.0,
        PositionKey(0, "B"): 1000.0,
    }
    assert reduce_minimum(occ) == {"A": 1000.0, "B": 1000.0}


def test_aggregate_single_cell(single) -> None:
    minimums, total = aggregate(tally(single), machines_per_group=1, groups=1)
    assert minimums == {"A1": 1000.0}
    assert total == 100.0


def test_aggregate_min_count_distinct(distinct_3x4) -> None:
    _, total = aggregate(tally(distinct_3x4), machines_per_group=4, groups=3)
    # 12 ids seen once each, every count credits one group ceiling
    assert total == pytest.approx(1200.0)


def test_aggregate_group_ceiling(distinct_3x4) -> None:
    params = CapacityParams(reduction=Reduction.GROUP_CEILING)
    minimums, total = aggregate(tally(distinct_3x4), 4, 3, params)
    assert total == 300.0
    assert len(minimums) == 12


def test_aggregate_presence_seeded_collapses_to_zero(shared_2x2) -> None:
    params = CapacityParams(reduction=Reduction.PRESENCE_SEEDED)
    occ = tally(shared_2x2, presence_weight=params.presence_weight)
    minimums, total = aggregate(occ, 2, 2, params)
    assert total == 0.0
    assert all(v < 1 for v in minimums.values())


def test_aggregate_presence_seeded_single_column_keeps_counts() -> None:
    topo = build_topology(3, 1, [["A"], ["A"], ["B"]])
    params = CapacityParams(reduction=Reduction.PRESENCE_SEEDED)
    occ = tally(topo, presence_weight=params.presence_weight)
    _, total = aggregate(occ, 1, 3, params)
    assert total == pytest.approx(300.0)


def test_subset_capacity_rejects_zero_machines() -> None:
    with pytest.raises(InvalidTopology):
        subset_capacity(100, 0)
    with pytest.raises(InvalidTopology):
        aggregate({}, machines_per_group=0, groups=1)


def test_aggregate_empty_map_is_zero() -> None:
    minimums, total = aggregate({}, machines_per_group=2, groups=1)
    assert minimums == {}
    assert total == 0.0


def test_tally_presence_seed_scales_with_occurrences() -> None:
    topo = build_topology(3, 3, [["A", "B", "A"], ["A", "C", "C"], ["B", "B", "B"]])
    occ = tally(topo, presence_weight=0.5)
    # "A" occurs 3 times, at positions 0, 0 and 2
    assert occ[PositionKey(0, "A")] == 2000.0 + 1.5
    assert occ[PositionKey(1, "A")] == 1.5
    assert occ[PositionKey(2, "A")] == 1000.0 + 1.5
    assert occ[PositionKey(2, "C")] == 1000.0 + 1.0
