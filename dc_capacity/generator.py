import random
from typing import Optional

from dc_capacity.models import MAX_DIMENSION, Topology
from dc_capacity.validation import build_topology, validate_dimensions


def generate_topology(
    groups: int,
    machines_per_group: int,
    pool_size: Optional[int] = None,
    seed: int = 0,
    max_dimension: int = MAX_DIMENSION,
) -> Topology:
    """Generate a synthetic topology with ids drawn from ``M1..M<pool_size>``.

    ``pool_size`` defaults to ``machines_per_group`` so ids repeat across groups.
    """
    validate_dimensions(groups, machines_per_group, max_dimension)
    if pool_size is None:
        pool_size = machines_per_group
    if pool_size < 1:
        raise ValueError(f"pool_size must be >= 1, got {pool_size}")
    rng = random.Random(seed)
    rows = [
        [f"M{rng.randint(1, pool_size)}" for _ in range(machines_per_group)]
        for _ in range(groups)
    ]
    return build_topology(groups, machines_per_group, rows, max_dimension)
