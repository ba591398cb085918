"""Single entry point running tally and aggregation for one topology.

Each call builds its own occurrence and aggregate maps; nothing is kept
between calls, so repeated or parallel computations never share state.
"""

from __future__ import annotations

import logging
from types import MappingProxyType
from typing import Optional

from dc_capacity.aggregate import aggregate
from dc_capacity.models import CapacityParams, CapacityResult, Reduction, Topology
from dc_capacity.tally import tally
from dc_capacity.validation import validate_topology, validate_weights

logger = logging.getLogger("dccap.capacity")


def compute_capacity(
    topology: Topology,
    params: Optional[CapacityParams] = None,
) -> CapacityResult:
    """Estimate the aggregate RPS of ``topology``.

    Raises:
        InvalidTopology: Dimensions out of range.
        InvalidShape: Matrix does not match the declared dimensions.
        ValueError: Weights in ``params`` cannot yield exact counts.
    """
    if params is None:
        params = CapacityParams()
    validate_topology(topology, params.max_dimension)
    validate_weights(params, topology)

    presence = params.presence_weight if params.reduction is Reduction.PRESENCE_SEEDED else None
    occurrences = tally(topology, unit_weight=params.unit_weight, presence_weight=presence)
    minimums, total_rps = aggregate(
        occurrences,
        machines_per_group=topology.machines_per_group,
        groups=topology.groups,
        params=params,
    )
    logger.debug(
        "occurrence entries=%d aggregate entries=%d",
        len(occurrences),
        len(minimums),
    )
    logger.info(
        "Capacity groups=%d machines=%d reduction=%s rps=%s",
        topology.groups,
        topology.machines_per_group,
        params.reduction.value,
        total_rps,
    )
    return CapacityResult(
        total_rps=total_rps,
        groups=topology.groups,
        machines_per_group=topology.machines_per_group,
        reduction=params.reduction,
        occurrences=MappingProxyType(occurrences),
        aggregate=MappingProxyType(minimums),
    )
