"""Data center capacity estimation.

Exports the core data structures and the tally / aggregation entry points.
"""

from dc_capacity.capacity import compute_capacity  # noqa: F401
from dc_capacity.models import (  # noqa: F401
    CapacityParams,
    CapacityResult,
    PositionKey,
    Reduction,
    Topology,
)
from dc_capacity.parser import load_topology, parse_topology_lines  # noqa: F401
from dc_capacity.validation import InvalidShape, InvalidTopology, TopologyError  # noqa: F401

__all__ = [
    "CapacityParams",
    "CapacityResult",
    "InvalidShape",
    "InvalidTopology",
    "PositionKey",
    "Reduction",
    "Topology",
    "TopologyError",
    "compute_capacity",
    "load_topology",
    "parse_topology_lines",
]
