"""Topology validation: dimension bounds and matrix shape.

All checks run before any tally state exists, so a failing topology never
produces a partial result.
"""

from __future__ import annotations

from typing import Sequence

from dc_capacity.models import MAX_DIMENSION, CapacityParams, Reduction, Topology


class TopologyError(ValueError):
    """Base class for rejected topologies."""


class InvalidTopology(TopologyError):
    """Group or machine count is non-positive or above the sanity ceiling."""


class InvalidShape(TopologyError):
    """Matrix does not match the declared groups x machines_per_group."""


def validate_dimensions(
    groups: int,
    machines_per_group: int,
    max_dimension: int = MAX_DIMENSION,
) -> None:
    for name, value in (("groups", groups), ("machines_per_group", machines_per_group)):
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidTopology(f"{name} must be an integer, got {value!r}")
        if value < 1:
            raise InvalidTopology(f"{name} must be >= 1, got {value}")
        if value > max_dimension:
            raise InvalidTopology(f"{name} must be <= {max_dimension}, got {value}")


def validate_shape(
    groups: int,
    machines_per_group: int,
    matrix: Sequence[Sequence[str]],
) -> None:
    """Check the matrix is fully populated with exactly the declared shape.

    Raises:
        InvalidShape: On a wrong row count, a wrong row width, or a cell that
            is not a non-empty string.
    """
    if len(matrix) != groups:
        raise InvalidShape(f"expected {groups} groups, got {len(matrix)}")
    for i, row in enumerate(matrix):
        if len(row) != machines_per_group:
            raise InvalidShape(
                f"group {i}: expected {machines_per_group} machines, got {len(row)}"
            )
        for j, machine_id in enumerate(row):
            if not isinstance(machine_id, str) or not machine_id:
                raise InvalidShape(f"group {i} position {j}: empty machine id")


def build_topology(
    groups: int,
    machines_per_group: int,
    rows: Sequence[Sequence[str]],
    max_dimension: int = MAX_DIMENSION,
) -> Topology:
    validate_dimensions(groups, machines_per_group, max_dimension)
    validate_shape(groups, machines_per_group, rows)
    return Topology(
        groups=groups,
        machines_per_group=machines_per_group,
        matrix=tuple(tuple(row) for row in rows),
    )


def validate_topology(topology: Topology, max_dimension: int = MAX_DIMENSION) -> None:
    validate_dimensions(topology.groups, topology.machines_per_group, max_dimension)
    validate_shape(topology.groups, topology.machines_per_group, topology.matrix)


def validate_weights(params: CapacityParams, topology: Topology) -> None:
    """Check that occurrence counts can be read back from tallied weights.

    ``unit_weight`` must be a whole number so repeated additions stay exact,
    and with presence seeding the seeds an id collects at one position must
    stay below one unit.

    Raises:
        ValueError: On a fractional or non-positive unit weight, or seeds that
            could add up to a full unit.
    """
    unit = params.unit_weight
    if isinstance(unit, bool) or not float(unit).is_integer() or unit < 1:
        raise ValueError(f"unit_weight must be a positive whole number, got {unit!r}")
    if params.reduction is not Reduction.PRESENCE_SEEDED:
        return
    if params.presence_weight <= 0:
        raise ValueError(f"presence_weight must be > 0, got {params.presence_weight!r}")
    seeds = params.presence_weight * topology.groups * topology.machines_per_group
    if seeds >= unit:
        raise ValueError(
            f"presence_weight {params.presence_weight} x {topology.groups} x "
            f"{topology.machines_per_group} reaches unit_weight {unit}"
        )
