"""Console formatting of capacity results."""

from __future__ import annotations

from dc_capacity.keys import format_key
from dc_capacity.models import UNIT_WEIGHT, CapacityResult
from dc_capacity.tally import occurrence_count

RULE = "-" * 37


def format_number(value: float) -> str:
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.4f}".rstrip("0").rstrip(".")


def format_results(result: CapacityResult) -> str:
    lines = [
        RULE,
        "Data Center Configuration",
        f"Requests Per Second = {format_number(result.total_rps)}",
        f"M-group             = {result.groups}",
        f"N-machines          = {result.machines_per_group}",
        RULE,
    ]
    return "\n".join(lines) + "\n"


def format_detailed_results(result: CapacityResult, unit_weight: float = UNIT_WEIGHT) -> str:
    """Summary block followed by the occurrence and aggregate tables.

    Occurrence keys are shown in their ``position-id`` text form, sorted by
    position then id; aggregate rows are sorted by machine id.
    """
    out = [format_results(result).rstrip("\n")]
    out.append(f"Reduction           = {result.reduction.value}")
    out.append("")
    out.append("Occurrences (position-machine: weight, count)")
    for key in sorted(result.occurrences):
        value = result.occurrences[key]
        out.append(
            f"  {format_key(key):<20} {format_number(value):>12} "
            f"{occurrence_count(value, unit_weight):>6}"
        )
    out.append("")
    out.append("Aggregate (machine: min weight, count)")
    for machine_id in sorted(result.aggregate):
        value = result.aggregate[machine_id]
        out.append(
            f"  {machine_id:<20} {format_number(value):>12} "
            f"{occurrence_count(value, unit_weight):>6}"
        )
    out.append(RULE)
    return "\n".join(out) + "\n"
