import os
from pathlib import Path

import matplotlib

matplotlib.use("Agg")  # Must be set before importing pyplot
import matplotlib.pyplot as plt  # noqa: E402

from dc_capacity.models import UNIT_WEIGHT, CapacityResult  # noqa: E402
from dc_capacity.report import format_number  # noqa: E402
from dc_capacity.tally import occurrence_count  # noqa: E402


def _ensure_dir(path: str):
    if path:
        os.makedirs(path, exist_ok=True)


def next_unique_path(path: str | Path) -> str:
    """If the file exists, append _1, _2 ... until a free name is found."""
    p = Path(path)
    if not p.exists():
        return str(p)
    counter = 1
    while True:
        candidate = p.parent / f"{p.stem}_{counter}{p.suffix}"
        if not candidate.exists():
            return str(candidate)
        counter += 1


def save_capacity_chart(
    result: CapacityResult,
    filepath: str,
    unit_weight: float = UNIT_WEIGHT,
    overwrite: bool = True,
) -> str:
    """Bar chart of usable occurrence counts per machine id.

    Figure width grows slowly with the number of ids; labels are rotated once
    there are more than a dozen of them.
    """
    ids = sorted(result.aggregate)
    counts = [occurrence_count(result.aggregate[m], unit_weight) for m in ids]

    fig, ax = plt.subplots(
        figsize=(min(8 + len(ids) * 0.25, 18), 5),
        constrained_layout=True,
    )
    try:
        ax.bar(
            range(len(ids)),
            counts,
            color="#00AACC",
            alpha=0.85,
            edgecolor="black",
            linewidth=0.6,
        )
        rotate = len(ids) > 12
        ax.set_xticks(range(len(ids)))
        ax.set_xticklabels(ids, rotation=45 if rotate else 0, ha="right" if rotate else "center")
        ax.set_xlabel("Machine", fontsize=12)
        ax.set_ylabel("Usable count", fontsize=12)
        ax.set_title(
            f"Capacity - {format_number(result.total_rps)} RPS "
            f"({result.groups}x{result.machines_per_group}, {result.reduction.value})",
            fontsize=13,
            fontweight="bold",
        )
        ax.grid(True, alpha=0.25, axis="y", linestyle="--", linewidth=0.7)

        if not overwrite:
            filepath = next_unique_path(filepath)
        _ensure_dir(os.path.dirname(filepath))
        fig.savefig(filepath, dpi=120)
    finally:
        plt.close(fig)
    return filepath
