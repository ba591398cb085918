"""Readers for the line-oriented topology format.

Format::

    <groups> <machines_per_group>
    <id> <id> ...        (one line per group, machines_per_group tokens)

Blank lines and lines starting with ``#`` are ignored.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Iterable, Iterator, Optional, TextIO

from dc_capacity.models import MAX_DIMENSION, Topology
from dc_capacity.validation import InvalidShape, build_topology, validate_dimensions

logger = logging.getLogger("dccap.parser")

PROMPT = "Enter M-groups by N-machines:"


def _content_lines(lines: Iterable[str]) -> Iterator[str]:
    for line in lines:
        stripped = line.strip()
        if stripped and not stripped.startswith("#"):
            yield stripped


def parse_header(line: str) -> tuple[int, int]:
    tokens = line.split()
    if len(tokens) != 2:
        raise ValueError(f"header must be '<groups> <machines_per_group>', got {line!r}")
    try:
        groups, machines = map(int, tokens)
    except ValueError:
        raise ValueError(f"header values must be integers, got {line!r}") from None
    return groups, machines


def parse_topology_lines(lines: Iterable[str], max_dimension: int = MAX_DIMENSION) -> Topology:
    """Build a validated topology from text lines.

    Raises:
        ValueError: Missing or malformed header, or trailing lines after the
            last group.
        InvalidTopology: Header dimensions out of range.
        InvalidShape: Too few group lines or a row with the wrong token count.
    """
    it = _content_lines(lines)
    header = next(it, None)
    if header is None:
        raise ValueError("empty input: missing '<groups> <machines_per_group>' header")
    groups, machines = parse_header(header)
    validate_dimensions(groups, machines, max_dimension)

    rows: list[list[str]] = []
    for _ in range(groups):
        line = next(it, None)
        if line is None:
            raise InvalidShape(f"expected {groups} group lines, got {len(rows)}")
        row = line.split()
        if len(row) != machines:
            raise InvalidShape(
                f"group {len(rows)}: expected {machines} machines, got {len(row)}"
            )
        rows.append(row)

    extra = next(it, None)
    if extra is not None:
        raise ValueError(f"unexpected line after {groups} groups: {extra!r}")
    return build_topology(groups, machines, rows, max_dimension)


def load_topology(file_path: str, max_dimension: int = MAX_DIMENSION) -> Topology:
    if not os.path.isfile(file_path):
        raise FileNotFoundError(f"Topology file not found: {file_path}")
    with open(file_path, "r", encoding="utf-8") as f:
        topology = parse_topology_lines(f, max_dimension)
    logger.info(
        "Loaded %s groups=%d machines=%d",
        file_path,
        topology.groups,
        topology.machines_per_group,
    )
    return topology


def read_interactive(
    stdin: Optional[TextIO] = None,
    stdout: Optional[TextIO] = None,
    max_dimension: int = MAX_DIMENSION,
) -> Topology:
    """Prompt for a header, then read exactly ``groups`` rows from ``stdin``.

    Unlike :func:`load_topology` reading stops after the last group, so a
    terminal session does not wait for end of input.
    """
    stdin = stdin if stdin is not None else sys.stdin
    stdout = stdout if stdout is not None else sys.stdout
    print(PROMPT, file=stdout, flush=True)
    lines = _content_lines(stdin)
    header = next(lines, None)
    if header is None:
        raise ValueError("no input: missing '<groups> <machines_per_group>' header")
    groups, machines = parse_header(header)
    validate_dimensions(groups, machines, max_dimension)
    rows = []
    for _ in range(groups):
        line = next(lines, None)
        if line is None:
            break
        rows.append(line)
    return parse_topology_lines([header, *rows], max_dimension)
