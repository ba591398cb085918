"""Pytest configuration & custom summary hook.

Also puts the project root on sys.path so 'import dc_capacity' works without
an install, and provides small topologies shared by several test modules.
"""

from __future__ import annotations

import sys
from pathlib import Path

import pytest

_root = Path(__file__).resolve().parents[1]
if str(_root) not in sys.path:
    sys.path.insert(0, str(_root))

from dc_capacity.models import Topology  # noqa: E402
from dc_capacity.validation import build_topology  # noqa: E402

FIXTURES = Path(__file__).resolve().parent / "fixtures"


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES


@pytest.fixture
def single() -> Topology:
    return build_topology(1, 1, [["A1"]])


@pytest.fixture
def distinct_3x4() -> Topology:
    rows = [[f"{c}{i}" for c in "ABCD"] for i in range(1, 4)]
    return build_topology(3, 4, rows)


@pytest.fixture
def shared_2x2() -> Topology:
    return build_topology(2, 2, [["A1", "B1"], ["A1", "B1"]])


def pytest_terminal_summary(
    terminalreporter: pytest.TerminalReporter,
    exitstatus: int,
    config: pytest.Config,
) -> None:  # noqa: D401
    """Append a compact custom summary at the end of test session."""
    stats = terminalreporter.stats
    collected = terminalreporter._numcollected  # type: ignore[attr-defined]
    passed = len(stats.get("passed", []))
    failed = len(stats.get("failed", []))
    errors = len(stats.get("error", []))
    skipped = len(stats.get("skipped", []))

    terminalreporter.section("Custom summary", sep="=")
    terminalreporter.write_line(
        f"Collected: {collected} | Passed: {passed} | Failed: {failed} | "
        f"Errors: {errors} | Skipped: {skipped}"
    )
    if failed:
        terminalreporter.write_line("Failed tests:")
        for rep in stats["failed"]:
            terminalreporter.write_line(f"  - {rep.nodeid}")
