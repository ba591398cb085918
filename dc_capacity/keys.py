"""Textual form of occurrence map keys.

Keys are held as ``PositionKey`` tuples in memory; the ``"<position>-<id>"``
string is only used when keys are printed or read back from a report.
"""

from __future__ import annotations

from dc_capacity.models import PositionKey

KEY_DELIMITER = "-"


def encode_key(position: int, machine_id: str, delimiter: str = KEY_DELIMITER) -> str:
    """Render ``(position, machine_id)`` as ``"<position><delimiter><machine_id>"``.

    Raises:
        ValueError: If ``position`` is negative or ``machine_id`` is empty or
            contains the delimiter (the text would not decode back uniquely).
    """
    if position < 0:
        raise ValueError(f"position must be >= 0, got {position}")
    if not machine_id:
        raise ValueError("machine_id must be a non-empty string")
    if delimiter in machine_id:
        raise ValueError(f"machine_id {machine_id!r} contains delimiter {delimiter!r}")
    return f"{position}{delimiter}{machine_id}"


def decode_key(token: str, delimiter: str = KEY_DELIMITER) -> PositionKey:
    """Parse a token produced by :func:`encode_key` back into a ``PositionKey``."""
    head, sep, tail = token.partition(delimiter)
    if not sep or not tail:
        raise ValueError(f"malformed key: {token!r}")
    if not head.isdecimal():
        raise ValueError(f"malformed position in key: {token!r}")
    if delimiter in tail:
        raise ValueError(f"ambiguous key, machine id contains delimiter: {token!r}")
    return PositionKey(int(head), tail)


def format_key(key: PositionKey) -> str:
    # display only: ids containing the delimiter are shown as-is
    return f"{key.position}{KEY_DELIMITER}{key.machine_id}"
