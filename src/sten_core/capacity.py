"""STEN - file access and host/payload size policy."""
from __future__ import annotations

import os

from sten_core.errors import AccessError, SizeError
from sten_core.names import format_bytes
from sten_core.protocol import HEADER_LEN, MIN_HOST_SIZE, MAX_HIDDEN_RATIO


def check_accessible(path: str | os.PathLike, label: str) -> None:
    """Fail unless ``path`` names a file that can be opened for reading."""
    if not os.fspath(path):
        raise AccessError(f"{label} path cannot be empty")
    try:
        with open(path, "rb"):
            pass
    except OSError as e:
        raise AccessError(f"{label} not found or not accessible: {os.fspath(path)}") from e


def max_payload_size(payload_size: int, host_size: int) -> int:
    """Return the host's capacity, failing if the payload does not fit in it.

    Header plus payload may take at most MAX_HIDDEN_RATIO of the host size.
    """
    if host_size < MIN_HOST_SIZE:
        raise SizeError(f"Host file too small. Minimum size: {format_bytes(MIN_HOST_SIZE)}")

    budget = int(host_size * MAX_HIDDEN_RATIO)
    if budget < HEADER_LEN:
        raise SizeError("Host file too small to hide any data")
    capacity = budget - HEADER_LEN

    if payload_size > capacity:
        raise SizeError(
            "The file to hide exceeds the allowable size.\n"
            f"  File size: {format_bytes(payload_size)} ({payload_size} bytes)\n"
            f"  Maximum allowed: {format_bytes(capacity)} ({capacity} bytes)\n"
            f"  Over by: {payload_size - capacity} bytes\n"
            "  Please choose a smaller file or a larger host file."
        )

    return capacity


def utilization(payload_size: int, capacity: int) -> float:
    """Percentage of ``capacity`` taken by the payload."""
    if capacity <= 0:
        return 0.0
    return payload_size / capacity * 100.0
