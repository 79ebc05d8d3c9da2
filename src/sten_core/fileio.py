"""STEN - whole-file byte I/O."""
from __future__ import annotations

import os

from sten_core.errors import AccessError


def file_size(path: str | os.PathLike) -> int:
    """Size in bytes, or 0 if the file cannot be stat'ed."""
    try:
        return os.stat(path).st_size
    except OSError:
        return 0


def read_all(path: str | os.PathLike) -> bytes:
    try:
        f = open(path, "rb")
    except OSError as e:
        raise AccessError(f"Cannot open file for reading: {os.fspath(path)}") from e

    with f:
        try:
            expected = os.fstat(f.fileno()).st_size
            data = f.read()
        except OSError as e:
            raise AccessError(f"Error reading file: {os.fspath(path)}") from e

    # Short read: the file shrank (or failed) between stat and read
    if len(data) < expected:
        raise AccessError(f"Error reading file: {os.fspath(path)}")
    return data


def write_all(path: str | os.PathLike, data: bytes) -> None:
    """Overwrite ``path`` with ``data``.

    Not atomic: a crash mid-write leaves a partial file behind.
    """
    try:
        f = open(path, "wb")
    except OSError as e:
        raise AccessError(f"Cannot create output file: {os.fspath(path)}") from e

    with f:
        try:
            written = f.write(data)
            f.flush()
        except OSError as e:
            raise AccessError(f"Error writing to file: {os.fspath(path)}") from e

    if written != len(data):
        raise AccessError(f"Error writing to file: {os.fspath(path)}")
