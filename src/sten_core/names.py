"""STEN - path and filename helpers."""
from __future__ import annotations

import os

_SEPARATORS = "/\\"
_UNITS = ("B", "KB", "MB", "GB", "TB")


def _last_separator(path: str) -> int:
    return max(path.rfind(sep) for sep in _SEPARATORS)


def final_component(path: str | os.PathLike) -> str:
    """Return the text after the last '/' or '\\'."""
    path = os.fspath(path)
    return path[_last_separator(path) + 1:]


def extension(name: str) -> str:
    """Return the lowercased extension including the dot, or '' if there is none."""
    pos = name.rfind(".")
    if pos == -1:
        return ""
    return name[pos:].lower()


def has_extension(path: str) -> bool:
    """True when a '.' appears after the last path separator."""
    return path.rfind(".") > _last_separator(path)


def output_filename(requested: str | os.PathLike, source_name: str, default_prefix: str) -> str:
    """Finalize an output path.

    An empty request falls back to ``default_prefix + source_name``. A request
    without an extension borrows the extension of ``source_name``.
    """
    requested = os.fspath(requested)
    if not requested:
        return default_prefix + source_name
    if has_extension(requested):
        return requested
    return requested + extension(source_name)


def format_bytes(size: int) -> str:
    """Human-readable size, e.g. '1.50 KB'."""
    value = float(size)
    unit = 0
    while value >= 1024.0 and unit < len(_UNITS) - 1:
        value /= 1024.0
        unit += 1
    return f"{value:.2f} {_UNITS[unit]}"


def printable(path: str | os.PathLike) -> str:
    """Path as text that any UTF-8 stream accepts; undecodable bytes become \\xNN."""
    return os.fsencode(path).decode("utf-8", "backslashreplace")
