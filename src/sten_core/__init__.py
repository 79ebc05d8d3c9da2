"""STEN Core - header format, capacity policy and byte I/O."""
from .errors import StegoError, AccessError, SizeError, FormatError
from .header import Header, build, serialize, deserialize, is_valid, compute_checksum
from .capacity import check_accessible, max_payload_size

__all__ = [
    "StegoError", "AccessError", "SizeError", "FormatError",
    "Header", "build", "serialize", "deserialize", "is_valid", "compute_checksum",
    "check_accessible", "max_payload_size",
]
