"""STEN header codec.

A header is a fixed 272-byte record appended right before the payload:

    magic | version | payload_size | filename_length | filename[256] | checksum

All integers are little-endian and the record has no padding, so any 272-byte
window of a file can be parsed as a candidate header. A window counts as a real
header only when the magic matches and the additive checksum agrees.
"""
from __future__ import annotations

import os
import struct
from dataclasses import dataclass, replace
from warnings import warn

from sten_core.errors import FormatError, SizeError
from sten_core.names import final_component
from sten_core.protocol import (
    MAGIC,
    VERSION,
    HEADER_FMT,
    HEADER_LEN,
    FILENAME_FIELD_LEN,
    MAX_FILENAME_LEN,
    MAX_PAYLOAD_SIZE,
    U32_MASK,
)


@dataclass(frozen=True)
class Header:
    magic: int
    version: int
    payload_size: int
    filename_length: int
    filename: bytes  # full NUL-padded field
    checksum: int

    @property
    def raw_name(self) -> bytes:
        """Stored filename bytes, cut at filename_length or the first NUL."""
        return self.filename[:self.filename_length].split(b"\x00", 1)[0]

    @property
    def name(self) -> str:
        """Stored filename for building paths (undecodable bytes surrogate-escaped)."""
        return os.fsdecode(self.raw_name)

    @property
    def display_name(self) -> str:
        """Stored filename for printing; a name cut mid-character shows as \\xNN."""
        return self.raw_name.decode("utf-8", "backslashreplace")

    def to_dict(self) -> dict:
        return {
            "magic": f"0x{self.magic:08X}",
            "version": self.version,
            "payload_size": self.payload_size,
            "filename_length": self.filename_length,
            "filename": self.display_name,
            "checksum": self.checksum,
        }


def compute_checksum(header: Header) -> int:
    """Sum of the numeric fields and the meaningful filename bytes, mod 2**32."""
    total = header.magic + header.version + header.payload_size + header.filename_length
    # filename_length of an arbitrary window may exceed the field; the slice clamps it
    total += sum(header.filename[:min(header.filename_length, FILENAME_FIELD_LEN)])
    return total & U32_MASK


def build(filename: str | os.PathLike, payload_size: int) -> Header:
    """Create the header for a payload called ``filename`` of ``payload_size`` bytes."""
    if not 0 <= payload_size <= MAX_PAYLOAD_SIZE:
        raise SizeError(f"Payload size {payload_size} does not fit the 32-bit header field")

    name = os.fsencode(final_component(filename))
    if len(name) > MAX_FILENAME_LEN:
        warn(f"Filename is {len(name)} bytes; keeping the first {MAX_FILENAME_LEN}")
        name = name[:MAX_FILENAME_LEN]

    draft = Header(
        magic=MAGIC,
        version=VERSION,
        payload_size=payload_size,
        filename_length=len(name),
        filename=name.ljust(FILENAME_FIELD_LEN, b"\x00"),
        checksum=0,
    )
    return replace(draft, checksum=compute_checksum(draft))


def serialize(header: Header) -> bytes:
    return struct.pack(
        HEADER_FMT,
        header.magic,
        header.version,
        header.payload_size,
        header.filename_length,
        header.filename,
        header.checksum,
    )


def deserialize(buf: bytes, offset: int = 0) -> Header:
    """Parse the 272-byte window of ``buf`` starting at ``offset``.

    Any bytes are accepted; use is_valid() to tell a real header from noise.
    """
    if len(buf) - offset < HEADER_LEN:
        raise FormatError("Invalid header size")

    magic, ver, size, name_len, name, checksum = struct.unpack_from(HEADER_FMT, buf, offset)
    return Header(
        magic=magic,
        version=ver,
        payload_size=size,
        filename_length=name_len,
        filename=name,
        checksum=checksum,
    )


def is_valid(header: Header) -> bool:
    return header.magic == MAGIC and header.checksum == compute_checksum(header)
