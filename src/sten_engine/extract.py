"""STEN Engine - recover a payload hidden by embed()."""
from __future__ import annotations

import os

from sten_core.capacity import check_accessible
from sten_core.errors import FormatError
from sten_core.fileio import read_all, write_all
from sten_core.header import Header, deserialize, is_valid
from sten_core.names import final_component, format_bytes, output_filename, printable
from sten_core.protocol import EXTRACT_PREFIX, HEADER_LEN
from sten_engine.scan import find_header


def extract(
    stego_path: str | os.PathLike,
    output_path: str | os.PathLike,
) -> tuple[str, Header]:
    """Write the hidden payload out; return the output path and the header found."""
    # 1. Access
    print("[1/4] Validating file access...")
    check_accessible(stego_path, "Stego file")

    # 2. Load
    print("[2/4] Reading stego file...")
    data = read_all(stego_path)
    print(f"  File size: {format_bytes(len(data))}")

    # 3. Locate the header
    print("[3/4] Searching for hidden data...")
    if len(data) < HEADER_LEN:
        raise FormatError("File too small to contain hidden data")

    found = find_header(data)
    if found is None:
        raise FormatError("No hidden data found in file")
    header_offset = found[0]

    header = deserialize(data, header_offset)
    if not is_valid(header):
        raise FormatError("Invalid or corrupted header")

    print(f"  Original filename: {header.display_name}")
    print(f"  Hidden file size: {format_bytes(header.payload_size)}")

    # 4. Slice the payload out
    print("[4/4] Extracting hidden file...")
    payload_offset = header_offset + HEADER_LEN
    if payload_offset + header.payload_size > len(data):
        raise FormatError("Corrupted file: size mismatch")

    payload = data[payload_offset:payload_offset + header.payload_size]

    # Stored names never contain separators unless the header was crafted
    out_path = output_filename(output_path, final_component(header.name), EXTRACT_PREFIX)
    write_all(out_path, payload)

    print(f"Extracted file: {printable(out_path)}")
    print(f"File size: {format_bytes(len(payload))}")
    return out_path, header
