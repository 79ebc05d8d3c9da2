"""STEN Engine - hide a payload file at the tail of a host file."""
from __future__ import annotations

import os

from sten_core.capacity import check_accessible, max_payload_size, utilization
from sten_core.fileio import file_size, read_all, write_all
from sten_core.header import build, serialize
from sten_core.names import final_component, format_bytes, output_filename, printable
from sten_core.protocol import EMBED_PREFIX


def embed(
    payload_path: str | os.PathLike,
    host_path: str | os.PathLike,
    output_path: str | os.PathLike,
) -> str:
    """Write host + header + payload to the output file and return its final path."""
    # 1. Access
    print("[1/5] Validating file access...")
    check_accessible(payload_path, "File to hide")
    check_accessible(host_path, "Host file")

    # 2. Sizes
    print("[2/5] Analyzing file sizes...")
    payload_size = file_size(payload_path)
    host_size = file_size(host_path)
    print(f"  File to hide: {format_bytes(payload_size)} ({printable(final_component(payload_path))})")
    print(f"  Host file: {format_bytes(host_size)} ({printable(final_component(host_path))})")

    # 3. Capacity
    print("[3/5] Checking size constraints...")
    capacity = max_payload_size(payload_size, host_size)
    print(f"  Capacity utilization: {utilization(payload_size, capacity):.1f}%")
    print(f"  Remaining capacity: {format_bytes(capacity - payload_size)}")

    # 4. Load
    print("[4/5] Reading files...")
    host_data = read_all(host_path)
    payload_data = read_all(payload_path)

    # 5. Compose: host + header + payload
    print("[5/5] Embedding hidden file...")
    header = build(payload_path, len(payload_data))
    output = b"".join([host_data, serialize(header), payload_data])

    final_path = output_filename(output_path, final_component(host_path), EMBED_PREFIX)
    write_all(final_path, output)

    print(f"Output file: {printable(final_path)}")
    print(f"Total size: {format_bytes(len(output))}")
    print(f"Hidden file: {header.display_name} ({format_bytes(payload_size)})")
    return final_path
