from __future__ import annotations

from warnings import warn

from sten_core.header import Header, deserialize, is_valid
from sten_core.protocol import MAGIC, HEADER_LEN


class HeaderScanner:
    """Backward header search: the file is opaque, the header must be found.

    - Every offset from len(data) - HEADER_LEN down to 1 is probed in turn.
    - Offset 0 is never probed.
    - The first window (nearest the tail) with a matching magic and checksum wins.
    """

    def __init__(self, data: bytes):
        self.data = data
        self.scan_stats = {
            "probes": 0,
            "magic_hits": 0,
            "checksum_rejects": 0,
        }

    def find(self) -> tuple[int, Header] | None:
        """Return (offset, header) of the tail-most valid header, or None."""
        found = None
        for i in range(len(self.data) - HEADER_LEN, 0, -1):
            candidate = deserialize(self.data, i)
            self.scan_stats["probes"] += 1

            if candidate.magic != MAGIC:
                continue
            self.scan_stats["magic_hits"] += 1

            if is_valid(candidate):
                found = (i, candidate)
                break

            self.scan_stats["checksum_rejects"] += 1

        # At most one warning per scan
        rejects = self.scan_stats["checksum_rejects"]
        if rejects:
            warn(f"{rejects} header candidate(s) failed their checksum")

        return found

    def get_scan_stats(self) -> dict:
        return dict(self.scan_stats)


def find_header(data: bytes) -> tuple[int, Header] | None:
    return HeaderScanner(data).find()
