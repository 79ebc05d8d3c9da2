import sys
from pathlib import Path

from sten_core.protocol import HEADER_LEN


def main():
    if len(sys.argv) != 3:
        print("Usage: corrupt_one_byte.py <file> <offset>")
        print("  a negative offset counts from the end of the file")
        raise SystemExit(2)

    p = Path(sys.argv[1])
    b = bytearray(p.read_bytes())
    if len(b) < HEADER_LEN:
        print("File too small to corrupt safely.")
        raise SystemExit(2)

    idx = int(sys.argv[2])
    if idx < 0:
        idx += len(b)
    if not 0 <= idx < len(b):
        print(f"Offset {sys.argv[2]} is outside the file ({len(b)} bytes).")
        raise SystemExit(2)

    b[idx] ^= 0x01
    p.write_bytes(bytes(b))
    print(f"Corrupted 1 byte at offset {idx} in {p}")


if __name__ == "__main__":
    main()
