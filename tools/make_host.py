from __future__ import annotations

import random
from pathlib import Path

from sten_core.header import build, serialize
from sten_core.protocol import MIN_HOST_SIZE

# --- DEFAULTS ---
DEFAULT_SIZE = 2 * MIN_HOST_SIZE
DEFAULT_SEED = 1337
DECOY_TEXT = b"nothing to see here\n"


def generate_host(out_path, size=DEFAULT_SIZE, seed=DEFAULT_SEED, decoy=None):
    """
    Write `size` deterministic pseudo-random bytes to `out_path`.
    With `decoy`, a valid header naming `decoy` and a short text payload is
    appended, so extraction of the file (or of anything it is hidden in, when
    it is the payload) stops at the decoy.
    """
    rng = random.Random(seed)
    body = rng.randbytes(size)

    if decoy:
        body += serialize(build(decoy, len(DECOY_TEXT))) + DECOY_TEXT

    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)
    out.write_bytes(body)

    print(f"GENERATED: {out} ({len(body)} bytes)")
    return out


if __name__ == "__main__":
    import sys

    # Usage:
    #   python tools/make_host.py OUT [--size N] [--seed S] [--decoy NAME]

    args = [a for a in sys.argv[1:] if a]

    def pop_option(arg_list: list[str], opt: str) -> tuple[str | None, list[str]]:
        """Remove `opt VALUE` from an argv-style list."""
        if opt not in arg_list:
            return None, arg_list
        i = arg_list.index(opt)
        if i + 1 >= len(arg_list):
            raise SystemExit(f"{opt} requires a value")
        return arg_list[i + 1], arg_list[:i] + arg_list[i + 2:]

    size, args = pop_option(args, "--size")
    seed, args = pop_option(args, "--seed")
    decoy, args = pop_option(args, "--decoy")

    if len(args) != 1:
        print("Usage: make_host.py OUT [--size N] [--seed S] [--decoy NAME]")
        raise SystemExit(2)

    generate_host(
        args[0],
        size=int(size) if size else DEFAULT_SIZE,
        seed=int(seed) if seed else DEFAULT_SEED,
        decoy=decoy,
    )
