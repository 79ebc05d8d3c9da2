"""STEN protocol constants.

Single source of truth for the on-disk header layout and the capacity policy.
Keep this file stable. Files written by one build must stay extractable by another.
"""

# Header magic: 0x5354454E ("STEN"), stored little-endian as b"NETS"
MAGIC = 0x5354454E
VERSION = 0x0001

# Header: [Magic(4) | Ver(2) | PayloadSize(4) | NameLen(2) | Name(256) | Checksum(4)] = 272 bytes
HEADER_FMT = "<IHIH256sI"
HEADER_LEN = 272

FILENAME_FIELD_LEN = 256
MAX_FILENAME_LEN = FILENAME_FIELD_LEN - 1

# Field bounds
U32_MASK = 0xFFFFFFFF
MAX_PAYLOAD_SIZE = U32_MASK

# Capacity policy
MIN_HOST_SIZE = 10 * 1024  # 10 KiB
MAX_HIDDEN_RATIO = 0.85  # header + payload may use at most 85% of the host size

# Output naming
EMBED_PREFIX = "stego_"
EXTRACT_PREFIX = "extracted_"
