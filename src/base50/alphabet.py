from typing import Tuple

# 26 * 2 + 10 = 62 candidates, 12 dropped:
#   B D I O i l look like 8 0 1 0 1 1
#   C Q V c o v may be read as 0 O U 0 o u
ALPHABET = (
    "0123456789"
    "A" "EFGH" "JKLMN" "P" "RSTU" "WXYZ"
    "ab" "defgh" "jk" "mn" "pqrstu" "wxyz"
)
BASE = len(ALPHABET)

STOP_CHAR = "."
# Whitespace, plus "_" so people can write 0xFFFF_FFFF style groupings.
SKIP_CHARS = "\t\n\r _"

# Sentinel classes stored in DECODE_TABLE next to digit values 0..49.
INVALID = -1
SKIP = -2
STOP = -3

ENCODE_TABLE: bytes = ALPHABET.encode("ascii")


def _build_decode_table() -> Tuple[int, ...]:
    table = [INVALID] * 256
    for value, ch in enumerate(ALPHABET):
        table[ord(ch)] = value
    for ch in SKIP_CHARS:
        table[ord(ch)] = SKIP
    table[ord(STOP_CHAR)] = STOP
    return tuple(table)


DECODE_TABLE: Tuple[int, ...] = _build_decode_table()


def is_skippable(ch: str) -> bool:
    return len(ch) == 1 and ch in SKIP_CHARS
