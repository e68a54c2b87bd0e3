from typing import Optional, Tuple, Union

from .alphabet import BASE, DECODE_TABLE, ENCODE_TABLE, SKIP, STOP, STOP_CHAR
from .errors import MAX_GROUP_VALUE, Base50Error, InvalidByteError, InvalidTotalError

BytesLike = Union[bytes, bytearray, memoryview]
Source = Union[str, bytes, bytearray, memoryview]

# 7 binary bytes fit in 10 base50 digits. Largest value per chunk length
# against the largest value of the digits used for it:
#
#   1  0xFF                =               255  zz          =              2499
#   2  0xFFFF              =             65535  zzz         =            124999
#   3  0xFFFF_FF           =          16777215  zzzz_z      =         312499999
#   4  0xFFFF_FFFF         =        4294967295  zzzz_zz     =       15624999999
#   5  0xFFFF_FFFF_FF      =     1099511627775  zzzz_zzzz   =    39062499999999
#   6  0xFFFF_FFFF_FFFF    =   281474976710655  zzzz_zzzz_z =  1953124999999999
#   7  0xFFFF_FFFF_FFFF_FF = 72057594037927935  zzzzz_zzzzz = 97656249999999999
CHUNK_BYTES = 7
GROUP_CHARS = 10
STOP_BYTE = ord(STOP_CHAR)

# Trailing chunk length -> (digits, value below which the top digit is dropped).
# Only odd lengths can drop a digit: for the others the shorter width already
# decodes to fewer bytes.
PARTIAL_GROUPS = {
    1: (2, 50),
    2: (3, 0),
    3: (5, 6_250_000),  # 50**4
    4: (6, 0),
    5: (8, 781_250_000_000),  # 50**7
    6: (9, 0),
}

# Characters for a trailing chunk of 0..6 bytes, stop character included.
_ENCODE_TAIL = (0, 3, 4, 6, 7, 9, 10)
# Bytes carried by a group of 0..10 digits.
_GROUP_BYTES = (0, 1, 1, 2, 3, 3, 4, 5, 5, 6, 7)


def encode_len(byte_count: int) -> int:
    """
    Return the buffer size needed to encode `byte_count` bytes.

    The stop character is included. The encoder writes exactly this many
    characters, or one fewer when a trailing 1, 3 or 5 byte chunk is small
    enough to drop its top digit (0x00 encodes as "0." rather than "00.").
    """
    if byte_count < 0:
        raise ValueError(f"byte count must be >= 0, got {byte_count}")
    whole, rem = divmod(byte_count, CHUNK_BYTES)
    return whole * GROUP_CHARS + _ENCODE_TAIL[rem]


def decode_len(char_count: int) -> int:
    """
    Return the number of bytes held by `char_count` base50 digits.

    `char_count` must NOT include a trailing stop character: strip it first,
    e.g. decode_len(len("1x")) == 1 for the encoding "1x.".
    """
    if char_count < 0:
        raise ValueError(f"character count must be >= 0, got {char_count}")
    whole, rem = divmod(char_count, GROUP_CHARS)
    return whole * CHUNK_BYTES + _GROUP_BYTES[rem]


def _write_digits(dst, offset: int, num: int, width: int) -> None:
    for i in range(offset + width - 1, offset - 1, -1):
        num, digit = divmod(num, BASE)
        dst[i] = ENCODE_TABLE[digit]
    if num:
        # Chunking guarantees every value fits its width.
        raise OverflowError(f"value does not fit in {width} base50 digits")


def encode_into(dst: Union[bytearray, memoryview], src: BytesLike) -> int:
    """
    Encode `src` into `dst` and return the number of bytes written.

    `dst` must hold at least encode_len(len(src)) bytes.
    """
    if not isinstance(src, bytes):
        src = bytes(src)
    needed = encode_len(len(src))
    if len(dst) < needed:
        raise ValueError(f"destination too small: {len(dst)} < {needed}")

    pos = 0
    full = len(src) - len(src) % CHUNK_BYTES
    for start in range(0, full, CHUNK_BYTES):
        num = int.from_bytes(src[start : start + CHUNK_BYTES], "big")
        _write_digits(dst, pos, num, GROUP_CHARS)
        pos += GROUP_CHARS

    tail = src[full:]
    if tail:
        width, threshold = PARTIAL_GROUPS[len(tail)]
        num = int.from_bytes(tail, "big")
        if num < threshold:
            width -= 1
        _write_digits(dst, pos, num, width)
        pos += width
        dst[pos] = STOP_BYTE
        pos += 1
    return pos


def encode(src: BytesLike) -> bytes:
    """Return the base50 encoding of `src` as ASCII bytes."""
    buf = bytearray(encode_len(len(src)))
    written = encode_into(buf, src)
    return bytes(buf[:written])


def encode_to_string(src: BytesLike) -> str:
    """Return the base50 encoding of `src` as text."""
    return encode(src).decode("ascii")


def _as_source(src: Source) -> BytesLike:
    if isinstance(src, str):
        return src.encode("utf-8")
    return src


def _decode(dst, src: BytesLike) -> Tuple[int, Optional[Base50Error]]:
    count = 0
    pos = 0
    end = len(src)
    while pos < end:
        # Read every digit of the group before writing any of its bytes, so
        # dst may share memory with src.
        num = 0
        digits = 0
        while pos < end and digits < GROUP_CHARS:
            value = DECODE_TABLE[src[pos]]
            pos += 1
            if value == SKIP:
                continue
            if value == STOP:
                break
            if value < 0:
                return count, InvalidByteError(src[pos - 1], bytes(dst[:count]))
            num = num * BASE + value
            digits += 1

        if not digits:
            continue
        if num > MAX_GROUP_VALUE:
            return count, InvalidTotalError(num, bytes(dst[:count]))

        size = _GROUP_BYTES[digits]
        if num >> (8 * size):
            # Bits the encoder could not have produced for this width.
            return count, InvalidTotalError(num, bytes(dst[:count]))
        dst[count : count + size] = num.to_bytes(size, "big")
        count += size
    return count, None


def decode_into(dst: Union[bytearray, memoryview], src: Source) -> int:
    """
    Decode base50 `src` into `dst` and return the number of bytes written.

    `dst` may be the same bytearray as `src` to decode in place. On malformed
    input a Base50Error is raised; its `decoded` attribute (and dst) hold the
    bytes of every group completed before the failing one.
    """
    count, err = _decode(dst, _as_source(src))
    if err is not None:
        raise err
    return count


def decode_partial(src: Source) -> Tuple[bytes, Optional[Base50Error]]:
    """
    Decode as much of `src` as possible.

    Returns (decoded, error): error is None on success, otherwise decoded
    is everything before the failing group.
    """
    src = _as_source(src)
    buf = bytearray(decode_len(len(src)))
    count, err = _decode(buf, src)
    return bytes(buf[:count]), err


def decode(src: Source) -> bytes:
    """
    Decode base50 text.

    Whitespace and "_" are ignored. A "." ends the current group, so several
    encodings can be concatenated and decoded in one call.
    """
    decoded, err = decode_partial(src)
    if err is not None:
        raise err
    return decoded


def decode_string(text: str) -> bytes:
    return decode(text.encode("utf-8"))
