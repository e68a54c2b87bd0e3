from typing import Literal, Union

from .alphabet import SKIP_CHARS, STOP_CHAR, is_skippable

DataFormat = Literal["raw", "hex"]


def hex_to_bytes(text: Union[str, bytes]) -> bytes:
    """
    Parse hex, ignoring whitespace, "_" and a leading 0x.

    An odd number of digits is padded on the left, so "f" means "0f".
    """
    if isinstance(text, (bytes, bytearray)):
        text = text.decode("ascii")
    cleaned = "".join(ch for ch in text if ch not in SKIP_CHARS)
    if cleaned[:2].lower() == "0x":
        cleaned = cleaned[2:]
    if len(cleaned) % 2:
        cleaned = "0" + cleaned
    return bytes.fromhex(cleaned)


def load_bytes(data: bytes, fmt: DataFormat) -> bytes:
    if fmt == "raw":
        return bytes(data)
    if fmt == "hex":
        return hex_to_bytes(data)
    raise ValueError(f"Unsupported data format: {fmt}")


def dump_bytes(data: bytes, fmt: DataFormat) -> bytes:
    if fmt == "raw":
        return bytes(data)
    if fmt == "hex":
        return data.hex().encode("ascii")
    raise ValueError(f"Unsupported data format: {fmt}")


def group_text(encoded: str, size: int, separator: str = "_") -> str:
    """
    Split encoded text into runs of `size` characters for reading aloud.

    The separator has to be one the decoder skips, so grouped text still
    decodes to the same bytes. A trailing stop character stays attached to
    the last run.
    """
    if size <= 0:
        return encoded
    if not is_skippable(separator):
        raise ValueError(f"Separator must be one of {SKIP_CHARS!r}, got {separator!r}")
    tail = ""
    if encoded.endswith(STOP_CHAR):
        encoded, tail = encoded[:-1], STOP_CHAR
    runs = [encoded[i : i + size] for i in range(0, len(encoded), size)]
    return separator.join(runs) + tail
