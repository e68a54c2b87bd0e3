from .alphabet import ALPHABET, BASE, SKIP_CHARS, STOP_CHAR
from .codec import (
    decode,
    decode_into,
    decode_len,
    decode_partial,
    decode_string,
    encode,
    encode_into,
    encode_len,
    encode_to_string,
)
from .config import Base50Config, load_config, save_config
from .errors import Base50Error, InvalidByteError, InvalidTotalError
from .formats import dump_bytes, group_text, hex_to_bytes, load_bytes
from .history import log_event, read_events

__all__ = [
    "ALPHABET",
    "BASE",
    "SKIP_CHARS",
    "STOP_CHAR",
    "Base50Config",
    "Base50Error",
    "InvalidByteError",
    "InvalidTotalError",
    "decode",
    "decode_into",
    "decode_len",
    "decode_partial",
    "decode_string",
    "dump_bytes",
    "encode",
    "encode_into",
    "encode_len",
    "encode_to_string",
    "group_text",
    "hex_to_bytes",
    "load_bytes",
    "load_config",
    "log_event",
    "read_events",
    "save_config",
]
