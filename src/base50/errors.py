MAX_GROUP_VALUE = 0xFF_FFFF_FFFF_FFFF


class Base50Error(ValueError):
    """
    Raised when base50 text cannot be decoded.

    `decoded` holds every byte of the groups completed before the failing
    group, so diagnostic tools can show how far decoding got.
    """

    def __init__(self, message: str, decoded: bytes = b"") -> None:
        super().__init__(message)
        self.decoded = decoded


class InvalidByteError(Base50Error):
    """A character outside the alphabet, not skippable and not the stop character."""

    def __init__(self, byte: int, decoded: bytes = b"") -> None:
        self.byte = byte
        if 0x20 <= byte < 0x7F:
            shown = f"{chr(byte)!r} (0x{byte:02x})"
        else:
            shown = f"0x{byte:02x}"
        super().__init__(f"base50: invalid byte: {shown}", decoded)


class InvalidTotalError(Base50Error):
    """A group whose value is out of range or not in canonical form."""

    def __init__(self, value: int, decoded: bytes = b"") -> None:
        self.value = value
        if value > MAX_GROUP_VALUE:
            message = f"base50: invalid group value > {MAX_GROUP_VALUE:#x}: {value:#x}"
        else:
            message = f"base50: invalid encoding (e.g. 56 should be 056): {value:#x}"
        super().__init__(message, decoded)
