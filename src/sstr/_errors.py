"""Error types raised by the codec, the byte arena and the string types."""

from collections.abc import Buffer

type BytePosition = int


class SStringError(Exception):
    """Common base for every failure raised by sstr."""


class DecodeError(SStringError, ValueError):
    """
    Reports malformed UTF-8 with the byte position where decoding stopped.

    Raised for lead bytes that match no width pattern, truncated sequences
    and continuation bytes that do not carry the 10xxxxxx marker.
    """

    def __init__(
        self, msg: str, data: Buffer = b"", pos: BytePosition = 0
    ) -> None:
        if not isinstance(msg, str):
            raise TypeError("msg must be a string")
        if not isinstance(pos, int) or pos < 0:
            raise ValueError("pos must be a non-negative integer")

        self.msg = msg
        self.data = bytes(data)
        self.pos = pos

        super().__init__(f"{msg} at byte {pos}")


class IndexOutOfRange(SStringError, IndexError):
    """Codepoint index or substring bound outside ``[0, len()]``."""

    def __init__(self, index: int, length: int) -> None:
        self.index = index
        self.length = length
        super().__init__(
            f"codepoint index {index} out of range for length {length}"
        )


class AllocationFailure(SStringError, MemoryError):
    """Arena growth could not be satisfied."""

    def __init__(self, requested: int, limit: int | None = None) -> None:
        self.requested = requested
        self.limit = limit
        if limit is None:
            msg = f"cannot allocate {requested} bytes"
        else:
            msg = f"cannot allocate {requested} bytes (limit {limit})"
        super().__init__(msg)
