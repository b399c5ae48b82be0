"""Checkpointed codepoint index <-> byte offset mapping for UTF-8 buffers."""

from __future__ import annotations

from bisect import bisect_right
from collections.abc import Buffer
from typing import Final

from ._codec import iter_offsets
from ._errors import IndexOutOfRange


class UTF8PositionMapper:
    """Efficient UTF-8 position mapping with checkpoint system.

    Instead of recording the offset of every codepoint, this mapper keeps
    checkpoints at regular intervals and walks forward from the nearest
    one. Intended for callers translating many positions over a buffer
    that does not change; the mapper snapshots the bytes it was built on.
    """

    def __init__(self, data: Buffer, checkpoint_interval: int = 256) -> None:
        """Initialize position mapper with checkpoint system.

        Args:
            data: UTF-8 bytes to map
            checkpoint_interval: Codepoints between checkpoints (default 256)
        """
        if checkpoint_interval < 1:
            raise ValueError("checkpoint_interval must be positive")

        self.data: Final = bytes(data)
        self.checkpoint_interval: Final = checkpoint_interval
        # Entry i is the byte offset of codepoint i * interval
        self._checkpoint_bytes: list[int] = []
        self._is_ascii_only: bool = True
        self.length = 0

        self._build_checkpoints()

    def _build_checkpoints(self) -> None:
        """Build checkpoint offsets at regular codepoint intervals."""
        index = 0
        for offset, width in iter_offsets(self.data):
            if index % self.checkpoint_interval == 0:
                self._checkpoint_bytes.append(offset)
            if width > 1:
                self._is_ascii_only = False
            index += 1
        self.length = index

    def byte_to_index(self, byte_pos: int) -> int:
        """Convert a byte offset to the index of the codepoint containing it.

        Args:
            byte_pos: Offset into the UTF-8 buffer, ``0..len(data)``

        Returns:
            Codepoint index; ``len(data)`` maps to the codepoint count
        """
        if not 0 <= byte_pos <= len(self.data):
            raise ValueError(f"byte position {byte_pos} out of range")

        # Fast path for ASCII-only text
        if self._is_ascii_only:
            return byte_pos
        if byte_pos == len(self.data):
            return self.length

        slot = bisect_right(self._checkpoint_bytes, byte_pos) - 1
        current_byte = self._checkpoint_bytes[slot]
        current_index = slot * self.checkpoint_interval

        for offset, width in iter_offsets(self.data[current_byte:]):
            if current_byte + offset + width > byte_pos:
                break
            current_index += 1
        return current_index

    def index_to_byte(self, index: int) -> int:
        """Convert a codepoint index to its starting byte offset.

        Args:
            index: Codepoint index, ``0..length``

        Returns:
            Byte offset; ``length`` maps to ``len(data)``
        """
        if not 0 <= index <= self.length:
            raise IndexOutOfRange(index, self.length)

        # Fast path for ASCII-only text
        if self._is_ascii_only:
            return index
        if index == self.length:
            return len(self.data)

        slot = index // self.checkpoint_interval
        byte_pos = self._checkpoint_bytes[slot]
        remaining = index - slot * self.checkpoint_interval
        for offset, _ in iter_offsets(self.data[byte_pos:]):
            if remaining == 0:
                return byte_pos + offset
            remaining -= 1
        return len(self.data)
