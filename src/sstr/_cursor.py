"""Forward codepoint cursor over a UTF-8 byte range."""

from __future__ import annotations

from collections.abc import Buffer
from typing import Self

from ._codec import _width_at
from ._codec import decode
from ._codec import decode_char
from ._codepoint import NULL_CODEPOINT
from ._codepoint import Codepoint


class CodepointCursor:
    """
    Lazy, finite iterator yielding one Codepoint per UTF-8 sequence.

    Reads ``ref[0:length]`` starting at ``offset``. Each step decodes the
    sequence at the current offset and advances by its width, so a
    multi-byte codepoint is never split. ``begin()`` starts a new
    traversal over the same range; ``end()`` is the terminal position.

    Two cursors are equal only when they share the same ``ref`` object,
    length and offset.
    """

    __slots__ = ("_ref", "_view", "_length", "_offset")

    def __init__(self, ref: Buffer, length: int, offset: int = 0) -> None:
        view = memoryview(ref)
        if not 0 <= length <= len(view):
            raise ValueError("length must lie within the referenced buffer")
        if not 0 <= offset <= length:
            raise ValueError("offset must lie within [0, length]")
        self._ref = ref
        self._view = view[:length]
        self._length = length
        self._offset = offset

    @property
    def ref(self) -> Buffer:
        return self._ref

    @property
    def length(self) -> int:
        return self._length

    @property
    def offset(self) -> int:
        return self._offset

    @property
    def at_end(self) -> bool:
        return self._offset == self._length

    def begin(self) -> CodepointCursor:
        return CodepointCursor(self._ref, self._length)

    def end(self) -> CodepointCursor:
        return CodepointCursor(self._ref, self._length, self._length)

    def peek(self) -> Codepoint:
        """Returns the current codepoint without advancing."""
        if self.at_end:
            return NULL_CODEPOINT
        return decode_char(self._view, self._offset)

    def advance(self) -> Codepoint:
        """Returns the current codepoint and advances past it."""
        if self.at_end:
            return NULL_CODEPOINT
        width = _width_at(self._view, self._offset)
        cp = decode(width, self._view, self._offset)
        self._offset += width
        return cp

    def __iter__(self) -> Self:
        return self

    def __next__(self) -> Codepoint:
        if self.at_end:
            raise StopIteration
        return self.advance()

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, CodepointCursor):
            return NotImplemented
        return (
            self._ref is other._ref
            and self._length == other._length
            and self._offset == other._offset
        )

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self) -> str:
        return (
            f"CodepointCursor(offset={self._offset}, length={self._length})"
        )
