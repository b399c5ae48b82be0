"""
UTF-8 string types: the borrowing StrView and the owning SString.

Both expose the same read-only operations, implemented once in
``_Utf8Ops`` against the used byte range returned by ``data()``. SString
additionally owns a ByteArena and is the only type with mutators
(``append_inplace`` and the in-place case conversions). Operations that
produce text always return a new SString.

Indices are codepoint indices unless the name says "bytes"; translating
an index walks the buffer from the start, so ``at`` is O(index) and
``len`` is O(bytes).
"""

from __future__ import annotations

import ctypes
from collections.abc import Buffer
from collections.abc import Iterable
from collections.abc import Iterator
from typing import Any
from typing import Self

from ._buffer import DEFAULT_BUFFER_CONFIG
from ._buffer import BufferConfig
from ._buffer import ByteArena
from ._codec import count_codepoints
from ._codec import decode
from ._codec import iter_offsets
from ._codec import validate
from ._codepoint import Codepoint
from ._convert import codepoints_to_str
from ._convert import codepoints_to_utf8
from ._convert import str_to_ucs2le
from ._convert import str_to_wide_buffer
from ._convert import ucs2le_to_codepoints
from ._convert import utf8_to_bytes
from ._cursor import CodepointCursor
from ._errors import IndexOutOfRange
from ._profile import ProfileContext
from ._utf8_mapper import UTF8PositionMapper

type Operand = SString | StrView | Buffer | str

NOT_FOUND = -1
CASE_OFFSET = Codepoint(0x20)
_SPACE = b" "
_EMPTY = b""


def _operand_bytes(other: Operand) -> memoryview | None:
    """Bytes of an operand, or None for unsupported types."""
    if isinstance(other, SString | StrView):
        return other.data()
    if isinstance(other, str):
        return memoryview(other.encode("utf-8", "surrogatepass"))
    if isinstance(other, Buffer):
        return memoryview(other).cast("B")
    return None


def _require_operand(other: Operand) -> memoryview:
    """Operand bytes; raw buffers must hold whole UTF-8 codepoints."""
    view = _operand_bytes(other)
    if view is None:
        kind = type(other).__name__
        msg = f"expected SString, StrView, bytes or str, not {kind}"
        raise TypeError(msg)
    if not isinstance(other, SString | StrView | str):
        validate(view)
    return view


def _case_edits(data: memoryview, lower: bool) -> list[tuple[int, int]]:
    """(offset, new byte) for every ASCII letter needing a case shift."""
    edits = []
    for offset, width in iter_offsets(data):
        if width != 1:
            continue
        cp = Codepoint(data[offset])
        if lower and cp.is_ascii_upper():
            edits.append((offset, int(cp + CASE_OFFSET)))
        elif not lower and cp.is_ascii_lower():
            edits.append((offset, int(cp - CASE_OFFSET)))
    return edits


class _Utf8Ops:
    """Read-only operations over a well-formed UTF-8 byte range."""

    __slots__ = ()

    # Provided by the concrete types
    def data(self) -> memoryview:
        raise NotImplementedError

    def null(self) -> bool:
        raise NotImplementedError

    def _cursor_ref(self) -> Buffer:
        raise NotImplementedError

    def _derive(self, raw: Buffer) -> SString:
        raise NotImplementedError

    # Size and emptiness

    def empty(self) -> bool:
        return self.size() == 0

    def size(self) -> int:
        return len(self.data())

    def len(self) -> int:
        """Codepoint count; decodes the whole buffer on every call."""
        return validate(self.data())

    def __len__(self) -> int:
        return self.len()

    def __bool__(self) -> bool:
        return not self.empty()

    # Iteration

    def iterator(self) -> CodepointCursor:
        """Fresh cursor positioned at the first codepoint."""
        return CodepointCursor(self._cursor_ref(), self.size())

    begin = iterator

    def end(self) -> CodepointCursor:
        return CodepointCursor(self._cursor_ref(), self.size(), self.size())

    def __iter__(self) -> Iterator[Codepoint]:
        return self.iterator()

    # Indexing

    def at(self, index: int) -> Codepoint:
        """
        Codepoint at ``index``, found by decoding from the start.

        Raises:
            IndexOutOfRange: if ``index`` is negative or ``>= len()``
        """
        view = self.data()
        if index >= 0:
            for i, (offset, width) in enumerate(iter_offsets(view)):
                if i == index:
                    return decode(width, view, offset)
        raise IndexOutOfRange(index, self.len())

    def __getitem__(self, key: int | slice) -> Any:
        if isinstance(key, slice):
            if key.step is not None:
                raise TypeError("slicing with a step is not supported")
            begin = 0 if key.start is None else key.start
            if key.stop is None:
                return self.substring(begin)
            return self.substring(begin, key.stop - begin)
        if not isinstance(key, int):
            kind = type(key).__name__
            msg = f"indices must be integers or slices, not {kind}"
            raise TypeError(msg)
        return self.at(key)

    def position_mapper(
        self, checkpoint_interval: int = 256
    ) -> UTF8PositionMapper:
        """Index/offset translator for many lookups over this content."""
        return UTF8PositionMapper(self.data(), checkpoint_interval)

    # Search

    def find_by_bytes(self, needle: Operand) -> int:
        """Byte offset of the first occurrence of ``needle``, or -1."""
        target = _require_operand(needle)
        return bytes(self.data()).find(target)

    def find(self, needle: Operand) -> int:
        """
        Codepoint index of the first occurrence of ``needle``, or -1.

        An empty needle matches at 0.
        """
        with ProfileContext("find", self.size()) as prof:
            pos = self.find_by_bytes(needle)
            if pos == NOT_FOUND:
                return NOT_FOUND
            index = count_codepoints(self.data(), pos)
            prof.decoded(index)
        return index

    def __contains__(self, needle: Operand) -> bool:
        return self.find_by_bytes(needle) != NOT_FOUND

    def ends_with(self, suffix: Operand) -> bool:
        return bytes(self.data()).endswith(_require_operand(suffix))

    def starts_with(self, prefix: Operand) -> bool:
        return bytes(self.data()).startswith(_require_operand(prefix))

    # Derived values

    def trim(self) -> SString:
        """Copy without leading and trailing spaces (0x20 only)."""
        return self._derive(bytes(self.data()).strip(_SPACE))

    def reverse(self) -> SString:
        """Copy with codepoints in reverse order."""
        view = self.data()
        with ProfileContext("reverse", len(view)) as prof:
            chunks = [view[o : o + w] for o, w in iter_offsets(view)]
            prof.decoded(len(chunks))
        return self._derive(b"".join(reversed(chunks)))

    def append(self, other: Operand) -> SString:
        """New value holding these bytes followed by ``other``'s."""
        tail = _require_operand(other)
        return self._derive(bytes(self.data()) + bytes(tail))

    def __add__(self, other: Operand) -> SString:
        if _operand_bytes(other) is None:
            return NotImplemented
        return self.append(other)

    def split(self, delimiter: Operand) -> list[SString]:
        """
        Pieces between occurrences of ``delimiter``, in order.

        Adjacent delimiters produce empty pieces. Without any occurrence
        the result is a single copy of this value.
        """
        sep = bytes(_require_operand(delimiter))
        if not sep:
            raise ValueError("empty separator")
        with ProfileContext("split", self.size()):
            return [
                self._derive(piece)
                for piece in bytes(self.data()).split(sep)
            ]

    def substring(self, begin: int, length: int | None = None) -> SString:
        """
        Codepoints ``[begin, begin + length)``; to the end when omitted.

        Raises:
            IndexOutOfRange: if either bound falls outside ``[0, len()]``
        """
        mapper = self.position_mapper()
        if begin < 0 or begin > mapper.length:
            raise IndexOutOfRange(begin, mapper.length)
        stop = mapper.length if length is None else begin + length
        if stop < begin or stop > mapper.length:
            raise IndexOutOfRange(stop, mapper.length)
        start_byte = mapper.index_to_byte(begin)
        stop_byte = mapper.index_to_byte(stop)
        return self._derive(self.data()[start_byte:stop_byte])

    # Case

    def is_lower(self) -> bool:
        """No uppercase ASCII letter present; other codepoints ignored."""
        return not any(cp.is_ascii_upper() for cp in self.iterator())

    def is_upper(self) -> bool:
        """No lowercase ASCII letter present; other codepoints ignored."""
        return not any(cp.is_ascii_lower() for cp in self.iterator())

    def _case_copy(self, lower: bool) -> SString:
        view = self.data()
        out = bytearray(view)
        for offset, byte in _case_edits(view, lower):
            out[offset] = byte
        return self._derive(out)

    def to_lower(self) -> SString:
        with ProfileContext("to_lower", self.size()):
            return self._case_copy(lower=True)

    def to_upper(self) -> SString:
        with ProfileContext("to_upper", self.size()):
            return self._case_copy(lower=False)

    # Comparison

    def __eq__(self, other: object) -> bool:
        view = _operand_bytes(other)  # type: ignore[arg-type]
        if view is None:
            return NotImplemented
        return self.data() == view

    __hash__ = None  # type: ignore[assignment]

    # Export

    def to_codepoints(self) -> list[Codepoint]:
        return list(self.iterator())

    def to_byte_string(self) -> bytes:
        return bytes(self.data())

    def to_wide_string(self) -> str:
        """
        Python text with one character per codepoint.

        Scalars above U+10FFFF can be stored (``encode`` accepts up to
        0x1FFFFF) but have no Python character, so this export and the
        ones built on it (``str()``, ``to_owned_wide_buffer``,
        ``to_ucs2le``) refuse them.

        Raises:
            ValueError: if a codepoint lies beyond U+10FFFF
        """
        return codepoints_to_str(self.iterator())

    def to_owned_wide_buffer(self) -> ctypes.Array[ctypes.c_wchar]:
        return str_to_wide_buffer(self.to_wide_string())

    def to_ucs2le(self) -> bytes:
        return str_to_ucs2le(self.to_wide_string())

    def __bytes__(self) -> bytes:
        return self.to_byte_string()

    def __str__(self) -> str:
        return self.to_wide_string()

    def __repr__(self) -> str:
        if self.null():
            return f"{type(self).__name__}()"
        return f"{type(self).__name__}({self.to_byte_string()!r})"


class StrView(_Utf8Ops):
    """
    Read-only borrow of a UTF-8 byte range.

    A view owns nothing and has no capacity. It stays readable for as long
    as it exists, but once an SString source grows or is moved the view
    keeps showing the bytes it was taken over.
    """

    __slots__ = ("_view", "_config", "_null_ref")

    def __init__(
        self, source: SString | StrView | Buffer | None = None
    ) -> None:
        self._config = DEFAULT_BUFFER_CONFIG
        self._null_ref = bytearray()
        if source is None:
            self._view: memoryview | None = None
        elif isinstance(source, SString):
            self._config = source.config
            self._view = None if source.null() else source.data()
        elif isinstance(source, StrView):
            self._config = source._config
            self._view = source._view
        elif isinstance(source, Buffer):
            view = memoryview(source).cast("B").toreadonly()
            validate(view)
            self._view = view
        else:
            msg = f"cannot view {type(source).__name__}"
            raise TypeError(msg)

    def null(self) -> bool:
        return self._view is None

    def data(self) -> memoryview:
        return memoryview(_EMPTY) if self._view is None else self._view

    def _cursor_ref(self) -> Buffer:
        return self._null_ref if self._view is None else self._view

    def _derive(self, raw: Buffer) -> SString:
        return SString._from_trusted(raw, self._config)

    def to_owned(self) -> SString:
        """Deep copy into a new SString."""
        if self._view is None:
            return SString(config=self._config)
        return self._derive(self._view)


class SString(_Utf8Ops):
    """
    Owning UTF-8 string backed by a ByteArena.

    ``SString(data, size)`` copies the first ``size`` bytes of ``data``
    after checking they are well-formed UTF-8; ``SString()`` is null.
    Copies are deep; ``take()`` moves the allocation out and leaves this
    instance null.
    """

    __slots__ = ("_arena",)

    def __init__(
        self,
        data: Buffer | None = None,
        size: int | None = None,
        *,
        config: BufferConfig = DEFAULT_BUFFER_CONFIG,
    ) -> None:
        self._arena = ByteArena(config)
        if data is None:
            if size:
                raise ValueError("size given without data")
            return
        if isinstance(data, str):
            raise TypeError("use SString.from_utf8 for str input")
        if isinstance(data, SString | StrView):
            data = data.data()

        view = memoryview(data).cast("B")
        if size is None:
            size = len(view)
        elif not 0 <= size <= len(view):
            raise ValueError("size exceeds the supplied buffer")
        chunk = view[:size]
        validate(chunk)
        self._arena.write(chunk)

    @classmethod
    def _from_trusted(
        cls, raw: Buffer, config: BufferConfig = DEFAULT_BUFFER_CONFIG
    ) -> SString:
        """Wraps bytes already known to be well-formed."""
        result = cls.__new__(cls)
        result._arena = ByteArena.from_bytes(raw, config)
        return result

    # Factories

    @classmethod
    def from_utf8(
        cls,
        data: Buffer | str,
        *,
        config: BufferConfig = DEFAULT_BUFFER_CONFIG,
    ) -> SString:
        """Copies UTF-8 text up to its first NUL byte."""
        return cls._from_trusted(utf8_to_bytes(data), config)

    @classmethod
    def from_ucs2le(
        cls, data: Buffer, *, config: BufferConfig = DEFAULT_BUFFER_CONFIG
    ) -> SString:
        """Decodes little-endian 16-bit wide text up to its first zero unit."""
        codepoints = ucs2le_to_codepoints(data)
        return cls._from_trusted(codepoints_to_utf8(codepoints), config)

    @classmethod
    def from_codepoints(
        cls,
        codepoints: Iterable[Codepoint | int],
        *,
        config: BufferConfig = DEFAULT_BUFFER_CONFIG,
    ) -> SString:
        return cls._from_trusted(codepoints_to_utf8(codepoints), config)

    # Buffer accessors

    @property
    def config(self) -> BufferConfig:
        return self._arena.config

    def null(self) -> bool:
        return self._arena.null

    def size(self) -> int:
        return self._arena.size

    def cap(self) -> int:
        return self._arena.capacity

    def data(self) -> memoryview:
        return self._arena.data()

    def _cursor_ref(self) -> Buffer:
        return self._arena.cursor_ref

    def _derive(self, raw: Buffer) -> SString:
        return SString._from_trusted(raw, self._arena.config)

    def view(self) -> StrView:
        """Borrowing view over the current content."""
        return StrView(self)

    # Ownership

    def copy(self) -> SString:
        """Deep copy into a new allocation."""
        result = SString.__new__(SString)
        result._arena = self._arena.copy()
        return result

    def take(self) -> SString:
        """Moves the content into a new SString; this one becomes null."""
        result = SString.__new__(SString)
        result._arena = self._arena.take()
        return result

    def __copy__(self) -> SString:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, Any]) -> SString:
        return self.copy()

    # Mutation

    def append_inplace(self, other: Operand) -> None:
        """Grows the arena as needed and copies ``other``'s bytes in."""
        self._arena.write(_require_operand(other))

    def __iadd__(self, other: Operand) -> Self:
        if _operand_bytes(other) is None:
            return NotImplemented
        self.append_inplace(other)
        return self

    def _shift_case_inplace(self, lower: bool) -> None:
        for offset, byte in _case_edits(self.data(), lower):
            self._arena.overwrite(offset, bytes((byte,)))

    def to_lower_inplace(self) -> None:
        with ProfileContext("to_lower_inplace", self.size()):
            self._shift_case_inplace(lower=True)

    def to_upper_inplace(self) -> None:
        with ProfileContext("to_upper_inplace", self.size()):
            self._shift_case_inplace(lower=False)
