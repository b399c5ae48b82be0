"""
UTF-8 codec primitives.

Pure functions over bytes-like objects: lead byte width, decode, encode,
and the terminated-sequence scans used by the string constructors. Every
path raises DecodeError instead of reading past a truncated or malformed
sequence.
"""

from collections.abc import Buffer
from collections.abc import Iterator

from ._codepoint import Codepoint
from ._errors import DecodeError
from ._errors import IndexOutOfRange
from ._profile import ProfileContext

type Width = int

_CONTINUATION_MASK = 0xC0
_CONTINUATION_TAG = 0x80
_PAYLOAD_MASK = 0x3F
_MAX_ENCODABLE = 0x1FFFFF


def lead_byte_width(byte: int) -> Width:
    """
    Returns the sequence width announced by a UTF-8 lead byte.

    Raises:
        DecodeError: if the byte is a continuation byte or 11111xxx
    """
    if byte < 0x80:
        return 1
    if byte & 0xE0 == 0xC0:
        return 2
    if byte & 0xF0 == 0xE0:
        return 3
    if byte & 0xF8 == 0xF0:
        return 4
    raise DecodeError(f"Invalid lead byte 0x{byte:02X}", bytes([byte]), 0)


def _width_at(data: Buffer, pos: int) -> Width:
    """Lead byte width with the error positioned inside ``data``."""
    try:
        return lead_byte_width(data[pos])  # type: ignore[index]
    except DecodeError as e:
        raise DecodeError(e.msg, data, pos) from None


def decode(width: Width, data: Buffer, pos: int = 0) -> Codepoint:
    """
    Decodes the ``width``-byte sequence starting at ``data[pos]``.

    The lead byte contributes its low ``7 - width`` bits (all seven for
    ASCII), each continuation byte six more.
    """
    view = memoryview(data)
    if width not in (1, 2, 3, 4):
        raise ValueError(f"width must be 1-4, not {width}")
    if pos + width > len(view):
        raise DecodeError("Truncated UTF-8 sequence", view, pos)

    lead = view[pos]
    if _width_at(view, pos) != width:
        raise DecodeError(
            f"Lead byte 0x{lead:02X} does not start a {width}-byte sequence",
            view,
            pos,
        )
    if width == 1:
        return Codepoint(lead)

    code = lead & (0xFF >> (width + 1))
    for i in range(pos + 1, pos + width):
        byte = view[i]
        if byte & _CONTINUATION_MASK != _CONTINUATION_TAG:
            raise DecodeError("Invalid continuation byte", view, i)
        code = (code << 6) | (byte & _PAYLOAD_MASK)
    return Codepoint(code)


def decode_char(data: Buffer, pos: int = 0) -> Codepoint:
    """
    Decodes the codepoint starting at ``data[pos]``.

    The width comes from the lead byte, so callers need not classify it
    first.

    Raises:
        DecodeError: if ``pos`` is past the end or the sequence is malformed
    """
    view = memoryview(data)
    if not 0 <= pos < len(view):
        raise DecodeError("No UTF-8 sequence at position", view, max(pos, 0))
    return decode(_width_at(view, pos), view, pos)


def encoded_width(cp: Codepoint | int) -> Width:
    """Number of UTF-8 bytes needed for ``cp``."""
    code = int(cp)
    if code < 0x80:
        return 1
    elif code < 0x800:
        return 2
    elif code < 0x10000:
        return 3
    return 4


def encode(cp: Codepoint | int) -> bytes:
    """Encodes one codepoint as UTF-8; inverse of :func:`decode`."""
    code = int(cp)
    if code > _MAX_ENCODABLE:
        msg = f"U+{code:X} does not fit in a 4-byte UTF-8 sequence"
        raise ValueError(msg)

    width = encoded_width(code)
    if width == 1:
        return bytes((code,))

    out = bytearray(width)
    for i in range(width - 1, 0, -1):
        out[i] = _CONTINUATION_TAG | (code & _PAYLOAD_MASK)
        code >>= 6
    # Lead byte: width high bits set, then a zero bit
    out[0] = ((0xFF00 >> width) & 0xFF) | code
    return bytes(out)


def iter_offsets(data: Buffer) -> Iterator[tuple[int, Width]]:
    """Yields ``(offset, width)`` for every codepoint in ``data``."""
    view = memoryview(data)
    pos = 0
    end = len(view)
    while pos < end:
        width = _width_at(view, pos)
        decode(width, view, pos)
        yield pos, width
        pos += width


def _scan_terminated(data: Buffer) -> tuple[int, int]:
    """Returns (codepoints, bytes) up to the first NUL or the end."""
    view = memoryview(data)
    pos = 0
    count = 0
    end = len(view)
    while pos < end and view[pos] != 0:
        width = _width_at(view, pos)
        decode(width, view, pos)
        pos += width
        count += 1
    return count, pos


def _profiled_scan(func_name: str, data: Buffer) -> tuple[int, int]:
    with ProfileContext(func_name, len(memoryview(data))) as prof:
        count, nbytes = _scan_terminated(data)
        prof.decoded(count, nbytes)
    return count, nbytes


def scan_codepoint_count(data: Buffer) -> int:
    """Counts codepoints before the terminating NUL (or the buffer end)."""
    return _profiled_scan("scan_codepoint_count", data)[0]


def scan_byte_length(data: Buffer) -> int:
    """Counts bytes before the terminating NUL (or the buffer end)."""
    return _profiled_scan("scan_byte_length", data)[1]


def validate(data: Buffer) -> int:
    """
    Checks that all of ``data`` is whole, well-formed UTF-8 sequences.

    NUL bytes are ordinary codepoints here. Returns the codepoint count.
    """
    with ProfileContext("validate", len(memoryview(data))) as prof:
        count = 0
        for _ in iter_offsets(data):
            count += 1
        prof.decoded(count)
    return count


def count_codepoints(data: Buffer, stop: int) -> int:
    """Counts codepoints whose first byte lies before byte offset ``stop``."""
    count = 0
    for offset, _ in iter_offsets(data):
        if offset >= stop:
            break
        count += 1
    return count


def byte_offset_of(data: Buffer, index: int) -> int:
    """
    Translates a codepoint index to a byte offset in O(index).

    ``index == len`` maps to the end of the buffer.

    Raises:
        IndexOutOfRange: if ``index`` is negative or past the end
    """
    if index < 0:
        raise IndexOutOfRange(index, validate(data))
    count = 0
    for offset, _ in iter_offsets(data):
        if count == index:
            return offset
        count += 1
    if count == index:
        return len(memoryview(data))
    raise IndexOutOfRange(index, count)
