"""
Conversions between UTF-8 bytes and the other supported text forms.

Little-endian wide text is a run of 16-bit units, least-significant byte
first, terminated by a zero unit or the end of the buffer. A high
surrogate followed by a low surrogate is rebuilt into one supplementary
codepoint; a surrogate without its partner passes through unchanged.
"""

from __future__ import annotations

import ctypes
import logging
from collections.abc import Buffer
from collections.abc import Iterable
from collections.abc import Iterator

from ._codec import encode
from ._codec import scan_byte_length
from ._codepoint import Codepoint
from ._errors import DecodeError

logger = logging.getLogger(__name__)

_HIGH_SURROGATES = range(0xD800, 0xDC00)
_LOW_SURROGATES = range(0xDC00, 0xE000)


def utf8_to_bytes(data: Buffer | str) -> bytes:
    """Copies UTF-8 text up to its NUL terminator (or end)."""
    if isinstance(data, str):
        data = data.encode("utf-8", "surrogatepass")
    view = memoryview(data)
    return bytes(view[: scan_byte_length(view)])


def _wide_units(data: Buffer) -> Iterator[int]:
    view = memoryview(data)
    if len(view) % 2:
        raise DecodeError(
            "Odd byte count in little-endian wide text", view, len(view) - 1
        )
    for i in range(0, len(view), 2):
        unit = view[i] | (view[i + 1] << 8)
        if unit == 0:
            return
        yield unit


def ucs2le_to_codepoints(data: Buffer) -> list[Codepoint]:
    """Decodes little-endian 16-bit units into codepoints."""
    if isinstance(data, str):
        raise TypeError("wide text must be bytes-like, not str")

    result: list[Codepoint] = []
    pending: int | None = None
    for unit in _wide_units(data):
        if pending is not None:
            if unit in _LOW_SURROGATES:
                code = 0x10000 + ((pending - 0xD800) << 10) + (unit - 0xDC00)
                result.append(Codepoint(code))
                pending = None
                continue
            logger.debug("Unpaired high surrogate U+%04X", pending)
            result.append(Codepoint(pending))
            pending = None

        if unit in _HIGH_SURROGATES:
            pending = unit
        else:
            result.append(Codepoint(unit))

    if pending is not None:
        logger.debug("Unpaired high surrogate U+%04X at end", pending)
        result.append(Codepoint(pending))
    return result


def codepoints_to_utf8(codepoints: Iterable[Codepoint | int]) -> bytes:
    """Encodes each codepoint and concatenates the sequences."""
    out = bytearray()
    for cp in codepoints:
        if not isinstance(cp, Codepoint | int) or isinstance(cp, bool):
            msg = f"expected Codepoint or int, not {type(cp).__name__}"
            raise TypeError(msg)
        out += encode(cp)
    return bytes(out)


def codepoints_to_str(codepoints: Iterable[Codepoint]) -> str:
    """One Python character per codepoint."""
    return "".join(str(cp) for cp in codepoints)


def str_to_wide_buffer(text: str) -> ctypes.Array[ctypes.c_wchar]:
    """NUL-terminated ``wchar_t`` array owned by the caller."""
    return ctypes.create_unicode_buffer(text)


def str_to_ucs2le(text: str) -> bytes:
    """Little-endian 16-bit units, surrogate pairs above U+FFFF."""
    return text.encode("utf-16-le", "surrogatepass")
