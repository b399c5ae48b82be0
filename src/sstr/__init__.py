"""
Unicode-aware string value type stored as compact UTF-8.

Provides codepoint-granular indexing, search, slicing, case conversion and
reversal over UTF-8 bytes, plus conversion to and from little-endian wide
text, codepoint sequences and ``ctypes`` wide-character buffers. The codec
primitives are exported as free functions usable without the string types.
"""

import logging

from ._buffer import DEFAULT_BUFFER_CONFIG
from ._buffer import BufferConfig
from ._buffer import ByteArena
from ._codec import byte_offset_of
from ._codec import count_codepoints
from ._codec import decode
from ._codec import decode_char
from ._codec import encode
from ._codec import encoded_width
from ._codec import iter_offsets
from ._codec import lead_byte_width
from ._codec import scan_byte_length
from ._codec import scan_codepoint_count
from ._codec import validate
from ._codepoint import NULL_CODEPOINT
from ._codepoint import Codepoint
from ._cursor import CodepointCursor
from ._errors import AllocationFailure
from ._errors import DecodeError
from ._errors import IndexOutOfRange
from ._errors import SStringError
from ._profile import HotPathStats
from ._profile import clear_hot_path_stats
from ._profile import get_hot_path_stats
from ._string import NOT_FOUND
from ._string import SString
from ._string import StrView
from ._utf8_mapper import UTF8PositionMapper

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "DEFAULT_BUFFER_CONFIG",
    "NOT_FOUND",
    "NULL_CODEPOINT",
    "AllocationFailure",
    "BufferConfig",
    "ByteArena",
    "Codepoint",
    "CodepointCursor",
    "DecodeError",
    "HotPathStats",
    "IndexOutOfRange",
    "SString",
    "SStringError",
    "StrView",
    "UTF8PositionMapper",
    "byte_offset_of",
    "clear_hot_path_stats",
    "count_codepoints",
    "decode",
    "decode_char",
    "encode",
    "encoded_width",
    "get_hot_path_stats",
    "iter_offsets",
    "lead_byte_width",
    "scan_byte_length",
    "scan_codepoint_count",
    "validate",
]
