"""
Pytest configuration and shared fixtures for sstr tests.

Provides immutable text cases mixing ASCII and multi-byte UTF-8, plus the
malformed byte sequences every decoding path must reject.
"""

from dataclasses import dataclass

import pytest

import sstr

GREETING = "你好 こんにちは Hello"


@dataclass(frozen=True)
class TextCase:
    """
    Immutable container for a UTF-8 text sample.

    Holds the Python text alongside the expected codepoint and byte counts
    so tests can check sstr against independently known answers.
    """

    description: str
    text: str
    codepoints: int
    nbytes: int


@dataclass(frozen=True)
class MalformedCase:
    """Byte sequence that is not well-formed UTF-8, and where it breaks."""

    description: str
    data: bytes
    pos: int


TEXT_CASES = [
    TextCase("empty", "", 0, 0),
    TextCase("ascii", "Hello", 5, 5),
    TextCase("two-byte latin", "h\u00e9llo", 5, 6),
    TextCase("three-byte cjk", "你好", 2, 6),
    TextCase("four-byte emoji", "a😀b", 3, 6),
    TextCase("mixed greeting", GREETING, 14, 28),
]

MALFORMED_CASES = [
    MalformedCase("lone continuation byte", b"\x80", 0),
    MalformedCase("five-byte lead", b"\xf8\x88\x80\x80\x80", 0),
    MalformedCase("0xFF lead", b"ab\xff", 2),
    MalformedCase("truncated two-byte", b"ok\xc3", 2),
    MalformedCase("truncated four-byte", b"\xf0\x9f\x98", 0),
    MalformedCase("ascii where continuation expected", b"\xe4\xbdA", 2),
]


@pytest.fixture(params=TEXT_CASES, ids=lambda case: case.description)
def text_case(request: pytest.FixtureRequest) -> TextCase:
    """Each well-formed sample in turn."""
    return request.param  # type: ignore[no-any-return]


@pytest.fixture(params=MALFORMED_CASES, ids=lambda case: case.description)
def malformed_case(request: pytest.FixtureRequest) -> MalformedCase:
    """Each malformed byte sequence in turn."""
    return request.param  # type: ignore[no-any-return]


@pytest.fixture
def greeting() -> sstr.SString:
    """The mixed CJK, kana and ASCII sample as an owning string."""
    return sstr.SString.from_utf8(GREETING)
