"""
Behavioral property tests over varied samples.

Validates the relationships that must hold between operations: length
accounting, index/byte consistency, reversal and slicing identities,
split/rejoin reconstruction and equality laws.
"""

import pytest
from conftest import TextCase

import sstr

GREETING = "你好 こんにちは Hello"
SHORT = "你こH"


def test_multibyte_size_exceeds_length(greeting: sstr.SString) -> None:
    """
    Validates size() > len() once multi-byte codepoints are present.
    """
    assert greeting.len() == len(GREETING) == 14
    assert greeting.size() > greeting.len()
    ascii_only = sstr.SString.from_utf8("Hello")
    assert ascii_only.size() == ascii_only.len()


def test_cross_instance_codepoints(greeting: sstr.SString) -> None:
    """
    Validates index mapping is independent of surrounding content.
    """
    short = sstr.SString.from_utf8(SHORT)
    assert greeting.at(0) == short.at(0)
    assert greeting.at(3) == short.at(1)
    assert greeting[9] == short[2]
    assert greeting[1] != short[1]


@pytest.mark.parametrize("needle", ["你", "好 ", "こんにちは", "ちは H", "lo"])
def test_find_index_matches_byte_offset(
    greeting: sstr.SString, needle: str
) -> None:
    """
    Validates the first find() codepoints occupy find_by_bytes() bytes.
    """
    index = greeting.find(needle)
    offset = greeting.find_by_bytes(needle)
    assert greeting.substring(0, index).size() == offset


def test_full_substring_is_identity(text_case: TextCase) -> None:
    """
    Validates substring(0, len()) == s.
    """
    s = sstr.SString.from_utf8(text_case.text)
    assert s.substring(0, s.len()) == s


def test_double_reverse_is_identity(text_case: TextCase) -> None:
    """
    Validates reverse().reverse() == s.
    """
    s = sstr.SString.from_utf8(text_case.text)
    assert s.reverse().reverse() == s


def test_append_adds_lengths(text_case: TextCase) -> None:
    """
    Validates a.append(b).len() == a.len() + b.len().
    """
    a = sstr.SString.from_utf8(text_case.text)
    b = sstr.SString.from_utf8(GREETING)
    assert a.append(b).len() == a.len() + b.len()
    assert (b + a).len() == a.len() + b.len()


@pytest.mark.parametrize(
    "text,delimiter",
    [
        ("一,二,三", ","),
        ("alpha::beta::gamma", "::"),
        ("你好 こんにちは Hello", " "),
        ("a😀b😀c", "😀"),
    ],
)
def test_split_then_join_reconstructs(text: str, delimiter: str) -> None:
    """
    Validates rejoining the pieces with the delimiter restores the text.
    """
    s = sstr.SString.from_utf8(text)
    pieces = s.split(delimiter)
    assert len(pieces) == text.count(delimiter) + 1

    rebuilt = pieces[0]
    for piece in pieces[1:]:
        rebuilt = rebuilt + delimiter + piece
    assert rebuilt == s


def test_equality_laws() -> None:
    """
    Validates reflexivity, symmetry and transitivity across types.
    """
    a = sstr.SString.from_utf8(GREETING)
    b = sstr.SString.from_utf8(GREETING.encode())
    c = a.view()
    assert a == a
    assert a == b and b == a
    assert b == c and a == c
    assert not (a != b)


def test_case_round_trip_idempotent(text_case: TextCase) -> None:
    """
    Validates upper(lower(s)) is stable and non-letters are untouched.
    """
    s = sstr.SString.from_utf8(text_case.text)
    once = s.to_lower().to_upper()
    assert once.to_lower().to_upper() == once
    if text_case.text.isascii():
        assert once == text_case.text.upper()
    for before, after in zip(s, once, strict=True):
        if not before.is_ascii_lower():
            assert after == before
