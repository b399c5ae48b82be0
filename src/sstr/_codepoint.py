"""Codepoint value type."""

from __future__ import annotations

from dataclasses import dataclass

_SCALAR_MASK = 0xFFFFFFFF
_MAX_UNICODE = 0x10FFFF


@dataclass(frozen=True, order=True, slots=True)
class Codepoint:
    """
    One Unicode scalar held as a 32-bit unsigned integer.

    Ordering and equality compare the scalar. Surrogates and unassigned
    values are accepted; the only check is the 32-bit range.
    """

    code: int = 0

    def __post_init__(self) -> None:
        if not isinstance(self.code, int) or isinstance(self.code, bool):
            raise TypeError("code must be an integer")
        if not 0 <= self.code <= _SCALAR_MASK:
            raise ValueError("code must fit in 32 unsigned bits")

    def __add__(self, other: Codepoint | int) -> Codepoint:
        if isinstance(other, Codepoint):
            other = other.code
        elif not isinstance(other, int):
            return NotImplemented
        return Codepoint((self.code + other) & _SCALAR_MASK)

    def __sub__(self, other: Codepoint | int) -> Codepoint:
        if isinstance(other, Codepoint):
            other = other.code
        elif not isinstance(other, int):
            return NotImplemented
        return Codepoint((self.code - other) & _SCALAR_MASK)

    def __int__(self) -> int:
        return self.code

    def __str__(self) -> str:
        """The character; only defined up to U+10FFFF."""
        if self.code > _MAX_UNICODE:
            raise ValueError(
                f"U+{self.code:X} is beyond the Unicode range"
            )
        return chr(self.code)

    def __repr__(self) -> str:
        return f"Codepoint(U+{self.code:04X})"

    @classmethod
    def of(cls, char: str) -> Codepoint:
        """Builds a codepoint from a one-character ``str``."""
        if len(char) != 1:
            raise ValueError("expected a single character")
        return cls(ord(char))

    def is_ascii_lower(self) -> bool:
        return 0x61 <= self.code <= 0x7A

    def is_ascii_upper(self) -> bool:
        return 0x41 <= self.code <= 0x5A


NULL_CODEPOINT = Codepoint(0)
