"""
String operation benchmarks comparing sstr against the builtin types.

Each benchmark runs the same logical operation over the same text:
- str, which indexes by codepoint natively
- bytes, which sees only UTF-8 code units
- sstr, which stores UTF-8 and walks it per codepoint
"""

from typing import Any

import pytest

import sstr
from benchmarks.data_generators import DATA_TYPES
from benchmarks.data_generators import generate_test_data


class TestStringBenchmarks:
    """Benchmarks for string operations across text representations."""

    @pytest.mark.benchmark(group="construct")
    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("kind", ["str", "sstr"])
    def test_construct(
        self, benchmark: Any, kind: str, data_type: str
    ) -> None:
        """Benchmarks building a string from UTF-8 bytes."""
        data = generate_test_data(data_type).encode("utf-8")
        if kind == "str":
            result = benchmark(data.decode, "utf-8")
        else:
            result = benchmark(sstr.SString.from_utf8, data)
        assert len(result) > 0

    @pytest.mark.benchmark(group="length")
    @pytest.mark.parametrize("data_type", DATA_TYPES)
    def test_codepoint_length(self, benchmark: Any, data_type: str) -> None:
        """Benchmarks counting codepoints, which sstr cannot cache."""
        text = generate_test_data(data_type)
        s = sstr.SString.from_utf8(text)
        assert benchmark(s.len) == len(text)

    @pytest.mark.benchmark(group="find")
    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("kind", ["str", "bytes", "sstr"])
    def test_find_last_word(
        self, benchmark: Any, kind: str, data_type: str
    ) -> None:
        """Benchmarks locating the final word of the text."""
        text = generate_test_data(data_type)
        needle = text.rsplit(" ", 1)[-1]
        if kind == "str":
            result = benchmark(text.find, needle)
        elif kind == "bytes":
            result = benchmark(text.encode().find, needle.encode())
        else:
            result = benchmark(sstr.SString.from_utf8(text).find, needle)
        assert result >= 0

    @pytest.mark.benchmark(group="substring")
    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("kind", ["str", "sstr"])
    def test_middle_substring(
        self, benchmark: Any, kind: str, data_type: str
    ) -> None:
        """Benchmarks extracting the middle half of the text."""
        text = generate_test_data(data_type)
        start, end = len(text) // 4, 3 * len(text) // 4
        if kind == "str":
            result = benchmark(text.__getitem__, slice(start, end))
        else:
            s = sstr.SString.from_utf8(text)
            result = benchmark(s.substring, start, end)
        assert result == text[start:end]

    @pytest.mark.benchmark(group="reverse")
    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("kind", ["str", "sstr"])
    def test_reverse(self, benchmark: Any, kind: str, data_type: str) -> None:
        """Benchmarks codepoint-order reversal."""
        text = generate_test_data(data_type)
        if kind == "str":
            result = benchmark(text.__getitem__, slice(None, None, -1))
        else:
            result = benchmark(sstr.SString.from_utf8(text).reverse)
        assert result == text[::-1]

    @pytest.mark.benchmark(group="split")
    @pytest.mark.parametrize("data_type", DATA_TYPES)
    @pytest.mark.parametrize("kind", ["str", "sstr"])
    def test_split_words(
        self, benchmark: Any, kind: str, data_type: str
    ) -> None:
        """Benchmarks splitting the text on spaces."""
        text = generate_test_data(data_type)
        if kind == "str":
            result = benchmark(text.split, " ")
        else:
            result = benchmark(sstr.SString.from_utf8(text).split, " ")
        assert len(result) == text.count(" ") + 1

    @pytest.mark.benchmark(group="case")
    @pytest.mark.parametrize("kind", ["bytes", "sstr"])
    def test_ascii_upper(self, benchmark: Any, kind: str) -> None:
        """Benchmarks ASCII upper-casing of mixed-script text."""
        text = generate_test_data("mixed")
        if kind == "bytes":
            result = benchmark(text.encode().upper)
        else:
            result = benchmark(sstr.SString.from_utf8(text).to_upper)
        assert bytes(result) == text.encode().upper()

    @pytest.mark.benchmark(group="append")
    @pytest.mark.parametrize("kind", ["bytearray", "sstr"])
    def test_repeated_append(self, benchmark: Any, kind: str) -> None:
        """Benchmarks growing a buffer one word at a time."""
        words = generate_test_data("mixed", words=200).split(" ")

        def build_bytearray() -> bytearray:
            out = bytearray()
            for word in words:
                out += word.encode()
            return out

        def build_sstr() -> sstr.SString:
            out = sstr.SString()
            for word in words:
                out += word
            return out

        build = build_bytearray if kind == "bytearray" else build_sstr
        result = benchmark(build)
        assert bytes(result) == "".join(words).encode()
