"""
Hot path profiling for codec scans and string operations.

Each instrumented call records its wall time, the bytes it walked and the
codepoints it decoded, so the per-script cost of UTF-8 decoding shows up
directly (ASCII text decodes one byte per codepoint, CJK three).

Enabled by setting ``SSTR_PROFILE`` in the environment; otherwise
``ProfileContext`` does nothing and ``get_hot_path_stats`` is empty.
"""

import os
import time
from dataclasses import dataclass
from typing import Any
from typing import Self

PROFILE_HOT_PATHS = __debug__ and "SSTR_PROFILE" in os.environ

_hot_path_stats: dict[str, "HotPathStats"] = {}


@dataclass
class HotPathStats:
    """Accumulated cost of one instrumented operation."""

    function_name: str
    call_count: int = 0
    total_time_ns: int = 0
    bytes_scanned: int = 0
    codepoints_decoded: int = 0

    def record_call(
        self, duration_ns: int, nbytes: int, ncodepoints: int
    ) -> None:
        self.call_count += 1
        self.total_time_ns += duration_ns
        self.bytes_scanned += nbytes
        self.codepoints_decoded += ncodepoints

    @property
    def bytes_per_codepoint(self) -> float:
        """Average encoded width seen; 0.0 before anything was decoded."""
        if not self.codepoints_decoded:
            return 0.0
        return self.bytes_scanned / self.codepoints_decoded

    @property
    def ns_per_codepoint(self) -> float:
        if not self.codepoints_decoded:
            return 0.0
        return self.total_time_ns / self.codepoints_decoded


class ProfileContext:
    """
    Times one call of a hot path when profiling is enabled.

    ``nbytes`` is the size of the input; the call reports what it actually
    decoded through ``decoded()``, which may stop short of the input at a
    NUL terminator.
    """

    __slots__ = ("func_name", "nbytes", "ncodepoints", "_start_ns")

    def __init__(self, func_name: str, nbytes: int = 0) -> None:
        self.func_name = func_name
        self.nbytes = nbytes
        self.ncodepoints = 0
        self._start_ns = 0

    def decoded(self, ncodepoints: int, nbytes: int | None = None) -> None:
        """Attributes decoded codepoints (and optionally bytes) to the call."""
        self.ncodepoints += ncodepoints
        if nbytes is not None:
            self.nbytes = nbytes

    def __enter__(self) -> Self:
        if PROFILE_HOT_PATHS:
            self._start_ns = time.perf_counter_ns()
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        if not PROFILE_HOT_PATHS:
            return
        duration = time.perf_counter_ns() - self._start_ns
        stats = _hot_path_stats.get(self.func_name)
        if stats is None:
            stats = _hot_path_stats[self.func_name] = HotPathStats(
                self.func_name
            )
        stats.record_call(duration, self.nbytes, self.ncodepoints)


def get_hot_path_stats() -> dict[str, HotPathStats]:
    """Snapshot of the statistics gathered so far."""
    return dict(_hot_path_stats)


def clear_hot_path_stats() -> None:
    _hot_path_stats.clear()
