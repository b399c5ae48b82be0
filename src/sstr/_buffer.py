"""Owned growable byte arena backing SString."""

from __future__ import annotations

import logging
import math
from collections.abc import Buffer
from dataclasses import dataclass

from ._errors import AllocationFailure

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BufferConfig:
    """
    Configures arena growth with immutable settings.

    A write that overflows the allocation reallocates to
    ``max(needed, capacity * growth_factor, min_capacity)`` bytes, never
    beyond ``max_capacity`` when one is set.
    """

    growth_factor: float = 2.0
    min_capacity: int = 16
    max_capacity: int | None = None

    def __post_init__(self) -> None:
        if not isinstance(self.growth_factor, int | float) or isinstance(
            self.growth_factor, bool
        ):
            raise TypeError("growth_factor must be a number")
        if self.growth_factor < 1:
            raise ValueError("growth_factor must be at least 1")
        if not isinstance(self.min_capacity, int) or self.min_capacity < 0:
            raise ValueError("min_capacity must be a non-negative integer")
        if self.max_capacity is not None and (
            not isinstance(self.max_capacity, int) or self.max_capacity < 0
        ):
            raise ValueError("max_capacity must be a non-negative integer")

    def next_capacity(self, current: int, needed: int) -> int:
        """Capacity to allocate when ``needed`` bytes do not fit."""
        grown = math.ceil(current * self.growth_factor)
        capacity = max(needed, grown, self.min_capacity)
        if self.max_capacity is not None:
            if needed > self.max_capacity:
                logger.debug(
                    "Refusing %d byte allocation over limit %d",
                    needed,
                    self.max_capacity,
                )
                raise AllocationFailure(needed, self.max_capacity)
            capacity = min(capacity, self.max_capacity)
        return capacity


DEFAULT_BUFFER_CONFIG = BufferConfig()


class ByteArena:
    """
    A single-owner byte allocation with ``size`` bytes in use.

    ``capacity >= size`` holds after every operation. A null arena has no
    allocation at all; an allocated arena with ``size == 0`` is empty but
    not null. Growth always allocates a fresh block and copies, so
    memoryviews taken before a reallocation keep reading the old block.
    """

    __slots__ = ("_block", "_size", "_null_ref", "config")

    def __init__(self, config: BufferConfig = DEFAULT_BUFFER_CONFIG) -> None:
        self._block: bytearray | None = None
        # Stands in for the block while null; never shared between arenas
        self._null_ref = bytearray()
        self._size = 0
        self.config = config

    @classmethod
    def from_bytes(
        cls, data: Buffer, config: BufferConfig = DEFAULT_BUFFER_CONFIG
    ) -> ByteArena:
        """Allocates an arena holding an exact copy of ``data``."""
        arena = cls(config)
        arena.write(data)
        return arena

    @property
    def null(self) -> bool:
        return self._block is None

    @property
    def size(self) -> int:
        return self._size

    @property
    def capacity(self) -> int:
        return 0 if self._block is None else len(self._block)

    @property
    def block(self) -> bytearray | None:
        """The current allocation; identity changes on reallocation."""
        return self._block

    @property
    def cursor_ref(self) -> bytearray:
        """The block, or this arena's own empty stand-in while null."""
        return self._null_ref if self._block is None else self._block

    def data(self) -> memoryview:
        """Read-only view of the used region."""
        if self._block is None:
            return memoryview(b"")
        return memoryview(self._block)[: self._size].toreadonly()

    def reserve(self, needed: int) -> None:
        """Ensures at least ``needed`` bytes are allocated."""
        if self._block is not None and needed <= len(self._block):
            return

        capacity = self.config.next_capacity(self.capacity, needed)
        try:
            block = bytearray(capacity)
        except MemoryError as e:
            raise AllocationFailure(capacity, self.config.max_capacity) from e

        if self._block is not None:
            block[: self._size] = self._block[: self._size]
            logger.debug(
                "Reallocated arena %d -> %d bytes", len(self._block), capacity
            )
        self._block = block

    def write(self, data: Buffer) -> None:
        """Appends ``data`` after the used region, growing if needed."""
        chunk = memoryview(data)
        end = self._size + len(chunk)
        self.reserve(end)
        assert self._block is not None
        self._block[self._size : end] = chunk
        self._size = end

    def overwrite(self, offset: int, data: Buffer) -> None:
        """Replaces bytes inside the used region without resizing it."""
        chunk = memoryview(data)
        end = offset + len(chunk)
        if self._block is None or offset < 0 or end > self._size:
            raise ValueError("overwrite must stay inside the used region")
        self._block[offset:end] = chunk

    def copy(self) -> ByteArena:
        """Deep copy into a new allocation of the same capacity."""
        clone = ByteArena(self.config)
        if self._block is not None:
            clone._block = bytearray(len(self._block))
            clone._block[: self._size] = self._block[: self._size]
            clone._size = self._size
        return clone

    def take(self) -> ByteArena:
        """Moves the allocation into a new arena and leaves this one null."""
        moved = ByteArena(self.config)
        moved._block, moved._size = self._block, self._size
        self._block, self._size = None, 0
        logger.debug("Moved %d byte arena", moved.capacity)
        return moved
