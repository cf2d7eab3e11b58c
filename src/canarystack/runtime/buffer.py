"""Slot storage for guarded containers.

Owns one contiguous block of slots and grows it by a fixed factor when
full. Blocks come from an Allocator so callers can bound memory use or
inject failures.

Architecture:
    - Block is a list of exactly `capacity` slots
    - Unused slots hold the UNSET marker
    - Growth reallocates wholesale: allocate, copy live slots, release old
    - Allocation failure never raises out of this module; callers get False

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
from typing import Final, Protocol, final, runtime_checkable

from canarystack.constants import GROWTH_FACTOR

__all__ = [
    "UNSET",
    "Allocator",
    "BudgetAllocator",
    "DefaultAllocator",
    "SlotBuffer",
]

logger = logging.getLogger(__name__)


@final
class _Unset:
    """Marker type for slots outside [0, size)."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<unset>"


UNSET: Final = _Unset()


@runtime_checkable
class Allocator(Protocol):
    """Source of slot blocks.

    allocate() must return a list of exactly `capacity` slots or raise
    MemoryError. deallocate() receives every block back exactly once.
    """

    def allocate(self, capacity: int) -> list[object]: ...

    def deallocate(self, block: list[object], capacity: int) -> None: ...


class DefaultAllocator:
    """Allocator backed by plain lists."""

    __slots__ = ()

    def allocate(self, capacity: int) -> list[object]:
        return [UNSET] * capacity

    def deallocate(self, block: list[object], capacity: int) -> None:
        block.clear()


class BudgetAllocator:
    """Allocator with a fixed budget of outstanding slots.

    Raises MemoryError when a request would push the number of slots
    currently handed out past max_slots. Deallocation returns slots to
    the budget.

    Attributes:
        max_slots: Maximum outstanding slots
        in_use: Slots currently handed out
    """

    __slots__ = ("_in_use", "_max_slots")

    def __init__(self, max_slots: int) -> None:
        """Initialize allocator.

        Args:
            max_slots: Maximum outstanding slots (must be non-negative)
        """
        if max_slots < 0:
            msg = "max_slots must be non-negative"
            raise ValueError(msg)
        self._max_slots = max_slots
        self._in_use = 0

    def allocate(self, capacity: int) -> list[object]:
        if self._in_use + capacity > self._max_slots:
            msg = (
                f"Slot budget exhausted: requested {capacity}, "
                f"{self._max_slots - self._in_use} of {self._max_slots} available"
            )
            raise MemoryError(msg)
        self._in_use += capacity
        return [UNSET] * capacity

    def deallocate(self, block: list[object], capacity: int) -> None:
        block.clear()
        self._in_use = max(0, self._in_use - capacity)

    @property
    def max_slots(self) -> int:
        """Maximum outstanding slots."""
        return self._max_slots

    @property
    def in_use(self) -> int:
        """Slots currently handed out."""
        return self._in_use


class SlotBuffer:
    """Exclusively owned, growable block of slots.

    Indexing is bounded by capacity, not by the caller's notion of size.

    Attributes:
        capacity: Number of slots in the current block
        allocated: Whether a usable block is installed
    """

    __slots__ = ("_allocator", "_block", "_capacity")

    def __init__(self, allocator: Allocator | None = None) -> None:
        """Initialize an empty buffer with no block.

        Args:
            allocator: Block source (default: DefaultAllocator())
        """
        self._allocator: Allocator = allocator if allocator is not None else DefaultAllocator()
        self._block: list[object] | None = None
        self._capacity = 0

    def allocate(self, capacity: int) -> bool:
        """Request the initial block.

        Args:
            capacity: Number of slots

        Returns:
            True on success. On failure the buffer keeps no usable block.
        """
        block = self._request(capacity)
        if block is None:
            return False
        self._block = block
        self._capacity = capacity
        return True

    def grow(self, size: int) -> bool:
        """Multiply capacity by GROWTH_FACTOR, preserving live slots.

        Only valid when the buffer is full (size == capacity).

        Args:
            size: Number of live slots to carry over

        Returns:
            True on success. On failure capacity and block are unchanged.
        """
        if size != self._capacity:
            msg = f"grow() requires a full buffer (size={size}, capacity={self._capacity})"
            raise ValueError(msg)

        new_capacity = self._capacity * GROWTH_FACTOR
        new_block = self._request(new_capacity)
        if new_block is None:
            return False

        old_block, old_capacity = self._block, self._capacity
        if old_block is not None:
            new_block[:size] = old_block[:size]
            self._allocator.deallocate(old_block, old_capacity)

        self._block = new_block
        self._capacity = new_capacity
        logger.debug("Buffer grown from %d to %d slots", old_capacity, new_capacity)
        return True

    def release(self) -> None:
        """Return the block to the allocator. Idempotent."""
        if self._block is not None:
            self._allocator.deallocate(self._block, self._capacity)
            logger.debug("Buffer released (%d slots)", self._capacity)
        self._block = None
        self._capacity = 0

    def _request(self, capacity: int) -> list[object] | None:
        try:
            block = self._allocator.allocate(capacity)
        except (MemoryError, OverflowError) as e:
            logger.warning("Allocation of %d slots failed: %s", capacity, e)
            return None
        if len(block) != capacity:
            msg = f"Allocator returned {len(block)} slots, expected {capacity}"
            raise ValueError(msg)
        return block

    def __getitem__(self, index: int) -> object:
        return self._live_block()[self._check_index(index)]

    def __setitem__(self, index: int, value: object) -> None:
        self._live_block()[self._check_index(index)] = value

    def clear(self, index: int) -> None:
        """Mark a slot as unspecified."""
        self._live_block()[self._check_index(index)] = UNSET

    def live(self, size: int) -> list[object]:
        """Copy of slots [0, size)."""
        if self._block is None:
            return []
        return self._block[:size]

    def slots(self) -> tuple[object, ...]:
        """Every slot in [0, capacity)."""
        if self._block is None:
            return ()
        return tuple(self._block)

    @property
    def capacity(self) -> int:
        """Number of slots in the current block."""
        return self._capacity

    @property
    def allocated(self) -> bool:
        """Whether a usable block is installed."""
        return self._block is not None

    @property
    def block_address(self) -> int | None:
        """Identity of the current block, None when unallocated."""
        return None if self._block is None else id(self._block)

    @property
    def allocator(self) -> Allocator:
        """Block source."""
        return self._allocator

    def _live_block(self) -> list[object]:
        if self._block is None:
            msg = "Buffer has no allocated block"
            raise IndexError(msg)
        return self._block

    def _check_index(self, index: int) -> int:
        if not 0 <= index < self._capacity:
            msg = f"Slot index {index} out of range for capacity {self._capacity}"
            raise IndexError(msg)
        return index
