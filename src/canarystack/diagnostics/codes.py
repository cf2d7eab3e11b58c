"""Error codes and diagnostic data structures.

Defines the sticky error bitmask, the structural snapshot used by dumps,
and diagnostic messages.
Python 3.13+. Zero external dependencies.
"""

from dataclasses import dataclass
from enum import IntFlag
from typing import Literal

__all__ = [
    "REPORT_ORDER",
    "Diagnostic",
    "StackError",
    "StackSnapshot",
]


class StackError(IntFlag):
    """Violation kinds recorded in a stack's sticky error bitmask.

    Bits are independent and combinable. Values are stable
    across releases.

    Kinds:
        POP_FROM_EMPTY: pop() on an empty stack
        ALLOCATION_FAILURE: initial allocation or growth failed
        CHECKSUM_MISMATCH: recomputed checksum differs from running checksum
        CANARY_BEFORE_CORRUPTED: leading guard no longer holds the sentinel
        CANARY_AFTER_CORRUPTED: trailing guard no longer holds the sentinel
        TOP_FROM_EMPTY: top() on an empty stack
    """

    NONE = 0
    POP_FROM_EMPTY = 1 << 1
    ALLOCATION_FAILURE = 1 << 2
    CHECKSUM_MISMATCH = 1 << 3
    CANARY_BEFORE_CORRUPTED = 1 << 4
    CANARY_AFTER_CORRUPTED = 1 << 5
    TOP_FROM_EMPTY = 1 << 6


# Order in which set bits are reported. Stable across releases.
REPORT_ORDER: tuple[StackError, ...] = (
    StackError.POP_FROM_EMPTY,
    StackError.ALLOCATION_FAILURE,
    StackError.CHECKSUM_MISMATCH,
    StackError.CANARY_BEFORE_CORRUPTED,
    StackError.CANARY_AFTER_CORRUPTED,
    StackError.TOP_FROM_EMPTY,
)


@dataclass(frozen=True, slots=True)
class Diagnostic:
    """Structured diagnostic message for one error kind.

    Attributes:
        code: Error bit this diagnostic describes
        message: Human-readable error description
        hint: Suggestion for tracking the error down
        severity: Error severity level
    """

    code: StackError
    message: str
    hint: str | None = None
    severity: Literal["error", "warning"] = "error"

    def __str__(self) -> str:
        """Return human-readable error description."""
        return self.message


@dataclass(frozen=True, slots=True)
class StackSnapshot:
    """Point-in-time structural view of a guarded stack.

    Captured by the stack for the error reporter's dump. Slot contents are
    stored as representations so the snapshot never holds references to
    live elements.

    Attributes:
        address: Identity of the stack instance (id())
        buffer_address: Identity of the slot block, None when unallocated
        capacity: Number of allocated slots
        size: Number of live elements
        slots: repr() of every slot in [0, capacity), "<unset>" when unspecified
        checksum: Running checksum
        canary_before: Leading guard value
        canary_after: Trailing guard value
    """

    address: int
    buffer_address: int | None
    capacity: int
    size: int
    slots: tuple[str, ...]
    checksum: int
    canary_before: int
    canary_after: int
