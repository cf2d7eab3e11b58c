"""Runtime layer: slot storage, integrity guard, reporter and the stack itself.

Python 3.13+.
"""

from .buffer import UNSET, Allocator, BudgetAllocator, DefaultAllocator, SlotBuffer
from .guard import GuardFinding, HashFunction, IntegrityGuard, compute_checksum, stable_hash
from .reporter import ErrorReporter
from .stack import GuardedStack

__all__ = [
    "UNSET",
    "Allocator",
    "BudgetAllocator",
    "DefaultAllocator",
    "ErrorReporter",
    "GuardFinding",
    "GuardedStack",
    "HashFunction",
    "IntegrityGuard",
    "SlotBuffer",
    "compute_checksum",
    "stable_hash",
]
