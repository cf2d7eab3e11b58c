"""Integrity checks for guarded containers.

Two independent detectors:
    - Running checksum: sum of per-element hashes, maintained on every
      mutation and recomputed from scratch on validation
    - Canaries: sentinel values at both ends of the instance state

Neither is cryptographic. The checksum is a plain sum: different element
multisets can share a sum, and reordering elements is invisible to it.
The canaries catch code that writes into the instance without going
through the stack API (interop layers, reflection, logic bugs).

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import hashlib
from collections.abc import Callable, Iterable
from dataclasses import dataclass
from typing import TypeAlias

from canarystack.constants import CHECKSUM_MASK, POISON
from canarystack.diagnostics.codes import StackError

__all__ = [
    "GuardFinding",
    "HashFunction",
    "IntegrityGuard",
    "checksum_add",
    "checksum_remove",
    "compute_checksum",
    "stable_hash",
]

HashFunction: TypeAlias = Callable[[object], int]


def checksum_add(checksum: int, digest: int) -> int:
    """Fold one element hash into the running checksum."""
    return (checksum + digest) & CHECKSUM_MASK


def checksum_remove(checksum: int, digest: int) -> int:
    """Remove one element hash from the running checksum."""
    return (checksum - digest) & CHECKSUM_MASK


def compute_checksum(values: Iterable[object], hash_function: HashFunction) -> int:
    """Recompute a checksum from scratch.

    Args:
        values: Live elements
        hash_function: Per-element hash

    Returns:
        Masked sum of hash_function(v) over values
    """
    checksum = 0
    for value in values:
        checksum = checksum_add(checksum, hash_function(value))
    return checksum


def stable_hash(value: object) -> int:
    """BLAKE2b-64 digest of repr(value).

    Unlike the builtin hash(), works for unhashable values (lists, dicts)
    and does not change between interpreter runs. Because it hashes the
    representation, mutating a stored container in place changes its
    hash, which the next validation reports as a checksum mismatch.

    Args:
        value: Any object with a deterministic repr()

    Returns:
        Unsigned 64-bit integer
    """
    digest = hashlib.blake2b(repr(value).encode("utf-8"), digest_size=8).digest()
    return int.from_bytes(digest, "big")


@dataclass(frozen=True, slots=True)
class GuardFinding:
    """Result of one integrity inspection.

    Attributes:
        errors: Bits found by this inspection (NONE when clean)
        expected_checksum: Running checksum at inspection time
        actual_checksum: Checksum recomputed from the live elements
    """

    errors: StackError
    expected_checksum: int
    actual_checksum: int

    @property
    def ok(self) -> bool:
        """True when no bit was found."""
        return not self.errors


class IntegrityGuard:
    """Stateless checker bound to one hash function.

    Attributes:
        hash_function: Per-element hash used for checksums
    """

    __slots__ = ("_hash_function",)

    def __init__(self, hash_function: HashFunction) -> None:
        if not callable(hash_function):
            msg = f"hash_function must be callable, got {type(hash_function).__name__}"
            raise TypeError(msg)
        self._hash_function = hash_function

    @property
    def hash_function(self) -> HashFunction:
        """Per-element hash used for checksums."""
        return self._hash_function

    def digest(self, value: object) -> int:
        """Hash one element."""
        return self._hash_function(value)

    def check_checksum(self, live: Iterable[object], checksum: int) -> StackError:
        """Recompute the checksum over live elements and compare.

        Returns:
            CHECKSUM_MISMATCH on mismatch, NONE otherwise
        """
        if compute_checksum(live, self._hash_function) != checksum:
            return StackError.CHECKSUM_MISMATCH
        return StackError.NONE

    @staticmethod
    def check_canaries(canary_before: int, canary_after: int) -> StackError:
        """Compare both canaries against the sentinel independently.

        Returns:
            One bit per corrupted canary, NONE when both are intact
        """
        errors = StackError.NONE
        if canary_before != POISON:
            errors |= StackError.CANARY_BEFORE_CORRUPTED
        if canary_after != POISON:
            errors |= StackError.CANARY_AFTER_CORRUPTED
        return errors

    def inspect(
        self,
        live: Iterable[object],
        checksum: int,
        canary_before: int,
        canary_after: int,
    ) -> GuardFinding:
        """Run both detectors.

        Args:
            live: Elements in [0, size)
            checksum: Running checksum
            canary_before: Leading guard value
            canary_after: Trailing guard value

        Returns:
            GuardFinding with every detected bit and both checksums
        """
        actual = compute_checksum(live, self._hash_function)
        errors = StackError.NONE
        if actual != checksum:
            errors |= StackError.CHECKSUM_MISMATCH
        errors |= self.check_canaries(canary_before, canary_after)
        return GuardFinding(errors=errors, expected_checksum=checksum, actual_checksum=actual)
