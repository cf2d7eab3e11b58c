"""Enumerations for canarystack type-safe constants.

Uses StrEnum (Python 3.11+) for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class StackState(StrEnum):
    """Lifecycle state of a GuardedStack.

    StrEnum provides automatic string conversion: str(StackState.EMPTY) == "empty"
    """

    EMPTY = "empty"
    """No live elements, no fatal failure so far."""

    NON_EMPTY = "non_empty"
    """At least one live element, no fatal failure so far."""

    POISONED = "poisoned"
    """A validation pass failed. Absorbing: every later operation fails."""


__all__ = [
    "StackState",
]
