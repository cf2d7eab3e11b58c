"""Fatal integrity exceptions for guarded containers.

These exceptions indicate SYSTEM FAILURES: a guarded stack detected
corruption or a protocol violation and refuses to continue. They should
propagate to the caller and are never recovered from inside the container.

Design:
    - Carry the sticky error bitmask observed at the time of failure
    - Carry diagnostic context for post-mortem analysis
    - Immutable after construction
    - @final decorator prevents subclassing of leaf types

Hierarchy:
    StackIntegrityError (base - system failures)
    ├─ StackValidationError (validation pass found violations)
    │  └─ StackPoisonedError (operation on a poisoned instance)
    ├─ StackAllocationError (growth failed while validation is disabled)
    ├─ EmptyStackError (empty top() while validation is disabled)
    └─ ImmutabilityViolationError (mutation attempt on an error object)

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import final

from canarystack.diagnostics.codes import StackError

__all__ = [
    "EmptyStackError",
    "ImmutabilityViolationError",
    "IntegrityContext",
    "StackAllocationError",
    "StackIntegrityError",
    "StackPoisonedError",
    "StackValidationError",
]


@dataclass(frozen=True, slots=True)
class IntegrityContext:
    """Context for integrity error diagnosis.

    Provides structured information for post-mortem analysis of
    integrity failures.

    Attributes:
        component: System component where error occurred (stack, buffer)
        operation: Operation being performed (push, pop, top, empty, validate)
        expected: Expected value, e.g. stored checksum (optional)
        actual: Actual value found, e.g. recomputed checksum (optional)
        timestamp: Time of error detection (time.monotonic())
    """

    component: str
    operation: str
    expected: str | None = None
    actual: str | None = None
    timestamp: float | None = None


class StackIntegrityError(Exception):
    """Base exception for all guarded container failures.

    This exception is immutable after construction to prevent
    tampering with error evidence.

    Attributes:
        errors: Sticky error bitmask at the time of failure
        context: Structured diagnostic context for post-mortem analysis
    """

    __slots__ = ("_context", "_errors", "_frozen")

    # Type annotations for __slots__ attributes (mypy requirement)
    _context: IntegrityContext | None
    _errors: StackError
    _frozen: bool

    def __init__(
        self,
        message: str,
        context: IntegrityContext | None = None,
        *,
        errors: StackError = StackError.NONE,
    ) -> None:
        """Initialize StackIntegrityError.

        Args:
            message: Human-readable error description
            context: Structured diagnostic context (optional)
            errors: Error bitmask observed when the failure was raised
        """
        super().__init__(message)
        object.__setattr__(self, "_context", context)
        object.__setattr__(self, "_errors", StackError(errors))
        object.__setattr__(self, "_frozen", True)

    # Python's exception handling sets these attributes when propagating exceptions.
    _PYTHON_EXCEPTION_ATTRS: frozenset[str] = frozenset(
        ("__traceback__", "__context__", "__cause__", "__suppress_context__", "__notes__")
    )

    def __setattr__(self, name: str, value: object) -> None:
        """Reject all attribute mutations after initialization.

        Raises:
            ImmutabilityViolationError: If attempting to modify after construction
        """
        if name in self._PYTHON_EXCEPTION_ATTRS:
            object.__setattr__(self, name, value)
            return
        if getattr(self, "_frozen", False):
            msg = f"Cannot modify integrity error attribute: {name}"
            raise ImmutabilityViolationError(msg)
        object.__setattr__(self, name, value)

    def __delattr__(self, name: str) -> None:
        """Reject all attribute deletions.

        Raises:
            ImmutabilityViolationError: Always
        """
        msg = f"Cannot delete integrity error attribute: {name}"
        raise ImmutabilityViolationError(msg)

    @property
    def context(self) -> IntegrityContext | None:
        """Structured diagnostic context."""
        return self._context

    @property
    def errors(self) -> StackError:
        """Error bitmask observed when the failure was raised."""
        return self._errors

    def __repr__(self) -> str:
        """Return detailed representation for debugging."""
        return (
            f"{self.__class__.__name__}({self.args[0]!r}, "
            f"errors={self._errors!r}, context={self._context!r})"
        )


class StackValidationError(StackIntegrityError):
    """A validation pass found at least one error bit set.

    Raised by the error reporter. The instance that raised it is
    Poisoned from then on.
    """


@final
class StackPoisonedError(StackValidationError):
    """Operation attempted on a Poisoned instance.

    Carries the same error bitmask as the original failure. Subclasses
    StackValidationError so callers can treat both alike.
    """


@final
class StackAllocationError(StackIntegrityError):
    """Buffer growth failed while validation is disabled.

    With validation enabled the same condition surfaces as a
    StackValidationError carrying ALLOCATION_FAILURE. Nothing is written
    in either case.
    """


@final
class EmptyStackError(StackIntegrityError):
    """top() on an empty stack while validation is disabled.

    The unspecified slot below the stack is never returned to the caller.
    """


@final
class ImmutabilityViolationError(StackIntegrityError):
    """Attempt to mutate an immutable error object.

    Typically indicates a programming error or code attempting to tamper
    with error evidence.
    """
