"""Self-validating, growable stack.

GuardedStack checks its own integrity on every public operation instead
of trusting caller discipline. It keeps:

    - a running checksum over the live elements,
    - two canaries bracketing its state,
    - a sticky error bitmask that is never cleared.

Any violation is recorded in the bitmask; the next validation pass writes
a diagnostic to the error stream and raises StackValidationError. From
then on the instance is Poisoned: every operation short-circuits to the
same failure without touching state.

Validation can be disabled with StackConfig(safe_mode=False). The checksum
is still maintained and verify() still works.

Thread Safety:
    None. One owner at a time.

Python 3.13+.
"""

from __future__ import annotations

import copy
import logging
from typing import TYPE_CHECKING, Generic, Never, Self, TextIO, TypeVar, cast

from canarystack.config import StackConfig
from canarystack.constants import DEFAULT_CAPACITY, POISON
from canarystack.diagnostics import StackError, StackSnapshot
from canarystack.enums import StackState
from canarystack.integrity import (
    EmptyStackError,
    IntegrityContext,
    StackAllocationError,
)

from .buffer import Allocator, SlotBuffer
from .guard import GuardFinding, HashFunction, IntegrityGuard, checksum_add, checksum_remove
from .reporter import ErrorReporter

if TYPE_CHECKING:
    from types import TracebackType

__all__ = ["GuardedStack"]

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _safe_repr(value: object) -> str:
    try:
        return repr(value)
    except Exception as e:  # noqa: BLE001 - a broken __repr__ must not mask the report
        return f"<unrepresentable {type(value).__name__}: {type(e).__name__}>"


class GuardedStack(Generic[T]):
    """LIFO container with canaries, a running checksum and sticky errors.

    Copying and pickling are rejected: the instance exclusively owns its
    buffer.

    Attributes:
        capacity: Allocated slots
        errors: Sticky error bitmask
        state: Empty, NonEmpty or Poisoned
        checksum: Running checksum over live elements

    Example:
        >>> stack = GuardedStack(4)
        >>> stack.push("kek")
        >>> stack.push("kek")
        >>> len(stack), stack.errors
        (2, <StackError.NONE: 0>)
        >>> stack.top()
        'kek'
    """

    __slots__ = (
        "_buffer",
        "_canary_after",
        "_canary_before",
        "_checksum",
        "_config",
        "_errors",
        "_guard",
        "_initial_capacity",
        "_last_finding",
        "_poisoned",
        "_released",
        "_reporter",
        "_size",
    )

    def __init__(
        self,
        capacity: int = DEFAULT_CAPACITY,
        hash_function: HashFunction = hash,
        allocator: Allocator | None = None,
        *,
        config: StackConfig | None = None,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize stack and allocate its first block.

        Allocation failure is recorded as ALLOCATION_FAILURE, not raised;
        the first operation that validates reports it.

        Args:
            capacity: Initial slot count (positive)
            hash_function: Per-element hash for the checksum (default: hash)
            allocator: Block source (default: DefaultAllocator())
            config: Validation and reporting options (default: StackConfig())
            stream: Destination for diagnostics (default: sys.stderr)

        Raises:
            ValueError: If capacity is not a positive integer
            TypeError: If hash_function is not callable
        """
        self._canary_before = POISON

        if isinstance(capacity, bool) or not isinstance(capacity, int) or capacity <= 0:
            msg = f"capacity must be a positive integer, got {capacity!r}"
            raise ValueError(msg)

        self._guard = IntegrityGuard(hash_function)
        self._config = config if config is not None else StackConfig()
        self._reporter = ErrorReporter.from_config(self._config, stream)
        self._buffer = SlotBuffer(allocator)
        self._initial_capacity = capacity
        self._size = 0
        self._checksum = 0
        self._errors = StackError.NONE
        self._last_finding: GuardFinding | None = None
        self._poisoned = False
        self._released = False

        if not self._buffer.allocate(capacity):
            self._errors |= StackError.ALLOCATION_FAILURE

        logger.debug(
            "GuardedStack created: capacity=%d safe_mode=%s",
            capacity,
            self._config.safe_mode,
        )

        self._canary_after = POISON

    # =========================================================================
    # Stack API
    # =========================================================================

    def push(self, value: T) -> None:
        """Push value, taking over the caller's reference.

        Raises:
            StackValidationError: Validation found errors (safe mode)
            StackAllocationError: Growth failed (fast mode)
        """
        self._push(value, "push")

    def push_copy(self, value: T) -> None:
        """Push a shallow copy of value; the caller keeps the original.

        Raises:
            StackValidationError: Validation found errors (safe mode)
            StackAllocationError: Growth failed (fast mode)
        """
        self._push(copy.copy(value), "push_copy")

    def pop(self) -> None:
        """Remove the top element.

        On an empty stack records POP_FROM_EMPTY; validation then fails.

        Raises:
            StackValidationError: Validation found errors (safe mode)
        """
        self._enter("pop")
        if self._size == 0:
            self._errors |= StackError.POP_FROM_EMPTY
        else:
            index = self._size - 1
            digest = self._guard.digest(self._buffer[index])
            self._checksum = checksum_remove(self._checksum, digest)
            self._buffer.clear(index)
            self._size = index
        self._validate("pop")

    def top(self) -> T:
        """Return the top element.

        On an empty stack records TOP_FROM_EMPTY and raises; no value
        from below the stack is ever returned.

        Raises:
            StackValidationError: Validation found errors (safe mode)
            EmptyStackError: Stack is empty (fast mode)
        """
        self._enter("top")
        if self._size == 0:
            self._errors |= StackError.TOP_FROM_EMPTY
        self._validate("top")
        if self._size == 0:
            self._raise_empty("top")
        return cast(T, self._buffer[self._size - 1])

    def replace_top(self, value: T) -> None:
        """Overwrite the top element, keeping the checksum balanced.

        Raises:
            StackValidationError: Validation found errors (safe mode)
            EmptyStackError: Stack is empty (fast mode)
        """
        self._enter("replace_top")
        digest = self._guard.digest(value)
        if self._size == 0:
            self._errors |= StackError.TOP_FROM_EMPTY
        self._validate("replace_top")
        if self._size == 0:
            self._raise_empty("replace_top")
        index = self._size - 1
        old_digest = self._guard.digest(self._buffer[index])
        self._checksum = checksum_add(checksum_remove(self._checksum, old_digest), digest)
        self._buffer[index] = value

    def empty(self) -> bool:
        """Validate, then report whether the stack holds no elements.

        Raises:
            StackValidationError: Validation found errors (safe mode)
        """
        self._enter("empty")
        self._validate("empty")
        return self._size == 0

    def validate(self) -> None:
        """Run the validation pass explicitly.

        No-op in fast mode.

        Raises:
            StackValidationError: Validation found errors
        """
        self._enter("validate")
        self._validate("validate")

    def verify(self) -> bool:
        """Inspect integrity without recording, reporting or raising.

        Runs regardless of safe_mode. Does not look at the sticky bitmask.

        Returns:
            True if the checksum and both canaries are intact
        """
        return self._inspect().ok

    # =========================================================================
    # Introspection (never validates)
    # =========================================================================

    @property
    def capacity(self) -> int:
        """Allocated slots (0 when no block could be allocated)."""
        return self._buffer.capacity

    @property
    def errors(self) -> StackError:
        """Sticky error bitmask."""
        return self._errors

    @property
    def checksum(self) -> int:
        """Running checksum over live elements."""
        return self._checksum

    @property
    def state(self) -> StackState:
        """Current lifecycle state."""
        if self._poisoned:
            return StackState.POISONED
        return StackState.EMPTY if self._size == 0 else StackState.NON_EMPTY

    @property
    def is_poisoned(self) -> bool:
        """Whether a validation pass has failed."""
        return self._poisoned

    @property
    def config(self) -> StackConfig:
        """Validation and reporting options."""
        return self._config

    @property
    def hash_function(self) -> HashFunction:
        """Per-element hash used for the checksum."""
        return self._guard.hash_function

    @property
    def last_finding(self) -> GuardFinding | None:
        """Result of the most recent validation pass."""
        return self._last_finding

    def has_error(self, error: StackError) -> bool:
        """Whether any bit of error is set."""
        return bool(self._errors & error)

    def snapshot(self) -> StackSnapshot:
        """Structural snapshot for dumps."""
        return StackSnapshot(
            address=id(self),
            buffer_address=self._buffer.block_address,
            capacity=self._buffer.capacity,
            size=self._size,
            slots=tuple(_safe_repr(slot) for slot in self._buffer.slots()),
            checksum=self._checksum,
            canary_before=self._canary_before,
            canary_after=self._canary_after,
        )

    def dump(self) -> str:
        """Structural dump text in the configured output format."""
        return self._reporter.formatter.format_dump(self.snapshot())

    def __len__(self) -> int:
        return self._size

    def __repr__(self) -> str:
        return (
            f"GuardedStack(size={self._size}, capacity={self._buffer.capacity}, "
            f"state={self.state.value}, errors={self._errors!r})"
        )

    # =========================================================================
    # Lifecycle
    # =========================================================================

    def release(self) -> None:
        """Return the buffer to the allocator. Idempotent.

        Any Stack API call afterwards raises ValueError.
        """
        if self._released:
            return
        self._buffer.release()
        self._size = 0
        self._checksum = 0
        self._released = True
        logger.debug("GuardedStack released")

    @property
    def released(self) -> bool:
        """Whether release() has been called."""
        return self._released

    def __enter__(self) -> Self:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_val: BaseException | None,
        exc_tb: TracebackType | None,
    ) -> None:
        self.release()

    def __copy__(self) -> Never:
        msg = "GuardedStack cannot be copied"
        raise TypeError(msg)

    def __deepcopy__(self, memo: dict[int, object]) -> Never:
        msg = "GuardedStack cannot be copied"
        raise TypeError(msg)

    def __reduce_ex__(self, protocol: object) -> Never:
        msg = "GuardedStack cannot be pickled"
        raise TypeError(msg)

    # =========================================================================
    # Internals
    # =========================================================================

    def _push(self, value: T, operation: str) -> None:
        self._enter(operation)
        # Hash first: an unhashable value must leave the stack untouched.
        digest = self._guard.digest(value)
        if not self._ensure_room():
            self._errors |= StackError.ALLOCATION_FAILURE
            self._validate(operation)
            msg = f"Cannot grow buffer beyond {self._buffer.capacity} slots"
            raise StackAllocationError(
                msg,
                IntegrityContext(component="buffer", operation=operation),
                errors=self._errors,
            )
        self._validate(operation)
        self._buffer[self._size] = value
        self._size += 1
        self._checksum = checksum_add(self._checksum, digest)

    def _ensure_room(self) -> bool:
        if not self._buffer.allocated:
            return self._buffer.allocate(self._initial_capacity)
        if self._size == self._buffer.capacity:
            return self._buffer.grow(self._size)
        return True

    def _enter(self, operation: str) -> None:
        if self._released:
            msg = f"{operation}() on released GuardedStack"
            raise ValueError(msg)
        if self._poisoned:
            self._reporter.report(
                self._errors,
                operation=operation,
                snapshot=self.snapshot,
                finding=self._last_finding,
                poisoned=True,
            )

    def _inspect(self) -> GuardFinding:
        return self._guard.inspect(
            self._buffer.live(self._size),
            self._checksum,
            self._canary_before,
            self._canary_after,
        )

    def _validate(self, operation: str) -> None:
        if not self._config.safe_mode:
            return
        finding = self._inspect()
        self._last_finding = finding
        self._errors |= finding.errors
        if self._errors:
            self._poisoned = True
            self._reporter.report(
                self._errors,
                operation=operation,
                snapshot=self.snapshot,
                finding=finding,
            )

    def _raise_empty(self, operation: str) -> Never:
        msg = f"{operation}() on empty GuardedStack"
        raise EmptyStackError(
            msg,
            IntegrityContext(component="stack", operation=operation),
            errors=self._errors,
        )
