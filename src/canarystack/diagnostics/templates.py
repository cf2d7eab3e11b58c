"""Error message templates.

Centralized error message templates for testable, consistent error messages.
Python 3.13+. Zero external dependencies.
"""

from .codes import REPORT_ORDER, Diagnostic, StackError

__all__ = ["ErrorTemplate"]


class ErrorTemplate:
    """Centralized error message templates.

    All diagnostic wording lives here. Message text is stable
    across releases.
    """

    @staticmethod
    def pop_from_empty() -> Diagnostic:
        """pop() called with no live elements.

        Returns:
            Diagnostic for POP_FROM_EMPTY
        """
        return Diagnostic(
            code=StackError.POP_FROM_EMPTY,
            message="Pop from empty stack was performed",
            hint="Check empty() before calling pop()",
        )

    @staticmethod
    def allocation_failure() -> Diagnostic:
        """Allocator refused a request for slots.

        Returns:
            Diagnostic for ALLOCATION_FAILURE
        """
        return Diagnostic(
            code=StackError.ALLOCATION_FAILURE,
            message="Failed to allocate memory",
            hint="Lower the initial capacity or raise the allocator budget",
        )

    @staticmethod
    def checksum_mismatch() -> Diagnostic:
        """Stored elements no longer hash to the running checksum.

        Returns:
            Diagnostic for CHECKSUM_MISMATCH
        """
        return Diagnostic(
            code=StackError.CHECKSUM_MISMATCH,
            message="Check of control sum failed",
            hint="A stored element was mutated in place or the buffer was written directly",
        )

    @staticmethod
    def canary_before_corrupted() -> Diagnostic:
        """Leading guard overwritten.

        Returns:
            Diagnostic for CANARY_BEFORE_CORRUPTED
        """
        return Diagnostic(
            code=StackError.CANARY_BEFORE_CORRUPTED,
            message="Canary before the stack is corrupted",
            hint="Something wrote into the instance outside the stack API",
        )

    @staticmethod
    def canary_after_corrupted() -> Diagnostic:
        """Trailing guard overwritten.

        Returns:
            Diagnostic for CANARY_AFTER_CORRUPTED
        """
        return Diagnostic(
            code=StackError.CANARY_AFTER_CORRUPTED,
            message="Canary after the stack is corrupted",
            hint="Something wrote into the instance outside the stack API",
        )

    @staticmethod
    def top_from_empty() -> Diagnostic:
        """top() called with no live elements.

        Returns:
            Diagnostic for TOP_FROM_EMPTY
        """
        return Diagnostic(
            code=StackError.TOP_FROM_EMPTY,
            message="Top from empty stack was performed",
            hint="Check empty() before calling top()",
        )

    @staticmethod
    def for_code(code: StackError) -> Diagnostic:
        """Diagnostic for a single error bit.

        Args:
            code: Exactly one StackError bit

        Returns:
            Matching Diagnostic

        Raises:
            ValueError: If code is not a single known bit
        """
        match code:
            case StackError.POP_FROM_EMPTY:
                return ErrorTemplate.pop_from_empty()
            case StackError.ALLOCATION_FAILURE:
                return ErrorTemplate.allocation_failure()
            case StackError.CHECKSUM_MISMATCH:
                return ErrorTemplate.checksum_mismatch()
            case StackError.CANARY_BEFORE_CORRUPTED:
                return ErrorTemplate.canary_before_corrupted()
            case StackError.CANARY_AFTER_CORRUPTED:
                return ErrorTemplate.canary_after_corrupted()
            case StackError.TOP_FROM_EMPTY:
                return ErrorTemplate.top_from_empty()
            case _:
                msg = f"Not a single error bit: {code!r}"
                raise ValueError(msg)

    @staticmethod
    def for_errors(errors: StackError) -> tuple[Diagnostic, ...]:
        """Diagnostics for every bit set in errors, in report order.

        Args:
            errors: Error bitmask (may be empty)

        Returns:
            One Diagnostic per set bit
        """
        return tuple(
            ErrorTemplate.for_code(code) for code in REPORT_ORDER if errors & code
        )
