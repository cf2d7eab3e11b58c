"""Fatal error reporting for guarded containers.

Turns a nonzero error bitmask into diagnostic text on the error stream
and a raised StackValidationError. A zero bitmask is a no-op.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import logging
import sys
import time
from collections.abc import Callable
from typing import TYPE_CHECKING, TextIO

from canarystack.diagnostics import (
    REPORT_ORDER,
    DiagnosticFormatter,
    ErrorTemplate,
    StackError,
    StackSnapshot,
)
from canarystack.integrity import IntegrityContext, StackPoisonedError, StackValidationError

if TYPE_CHECKING:
    from canarystack.config import StackConfig
    from canarystack.runtime.guard import GuardFinding

__all__ = ["ErrorReporter", "describe_errors"]

logger = logging.getLogger(__name__)


def describe_errors(errors: StackError) -> str:
    """Comma-separated names of the set bits, in report order."""
    return ", ".join(code.name or "" for code in REPORT_ORDER if errors & code)


class ErrorReporter:
    """Writes diagnostics for a nonzero bitmask, then raises.

    The stream is resolved at report time, so sys.stderr redirection
    after construction is honored.

    Attributes:
        formatter: Formatter used for report text
        enable_dump: Whether reports include a structural dump
    """

    __slots__ = ("_enable_dump", "_formatter", "_stream")

    def __init__(
        self,
        formatter: DiagnosticFormatter | None = None,
        *,
        enable_dump: bool = True,
        stream: TextIO | None = None,
    ) -> None:
        """Initialize reporter.

        Args:
            formatter: Report formatter (default: DiagnosticFormatter())
            enable_dump: Append a structural dump to reports
            stream: Destination for report text (default: sys.stderr at report time)
        """
        self._formatter = formatter if formatter is not None else DiagnosticFormatter()
        self._enable_dump = enable_dump
        self._stream = stream

    @classmethod
    def from_config(cls, config: StackConfig, stream: TextIO | None = None) -> ErrorReporter:
        """Build a reporter matching a StackConfig."""
        formatter = DiagnosticFormatter(
            output_format=config.output_format,
            sanitize=config.sanitize,
            max_content_length=config.max_content_length,
        )
        return cls(formatter, enable_dump=config.enable_dump, stream=stream)

    @property
    def formatter(self) -> DiagnosticFormatter:
        """Formatter used for report text."""
        return self._formatter

    @property
    def enable_dump(self) -> bool:
        """Whether reports include a structural dump."""
        return self._enable_dump

    def render(self, errors: StackError, snapshot: StackSnapshot | None = None) -> str:
        """Report text for errors, without writing or raising.

        Args:
            errors: Error bitmask
            snapshot: Structural snapshot, ignored unless dumps are enabled

        Returns:
            Formatted report (empty string when errors is NONE)
        """
        if not errors:
            return ""
        diagnostics = ErrorTemplate.for_errors(errors)
        return self._formatter.format_report(
            diagnostics, snapshot if self._enable_dump else None
        )

    def report(
        self,
        errors: StackError,
        *,
        operation: str,
        snapshot: Callable[[], StackSnapshot] | None = None,
        finding: GuardFinding | None = None,
        poisoned: bool = False,
    ) -> None:
        """Report errors and fail, or return quietly when there are none.

        Args:
            errors: Sticky error bitmask
            operation: Stack operation in progress (for context and logs)
            snapshot: Callable producing the structural snapshot on demand
            finding: Latest guard inspection (adds checksum context)
            poisoned: Raise StackPoisonedError instead of StackValidationError

        Raises:
            StackValidationError: If errors is nonzero
            StackPoisonedError: If errors is nonzero and poisoned is set
        """
        if not errors:
            return

        dump = snapshot() if (snapshot is not None and self._enable_dump) else None
        text = self.render(errors, dump)
        stream = self._stream if self._stream is not None else sys.stderr
        stream.write(text + "\n")
        stream.flush()

        names = describe_errors(errors)
        logger.error("Stack integrity failure during %s: %s", operation, names)

        context = IntegrityContext(
            component="stack",
            operation=operation,
            expected=None if finding is None else f"{finding.expected_checksum:#x}",
            actual=None if finding is None else f"{finding.actual_checksum:#x}",
            timestamp=time.monotonic(),
        )
        if poisoned:
            msg = f"Operation '{operation}' on poisoned stack: {names}"
            raise StackPoisonedError(msg, context, errors=errors)
        msg = f"Stack integrity check failed during '{operation}': {names}"
        raise StackValidationError(msg, context, errors=errors)
