"""Diagnostic formatting service.

Centralizes diagnostic and structural dump formatting with configurable
options.
Python 3.13+. Zero external dependencies.
"""

import json
from collections.abc import Iterable
from dataclasses import dataclass
from enum import StrEnum

from canarystack.constants import DEFAULT_MAX_CONTENT_LENGTH

from .codes import Diagnostic, StackSnapshot

__all__ = [
    "DiagnosticFormatter",
    "OutputFormat",
]


class OutputFormat(StrEnum):
    """Output format options for diagnostic formatting."""

    TEXT = "text"  # Tab-indented report with brace-delimited dump (default)
    SIMPLE = "simple"  # One "CODE: message" line per diagnostic
    JSON = "json"  # JSON document for tooling integration


@dataclass(frozen=True, slots=True)
class DiagnosticFormatter:
    """Diagnostic formatting service.

    Formats error reports and structural dumps into human-readable or
    machine-readable text.

    Attributes:
        output_format: Output style (text, simple, json)
        sanitize: Truncate slot contents to prevent log flooding
        max_content_length: Maximum slot content length when sanitizing

    Example:
        >>> formatter = DiagnosticFormatter()
        >>> print(formatter.format_report([ErrorTemplate.pop_from_empty()]))
        Errors found:
        \tPop from empty stack was performed;

        >>> formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)
        >>> print(formatter.format(ErrorTemplate.pop_from_empty()))
        POP_FROM_EMPTY: Pop from empty stack was performed
    """

    output_format: OutputFormat = OutputFormat.TEXT
    sanitize: bool = False
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH

    def format(self, diagnostic: Diagnostic) -> str:
        """Format a single diagnostic as one line.

        Args:
            diagnostic: Diagnostic to format

        Returns:
            Formatted diagnostic line (no trailing newline)
        """
        match self.output_format:
            case OutputFormat.TEXT:
                return f"\t{diagnostic.message};"
            case OutputFormat.SIMPLE:
                return f"{diagnostic.code.name}: {diagnostic.message}"
            case OutputFormat.JSON:
                return json.dumps(self._diagnostic_data(diagnostic), ensure_ascii=False)

    def format_report(
        self,
        diagnostics: Iterable[Diagnostic],
        snapshot: StackSnapshot | None = None,
    ) -> str:
        """Format a full error report, optionally followed by a dump.

        Args:
            diagnostics: Diagnostics to report, already in report order
            snapshot: Structural snapshot to append (None to omit the dump)

        Returns:
            Report text (no trailing newline)
        """
        items = tuple(diagnostics)

        if self.output_format is OutputFormat.JSON:
            data: dict[str, object] = {
                "errors": [self._diagnostic_data(d) for d in items],
            }
            if snapshot is not None:
                data["dump"] = self._snapshot_data(snapshot)
            return json.dumps(data, ensure_ascii=False)

        parts: list[str] = []
        if self.output_format is OutputFormat.TEXT:
            parts.append("Errors found:")
        parts.extend(self.format(d) for d in items)
        if snapshot is not None:
            parts.append(self.format_dump(snapshot))
        return "\n".join(parts)

    def format_dump(self, snapshot: StackSnapshot) -> str:
        """Format a structural dump.

        Example output:
            Dump:
            stack = 0x7f3a2c1e4b80
            {
                buffer[4] = 0x7f3a2c1e5a40
                {
                    [0] = 'kek'
                    [1] = 'kek'
                    [2] = <unset>
                    [3] = <unset>
                }
                size = 2
                checksum = 0x1f2e3d4c5b6a7988
                canary_before = 0xdeadbeef
                canary_after = 0xdeadbeef
            }
        """
        if self.output_format is OutputFormat.JSON:
            return json.dumps(self._snapshot_data(snapshot), ensure_ascii=False)

        lines = ["Dump:", f"stack = {snapshot.address:#x}", "{"]
        if snapshot.buffer_address is None:
            lines.append(f"\tbuffer[{snapshot.capacity}] = <unallocated>")
        else:
            lines.append(f"\tbuffer[{snapshot.capacity}] = {snapshot.buffer_address:#x}")
            lines.append("\t{")
            for index, content in enumerate(snapshot.slots):
                lines.append(f"\t\t[{index}] = {self._maybe_sanitize(content)}")
            lines.append("\t}")
        lines.append(f"\tsize = {snapshot.size}")
        lines.append(f"\tchecksum = {snapshot.checksum:#018x}")
        lines.append(f"\tcanary_before = {snapshot.canary_before:#x}")
        lines.append(f"\tcanary_after = {snapshot.canary_after:#x}")
        lines.append("}")
        return "\n".join(lines)

    @staticmethod
    def _diagnostic_data(diagnostic: Diagnostic) -> dict[str, str | int | None]:
        return {
            "code": diagnostic.code.name,
            "code_value": int(diagnostic.code),
            "message": diagnostic.message,
            "hint": diagnostic.hint,
            "severity": diagnostic.severity,
        }

    def _snapshot_data(self, snapshot: StackSnapshot) -> dict[str, object]:
        return {
            "address": snapshot.address,
            "buffer_address": snapshot.buffer_address,
            "capacity": snapshot.capacity,
            "size": snapshot.size,
            "slots": [self._maybe_sanitize(s) for s in snapshot.slots],
            "checksum": snapshot.checksum,
            "canary_before": snapshot.canary_before,
            "canary_after": snapshot.canary_after,
        }

    def _maybe_sanitize(self, text: str) -> str:
        """Truncate text if sanitization is enabled.

        Args:
            text: Text to possibly truncate

        Returns:
            Original or truncated text
        """
        if self.sanitize and len(text) > self.max_content_length:
            return text[: self.max_content_length] + "..."
        return text
