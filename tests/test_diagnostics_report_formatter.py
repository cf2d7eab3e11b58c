"""Tests for DiagnosticFormatter report and dump rendering.

Covers the three output formats, dump layout for allocated and
unallocated buffers, and slot sanitization.

Python 3.13+.
"""

from __future__ import annotations

import json

from canarystack.constants import POISON
from canarystack.diagnostics import (
    DiagnosticFormatter,
    ErrorTemplate,
    OutputFormat,
    StackSnapshot,
)


def _snapshot(
    *,
    buffer_address: int | None = 0xB0,
    slots: tuple[str, ...] = ("1", "<unset>"),
) -> StackSnapshot:
    return StackSnapshot(
        address=0xA0,
        buffer_address=buffer_address,
        capacity=len(slots),
        size=1,
        slots=slots,
        checksum=1,
        canary_before=POISON,
        canary_after=POISON,
    )


# ============================================================================
# Single diagnostics
# ============================================================================


class TestFormatDiagnostic:
    """format() for each output style."""

    def test_text(self) -> None:
        """TEXT is a tab-indented message with a trailing semicolon."""
        line = DiagnosticFormatter().format(ErrorTemplate.top_from_empty())

        assert line == "\tTop from empty stack was performed;"

    def test_simple(self) -> None:
        """SIMPLE prefixes the flag name."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        assert formatter.format(ErrorTemplate.checksum_mismatch()) == (
            "CHECKSUM_MISMATCH: Check of control sum failed"
        )

    def test_json(self) -> None:
        """JSON carries code name and numeric value."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(formatter.format(ErrorTemplate.allocation_failure()))

        assert data["code"] == "ALLOCATION_FAILURE"
        assert data["code_value"] == 4
        assert data["severity"] == "error"


# ============================================================================
# Reports and dumps
# ============================================================================


class TestFormatReport:
    """format_report() and format_dump()."""

    def test_text_report_without_dump(self) -> None:
        """TEXT report has a header line and one line per diagnostic."""
        text = DiagnosticFormatter().format_report(
            [ErrorTemplate.pop_from_empty(), ErrorTemplate.top_from_empty()]
        )

        assert text == (
            "Errors found:\n"
            "\tPop from empty stack was performed;\n"
            "\tTop from empty stack was performed;"
        )

    def test_simple_report_has_no_header(self) -> None:
        """SIMPLE report omits the header."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.SIMPLE)

        text = formatter.format_report([ErrorTemplate.pop_from_empty()])

        assert text == "POP_FROM_EMPTY: Pop from empty stack was performed"

    def test_text_dump_layout(self) -> None:
        """TEXT dump lists every slot between braces."""
        dump = DiagnosticFormatter().format_dump(_snapshot())

        assert dump.splitlines() == [
            "Dump:",
            "stack = 0xa0",
            "{",
            "\tbuffer[2] = 0xb0",
            "\t{",
            "\t\t[0] = 1",
            "\t\t[1] = <unset>",
            "\t}",
            "\tsize = 1",
            "\tchecksum = 0x0000000000000001",
            "\tcanary_before = 0xdeadbeef",
            "\tcanary_after = 0xdeadbeef",
            "}",
        ]

    def test_unallocated_buffer(self) -> None:
        """No block renders as <unallocated> with no slot list."""
        dump = DiagnosticFormatter().format_dump(_snapshot(buffer_address=None, slots=()))

        assert "\tbuffer[0] = <unallocated>" in dump
        assert "\t{" not in dump

    def test_report_appends_dump(self) -> None:
        """A snapshot is appended after the diagnostics."""
        text = DiagnosticFormatter().format_report(
            [ErrorTemplate.pop_from_empty()], _snapshot()
        )

        assert text.index("Errors found:") < text.index("Dump:")

    def test_json_report(self) -> None:
        """JSON report is one document with errors and dump."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(
            formatter.format_report([ErrorTemplate.pop_from_empty()], _snapshot())
        )

        assert [e["code"] for e in data["errors"]] == ["POP_FROM_EMPTY"]
        assert data["dump"]["size"] == 1
        assert data["dump"]["canary_after"] == POISON

    def test_json_report_without_dump(self) -> None:
        """JSON report omits the dump key when no snapshot is given."""
        formatter = DiagnosticFormatter(output_format=OutputFormat.JSON)

        data = json.loads(formatter.format_report([ErrorTemplate.pop_from_empty()]))

        assert "dump" not in data


class TestSanitize:
    """Slot content truncation."""

    def test_long_slot_truncated(self) -> None:
        """Slots over the limit are cut and marked."""
        formatter = DiagnosticFormatter(sanitize=True, max_content_length=4)

        dump = formatter.format_dump(_snapshot(slots=("abcdefgh",)))

        assert "\t\t[0] = abcd..." in dump

    def test_disabled_by_default(self) -> None:
        """Without sanitize, slots are printed in full."""
        dump = DiagnosticFormatter(max_content_length=4).format_dump(
            _snapshot(slots=("abcdefgh",))
        )

        assert "\t\t[0] = abcdefgh" in dump
