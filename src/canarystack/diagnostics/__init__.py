"""Diagnostic system for guarded containers.

Provides error codes, message templates, structural snapshots and
formatting for integrity reports.

Python 3.13+. Zero external dependencies.
"""

from .codes import REPORT_ORDER, Diagnostic, StackError, StackSnapshot
from .formatter import DiagnosticFormatter, OutputFormat
from .templates import ErrorTemplate

__all__ = [
    "REPORT_ORDER",
    "Diagnostic",
    "DiagnosticFormatter",
    "ErrorTemplate",
    "OutputFormat",
    "StackError",
    "StackSnapshot",
]
