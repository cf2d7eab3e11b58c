"""canarystack - Self-validating stack with canaries and a running checksum.

Detects memory corruption and protocol violations (pop or top on an empty
stack, failed growth, tampered elements or instance state) on every public
operation instead of trusting caller discipline. Violations accumulate in a
sticky error bitmask; the next validation pass writes a diagnostic to the
error stream and raises. The instance is Poisoned from then on.

Public API:
    GuardedStack - The container
    StackConfig - Validation and reporting options
    StackError - Sticky error bitmask flags
    StackState - Empty / NonEmpty / Poisoned
    BudgetAllocator, DefaultAllocator - Slot block sources
    stable_hash - Repr-based BLAKE2b element hash

Exceptions:
    StackIntegrityError - Base exception class
    StackValidationError - Validation found violations
    StackPoisonedError - Operation on a poisoned instance
    StackAllocationError - Growth failed with validation disabled
    EmptyStackError - Empty top() with validation disabled

Submodules:
    canarystack.diagnostics - Error codes, templates and formatting
    canarystack.runtime - Buffer, guard, reporter and stack implementation
"""

from .config import StackConfig
from .diagnostics import OutputFormat, StackError
from .enums import StackState
from .integrity import (
    EmptyStackError,
    StackAllocationError,
    StackIntegrityError,
    StackPoisonedError,
    StackValidationError,
)
from .runtime import BudgetAllocator, DefaultAllocator, GuardedStack, stable_hash

# Version information - Auto-populated from package metadata
# SINGLE SOURCE OF TRUTH: pyproject.toml [project] version
from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _get_version

try:
    __version__ = _get_version("canarystack")
except PackageNotFoundError:
    # Development mode: package not installed yet
    __version__ = "0.0.0+dev"

__all__ = [
    "BudgetAllocator",
    "DefaultAllocator",
    "EmptyStackError",
    "GuardedStack",
    "OutputFormat",
    "StackAllocationError",
    "StackConfig",
    "StackError",
    "StackIntegrityError",
    "StackPoisonedError",
    "StackState",
    "StackValidationError",
    "__version__",
    "stable_hash",
]
