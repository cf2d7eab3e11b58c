"""Shared constants for canarystack.

This module provides centralized configuration constants used across
the runtime and diagnostics packages. Placing constants here avoids
circular imports and provides a single source of truth.

Constants are grouped by domain:
- Guard values: Sentinels bracketing the instance state
- Growth policy: Buffer sizing
- Checksum arithmetic: Accumulator width

Python 3.13+. Zero external dependencies.
"""

# ruff: noqa: RUF022 - __all__ organized by category for readability
__all__ = [
    # Guard values
    "POISON",
    # Growth policy
    "DEFAULT_CAPACITY",
    "GROWTH_FACTOR",
    # Checksum arithmetic
    "CHECKSUM_BITS",
    "CHECKSUM_MASK",
    # Diagnostics
    "DEFAULT_MAX_CONTENT_LENGTH",
]

# ============================================================================
# GUARD VALUES
# ============================================================================

# Sentinel stored in both canaries. Any other value means something wrote
# into the instance outside the Stack API.
POISON: int = 0xDEADBEEF

# ============================================================================
# GROWTH POLICY
# ============================================================================

# Slots allocated when no capacity is requested.
DEFAULT_CAPACITY: int = 64

# Capacity multiplier applied when a push finds the buffer full.
GROWTH_FACTOR: int = 2

# ============================================================================
# CHECKSUM ARITHMETIC
# ============================================================================

# The running checksum wraps like an unsigned machine word. Python hashes
# may be negative; masking keeps add/remove symmetric.
CHECKSUM_BITS: int = 64
CHECKSUM_MASK: int = (1 << CHECKSUM_BITS) - 1

# ============================================================================
# DIAGNOSTICS
# ============================================================================

# Truncation width for slot representations when dumps are sanitized.
DEFAULT_MAX_CONTENT_LENGTH: int = 100
