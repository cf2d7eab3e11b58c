"""Hypothesis strategies for canarystack property-based testing.

Usage:
    from tests.strategies import stack_values, operation_sequences
    from tests.strategies.stack import capacities

Event-Emitting Strategies (HypoFuzz-Optimized):
    - operation_sequences: Emits ``strategy=ops_{shape}``
    - stack_values: Emits ``strategy=value_{kind}``
"""

from .stack import (
    StackOp,
    capacities,
    hashable_values,
    operation_sequences,
    stack_values,
)

__all__ = [
    "StackOp",
    "capacities",
    "hashable_values",
    "operation_sequences",
    "stack_values",
]
