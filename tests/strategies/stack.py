"""Hypothesis strategies for guarded stack testing.

Provides element values, capacities and push/pop operation sequences.

Event-Emitting Strategies (HypoFuzz-Optimized):
    - stack_values: Emits ``strategy=value_{kind}``
    - operation_sequences: Emits ``strategy=ops_{shape}``

Python 3.13+.
"""

from __future__ import annotations

from enum import StrEnum

from hypothesis import event
from hypothesis import strategies as st
from hypothesis.strategies import composite

__all__ = [
    "StackOp",
    "capacities",
    "hashable_values",
    "operation_sequences",
    "stack_values",
]


class StackOp(StrEnum):
    """Mutating operation in a generated sequence."""

    PUSH = "push"
    POP = "pop"


capacities: st.SearchStrategy[int] = st.integers(min_value=1, max_value=32)

hashable_values: st.SearchStrategy[object] = st.one_of(
    st.integers(),
    st.text(max_size=20),
    st.booleans(),
    st.none(),
    st.tuples(st.integers(), st.text(max_size=5)),
)


@composite
def stack_values(draw: st.DrawFn) -> object:
    """Generate a hashable element, tagging its kind."""
    value = draw(hashable_values)
    event(f"strategy=value_{type(value).__name__}")
    return value


@composite
def operation_sequences(
    draw: st.DrawFn,
    *,
    max_ops: int = 60,
) -> list[tuple[StackOp, object]]:
    """Generate push/pop sequences that never pop an empty stack.

    Each entry is (op, value); value is None for pops.

    Events emitted:
        - ``strategy=ops_{shape}``: push-only, balanced or mixed.
    """
    length = draw(st.integers(min_value=0, max_value=max_ops))
    ops: list[tuple[StackOp, object]] = []
    depth = 0
    for _ in range(length):
        if depth > 0 and draw(st.booleans()):
            ops.append((StackOp.POP, None))
            depth -= 1
        else:
            ops.append((StackOp.PUSH, draw(hashable_values)))
            depth += 1

    pops = sum(1 for op, _ in ops if op is StackOp.POP)
    if not ops:
        event("strategy=ops_empty")
    elif pops == 0:
        event("strategy=ops_push_only")
    elif depth == 0:
        event("strategy=ops_balanced")
    else:
        event("strategy=ops_mixed")
    return ops
