"""Quickstart example for canarystack.

This example demonstrates basic usage of GuardedStack: pushing, reading,
growth past the initial capacity, and what happens on a protocol
violation.

Note: Error reports are written to the stream passed to the stack. The
examples redirect them to an in-memory buffer so the output stays tidy;
by default reports go to stderr.
"""

import io

from canarystack import GuardedStack, StackConfig, StackValidationError

# Example 1: Push and read
print("=" * 50)
print("Example 1: Push and Read")
print("=" * 50)

stack: GuardedStack[str] = GuardedStack(10)
stack.push("kek")
stack.push("kek")

print(stack.top())
# Output: kek
print(len(stack), stack.capacity)
# Output: 2 10

# Example 2: Growth
print("\n" + "=" * 50)
print("Example 2: Growth by Doubling")
print("=" * 50)

numbers: GuardedStack[int] = GuardedStack(2)
for i in range(5):
    numbers.push(i)
    print(f"size={len(numbers)} capacity={numbers.capacity}")
# Output:
# size=1 capacity=2
# size=2 capacity=2
# size=3 capacity=4
# size=4 capacity=4
# size=5 capacity=8

# Example 3: Pop from empty
print("\n" + "=" * 50)
print("Example 3: Protocol Violation")
print("=" * 50)

reports = io.StringIO()
strict: GuardedStack[int] = GuardedStack(4, stream=reports)
strict.push(10)
strict.pop()
try:
    strict.pop()
except StackValidationError as e:
    print(f"Raised: {e}")
    print(f"State: {strict.state}")
print(reports.getvalue().splitlines()[1])
# Output:
# Raised: Stack integrity check failed during 'pop': POP_FROM_EMPTY
# State: poisoned
# 	Pop from empty stack was performed;

# Example 4: Fast mode
print("\n" + "=" * 50)
print("Example 4: Validation Disabled")
print("=" * 50)

fast: GuardedStack[int] = GuardedStack(4, config=StackConfig(safe_mode=False))
fast.pop()
print(fast.errors.name)
print(fast.state)
# Output:
# POP_FROM_EMPTY
# empty

# Example 5: Context manager
print("\n" + "=" * 50)
print("Example 5: Releasing the Buffer")
print("=" * 50)

with GuardedStack[int](4) as scoped:
    scoped.push(1)
    print(scoped)
print(scoped.released)
# Output:
# GuardedStack(size=1, capacity=4, state=non_empty, errors=<StackError.NONE: 0>)
# True
