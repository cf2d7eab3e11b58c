"""Corruption detection example for canarystack.

Simulates the kinds of damage a guarded stack is built to catch: a
stored element mutated behind the stack's back, and an overwritten
canary. Each is detected on the next operation and reported with a
structural dump.

WARNING: The writes to private attributes below exist only to simulate
corruption. Never touch a stack's internals in application code.
"""

import io

from canarystack import (
    GuardedStack,
    OutputFormat,
    StackConfig,
    StackValidationError,
    stable_hash,
)

# Example 1: In-place mutation of a stored element
print("=" * 50)
print("Example 1: Checksum Mismatch")
print("=" * 50)

reports = io.StringIO()
stack: GuardedStack[list[int]] = GuardedStack(4, hash_function=stable_hash, stream=reports)
payload = [1, 2, 3]
stack.push(payload)
payload.append(4)

try:
    stack.top()
except StackValidationError as e:
    print(f"Raised: {e}")
    if e.context is not None:
        print(f"expected={e.context.expected} actual={e.context.actual}")
print(reports.getvalue())

# Example 2: push_copy isolates the stored value
print("\n" + "=" * 50)
print("Example 2: push_copy")
print("=" * 50)

safe: GuardedStack[list[int]] = GuardedStack(4, hash_function=stable_hash)
payload = [1, 2, 3]
safe.push_copy(payload)
payload.append(4)
print(safe.top())
# Output: [1, 2, 3]

# Example 3: Overwritten canary, reported as JSON
print("\n" + "=" * 50)
print("Example 3: Canary Corruption (JSON report)")
print("=" * 50)

reports = io.StringIO()
config = StackConfig(output_format=OutputFormat.JSON)
guarded: GuardedStack[int] = GuardedStack(2, config=config, stream=reports)
guarded.push(7)
guarded._canary_after = 0  # simulated stray write

try:
    guarded.empty()
except StackValidationError as e:
    print(f"Raised: {e}")
print(reports.getvalue())

# Example 4: verify() checks without poisoning
print("\n" + "=" * 50)
print("Example 4: Non-fatal verify()")
print("=" * 50)

probe: GuardedStack[int] = GuardedStack(2)
probe._canary_before = 0
print(probe.verify())
print(probe.is_poisoned)
# Output:
# False
# False
