"""Fuzz testing infrastructure for canarystack.

This package contains:
- test_stack_state_machine: RuleBasedStateMachine comparing GuardedStack to a list model

Python 3.13+.
"""
