"""Validation and diagnostics configuration for GuardedStack.

Provides a single frozen dataclass that encapsulates every switch that
controls how much checking a stack performs and how failures are
reported.

Python 3.13+. Zero external dependencies.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass

from canarystack.constants import DEFAULT_MAX_CONTENT_LENGTH
from canarystack.diagnostics.formatter import OutputFormat

__all__ = ["ENV_ENABLE_DUMP", "ENV_OUTPUT_FORMAT", "ENV_SAFE_MODE", "StackConfig"]

ENV_SAFE_MODE = "CANARYSTACK_SAFE_MODE"
ENV_ENABLE_DUMP = "CANARYSTACK_ENABLE_DUMP"
ENV_OUTPUT_FORMAT = "CANARYSTACK_OUTPUT_FORMAT"

_TRUE_VALUES = frozenset(("1", "true", "yes", "on"))
_FALSE_VALUES = frozenset(("0", "false", "no", "off"))


@dataclass(frozen=True, slots=True)
class StackConfig:
    """Immutable configuration for GuardedStack validation and reporting.

    All fields have sensible defaults; constructing ``StackConfig()`` with
    no arguments produces the fully checked configuration.

    Attributes:
        safe_mode: Run the validation pass on every operation (default: True).
            When False, integrity checks and reporting are skipped entirely;
            the running checksum is still maintained.
        enable_dump: Append a structural dump to every error report
            (default: True).
        output_format: Report layout (default: OutputFormat.TEXT).
        sanitize: Truncate long slot contents in dumps (default: False).
        max_content_length: Truncation width when sanitizing (default: 100).

    Example:
        >>> from canarystack import GuardedStack, StackConfig
        >>> fast = StackConfig(safe_mode=False)
        >>> stack = GuardedStack(16, config=fast)
        >>> stack.config.safe_mode
        False
    """

    safe_mode: bool = True
    enable_dump: bool = True
    output_format: OutputFormat = OutputFormat.TEXT
    sanitize: bool = False
    max_content_length: int = DEFAULT_MAX_CONTENT_LENGTH

    def __post_init__(self) -> None:
        """Validate configuration values at construction time.

        Raises:
            ValueError: If max_content_length is not positive or
                output_format is not a known format.
        """
        if self.max_content_length <= 0:
            msg = "max_content_length must be positive"
            raise ValueError(msg)
        object.__setattr__(self, "output_format", OutputFormat(self.output_format))

    @classmethod
    def from_env(cls, environ: Mapping[str, str] | None = None) -> StackConfig:
        """Build a configuration from environment variables.

        Unset variables keep their defaults.

        Args:
            environ: Mapping to read instead of os.environ

        Returns:
            StackConfig reflecting CANARYSTACK_SAFE_MODE,
            CANARYSTACK_ENABLE_DUMP and CANARYSTACK_OUTPUT_FORMAT

        Raises:
            ValueError: If a variable holds an unrecognized value
        """
        env = os.environ if environ is None else environ
        defaults = cls()
        return cls(
            safe_mode=_read_bool(env, ENV_SAFE_MODE, defaults.safe_mode),
            enable_dump=_read_bool(env, ENV_ENABLE_DUMP, defaults.enable_dump),
            output_format=OutputFormat(
                env.get(ENV_OUTPUT_FORMAT, defaults.output_format).strip().lower()
            ),
        )


def _read_bool(env: Mapping[str, str], name: str, default: bool) -> bool:
    raw = env.get(name)
    if raw is None:
        return default
    value = raw.strip().lower()
    if value in _TRUE_VALUES:
        return True
    if value in _FALSE_VALUES:
        return False
    msg = f"{name} must be one of 1/0/true/false/yes/no/on/off, got {raw!r}"
    raise ValueError(msg)
