"""Tests for StackConfig."""

from __future__ import annotations

import pytest

from canarystack import OutputFormat, StackConfig
from canarystack.config import ENV_ENABLE_DUMP, ENV_OUTPUT_FORMAT, ENV_SAFE_MODE


class TestStackConfig:
    """Construction and validation."""

    def test_defaults(self) -> None:
        """Default config is fully checked with text dumps."""
        config = StackConfig()

        assert config.safe_mode is True
        assert config.enable_dump is True
        assert config.output_format is OutputFormat.TEXT
        assert config.sanitize is False
        assert config.max_content_length == 100

    def test_output_format_coerced(self) -> None:
        """String formats are coerced to OutputFormat."""
        config = StackConfig(output_format="json")  # type: ignore[arg-type]

        assert config.output_format is OutputFormat.JSON

    def test_unknown_output_format(self) -> None:
        """Unknown formats raise ValueError."""
        with pytest.raises(ValueError):
            StackConfig(output_format="xml")  # type: ignore[arg-type]

    @pytest.mark.parametrize("length", [0, -5])
    def test_max_content_length_positive(self, length: int) -> None:
        """Non-positive truncation width is rejected."""
        with pytest.raises(ValueError, match="max_content_length"):
            StackConfig(max_content_length=length)

    def test_frozen(self) -> None:
        """Config is immutable."""
        config = StackConfig()

        with pytest.raises(AttributeError):
            config.safe_mode = False  # type: ignore[misc]


class TestFromEnv:
    """Environment-driven configuration."""

    def test_empty_environment_gives_defaults(self) -> None:
        """No variables means defaults."""
        assert StackConfig.from_env({}) == StackConfig()

    @pytest.mark.parametrize(
        ("raw", "expected"),
        [("0", False), ("false", False), (" OFF ", False), ("1", True), ("Yes", True)],
    )
    def test_safe_mode_values(self, raw: str, expected: bool) -> None:
        """Boolean spellings are case and whitespace insensitive."""
        config = StackConfig.from_env({ENV_SAFE_MODE: raw})

        assert config.safe_mode is expected

    def test_all_variables(self) -> None:
        """Every variable is honored."""
        config = StackConfig.from_env(
            {ENV_SAFE_MODE: "no", ENV_ENABLE_DUMP: "0", ENV_OUTPUT_FORMAT: "SIMPLE"}
        )

        assert config == StackConfig(
            safe_mode=False, enable_dump=False, output_format=OutputFormat.SIMPLE
        )

    def test_invalid_boolean(self) -> None:
        """Unrecognized boolean spellings raise ValueError naming the variable."""
        with pytest.raises(ValueError, match=ENV_ENABLE_DUMP):
            StackConfig.from_env({ENV_ENABLE_DUMP: "maybe"})

    def test_reads_os_environ(self, monkeypatch: pytest.MonkeyPatch) -> None:
        """Without a mapping, os.environ is read."""
        monkeypatch.setenv(ENV_SAFE_MODE, "off")

        assert StackConfig.from_env().safe_mode is False
