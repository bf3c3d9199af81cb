# pyright: reportAny=false
"""Unit tests for specindex exceptions.

These tests verify that exception constructors correctly store context
attributes. We don't test Python built-in behaviors (inheritance, str()).
"""

from pathlib import Path

from specindex.exceptions import (
    ConfigLoadError,
    ConfigValidationError,
    SpecIndexError,
    SpecNotFoundError,
)


class TestConfigLoadError:
    def test_stores_location_context(self) -> None:
        error = ConfigLoadError(
            "Parse error",
            path=Path("/project/specindex.toml"),
            line=15,
            column=8,
        )

        assert error.path == Path("/project/specindex.toml")
        assert error.line == 15
        assert error.column == 8

    def test_context_fields_default_to_none(self) -> None:
        error = ConfigLoadError("Simple error")

        assert error.path is None
        assert error.line is None
        assert error.column is None


class TestConfigValidationError:
    def test_stores_validation_context(self) -> None:
        error = ConfigValidationError(
            "Invalid enum value",
            key="logging.level",
            value="verbose",
            expected="'debug', 'info', 'warning' or 'error'",
            source="specindex.toml",
        )

        assert error.key == "logging.level"
        assert error.value == "verbose"
        assert error.expected == "'debug', 'info', 'warning' or 'error'"
        assert error.source == "specindex.toml"

    def test_source_defaults_to_none(self) -> None:
        error = ConfigValidationError("Error", key="key", value="v", expected="e")

        assert error.source is None


class TestSpecNotFoundError:
    def test_stores_spec_id(self) -> None:
        error = SpecNotFoundError("Spec not found: 042", spec_id="042")

        assert error.spec_id == "042"

    def test_can_be_caught_as_key_error_or_base(self) -> None:
        error = SpecNotFoundError("missing")

        assert isinstance(error, KeyError)
        assert isinstance(error, SpecIndexError)
        assert error.spec_id is None
