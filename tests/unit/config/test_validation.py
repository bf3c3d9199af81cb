# pyright: reportAny=false, reportUnknownArgumentType=false
"""Unit tests for config validation."""

from typing import Any

import pytest

from specindex.config import (
    DEFAULT_CONFIG,
    ValidationIssue,
    raise_if_validation_errors,
    validate_config,
)
from specindex.exceptions import ConfigValidationError


class TestValidateConfig:
    def test_defaults_are_valid(self) -> None:
        assert validate_config(DEFAULT_CONFIG) == []

    def test_empty_config_is_valid(self) -> None:
        assert validate_config({}) == []

    def test_negative_context_length(self) -> None:
        issues = validate_config({"search": {"context_length": -1}})

        (issue,) = issues
        assert issue.key == "search.context_length"
        assert issue.expected == ">= 0"
        assert issue.actual == -1
        assert issue.source is None

    def test_max_matches_must_be_positive(self) -> None:
        (issue,) = validate_config({"search": {"max_matches_per_spec": 0}})

        assert issue.key == "search.max_matches_per_spec"
        assert issue.expected == ">= 1"

    def test_invalid_log_level(self) -> None:
        (issue,) = validate_config({"logging": {"level": "verbose"}}, source="env")

        assert issue.key == "logging.level"
        assert issue.actual == "verbose"
        assert issue.source == "env"
        assert issue.expected is not None
        assert "debug" in issue.expected

    def test_invalid_reference_severity(self) -> None:
        (issue,) = validate_config({"graph": {"reference_severity": "fatal"}})

        assert issue.key == "graph.reference_severity"

    def test_unbounded_impact_depth_is_valid(self) -> None:
        assert validate_config({"graph": {"impact_max_depth": None}}) == []

    def test_unknown_section_is_ignored_unless_strict(self) -> None:
        config: dict[str, Any] = {"unknown_section": {"key": 1}}

        assert validate_config(config) == []
        (issue,) = validate_config(config, strict=True)
        assert issue.key == "unknown_section"


class TestRaiseIfValidationErrors:
    def test_no_issues_does_not_raise(self) -> None:
        raise_if_validation_errors([])

    def test_issue_without_expected_uses_message(self) -> None:
        issue = ValidationIssue(
            key="search.context_length",
            message="Input should be a valid integer",
            expected=None,
            actual="wide",
        )

        with pytest.raises(ConfigValidationError) as exc_info:
            raise_if_validation_errors([issue])

        assert exc_info.value.expected == "Input should be a valid integer"
        assert exc_info.value.source is None

    def test_raises_first_error(self) -> None:
        issues = validate_config({"search": {"context_length": -1}})

        with pytest.raises(ConfigValidationError) as exc_info:
            raise_if_validation_errors(issues, source="specindex.toml")

        error = exc_info.value
        assert error.key == "search.context_length"
        assert error.value == -1
        assert error.expected == ">= 0"
        assert error.source == "specindex.toml"
        assert "search.context_length" in str(error)
