"""specindex exceptions."""

from typing import TYPE_CHECKING, Any

if TYPE_CHECKING:
    from pathlib import Path


class SpecIndexError(Exception):
    """Base exception for specindex errors."""


class ConfigError(SpecIndexError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source


# =============================================================================
# Spec Exceptions
# =============================================================================


class SpecError(SpecIndexError):
    """Base exception for spec index errors."""


class SpecNotFoundError(SpecError, KeyError):
    """Raised when a specification cannot be found in the index.

    Attributes:
        spec_id: The ID of the specification that was not found.
    """

    def __init__(self, message: str, *, spec_id: str | None = None) -> None:
        """Initialize with error message and spec context.

        Args:
            message: Human-readable error message.
            spec_id: The ID of the specification that was not found.
        """
        super().__init__(message)
        self.spec_id: str | None = spec_id
