"""Configuration loading entry points."""

import os
from typing import TYPE_CHECKING, Any

from specindex.config._models import Config
from specindex.exceptions import ConfigError

if TYPE_CHECKING:
    from pathlib import Path


def load_config(
    config_path: Path | None = None,
    *,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> Config:
    """Load configuration from defaults, file, environment and overrides.

    Args:
        config_path: Path to a TOML config file. A missing file is skipped.
        cli_overrides: Overrides with the highest precedence.

    Returns:
        The merged, validated configuration.

    Raises:
        ConfigLoadError: If the config file cannot be parsed.
        ConfigValidationError: If the merged configuration is invalid.
    """
    return Config.load(config_path=config_path, overrides=cli_overrides)


def safe_load_config(
    config_path: Path | None = None,
    *,
    cli_overrides: dict[str, Any] | None = None,  # pyright: ignore[reportExplicitAny]
) -> tuple[Config, str | None]:
    """Load configuration, falling back to defaults on failure.

    Behavior on failure depends on the SPECINDEX_STRICT_CONFIG environment
    variable: when "1" the error propagates, otherwise the defaults are
    returned together with the error message.

    Returns:
        Tuple of (Config, error_message). On success, error_message is None.

    Raises:
        ConfigError: In strict mode, if the configuration cannot be loaded.
    """
    strict_mode = os.environ.get("SPECINDEX_STRICT_CONFIG", "0") == "1"

    try:
        return load_config(config_path, cli_overrides=cli_overrides), None
    except ConfigError as e:
        if strict_mode:
            raise
        return Config.from_dict({}), str(e)
