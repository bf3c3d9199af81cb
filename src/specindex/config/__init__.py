"""Configuration for specindex.

Configuration is merged from built-in defaults, an optional TOML file,
SPECINDEX_* environment variables and explicit overrides, then validated with
Pydantic. Sections:

- ``[logging]``: level, format, file
- ``[search]``: max_matches_per_spec, context_length, include_archived
- ``[graph]``: impact_max_depth, reference_severity

Example:
    >>> from specindex.config import Config
    >>> config = Config.from_dict({"search": {"context_length": 40}})
    >>> config.search.context_length
    40
"""

from specindex.config._defaults import DEFAULT_CONFIG
from specindex.config._load import load_config, safe_load_config
from specindex.config._loader import (
    deep_merge,
    parse_env_value,
    parse_env_vars,
    read_toml_file,
    set_nested_key,
)
from specindex.config._models import (
    Config,
    ConfigLayer,
    GraphConfiguration,
    LogFormat,
    LoggingConfig,
    LogLevel,
    SearchConfiguration,
)
from specindex.config._validation import (
    ValidationIssue,
    raise_if_validation_errors,
    validate_config,
)

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigLayer",
    "GraphConfiguration",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SearchConfiguration",
    "ValidationIssue",
    "deep_merge",
    "load_config",
    "parse_env_value",
    "parse_env_vars",
    "raise_if_validation_errors",
    "read_toml_file",
    "safe_load_config",
    "set_nested_key",
    "validate_config",
]
