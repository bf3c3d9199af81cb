# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Reading the TOML file and SPECINDEX_* variables, and layering the results."""

import os
import tomllib
from typing import TYPE_CHECKING, Any

from specindex.exceptions import ConfigLoadError

if TYPE_CHECKING:
    from collections.abc import Mapping
    from pathlib import Path

ENV_PREFIX = "SPECINDEX_"

# Read directly by safe_load_config and the logging helpers
_RESERVED_ENV_KEYS = frozenset({"DEBUG", "LOG_LEVEL", "STRICT_CONFIG"})


def read_toml_file(path: Path) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Parse a TOML config file.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file is not valid TOML. Carries the path and
            the line and column of the error.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(msg, path=path, line=e.lineno, column=e.colno) from e


def copy_value(value: Any) -> Any:  # pyright: ignore[reportExplicitAny]
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(
    base: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
    override: Mapping[str, Any],  # pyright: ignore[reportExplicitAny]
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Return a copy of `base` with `override` layered on top.

    Tables present on both sides merge key by key. Any other value in
    `override`, arrays included, replaces the one in `base`. Neither input
    is modified.
    """
    result: dict[str, Any] = copy_value(dict(base))  # pyright: ignore[reportExplicitAny]
    for key, value in override.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        else:
            result[key] = copy_value(value)
    return result


def parse_env_value(value: str) -> Any:  # pyright: ignore[reportExplicitAny]
    """Convert an environment string to the value type settings use.

    Examples:
        >>> parse_env_value("TRUE")
        True
        >>> parse_env_value("40")
        40
        >>> parse_env_value("none") is None
        True
        >>> parse_env_value("text")
        'text'
    """
    match value.strip().lower():
        case "true":
            return True
        case "false":
            return False
        case "none" | "null":
            return None
        case _:
            pass

    try:
        return int(value)
    except ValueError:
        return value


def set_nested_key(
    d: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key_path: str,
    value: Any,  # pyright: ignore[reportExplicitAny]
) -> None:
    """Set `value` at a dotted path, replacing any scalar in the way.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "search.context_length", 40)
        >>> d
        {'search': {'context_length': 40}}
    """
    *parents, leaf = key_path.split(".")
    current = d
    for part in parents:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]
    current[leaf] = value


def parse_env_vars(
    prefix: str = ENV_PREFIX,
    environ: Mapping[str, str] | None = None,
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """Collect SPECINDEX_* variables into a nested config dictionary.

    A double underscore separates the section from the key, so
    SPECINDEX_SEARCH__CONTEXT_LENGTH sets search.context_length. Variables
    owned by other parts of specindex (SPECINDEX_DEBUG, SPECINDEX_LOG_LEVEL,
    SPECINDEX_STRICT_CONFIG) are skipped.

    Args:
        prefix: Variable name prefix.
        environ: Variables to read. Defaults to os.environ.
    """
    source = os.environ if environ is None else environ
    result: dict[str, Any] = {}  # pyright: ignore[reportExplicitAny]

    for key, value in source.items():
        if not key.startswith(prefix):
            continue
        name = key.removeprefix(prefix)
        if not name or name in _RESERVED_ENV_KEYS:
            continue
        set_nested_key(result, name.replace("__", ".").lower(), parse_env_value(value))

    return result
