# pyright: reportExplicitAny=false, reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
"""The Config container and its layered loading."""

from enum import StrEnum
from typing import TYPE_CHECKING, Any, ClassVar

from pydantic import BaseModel, ConfigDict, Field, PrivateAttr

from specindex.config._defaults import DEFAULT_CONFIG
from specindex.config._loader import deep_merge, parse_env_vars, read_toml_file
from specindex.config._models._logging import LoggingConfig
from specindex.config._models._search import GraphConfiguration, SearchConfiguration

if TYPE_CHECKING:
    from pathlib import Path
    from typing import Self


class ConfigLayer(StrEnum):
    """Configuration layers, lowest precedence first."""

    DEFAULTS = "defaults"
    FILE = "file"
    ENV = "env"
    OVERRIDES = "overrides"


class Config(BaseModel):
    """Validated specindex configuration.

    Build instances with from_dict(), from_file() or load() so that values
    are layered over DEFAULT_CONFIG and validated first.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    search: SearchConfiguration = Field(default_factory=SearchConfiguration)
    graph: GraphConfiguration = Field(default_factory=GraphConfiguration)

    _data: dict[str, Any] = PrivateAttr(default_factory=dict)
    _layers: tuple[ConfigLayer, ...] = PrivateAttr(default=())

    @classmethod
    def _build(
        cls,
        merged: dict[str, Any],
        layers: tuple[ConfigLayer, ...],
        *,
        validate: bool,
        source_label: str | None = None,
    ) -> Self:
        # Deferred import to avoid circular dependency
        from specindex.config._validation import (  # noqa: PLC0415
            raise_if_validation_errors,
            validate_config,
        )

        if validate:
            issues = validate_config(merged, source=source_label)
            raise_if_validation_errors(issues, source=source_label)

        config = cls.model_validate(merged)
        config._data = merged
        config._layers = layers
        return config

    @classmethod
    def from_dict(cls, data: dict[str, Any], *, validate: bool = True) -> Self:
        """Layer `data` over the defaults.

        Raises:
            ConfigValidationError: If validation fails (when validate=True).
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        return cls._build(merged, (ConfigLayer.DEFAULTS,), validate=validate)

    @classmethod
    def from_file(cls, path: Path, *, validate: bool = True) -> Self:
        """Layer one TOML file over the defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If validation fails. The error's source is
                the file path.
        """
        merged = deep_merge(DEFAULT_CONFIG, read_toml_file(path))
        return cls._build(
            merged,
            (ConfigLayer.DEFAULTS, ConfigLayer.FILE),
            validate=validate,
            source_label=str(path),
        )

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
        overrides: dict[str, Any] | None = None,
    ) -> Self:
        """Load configuration from every layer.

        Layers apply in ConfigLayer order: defaults, the TOML file at
        `config_path`, SPECINDEX_* environment variables, then `overrides`.
        A missing file and empty layers are skipped.

        Raises:
            ConfigLoadError: If the config file cannot be parsed.
            ConfigValidationError: If the merged configuration is invalid.
        """
        candidates: list[tuple[ConfigLayer, dict[str, Any]]] = [
            (ConfigLayer.DEFAULTS, DEFAULT_CONFIG)
        ]
        if config_path is not None and config_path.is_file():
            candidates.append((ConfigLayer.FILE, read_toml_file(config_path)))
        if include_env:
            candidates.append((ConfigLayer.ENV, parse_env_vars()))
        if overrides:
            candidates.append((ConfigLayer.OVERRIDES, overrides))

        merged: dict[str, Any] = {}
        layers: list[ConfigLayer] = []
        for layer, values in candidates:
            if values:
                merged = deep_merge(merged, values)
                layers.append(layer)

        return cls._build(merged, tuple(layers), validate=True)

    @property
    def layers(self) -> tuple[ConfigLayer, ...]:
        """Layers that contributed values, lowest precedence first."""
        return self._layers

    def get(self, key: str, default: Any = None) -> Any:
        """Get a configuration value by dot-notation key.

        Examples:
            >>> config = Config.from_dict({})
            >>> config.get("search.context_length")
            80
            >>> config.get("missing.key", "fallback")
            'fallback'
        """
        current: Any = self._data
        for part in key.split("."):
            if not isinstance(current, dict) or part not in current:
                return default
            current = current[part]
        return current

    def to_dict(self) -> dict[str, Any]:
        """Return the validated configuration as a plain dictionary."""
        return self.model_dump(mode="json")
