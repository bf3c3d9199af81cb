"""Pydantic models for each configuration section and the Config container."""

from specindex.config._models._config import Config, ConfigLayer
from specindex.config._models._logging import LogFormat, LoggingConfig, LogLevel
from specindex.config._models._search import GraphConfiguration, SearchConfiguration

__all__ = [
    "Config",
    "ConfigLayer",
    "GraphConfiguration",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "SearchConfiguration",
]
