"""The ``[logging]`` section."""

from enum import StrEnum
from typing import ClassVar

from pydantic import BaseModel, ConfigDict


class LogLevel(StrEnum):
    """Threshold below which log events are discarded."""

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Where index events go and how they are rendered.

    Attributes:
        level: Events below this level are dropped.
        format: JSON lines, or key=value text.
        file: Log file path. Empty writes to stderr.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON
    file: str = ""
