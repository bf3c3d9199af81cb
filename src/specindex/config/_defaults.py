"""Default configuration values.

This module defines the built-in default configuration values that are used
when no other configuration sources provide values.
"""

from typing import Any

DEFAULT_CONFIG: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
    "logging": {
        "level": "info",
        "format": "json",
        "file": "",
    },
    "search": {
        "max_matches_per_spec": 5,
        "context_length": 80,
        "include_archived": False,
    },
    "graph": {
        "impact_max_depth": 3,
        "reference_severity": "warning",
    },
}
