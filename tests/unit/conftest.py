import os
from pathlib import Path
from typing import TYPE_CHECKING
from unittest.mock import MagicMock

import pytest

if TYPE_CHECKING:
    from collections.abc import Iterator


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.unit)


@pytest.fixture
def mock_logger() -> MagicMock:
    """Create a stand-in for a structlog FilteringBoundLogger."""
    return MagicMock()


@pytest.fixture
def clean_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[pytest.MonkeyPatch]:
    """Remove SPECINDEX_* variables from the environment for the test."""
    for key in list(os.environ):
        if key.startswith("SPECINDEX_"):
            monkeypatch.delenv(key)
    yield monkeypatch
