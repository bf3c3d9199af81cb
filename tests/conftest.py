"""Shared test fixtures for specindex tests."""

from collections.abc import Callable

import pytest

from specindex import SpecRecord

SpecFactory = Callable[..., SpecRecord]

_TUPLE_FIELDS = ("tags", "depends_on", "related")


@pytest.fixture
def make_spec() -> SpecFactory:
    """Return a factory creating SpecRecord values with defaults.

    The path defaults to "specs/<id>". List values for tags and relationship
    fields are converted to tuples.
    """

    def _make(spec_id: str, **overrides: object) -> SpecRecord:
        fields: dict[str, object] = {"id": spec_id, "path": f"specs/{spec_id}"}
        fields.update(overrides)
        for key in _TUPLE_FIELDS:
            value = fields.get(key)
            if isinstance(value, list):
                fields[key] = tuple(value)  # pyright: ignore[reportUnknownArgumentType]
        return SpecRecord(**fields)  # pyright: ignore[reportArgumentType]

    return _make
