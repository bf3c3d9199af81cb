from typing import TYPE_CHECKING

import pytest

from specindex.graph import (
    DependencyGraph,
    extract_spec_references,
    find_unlinked_references,
)

if TYPE_CHECKING:
    from tests.conftest import SpecFactory


class TestExtractSpecReferences:
    def test_finds_spec_and_depends_on_mentions(self) -> None:
        text = "See spec 042-auth. Depends on: 017-db"

        assert extract_spec_references(text) == ("042-auth", "017-db")

    @pytest.mark.parametrize(
        "text",
        [
            "SPEC: 100-cache",
            "specs 100-cache",
            "depends on 100-cache",
            "spec:100-cache",
        ],
    )
    def test_prefix_forms(self, text: str) -> None:
        assert extract_spec_references(text) == ("100-cache",)

    def test_duplicates_are_reported_once(self) -> None:
        text = "spec 001-a, then spec 002-b, and spec 001-a again"

        assert extract_spec_references(text) == ("001-a", "002-b")

    @pytest.mark.parametrize(
        "text",
        ["", "spec 42-short", "spec abc-001", "see 001-auth", "inspect 001"],
    )
    def test_non_references(self, text: str) -> None:
        assert extract_spec_references(text) == ()


class TestFindUnlinkedReferences:
    def test_lists_resolved_but_undeclared_mentions(
        self, make_spec: SpecFactory
    ) -> None:
        api = make_spec(
            "003-api",
            depends_on=["002-db"],
            content=(
                "Builds on spec 001-auth and spec 002-db.\n"
                "See spec 999-missing and spec 003-api."
            ),
        )
        graph = DependencyGraph([make_spec("001-auth"), make_spec("002-db"), api])

        assert find_unlinked_references(api, graph) == ("001-auth",)

    def test_mentions_resolve_by_name(self, make_spec: SpecFactory) -> None:
        target = make_spec("7", name="007-billing")
        spec = make_spec("8", content="depends on 007-billing")
        graph = DependencyGraph([target, spec])

        assert find_unlinked_references(spec, graph) == ("7",)

    def test_spec_outside_graph(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([make_spec("001-auth")])
        outsider = make_spec("x", content="spec 001-auth")

        assert find_unlinked_references(outsider, graph) == ("001-auth",)
