from itertools import pairwise
from typing import TYPE_CHECKING

import pytest

from specindex import SpecNotFoundError
from specindex.config import GraphConfiguration
from specindex.graph import (
    DependencyGraph,
    DependencyNode,
    RelationshipField,
    build_dependency_graph,
)

if TYPE_CHECKING:
    from unittest.mock import MagicMock

    from specindex import SpecRecord, SpecSummary
    from tests.conftest import SpecFactory


def _ids(summaries: tuple[SpecSummary, ...]) -> list[str]:
    return [s.id for s in summaries]


@pytest.fixture
def chain(make_spec: SpecFactory) -> list[SpecRecord]:
    """Five specs where each depends on the previous one."""
    return [make_spec("1")] + [
        make_spec(str(i), depends_on=[str(i - 1)]) for i in range(2, 6)
    ]


@pytest.fixture
def cyclic(make_spec: SpecFactory) -> list[SpecRecord]:
    """Specs 1 and 2 depend on each other; 3 depends on 1; 4 is isolated."""
    return [
        make_spec("1", depends_on=["2"]),
        make_spec("2", depends_on=["1"]),
        make_spec("3", depends_on=["1"]),
        make_spec("4"),
    ]


class TestConstruction:
    def test_required_by_is_derived(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([
            make_spec("1", title="OAuth login", tags=["auth"]),
            make_spec("2", title="Session store", depends_on=["1"]),
        ])

        complete = graph.get_complete_graph("1")

        assert _ids(complete.required_by) == ["2"]
        assert complete.depends_on == ()
        assert _ids(graph.get_complete_graph("2").depends_on) == ["1"]

    def test_dangling_reference_is_dropped(
        self, make_spec: SpecFactory, mock_logger: MagicMock
    ) -> None:
        graph = DependencyGraph(
            [make_spec("1", depends_on=["999"], related=["nope"])],
            logger=mock_logger,
        )

        assert graph.node("1") == DependencyNode()
        mock_logger.debug.assert_any_call(
            "dangling_reference",
            spec_id="1",
            field="depends_on",
            reference="999",
        )
        build_call = mock_logger.debug.call_args_list[-1]
        assert build_call.args == ("graph_built",)
        assert build_call.kwargs["dangling"] == 2

    def test_related_is_symmetric(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([make_spec("1", related=["2"]), make_spec("2")])

        assert graph.node("1").related == {"2"}
        assert graph.node("2").related == {"1"}

    def test_references_resolve_by_path_and_name(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([
            make_spec("1", path="specs/001-auth"),
            make_spec("2", name="002-session"),
            make_spec("3", depends_on=["specs/001-auth", " 002-session "]),
        ])

        assert graph.node("3").depends_on == {"1", "2"}
        assert graph.resolve("002-session") == "2"
        assert graph.resolve("missing") is None

    def test_id_wins_over_path(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([
            make_spec("a", path="b"),
            make_spec("b", path="c"),
        ])

        assert graph.resolve("b") == "b"

    def test_self_references_are_kept(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([make_spec("1", depends_on=["1"], related=["1"])])

        assert graph.node("1") == DependencyNode(
            depends_on=frozenset({"1"}),
            required_by=frozenset({"1"}),
            related=frozenset({"1"}),
        )
        assert _ids(graph.get_complete_graph("1").required_by) == ["1"]

    def test_duplicate_ids_keep_first(
        self, make_spec: SpecFactory, mock_logger: MagicMock
    ) -> None:
        graph = DependencyGraph(
            [make_spec("1", title="first"), make_spec("1", title="second")],
            logger=mock_logger,
        )

        assert len(graph) == 1
        assert graph.spec("1").title == "first"
        mock_logger.warning.assert_called_once()
        assert mock_logger.warning.call_args.args == ("duplicate_spec_id",)

    def test_input_is_not_mutated(self, make_spec: SpecFactory) -> None:
        specs = [make_spec("1", related=["2"]), make_spec("2")]

        graph = DependencyGraph(specs)

        assert specs[1].related == ()
        assert graph.specs() == tuple(specs)

    def test_build_dependency_graph(self, chain: list[SpecRecord]) -> None:
        graph = build_dependency_graph(chain, GraphConfiguration(impact_max_depth=1))

        assert len(graph) == 5
        assert "3" in graph
        assert "9" not in graph
        assert graph.config.impact_max_depth == 1


class TestLookup:
    def test_unknown_id_raises(self, chain: list[SpecRecord]) -> None:
        graph = DependencyGraph(chain)

        with pytest.raises(SpecNotFoundError) as exc_info:
            _ = graph.get_complete_graph("missing")

        assert exc_info.value.spec_id == "missing"
        assert "Spec not found: missing" in str(exc_info.value)

    @pytest.mark.parametrize(
        "method",
        ["spec", "node", "impact_radius", "get_upstream", "has_circular_dependency"],
    )
    def test_unknown_id_is_a_key_error(
        self, chain: list[SpecRecord], method: str
    ) -> None:
        graph = DependencyGraph(chain)

        with pytest.raises(KeyError):
            _ = getattr(graph, method)("missing")

    def test_neighbors_follow_collection_order(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([
            make_spec("c", depends_on=["x"]),
            make_spec("a", depends_on=["x"]),
            make_spec("b", depends_on=["x"]),
            make_spec("x"),
        ])

        assert _ids(graph.get_complete_graph("x").required_by) == ["c", "a", "b"]

    def test_complete_graph_to_dict(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([
            make_spec("1", related=["3"]),
            make_spec("2", depends_on=["1"]),
            make_spec("3"),
        ])

        data = graph.get_complete_graph("1").to_dict()

        assert data["current"]["id"] == "1"
        assert data["dependsOn"] == []
        assert [s["id"] for s in data["requiredBy"]] == ["2"]
        assert [s["id"] for s in data["related"]] == ["3"]


class TestImpactRadius:
    def test_default_depth_is_three(self, chain: list[SpecRecord]) -> None:
        radius = DependencyGraph(chain).impact_radius("1")

        assert radius.max_depth == 3
        assert radius.depth == 3
        assert _ids(radius.affected) == ["2", "3", "4"]
        assert _ids(radius.layers[0]) == ["1"]

    def test_unbounded_depth(self, chain: list[SpecRecord]) -> None:
        radius = DependencyGraph(chain).impact_radius("1", None)

        assert radius.max_depth is None
        assert _ids(radius.affected) == ["2", "3", "4", "5"]

    @pytest.mark.parametrize("depth", [0, -1, -10])
    def test_zero_or_negative_depth_is_only_the_spec(
        self, chain: list[SpecRecord], depth: int
    ) -> None:
        radius = DependencyGraph(chain).impact_radius("1", depth)

        assert radius.max_depth == 0
        assert [_ids(layer) for layer in radius.layers] == [["1"]]
        assert radius.affected == ()

    def test_configured_default_depth(self, chain: list[SpecRecord]) -> None:
        shallow = DependencyGraph(chain, GraphConfiguration(impact_max_depth=1))
        unbounded = DependencyGraph(chain, GraphConfiguration(impact_max_depth=None))

        assert _ids(shallow.impact_radius("1").affected) == ["2"]
        assert _ids(unbounded.impact_radius("1").affected) == ["2", "3", "4", "5"]
        assert _ids(shallow.impact_radius("1", 2).affected) == ["2", "3"]

    def test_diamond_visits_each_spec_once(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([
            make_spec("1"),
            make_spec("2", depends_on=["1"]),
            make_spec("3", depends_on=["1"]),
            make_spec("4", depends_on=["2", "3"]),
        ])

        radius = graph.impact_radius("1", None)

        assert [_ids(layer) for layer in radius.layers] == [["1"], ["2", "3"], ["4"]]

    def test_cycle_terminates(self, cyclic: list[SpecRecord]) -> None:
        radius = DependencyGraph(cyclic).impact_radius("1", None)

        assert [_ids(layer) for layer in radius.layers] == [["1"], ["2", "3"]]

    def test_leaf_has_no_impact(self, chain: list[SpecRecord]) -> None:
        radius = DependencyGraph(chain).impact_radius("5", None)

        assert radius.depth == 0

    def test_to_dict(self, chain: list[SpecRecord]) -> None:
        data = DependencyGraph(chain).impact_radius("4").to_dict()

        assert data["current"]["id"] == "4"
        assert data["maxDepth"] == 3
        assert [[s["id"] for s in layer] for layer in data["layers"]] == [
            ["4"],
            ["5"],
        ]


class TestUpstreamDownstream:
    def test_upstream_nearest_first(self, chain: list[SpecRecord]) -> None:
        graph = DependencyGraph(chain)

        assert _ids(graph.get_upstream("5")) == ["4", "3", "2"]
        assert _ids(graph.get_upstream("5", None)) == ["4", "3", "2", "1"]
        assert graph.get_upstream("1") == ()

    def test_downstream_matches_impact_radius(self, chain: list[SpecRecord]) -> None:
        graph = DependencyGraph(chain)

        assert _ids(graph.get_downstream("1", 2)) == ["2", "3"]
        radius = graph.impact_radius("1", None)
        assert graph.get_downstream("1", None) == radius.affected


class TestCycles:
    def test_circular_dependency_is_reachable(self, cyclic: list[SpecRecord]) -> None:
        graph = DependencyGraph(cyclic)

        assert graph.has_circular_dependency("1")
        assert graph.has_circular_dependency("2")
        assert graph.has_circular_dependency("3")
        assert not graph.has_circular_dependency("4")

    def test_acyclic_graph(self, chain: list[SpecRecord]) -> None:
        graph = DependencyGraph(chain)

        assert not any(graph.has_circular_dependency(s.id) for s in chain)
        assert graph.find_cycle() == ()

    def test_find_cycle_returns_closed_dependency_path(
        self, cyclic: list[SpecRecord]
    ) -> None:
        graph = DependencyGraph(cyclic)

        cycle = graph.find_cycle()

        assert len(cycle) >= 3
        assert cycle[0] == cycle[-1]
        for current, dependency in pairwise(cycle):
            assert dependency in graph.node(current).depends_on

    def test_longer_cycle(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([
            make_spec("a", depends_on=["b"]),
            make_spec("b", depends_on=["c"]),
            make_spec("c", depends_on=["a"]),
        ])

        cycle = graph.find_cycle()

        assert set(cycle) == {"a", "b", "c"}
        assert len(cycle) == 4

    def test_self_dependency_is_a_cycle(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph([
            make_spec("a", depends_on=["a"]),
            make_spec("b", depends_on=["a"]),
            make_spec("c"),
        ])

        assert graph.has_circular_dependency("a")
        assert graph.has_circular_dependency("b")
        assert not graph.has_circular_dependency("c")
        assert graph.find_cycle() == ("a", "a")

    def test_self_dependency_does_not_repeat_in_impact(
        self, make_spec: SpecFactory
    ) -> None:
        graph = DependencyGraph([
            make_spec("a", depends_on=["a"]),
            make_spec("b", depends_on=["a"]),
        ])

        radius = graph.impact_radius("a", None)

        assert [[s.id for s in layer] for layer in radius.layers] == [["a"], ["b"]]
        assert _ids(graph.get_upstream("a", None)) == []


class TestReferenceIssues:
    def test_uses_configured_severity(self, make_spec: SpecFactory) -> None:
        graph = DependencyGraph(
            [make_spec("1", depends_on=["999", "1"]), make_spec("2", related=["1"])],
            GraphConfiguration(reference_severity="error"),
        )

        issues = graph.reference_issues()

        assert [(i.spec_id, i.field, i.reference) for i in issues] == [
            ("1", RelationshipField.DEPENDS_ON, "999"),
            ("1", RelationshipField.DEPENDS_ON, "1"),
        ]
        assert {i.severity for i in issues} == {"error"}
