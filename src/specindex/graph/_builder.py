# pyright: reportUnknownVariableType=false, reportUnknownArgumentType=false
"""Dependency graph construction and queries.

This module provides the DependencyGraph class, which derives forward, reverse
and symmetric relationships from a spec collection and answers neighbor,
impact radius and cycle queries against the result.
"""

from enum import Enum, auto
from types import MappingProxyType
from typing import TYPE_CHECKING, Final

import rustworkx as rx

from specindex.config import GraphConfiguration
from specindex.exceptions import SpecNotFoundError
from specindex.graph._models import (
    CompleteDependencyGraph,
    DependencyNode,
    ImpactRadius,
    RelationshipField,
)

if TYPE_CHECKING:
    from collections.abc import Iterable, Mapping

    from structlog.typing import FilteringBoundLogger

    from specindex._models import SpecRecord, SpecSummary
    from specindex.graph._models import ReferenceIssue

__all__ = ["DependencyGraph", "ReferenceResolver", "build_dependency_graph"]


class _Depth(Enum):
    CONFIGURED = auto()


class _Direction(Enum):
    """Edge set followed by a traversal."""

    UPSTREAM = auto()
    DOWNSTREAM = auto()


class ReferenceResolver:
    """Resolves declared references to spec ids.

    A reference matches a spec id first, then a spec path, then a spec name.
    When several specs share a path or name, the first one in the collection
    wins.
    """

    __slots__: Final = ("_by_id", "_by_name", "_by_path")

    _by_id: dict[str, str]
    _by_path: dict[str, str]
    _by_name: dict[str, str]

    def __init__(self, specs: Iterable[SpecRecord]) -> None:
        self._by_id = {}
        self._by_path = {}
        self._by_name = {}
        for spec in specs:
            _ = self._by_id.setdefault(spec.id, spec.id)
            if spec.path:
                _ = self._by_path.setdefault(spec.path, spec.id)
            if spec.name:
                _ = self._by_name.setdefault(spec.name, spec.id)

    def resolve(self, reference: str) -> str | None:
        """Return the id the reference points to, or None if it dangles."""
        key = reference.strip()
        if not key:
            return None
        for index in (self._by_id, self._by_path, self._by_name):
            if key in index:
                return index[key]
        return None


class DependencyGraph:
    """Immutable dependency graph over a spec collection.

    Construction runs two passes: the first resolves every spec's declared
    `depends_on` and `related` references, the second adds the reverse
    `required_by` edges and makes `related` symmetric. References that do not
    resolve are dropped. A spec that depends on itself keeps the edge and
    forms a one-node cycle.

    A rustworkx digraph mirrors the `depends_on` edges (dependent to
    dependency) for cycle detection.
    """

    __slots__: Final = (
        "_config",
        "_cyclic",
        "_dangling",
        "_graph",
        "_indices",
        "_nodes",
        "_order",
        "_resolver",
        "_specs",
    )

    _config: GraphConfiguration
    _specs: Mapping[str, SpecRecord]
    _order: dict[str, int]
    _nodes: Mapping[str, DependencyNode]
    _resolver: ReferenceResolver
    _graph: rx.PyDiGraph[str, None]
    _indices: dict[str, int]
    _cyclic: frozenset[str]
    _dangling: int

    def __init__(
        self,
        specs: Iterable[SpecRecord],
        config: GraphConfiguration | None = None,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Build the graph.

        Args:
            specs: The whole spec collection. When ids repeat, the first spec
                wins and later ones are ignored.
            config: Graph settings. Defaults to GraphConfiguration().
            logger: Optional structlog logger for build events.
        """
        self._config = config if config is not None else GraphConfiguration()
        records: dict[str, SpecRecord] = {}
        for spec in specs:
            if spec.id in records:
                if logger is not None:
                    logger.warning(
                        "duplicate_spec_id",
                        spec_id=spec.id,
                        path=spec.path,
                        kept_path=records[spec.id].path,
                    )
                continue
            records[spec.id] = spec

        self._specs = MappingProxyType(records)
        self._order = {spec_id: position for position, spec_id in enumerate(records)}
        self._resolver = ReferenceResolver(records.values())
        self._dangling = 0

        nodes = self._build_nodes(logger)
        self._nodes = MappingProxyType(nodes)
        self._graph, self._indices = self._build_digraph(nodes)
        self._cyclic = frozenset(
            self._graph[index]
            for component in rx.strongly_connected_components(self._graph)
            if len(component) > 1
            or self._graph.has_edge(component[0], component[0])
            for index in component
        )

        if logger is not None:
            logger.debug(
                "graph_built",
                specs=len(records),
                edges=self._graph.num_edges(),
                dangling=self._dangling,
                cyclic=len(self._cyclic),
            )

    # -------------------------------------------------------------------------
    # Construction Helper Methods
    # -------------------------------------------------------------------------

    def _resolve_references(
        self,
        spec: SpecRecord,
        field: RelationshipField,
        references: Iterable[str],
        logger: FilteringBoundLogger | None,
    ) -> set[str]:
        """Resolve declared references, dropping dangling ones."""
        resolved: set[str] = set()
        for reference in references:
            target = self._resolver.resolve(reference)
            if target is None:
                self._dangling += 1
                if logger is not None:
                    logger.debug(
                        "dangling_reference",
                        spec_id=spec.id,
                        field=field.value,
                        reference=reference,
                    )
                continue
            resolved.add(target)
        return resolved

    def _build_nodes(
        self, logger: FilteringBoundLogger | None
    ) -> dict[str, DependencyNode]:
        # Pass 1: declared edges
        depends_on: dict[str, set[str]] = {}
        related: dict[str, set[str]] = {}
        for spec_id, spec in self._specs.items():
            depends_on[spec_id] = self._resolve_references(
                spec, RelationshipField.DEPENDS_ON, spec.depends_on, logger
            )
            related[spec_id] = self._resolve_references(
                spec, RelationshipField.RELATED, spec.related, logger
            )

        # Pass 2: reverse and symmetric edges
        required_by: dict[str, set[str]] = {spec_id: set() for spec_id in self._specs}
        for spec_id, targets in depends_on.items():
            for target in targets:
                required_by[target].add(spec_id)

        declared = {spec_id: tuple(targets) for spec_id, targets in related.items()}
        for spec_id, targets in declared.items():
            for target in targets:
                related[target].add(spec_id)

        return {
            spec_id: DependencyNode(
                depends_on=frozenset(depends_on[spec_id]),
                required_by=frozenset(required_by[spec_id]),
                related=frozenset(related[spec_id]),
            )
            for spec_id in self._specs
        }

    def _build_digraph(
        self, nodes: Mapping[str, DependencyNode]
    ) -> tuple[rx.PyDiGraph[str, None], dict[str, int]]:
        graph: rx.PyDiGraph[str, None] = rx.PyDiGraph(check_cycle=False)
        indices: dict[str, int] = {}

        for spec_id in nodes:
            indices[spec_id] = graph.add_node(spec_id)

        # A depends on B means edge A -> B
        for spec_id, node in nodes.items():
            for dep_id in self._ordered(node.depends_on):
                _ = graph.add_edge(indices[spec_id], indices[dep_id], None)

        return graph, indices

    # -------------------------------------------------------------------------
    # Query Helper Methods
    # -------------------------------------------------------------------------

    def _require(self, spec_id: str) -> SpecRecord:
        try:
            return self._specs[spec_id]
        except KeyError:
            msg = f"Spec not found: {spec_id}"
            raise SpecNotFoundError(msg, spec_id=spec_id) from None

    def _ordered(self, spec_ids: Iterable[str]) -> list[str]:
        """Sort spec ids into collection order."""
        return sorted(spec_ids, key=self._order.__getitem__)

    def _summaries(self, spec_ids: Iterable[str]) -> tuple[SpecSummary, ...]:
        return tuple(
            self._specs[spec_id].summary() for spec_id in self._ordered(spec_ids)
        )

    def _depth_limit(self, max_depth: int | None | _Depth) -> int | None:
        """Normalize a depth argument: None is unbounded, negatives become 0."""
        if max_depth is _Depth.CONFIGURED:
            max_depth = self._config.impact_max_depth
        return None if max_depth is None else max(max_depth, 0)

    def _traverse(
        self,
        spec_id: str,
        direction: _Direction,
        limit: int | None,
    ) -> list[list[str]]:
        """Breadth-first layers over one edge set, excluding the start node.

        Each spec is visited once, so cycles terminate.
        """
        visited = {spec_id}
        frontier = [spec_id]
        layers: list[list[str]] = []

        while frontier and (limit is None or len(layers) < limit):
            reached: set[str] = set()
            for current in frontier:
                node = self._nodes[current]
                match direction:
                    case _Direction.UPSTREAM:
                        neighbors = node.depends_on
                    case _Direction.DOWNSTREAM:
                        neighbors = node.required_by
                reached.update(neighbors - visited)
            if not reached:
                break
            visited |= reached
            frontier = self._ordered(reached)
            layers.append(frontier)

        return layers

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------

    def __contains__(self, spec_id: object) -> bool:
        return spec_id in self._specs

    def __len__(self) -> int:
        return len(self._specs)

    @property
    def config(self) -> GraphConfiguration:
        return self._config

    def specs(self) -> tuple[SpecRecord, ...]:
        """Return the indexed specs in collection order."""
        return tuple(self._specs.values())

    def spec(self, spec_id: str) -> SpecRecord:
        """Return the spec with the given id.

        Raises:
            SpecNotFoundError: If the id is not in the graph.
        """
        return self._require(spec_id)

    def node(self, spec_id: str) -> DependencyNode:
        """Return the resolved relationships of a spec.

        Raises:
            SpecNotFoundError: If the id is not in the graph.
        """
        _ = self._require(spec_id)
        return self._nodes[spec_id]

    def resolve(self, reference: str) -> str | None:
        """Resolve a reference (id, path or name) to a spec id."""
        return self._resolver.resolve(reference)

    def get_complete_graph(self, spec_id: str) -> CompleteDependencyGraph:
        """Get a spec with its direct upstream, downstream and related specs.

        Args:
            spec_id: The spec ID.

        Returns:
            CompleteDependencyGraph with neighbors in collection order.

        Raises:
            SpecNotFoundError: If the id is not in the graph.
        """
        spec = self._require(spec_id)
        node = self._nodes[spec_id]
        return CompleteDependencyGraph(
            current=spec.summary(),
            depends_on=self._summaries(node.depends_on),
            required_by=self._summaries(node.required_by),
            related=self._summaries(node.related),
        )

    def impact_radius(
        self,
        spec_id: str,
        max_depth: int | None | _Depth = _Depth.CONFIGURED,
    ) -> ImpactRadius:
        """Find the specs affected by a change to `spec_id`.

        Walks `required_by` edges breadth-first, visiting each spec once.

        Args:
            spec_id: The changed spec.
            max_depth: Maximum number of hops. Defaults to the configured
                `impact_max_depth`. None means unbounded; negative values
                behave as 0.

        Returns:
            ImpactRadius with one layer per hop distance.

        Raises:
            SpecNotFoundError: If the id is not in the graph.
        """
        current = self._require(spec_id).summary()
        limit = self._depth_limit(max_depth)
        layers = self._traverse(spec_id, _Direction.DOWNSTREAM, limit)
        return ImpactRadius(
            current=current,
            max_depth=limit,
            layers=(
                (current,),
                *(self._summaries(layer) for layer in layers),
            ),
        )

    def get_upstream(
        self,
        spec_id: str,
        max_depth: int | None | _Depth = _Depth.CONFIGURED,
    ) -> tuple[SpecSummary, ...]:
        """Get the specs `spec_id` transitively depends on, nearest first.

        Raises:
            SpecNotFoundError: If the id is not in the graph.
        """
        _ = self._require(spec_id)
        layers = self._traverse(
            spec_id, _Direction.UPSTREAM, self._depth_limit(max_depth)
        )
        return tuple(s for layer in layers for s in self._summaries(layer))

    def get_downstream(
        self,
        spec_id: str,
        max_depth: int | None | _Depth = _Depth.CONFIGURED,
    ) -> tuple[SpecSummary, ...]:
        """Get the specs that transitively depend on `spec_id`, nearest first.

        Raises:
            SpecNotFoundError: If the id is not in the graph.
        """
        return self.impact_radius(spec_id, max_depth).affected

    def has_circular_dependency(self, spec_id: str) -> bool:
        """Check whether a dependency cycle is reachable from `spec_id`.

        Raises:
            SpecNotFoundError: If the id is not in the graph.
        """
        _ = self._require(spec_id)
        if not self._cyclic:
            return False
        index = self._indices[spec_id]
        reachable = {index} | set(rx.descendants(self._graph, index))
        return any(self._graph[i] in self._cyclic for i in reachable)

    def find_cycle(self) -> tuple[str, ...]:
        """Return one dependency cycle as a closed path of spec ids.

        The first and last ids are the same. Returns an empty tuple when the
        graph is acyclic.
        """
        if not self._cyclic:
            return ()
        source = self._ordered(self._cyclic)[0]
        index = self._indices[source]
        if self._graph.has_edge(index, index):
            return (source, source)
        cycle_edges = rx.digraph_find_cycle(self._graph, index)
        if not cycle_edges:
            return ()
        # cycle_edges is a list of (source, target) index tuples
        cycle_ids = [self._graph[source_idx] for source_idx, _ in cycle_edges]
        _, last_target = cycle_edges[-1]
        cycle_ids.append(self._graph[last_target])
        return tuple(cycle_ids)

    def reference_issues(self) -> tuple[ReferenceIssue, ...]:
        """Report dangling and self references declared by the indexed specs.

        Issues carry the configured `reference_severity`. Specs dropped as
        duplicate ids are not checked.
        """
        from specindex.graph._validation import check_references  # noqa: PLC0415

        return check_references(
            self._specs.values(), severity=self._config.reference_severity
        )


def build_dependency_graph(
    specs: Iterable[SpecRecord],
    config: GraphConfiguration | None = None,
    *,
    logger: FilteringBoundLogger | None = None,
) -> DependencyGraph:
    """Build a dependency graph from a spec collection.

    Examples:
        >>> from specindex import SpecRecord
        >>> graph = build_dependency_graph([
        ...     SpecRecord(id="1", path="001-auth"),
        ...     SpecRecord(id="2", path="002-session", depends_on=("1",)),
        ... ])
        >>> [s.id for s in graph.get_complete_graph("1").required_by]
        ['2']
    """
    return DependencyGraph(specs, config, logger=logger)
