"""Search engine over an in-memory spec collection.

This module provides the SearchEngine class, which wires the query parser,
field matcher, scorer and ranker together and reports timing metadata.
"""

import time
from typing import TYPE_CHECKING, Final

from specindex.config import SearchConfiguration
from specindex.search._matcher import (
    first_failing_filter,
    match_spec,
    spec_contains_all_terms,
    spec_contains_any_term,
)
from specindex.search._models import (
    ParsedQuery,
    SearchMetadata,
    SearchResponse,
    SearchResult,
)
from specindex.search._parser import parse_query
from specindex.search._ranking import rank_results
from specindex.search._scoring import score_spec

if TYPE_CHECKING:
    from collections.abc import Iterable

    from structlog.typing import FilteringBoundLogger

    from specindex._models import SpecRecord

__all__ = ["SearchEngine", "search_specs"]


class SearchEngine:
    """Relevance search over spec snapshots.

    The engine holds configuration only; every call receives the collection to
    search, so one engine can serve many snapshots and threads.
    """

    __slots__: Final = ("_config", "_logger")

    _config: SearchConfiguration
    _logger: FilteringBoundLogger | None

    def __init__(
        self,
        config: SearchConfiguration | None = None,
        *,
        logger: FilteringBoundLogger | None = None,
    ) -> None:
        """Initialize the search engine.

        Args:
            config: Search settings. Defaults to SearchConfiguration().
            logger: Optional structlog logger for debug events.
        """
        self._config = config if config is not None else SearchConfiguration()
        self._logger = logger

    @property
    def config(self) -> SearchConfiguration:
        return self._config

    # -------------------------------------------------------------------------
    # Helper Methods
    # -------------------------------------------------------------------------

    def _is_eligible(self, spec: SpecRecord, query: ParsedQuery) -> bool:
        """Check archive visibility, filters, exclusions and the all-terms rule."""
        if (
            spec.is_archived
            and not self._config.include_archived
            and not query.requests_archived
        ):
            return False

        failed = first_failing_filter(spec, query.filters)
        if failed is not None:
            if self._logger is not None:
                self._logger.debug(
                    "spec_excluded_by_filter",
                    spec_id=spec.id,
                    field=failed.field.value,
                    value=failed.value,
                )
            return False

        if spec_contains_any_term(spec, query.excluded_terms):
            return False

        return spec_contains_all_terms(spec, query.terms)

    def _build_result(self, spec: SpecRecord, query: ParsedQuery) -> SearchResult:
        matches = match_spec(spec, query.terms, self._config.context_length)
        return SearchResult(
            spec=spec.summary(),
            score=score_spec(matches),
            total_matches=len(matches),
            matches=matches,
        )

    # -------------------------------------------------------------------------
    # Public Methods
    # -------------------------------------------------------------------------

    def search(self, query: str, specs: Iterable[SpecRecord]) -> SearchResponse:
        """Search a spec collection.

        A spec is returned only when it satisfies every filter, contains no
        excluded term, and contains every query term in at least one field.
        Filter-only queries return every eligible spec with a score of 0. An
        empty query returns no results.

        Args:
            query: Raw query string in the search mini-language.
            specs: The collection to search. It is read once and not mutated.

        Returns:
            Ranked results with metadata.
        """
        started = time.perf_counter()
        parsed = parse_query(query)
        collection = tuple(specs)

        results: list[SearchResult] = []
        if not parsed.is_empty:
            results.extend(
                self._build_result(spec, parsed)
                for spec in collection
                if self._is_eligible(spec, parsed)
            )

        ranked = rank_results(
            results,
            max_matches_per_spec=self._config.max_matches_per_spec,
            context_length=self._config.context_length,
        )
        elapsed_ms = round((time.perf_counter() - started) * 1000, 3)

        if self._logger is not None:
            self._logger.debug(
                "search_completed",
                query=query,
                terms=list(parsed.terms),
                filters=len(parsed.filters),
                results=len(ranked),
                specs_searched=len(collection),
                search_time_ms=elapsed_ms,
            )

        return SearchResponse(
            results=ranked,
            metadata=SearchMetadata(
                total_results=len(ranked),
                search_time=elapsed_ms,
                query=query,
                specs_searched=len(collection),
            ),
            parsed_query=parsed,
        )


def search_specs(
    query: str,
    specs: Iterable[SpecRecord],
    config: SearchConfiguration | None = None,
    *,
    logger: FilteringBoundLogger | None = None,
) -> SearchResponse:
    """Search a spec collection with a one-off engine.

    Examples:
        >>> from specindex import SpecRecord
        >>> specs = [SpecRecord(id="1", path="001-login", title="OAuth login")]
        >>> [r.spec.id for r in search_specs("oauth", specs).results]
        ['1']
    """
    return SearchEngine(config, logger=logger).search(query, specs)
