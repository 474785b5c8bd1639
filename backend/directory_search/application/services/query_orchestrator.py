"""Query orchestrator: concurrent fan-out to the collection searchers and facets.

Every branch is isolated: a failing or slow collection degrades to an empty
result and is logged, the others still answer. A directory search always
returns something rather than an all-or-nothing error.
"""

import asyncio
import logging

from directory_search.application.services.collection_searcher import CollectionSearcher
from directory_search.application.services.facet_aggregator import FacetAggregator
from directory_search.domain.entities import (
    CollectionResult,
    FacetSet,
    FanOutResult,
    SearchCollection,
    SearchFilter,
)

logger = logging.getLogger(__name__)

DEFAULT_TIMEOUT_SECONDS = 3.0


class QueryOrchestrator:
    """Runs one ``SearchFilter`` against every targeted collection plus facets.

    All branches share a single deadline. Branches still running when it
    expires are cancelled and awaited, so no task outlives the request.
    """

    def __init__(
        self,
        searchers: dict[SearchCollection, CollectionSearcher],
        facet_aggregator: FacetAggregator,
        *,
        timeout_seconds: float = DEFAULT_TIMEOUT_SECONDS,
    ):
        self._searchers = searchers
        self._facet_aggregator = facet_aggregator
        self._timeout_seconds = timeout_seconds

    async def execute(self, search_filter: SearchFilter) -> FanOutResult:
        collection_tasks: dict[SearchCollection, asyncio.Task[CollectionResult]] = {}
        for collection in SearchCollection:
            # Collections outside the target set stay empty and are never queried
            if not search_filter.targets(collection):
                continue
            searcher = self._searchers.get(collection)
            if searcher is None:
                logger.error("No searcher registered for collection '%s'", collection.value)
                continue
            collection_tasks[collection] = asyncio.create_task(
                self._run_collection(searcher, search_filter),
                name=f"search:{collection.value}",
            )
        # Each facet query carries the deadline itself, so one slow facet
        # empties only its own list
        facet_task = asyncio.create_task(self._run_facets(search_filter), name="search:facets")

        all_tasks: list[asyncio.Task] = [*collection_tasks.values(), facet_task]
        pending: set[asyncio.Task] = set()
        try:
            if collection_tasks:
                _, pending = await asyncio.wait(collection_tasks.values(), timeout=self._timeout_seconds)
            if pending:
                for task in pending:
                    logger.warning(
                        "Search branch '%s' exceeded %.1fs deadline; returning empty result. filter=%s",
                        task.get_name(),
                        self._timeout_seconds,
                        search_filter.as_log_dict(),
                    )
                    task.cancel()
                await asyncio.gather(*pending, return_exceptions=True)
            facets = await facet_task
        except asyncio.CancelledError:
            for task in all_tasks:
                task.cancel()
            raise

        result = FanOutResult()
        for collection, task in collection_tasks.items():
            branch = task.result() if task not in pending else CollectionResult.empty(error="timeout")
            setattr(result, collection.value, branch)
        result.facets = facets

        logger.info(
            "Fan-out complete: organizations=%d services=%d case_studies=%d timed_out=%d",
            len(result.organizations.items),
            len(result.services.items),
            len(result.case_studies.items),
            len(pending),
        )
        return result

    async def _run_collection(
        self,
        searcher: CollectionSearcher,
        search_filter: SearchFilter,
    ) -> CollectionResult:
        collection = searcher.collection.value
        try:
            result = await searcher.search(search_filter)
        except Exception:
            logger.exception(
                "Collection search '%s' failed unexpectedly. filter=%s",
                collection,
                search_filter.as_log_dict(),
            )
            return CollectionResult.empty(error="unexpected error")
        if result.error:
            logger.warning(
                "Collection search '%s' degraded to empty result: %s. filter=%s",
                collection,
                result.error,
                search_filter.as_log_dict(),
            )
        return result

    async def _run_facets(self, search_filter: SearchFilter) -> FacetSet:
        try:
            return await self._facet_aggregator.aggregate(search_filter, timeout_seconds=self._timeout_seconds)
        except Exception:
            logger.exception("Facet aggregation failed. filter=%s", search_filter.as_log_dict())
            return FacetSet()
