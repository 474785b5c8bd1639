"""Facet aggregation over the published directory.

Facets describe what is available overall, not what matches the current
narrowing: the free-text term and categorical filters are ignored so the UI
can always offer further refinements.
"""

import asyncio
import logging
from collections import Counter
from collections.abc import Awaitable, Iterable

from directory_search.application.interfaces import DirectoryStore, FacetCount
from directory_search.domain.entities import (
    COMPANY_SIZE_BUCKETS,
    FacetBucket,
    FacetSet,
    SearchCollection,
    SearchFilter,
    bucket_for_employee_count,
)

logger = logging.getLogger(__name__)

MAX_INDUSTRY_BUCKETS = 20
MAX_CATEGORY_BUCKETS = 20


def _sorted_buckets(counts: Iterable[tuple[str, int]], limit: int | None = None) -> tuple[FacetBucket, ...]:
    """Sort by count descending, ties by name, optionally truncated."""
    buckets = sorted(
        (FacetBucket(name=name, count=count) for name, count in counts if count > 0),
        key=lambda b: (-b.count, b.name),
    )
    if limit is not None:
        buckets = buckets[:limit]
    return tuple(buckets)


def _value_buckets(rows: list[FacetCount], limit: int | None) -> tuple[FacetBucket, ...]:
    counts: Counter[str] = Counter()
    for row in rows:
        if row.value is None or row.value == "":
            continue
        counts[str(row.value)] += row.count
    return _sorted_buckets(counts.items(), limit)


def _size_buckets(rows: list[FacetCount]) -> tuple[FacetBucket, ...]:
    counts: Counter[str] = Counter({bucket.name: 0 for bucket in COMPANY_SIZE_BUCKETS})
    for row in rows:
        if row.value is None:
            continue
        try:
            employees = int(row.value)
        except (TypeError, ValueError):
            logger.debug("Skipping non-numeric employee count %r", row.value)
            continue
        counts[bucket_for_employee_count(employees).name] += row.count
    # Zero-count buckets are dropped by _sorted_buckets
    return _sorted_buckets(counts.items())


class FacetAggregator:
    """Computes industries, regions, categories and company-size facets."""

    def __init__(self, store: DirectoryStore):
        self._store = store

    async def aggregate(
        self, search_filter: SearchFilter | None = None, *, timeout_seconds: float | None = None
    ) -> FacetSet:
        """Run the four facet queries concurrently.

        A failure or a query running past ``timeout_seconds`` empties only its
        own facet; the others are still returned.
        """
        store = self._store
        industries, regions, categories, sizes = await asyncio.gather(
            self._safe_facet(
                "industries", store.aggregate_facet(SearchCollection.ORGANIZATIONS, "industry"), timeout_seconds
            ),
            self._safe_facet(
                "regions", store.aggregate_facet(SearchCollection.ORGANIZATIONS, "address_region"), timeout_seconds
            ),
            self._safe_facet(
                "categories", store.aggregate_facet(SearchCollection.SERVICES, "category"), timeout_seconds
            ),
            self._safe_facet(
                "company_sizes",
                store.aggregate_facet(SearchCollection.ORGANIZATIONS, "employee_count"),
                timeout_seconds,
            ),
        )
        return FacetSet(
            industries=_value_buckets(industries, MAX_INDUSTRY_BUCKETS),
            regions=_value_buckets(regions, None),
            categories=_value_buckets(categories, MAX_CATEGORY_BUCKETS),
            company_sizes=_size_buckets(sizes),
        )

    @staticmethod
    async def _safe_facet(
        name: str, call: Awaitable[list[FacetCount]], timeout_seconds: float | None = None
    ) -> list[FacetCount]:
        try:
            return list(await asyncio.wait_for(call, timeout_seconds))
        except asyncio.TimeoutError:
            logger.warning("Facet '%s' exceeded %.1fs deadline; returning empty facet", name, timeout_seconds)
            return []
        except Exception as e:
            logger.warning("Facet '%s' aggregation failed: %s", name, e)
            return []
