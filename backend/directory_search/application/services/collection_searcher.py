"""Collection searchers: one filtered, sorted, paginated lookup per collection.

The three variants share the ``SearchFilter`` contract and differ only in
their text-match columns, the filters they honour and their sort columns.
"""

import logging
from datetime import date
from typing import Any

from directory_search.application.interfaces import CollectionQuery, DirectoryStore, RangeBound
from directory_search.domain.entities import (
    CollectionResult,
    SearchCollection,
    SearchFilter,
    SortBy,
    SortOrder,
    get_size_bucket,
)
from directory_search.domain.exceptions import DataStoreError

logger = logging.getLogger(__name__)

FALLBACK_SORT_COLUMN = "updated_at"


class CollectionSearcher:
    """Base searcher. Subclasses declare their columns and add their filters."""

    collection: SearchCollection
    text_columns: tuple[str, ...] = ()
    sort_columns: dict[SortBy, str] = {}

    def __init__(self, store: DirectoryStore):
        self._store = store

    async def search(self, search_filter: SearchFilter) -> CollectionResult:
        """Query the store; a store failure degrades to an empty result carrying the error."""
        query = self.build_query(search_filter)
        try:
            page = await self._store.query_published(self.collection, query)
        except DataStoreError as e:
            return CollectionResult.empty(error=str(e))
        return CollectionResult(items=list(page.items), total=page.total)

    def build_query(self, search_filter: SearchFilter) -> CollectionQuery:
        sort_column = self._sort_column(search_filter.sort_by)
        return CollectionQuery(
            text_match_columns=self.text_columns,
            # Empty free text disables the clause rather than matching nothing
            text_term=search_filter.free_text.strip(),
            equals_filters=self._equals_filters(search_filter),
            range_filters=self._range_filters(search_filter),
            range_any_filters=self._range_any_filters(search_filter),
            non_null_columns=self._non_null_columns(search_filter),
            sort_column=sort_column,
            sort_descending=search_filter.sort_order == SortOrder.DESC,
            limit=search_filter.limit,
            offset=search_filter.offset,
        )

    def _equals_filters(self, search_filter: SearchFilter) -> dict[str, list[Any]]:
        return {}

    def _range_filters(self, search_filter: SearchFilter) -> dict[str, RangeBound]:
        return {}

    def _range_any_filters(self, search_filter: SearchFilter) -> dict[str, list[RangeBound]]:
        return {}

    def _non_null_columns(self, search_filter: SearchFilter) -> tuple[str, ...]:
        return ()

    def _sort_column(self, sort_by: SortBy) -> str | None:
        # No scoring function exists: relevance keeps the store's default order.
        if sort_by == SortBy.RELEVANCE:
            return None
        return self.sort_columns.get(sort_by, FALLBACK_SORT_COLUMN)


class OrganizationSearcher(CollectionSearcher):
    collection = SearchCollection.ORGANIZATIONS
    text_columns = ("name", "description", "industry")
    sort_columns = {
        SortBy.NAME: "name",
        SortBy.ESTABLISHED: "established_at",
        SortBy.UPDATED: "updated_at",
    }

    def _equals_filters(self, search_filter: SearchFilter) -> dict[str, list[Any]]:
        filters: dict[str, list[Any]] = {}
        if search_filter.industries:
            filters["industry"] = list(search_filter.industries)
        if search_filter.regions:
            filters["address_region"] = list(search_filter.regions)
        return filters

    def _range_filters(self, search_filter: SearchFilter) -> dict[str, RangeBound]:
        year_range = search_filter.established_year_range
        if year_range is None:
            return {}
        # Zero or missing years must not turn into a degenerate date bound
        min_date = date(year_range.min, 1, 1) if _valid_year(year_range.min) else None
        max_date = date(year_range.max, 12, 31) if _valid_year(year_range.max) else None
        bound = RangeBound(min=min_date, max=max_date)
        return {} if bound.is_open else {"established_at": bound}

    def _range_any_filters(self, search_filter: SearchFilter) -> dict[str, list[RangeBound]]:
        ranges: list[RangeBound] = []
        for size in search_filter.company_sizes:
            bucket = get_size_bucket(size)
            if bucket is None:
                logger.debug("Ignoring unknown company size %r", size)
                continue
            ranges.append(RangeBound(min=bucket.min_employees, max=bucket.max_employees))
        return {"employee_count": ranges} if ranges else {}

    def _non_null_columns(self, search_filter: SearchFilter) -> tuple[str, ...]:
        columns: list[str] = []
        if search_filter.has_awards:
            columns.append("awards")
        if search_filter.has_certifications:
            columns.append("certifications")
        return tuple(columns)


class ServiceSearcher(CollectionSearcher):
    collection = SearchCollection.SERVICES
    text_columns = ("name", "description", "category")
    sort_columns = {
        SortBy.NAME: "name",
        SortBy.UPDATED: "updated_at",
    }

    def _equals_filters(self, search_filter: SearchFilter) -> dict[str, list[Any]]:
        if search_filter.categories:
            return {"category": list(search_filter.categories)}
        return {}

    def _range_filters(self, search_filter: SearchFilter) -> dict[str, RangeBound]:
        filters: dict[str, RangeBound] = {}
        floor = search_filter.price_min
        if floor is not None and floor > 0:
            filters["price_min"] = RangeBound(min=floor)
        ceiling = search_filter.price_ceiling
        if ceiling is not None and ceiling > 0:
            filters["price_max"] = RangeBound(max=ceiling)
        return filters


class CaseStudySearcher(CollectionSearcher):
    collection = SearchCollection.CASE_STUDIES
    text_columns = ("title", "summary", "industry")
    sort_columns = {
        SortBy.NAME: "title",
        SortBy.UPDATED: "updated_at",
    }

    def _equals_filters(self, search_filter: SearchFilter) -> dict[str, list[Any]]:
        if search_filter.industries:
            return {"industry": list(search_filter.industries)}
        return {}


def _valid_year(year: int | None) -> bool:
    return year is not None and 0 < year <= date.max.year


def build_default_searchers(store: DirectoryStore) -> dict[SearchCollection, CollectionSearcher]:
    """One searcher per collection, all sharing the same store."""
    searchers: list[CollectionSearcher] = [
        OrganizationSearcher(store),
        ServiceSearcher(store),
        CaseStudySearcher(store),
    ]
    return {searcher.collection: searcher for searcher in searchers}
