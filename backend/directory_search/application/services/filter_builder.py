"""Filter builder. Maps extracted entities and intent onto a ``SearchFilter``."""

import logging
import re
from collections.abc import Mapping

from directory_search.domain.entities import (
    ALL_COLLECTIONS,
    EntityKind,
    ExtractedEntity,
    SearchCollection,
    SearchFilter,
    SearchIntent,
    SortBy,
    SortOrder,
    YearRange,
)

logger = logging.getLogger(__name__)

STOP_PARTICLES: tuple[str, ...] = ("の", "が", "を", "に", "で", "から", "まで", "について", "による")

YEAR_WINDOW = 5
DEFAULT_LIMIT = 20

_WHITESPACE = re.compile(r"\s+")

DEFAULT_COLLECTION_MAP: Mapping[SearchIntent, frozenset[SearchCollection]] = {
    SearchIntent.FIND_ORGANIZATION: frozenset({SearchCollection.ORGANIZATIONS}),
    SearchIntent.LOCATION_SEARCH: frozenset({SearchCollection.ORGANIZATIONS}),
    SearchIntent.SIZE_BASED_SEARCH: frozenset({SearchCollection.ORGANIZATIONS}),
    SearchIntent.INDUSTRY_ANALYSIS: frozenset({SearchCollection.ORGANIZATIONS}),
    SearchIntent.FIND_SERVICE: frozenset({SearchCollection.SERVICES}),
    SearchIntent.COMPARE_SERVICES: frozenset({SearchCollection.SERVICES}),
    SearchIntent.FIND_CASE_STUDY: frozenset({SearchCollection.CASE_STUDIES}),
    SearchIntent.GENERAL_SEARCH: ALL_COLLECTIONS,
}

# intent → (sort_by, limit); None keeps the default
_INTENT_OVERRIDES: dict[SearchIntent, tuple[SortBy, int | None]] = {
    SearchIntent.COMPARE_SERVICES: (SortBy.NAME, 10),
    SearchIntent.INDUSTRY_ANALYSIS: (SortBy.NAME, 50),
    SearchIntent.FIND_CASE_STUDY: (SortBy.UPDATED, None),
    SearchIntent.LOCATION_SEARCH: (SortBy.NAME, None),
    SearchIntent.SIZE_BASED_SEARCH: (SortBy.NAME, None),
}

_CATEGORICAL_FIELDS = {
    EntityKind.INDUSTRY: "industries",
    EntityKind.LOCATION: "regions",
    EntityKind.COMPANY_SIZE: "company_sizes",
}


def extract_search_terms(normalized_query: str, entities: list[ExtractedEntity]) -> str:
    """Free text left over once structured matches and stop particles are removed."""
    cleaned = normalized_query
    for entity in entities:
        cleaned = cleaned.replace(entity.matched_text, "", 1)
    for particle in STOP_PARTICLES:
        cleaned = cleaned.replace(particle, "")
    return _WHITESPACE.sub(" ", cleaned.strip())


def process_query(normalized_query: str, entities: list[ExtractedEntity]) -> str:
    """Annotate the query by replacing each match with ``[kind:value]``."""
    processed = normalized_query
    for entity in entities:
        processed = processed.replace(entity.matched_text, f"[{entity.kind.value}:{entity.value}]", 1)
    return processed


class FilterBuilder:
    """Builds the collection-agnostic filter for one query.

    ``strict`` makes an unmapped intent an assertion failure; otherwise it
    is logged and the query searches every collection.
    """

    def __init__(
        self,
        *,
        collection_map: Mapping[SearchIntent, frozenset[SearchCollection]] = DEFAULT_COLLECTION_MAP,
        default_limit: int = DEFAULT_LIMIT,
        strict: bool = True,
    ):
        self._collection_map = collection_map
        self._default_limit = default_limit
        self._strict = strict

    def build(
        self,
        normalized_query: str,
        entities: list[ExtractedEntity],
        intent: SearchIntent,
    ) -> SearchFilter:
        categorical: dict[str, list[str]] = {name: [] for name in _CATEGORICAL_FIELDS.values()}
        year_range: YearRange | None = None
        price_ceiling: int | None = None

        for entity in entities:
            field_name = _CATEGORICAL_FIELDS.get(entity.kind)
            if field_name is not None:
                values = categorical[field_name]
                if isinstance(entity.value, str) and entity.value not in values:
                    values.append(entity.value)
            # Multiple year or price mentions: the last one wins. Which one
            # the user meant is ambiguous.
            elif entity.kind == EntityKind.YEAR and isinstance(entity.value, int):
                year_range = YearRange(min=entity.value - YEAR_WINDOW, max=entity.value + YEAR_WINDOW)
            elif entity.kind == EntityKind.PRICE_CEILING and isinstance(entity.value, int):
                price_ceiling = entity.value

        sort_by = SortBy.RELEVANCE
        limit = self._default_limit
        override = _INTENT_OVERRIDES.get(intent)
        if override is not None:
            sort_by, override_limit = override
            if override_limit is not None:
                limit = override_limit

        return SearchFilter(
            free_text=extract_search_terms(normalized_query, entities),
            target_collections=self._collections_for(intent),
            industries=tuple(categorical["industries"]),
            regions=tuple(categorical["regions"]),
            company_sizes=tuple(categorical["company_sizes"]),
            established_year_range=year_range,
            price_ceiling=price_ceiling,
            sort_by=sort_by,
            sort_order=SortOrder.DESC,
            limit=limit,
            offset=0,
        )

    def _collections_for(self, intent: SearchIntent) -> frozenset[SearchCollection]:
        collections = self._collection_map.get(intent)
        if collections is not None:
            return collections
        if self._strict:
            raise AssertionError(f"No target collections mapped for intent {intent.value!r}")
        logger.error("No target collections mapped for intent %r, searching all collections", intent.value)
        return self._collection_map.get(SearchIntent.GENERAL_SEARCH, ALL_COLLECTIONS)
