"""Smart search service. Turns a free-text query into structured multi-entity results.

Flow:
  1. Analysis: normalize → extract entities → classify intent → build filter.
  2. Fan-out: organizations, services and case studies searched concurrently
     alongside facet aggregation (see ``QueryOrchestrator``).
  3. Assembly: suggestions, explanation, totals and timing.

Only input validation errors reach the caller. Every store-side failure
degrades to partial results.
"""

import logging
import time

from directory_search.application.interfaces import DirectoryStore
from directory_search.application.services.entity_extractor import EntityExtractor, normalize_query
from directory_search.application.services.explanation_builder import ExplanationBuilder
from directory_search.application.services.filter_builder import FilterBuilder, process_query
from directory_search.application.services.intent_classifier import IntentClassifier
from directory_search.application.services.query_orchestrator import QueryOrchestrator
from directory_search.application.services.suggestion_generator import SuggestionGenerator
from directory_search.domain.entities import (
    ExtractedEntity,
    FanOutResult,
    QueryAnalysis,
    SearchCollection,
    SearchFilter,
    SearchIntent,
    SmartSearchResult,
)
from directory_search.domain.exceptions import QueryValidationError
from directory_search.infrastructure.logging.colored_logger import SearchPipelineLogger, SearchStage

logger = logging.getLogger(__name__)
plog = SearchPipelineLogger("SmartSearchService")

DEFAULT_MAX_QUERY_LENGTH = 200

NO_ENTITY_CONFIDENCE = 0.3
MAX_CONFIDENCE = 0.95
INTENT_BONUS = 0.2
GENERAL_INTENT_BONUS = 0.1

AUTOCOMPLETE_MIN_LENGTH = 2
AUTOCOMPLETE_SECONDARY_LIMIT = 5


def calculate_confidence(entities: list[ExtractedEntity], intent: SearchIntent) -> float:
    """Heuristic in [0, 0.95]: mean entity confidence plus an intent-specificity bonus."""
    if not entities:
        return NO_ENTITY_CONFIDENCE
    average = sum(e.confidence for e in entities) / len(entities)
    bonus = GENERAL_INTENT_BONUS if intent == SearchIntent.GENERAL_SEARCH else INTENT_BONUS
    return min(MAX_CONFIDENCE, average + bonus)


class SmartSearchService:
    """Application service for natural-language directory search."""

    def __init__(
        self,
        extractor: EntityExtractor,
        classifier: IntentClassifier,
        filter_builder: FilterBuilder,
        orchestrator: QueryOrchestrator,
        store: DirectoryStore,
        *,
        suggestion_generator: SuggestionGenerator | None = None,
        explanation_builder: ExplanationBuilder | None = None,
        max_query_length: int = DEFAULT_MAX_QUERY_LENGTH,
    ):
        self._extractor = extractor
        self._classifier = classifier
        self._filter_builder = filter_builder
        self._orchestrator = orchestrator
        self._store = store
        self._suggestions = suggestion_generator or SuggestionGenerator()
        self._explanations = explanation_builder or ExplanationBuilder()
        self._max_query_length = max_query_length

    def analyze(self, query: str) -> QueryAnalysis:
        """Understand the query without touching the data store."""
        self._validate(query)
        normalized = normalize_query(query)
        entities = self._extractor.extract(normalized)
        intent = self._classifier.classify(normalized, entities)
        search_filter = self._filter_builder.build(normalized, entities, intent)
        return QueryAnalysis(
            original_query=query,
            normalized_query=normalized,
            processed_query=process_query(normalized, entities),
            intent=intent,
            entities=tuple(entities),
            filter=search_filter,
            confidence_score=calculate_confidence(entities, intent),
        )

    async def execute_smart_search(self, query: str) -> SmartSearchResult:
        """Full flow: analyze → fan out → assemble."""
        start = time.monotonic()

        with plog.timed_step(SearchStage.ANALYZE, "Analyzing query", query=query):
            analysis = self.analyze(query)
        plog.stats(
            intent=analysis.intent.value,
            entities=len(analysis.entities),
            confidence=f"{analysis.confidence_score:.2f}",
            free_text=analysis.filter.free_text or "-",
        )

        with plog.timed_step(
            SearchStage.FAN_OUT,
            "Searching collections",
            collections=",".join(sorted(c.value for c in analysis.filter.target_collections)),
        ):
            outcome = await self._orchestrator.execute(analysis.filter)

        entities = list(analysis.entities)
        with plog.timed_step(SearchStage.SUGGEST, "Building suggestions and explanation"):
            suggestions = self._suggestions.generate(query, analysis.intent, entities)
            explanation = self._explanations.build(query, analysis.intent, entities)
        elapsed_ms = int((time.monotonic() - start) * 1000)

        result = SmartSearchResult(
            original_query=query,
            processed_query=analysis.processed_query,
            intent=analysis.intent,
            entities=analysis.entities,
            filter=analysis.filter,
            confidence_score=analysis.confidence_score,
            organizations=tuple(outcome.organizations.items),
            services=tuple(outcome.services.items),
            case_studies=tuple(outcome.case_studies.items),
            facets=outcome.facets,
            suggestions=tuple(suggestions),
            explanation=explanation,
            total_found=outcome.total_found,
            elapsed_ms=elapsed_ms,
        )
        plog.step_complete(
            SearchStage.COMPLETE,
            "Smart search finished",
            total_found=result.total_found,
            elapsed_ms=elapsed_ms,
        )
        return result

    async def search_with_filter(self, search_filter: SearchFilter) -> FanOutResult:
        """Advanced search: run a caller-built filter through the same fan-out."""
        logger.info("Advanced search: filter=%s", search_filter.as_log_dict())
        return await self._orchestrator.execute(search_filter)

    async def autocomplete(self, term: str, limit: int = 10) -> list[str]:
        """Type-ahead strings from organization names, industries and service names."""
        term = term.strip()
        if len(term) < AUTOCOMPLETE_MIN_LENGTH or limit <= 0:
            return []

        lookups = (
            (SearchCollection.ORGANIZATIONS, "name", limit),
            (SearchCollection.ORGANIZATIONS, "industry", AUTOCOMPLETE_SECONDARY_LIMIT),
            (SearchCollection.SERVICES, "name", AUTOCOMPLETE_SECONDARY_LIMIT),
        )
        collected: list[str] = []
        for collection, field_name, lookup_limit in lookups:
            try:
                values = await self._store.match_values(collection, field_name, term, lookup_limit)
            except Exception as e:
                # Keep whatever the earlier lookups produced
                logger.warning("Autocomplete lookup %s.%s failed: %s", collection.value, field_name, e)
                break
            for value in values:
                if value and value not in collected:
                    collected.append(value)
        return collected[:limit]

    def _validate(self, query: object) -> None:
        if not isinstance(query, str):
            raise QueryValidationError(f"query must be a string, got {type(query).__name__}")
        if len(query) > self._max_query_length:
            raise QueryValidationError(
                f"query exceeds {self._max_query_length} characters ({len(query)})"
            )
