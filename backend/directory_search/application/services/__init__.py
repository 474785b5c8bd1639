from .entity_extractor import EntityExtractor, normalize_query
from .intent_classifier import IntentClassifier, IntentRule, DEFAULT_INTENT_RULES
from .filter_builder import FilterBuilder, DEFAULT_COLLECTION_MAP
from .collection_searcher import (
    CollectionSearcher,
    OrganizationSearcher,
    ServiceSearcher,
    CaseStudySearcher,
    build_default_searchers,
)
from .facet_aggregator import FacetAggregator
from .query_orchestrator import QueryOrchestrator
from .suggestion_generator import SuggestionGenerator
from .explanation_builder import ExplanationBuilder
from .smart_search_service import SmartSearchService, calculate_confidence

__all__ = [
    "EntityExtractor",
    "normalize_query",
    "IntentClassifier",
    "IntentRule",
    "DEFAULT_INTENT_RULES",
    "FilterBuilder",
    "DEFAULT_COLLECTION_MAP",
    "CollectionSearcher",
    "OrganizationSearcher",
    "ServiceSearcher",
    "CaseStudySearcher",
    "build_default_searchers",
    "FacetAggregator",
    "QueryOrchestrator",
    "SuggestionGenerator",
    "ExplanationBuilder",
    "SmartSearchService",
    "calculate_confidence",
]
