"""FastAPI dependency injection. Wires infrastructure to the application layer."""

from collections.abc import AsyncGenerator

from directory_search.config import get_settings
from directory_search.application.interfaces import DirectoryStore
from directory_search.application.services import (
    EntityExtractor,
    FacetAggregator,
    FilterBuilder,
    IntentClassifier,
    QueryOrchestrator,
    SmartSearchService,
    build_default_searchers,
)
from directory_search.infrastructure.database.session import async_session_factory
from directory_search.infrastructure.database.repositories import SQLAlchemyDirectoryStore
from directory_search.infrastructure.keywords.yaml_keyword_loader import get_keyword_dictionaries


def build_smart_search_service(store: DirectoryStore) -> SmartSearchService:
    """Assemble the full pipeline around a directory store."""
    settings = get_settings()
    orchestrator = QueryOrchestrator(
        build_default_searchers(store),
        FacetAggregator(store),
        timeout_seconds=settings.search_timeout_seconds,
    )
    return SmartSearchService(
        extractor=EntityExtractor(get_keyword_dictionaries()),
        classifier=IntentClassifier(),
        filter_builder=FilterBuilder(
            default_limit=settings.default_result_limit,
            strict=not settings.is_production,
        ),
        orchestrator=orchestrator,
        store=store,
        max_query_length=settings.max_query_length,
    )


async def get_smart_search_service() -> AsyncGenerator[SmartSearchService, None]:
    """Provides a SmartSearchService backed by the SQLAlchemy directory store."""
    store = SQLAlchemyDirectoryStore(async_session_factory)
    yield build_smart_search_service(store)
