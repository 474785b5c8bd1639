"""Search API controller with endpoints for smart, advanced and type-ahead search."""

from fastapi import APIRouter, Depends, HTTPException, Query, status

from directory_search.application.schemas.search import (
    AdvancedSearchRequest,
    AdvancedSearchResultSchema,
    AutocompleteResponse,
    CaseStudySchema,
    ExtractedEntitySchema,
    FacetSetSchema,
    OrganizationSchema,
    QueryAnalysisSchema,
    SearchFilterSchema,
    ServiceSchema,
    SmartSearchRequest,
    SmartSearchResultSchema,
    YearRangeSchema,
)
from directory_search.application.services.smart_search_service import SmartSearchService
from directory_search.domain.entities import (
    ExtractedEntity,
    FacetSet,
    SearchFilter,
    YearRange,
)
from directory_search.domain.exceptions import QueryValidationError
from directory_search.infrastructure.dependencies import get_smart_search_service

router = APIRouter(prefix="/search", tags=["search"])


# ── Helpers ──────────────────────────────────────────────────────────


def _to_filter_schema(search_filter: SearchFilter) -> SearchFilterSchema:
    year_range = search_filter.established_year_range
    return SearchFilterSchema(
        free_text=search_filter.free_text,
        target_collections=sorted(search_filter.target_collections, key=lambda c: c.value),
        industries=list(search_filter.industries),
        regions=list(search_filter.regions),
        categories=list(search_filter.categories),
        company_sizes=list(search_filter.company_sizes),
        established_year_range=(
            YearRangeSchema(min=year_range.min, max=year_range.max) if year_range else None
        ),
        price_min=search_filter.price_min,
        price_ceiling=search_filter.price_ceiling,
        has_awards=search_filter.has_awards,
        has_certifications=search_filter.has_certifications,
        sort_by=search_filter.sort_by,
        sort_order=search_filter.sort_order,
        limit=search_filter.limit,
        offset=search_filter.offset,
    )


def _to_entity_schemas(entities: tuple[ExtractedEntity, ...]) -> list[ExtractedEntitySchema]:
    return [ExtractedEntitySchema.model_validate(e, from_attributes=True) for e in entities]


def _to_facet_schema(facets: FacetSet) -> FacetSetSchema:
    return FacetSetSchema.model_validate(facets, from_attributes=True)


def _to_search_filter(body: AdvancedSearchRequest) -> SearchFilter:
    year_range = None
    if body.established_year_range is not None:
        year_range = YearRange(
            min=body.established_year_range.min,
            max=body.established_year_range.max,
        )
    return SearchFilter(
        free_text=body.free_text.lower().strip(),
        target_collections=frozenset(body.target_collections),
        industries=tuple(body.industries),
        regions=tuple(body.regions),
        categories=tuple(body.categories),
        company_sizes=tuple(body.company_sizes),
        established_year_range=year_range,
        price_min=body.price_min,
        price_ceiling=body.price_ceiling,
        has_awards=body.has_awards,
        has_certifications=body.has_certifications,
        sort_by=body.sort_by,
        sort_order=body.sort_order,
        limit=body.limit,
        offset=body.offset,
    )


# ── Endpoints ────────────────────────────────────────────────────────


@router.post("/smart", response_model=SmartSearchResultSchema)
async def smart_search(
    body: SmartSearchRequest,
    service: SmartSearchService = Depends(get_smart_search_service),
):
    """Understand a free-text query and search organizations, services and case studies."""
    try:
        result = await service.execute_smart_search(body.query)
    except QueryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return SmartSearchResultSchema(
        original_query=result.original_query,
        processed_query=result.processed_query,
        intent=result.intent,
        entities=_to_entity_schemas(result.entities),
        filter=_to_filter_schema(result.filter),
        confidence_score=result.confidence_score,
        organizations=[OrganizationSchema.model_validate(o, from_attributes=True) for o in result.organizations],
        services=[ServiceSchema.model_validate(s, from_attributes=True) for s in result.services],
        case_studies=[CaseStudySchema.model_validate(c, from_attributes=True) for c in result.case_studies],
        facets=_to_facet_schema(result.facets),
        suggestions=list(result.suggestions),
        explanation=result.explanation,
        total_found=result.total_found,
        elapsed_ms=result.elapsed_ms,
    )


@router.post("/analyze", response_model=QueryAnalysisSchema)
async def analyze_query(
    body: SmartSearchRequest,
    service: SmartSearchService = Depends(get_smart_search_service),
):
    """Resolve entities, intent and filter only (no search), useful for debugging."""
    try:
        analysis = service.analyze(body.query)
    except QueryValidationError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))

    return QueryAnalysisSchema(
        original_query=analysis.original_query,
        processed_query=analysis.processed_query,
        intent=analysis.intent,
        entities=_to_entity_schemas(analysis.entities),
        filter=_to_filter_schema(analysis.filter),
        confidence_score=analysis.confidence_score,
    )


@router.post("/advanced", response_model=AdvancedSearchResultSchema)
async def advanced_search(
    body: AdvancedSearchRequest,
    service: SmartSearchService = Depends(get_smart_search_service),
):
    """Search with an explicit filter instead of a free-text query."""
    outcome = await service.search_with_filter(_to_search_filter(body))
    return AdvancedSearchResultSchema(
        organizations=[
            OrganizationSchema.model_validate(o, from_attributes=True) for o in outcome.organizations.items
        ],
        services=[ServiceSchema.model_validate(s, from_attributes=True) for s in outcome.services.items],
        case_studies=[
            CaseStudySchema.model_validate(c, from_attributes=True) for c in outcome.case_studies.items
        ],
        facets=_to_facet_schema(outcome.facets),
        total_found=outcome.total_found,
    )


@router.get("/suggest", response_model=AutocompleteResponse)
async def suggest(
    q: str = Query(default="", max_length=100),
    limit: int = Query(default=10, ge=1, le=50),
    service: SmartSearchService = Depends(get_smart_search_service),
):
    """Type-ahead suggestions from published names and industries."""
    suggestions = await service.autocomplete(q, limit=limit)
    return AutocompleteResponse(query=q, suggestions=suggestions)
