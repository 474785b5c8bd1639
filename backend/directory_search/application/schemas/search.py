"""Pydantic schemas for smart search API requests and responses."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field

from directory_search.domain.entities import (
    EntityKind,
    SearchCollection,
    SearchIntent,
    SortBy,
    SortOrder,
)


# ── Request Schemas ──────────────────────────────────────────────────


class SmartSearchRequest(BaseModel):
    """Request body for a natural-language directory search."""

    query: str = Field(default="", description="Free-text query, e.g. '東京のAIスタートアップ'")


class YearRangeSchema(BaseModel):
    min: int | None = Field(default=None, ge=0)
    max: int | None = Field(default=None, ge=0)


class AdvancedSearchRequest(BaseModel):
    """Explicit filter for the advanced (non-NLP) search."""

    free_text: str = Field(default="", max_length=200)
    target_collections: list[SearchCollection] = Field(default_factory=lambda: list(SearchCollection))
    industries: list[str] = []
    regions: list[str] = []
    categories: list[str] = []
    company_sizes: list[str] = []
    established_year_range: YearRangeSchema | None = None
    price_min: int | None = Field(default=None, ge=0, description="Lowest service price floor (yen)")
    price_ceiling: int | None = Field(default=None, ge=0)
    has_awards: bool = False
    has_certifications: bool = False
    sort_by: SortBy = SortBy.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    limit: int = Field(default=20, ge=1, le=100)
    offset: int = Field(default=0, ge=0)


# ── Response Schemas ─────────────────────────────────────────────────


class ExtractedEntitySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    kind: EntityKind
    value: str | int
    confidence: float
    matched_text: str


class SearchFilterSchema(BaseModel):
    """The structured filter derived from the query."""

    free_text: str
    target_collections: list[SearchCollection]
    industries: list[str] = []
    regions: list[str] = []
    categories: list[str] = []
    company_sizes: list[str] = []
    established_year_range: YearRangeSchema | None = None
    price_min: int | None = None
    price_ceiling: int | None = None
    has_awards: bool = False
    has_certifications: bool = False
    sort_by: SortBy
    sort_order: SortOrder
    limit: int
    offset: int


class OrganizationSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    description: str | None = None
    industry: str | None = None
    address_region: str | None = None
    employee_count: int | None = None
    established_at: date | None = None
    url: str | None = None
    awards: list[str] | None = None
    certifications: list[str] | None = None
    updated_at: datetime | None = None


class ServiceSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    name: str
    organization_id: str
    description: str | None = None
    category: str | None = None
    price_min: int | None = None
    price_max: int | None = None
    updated_at: datetime | None = None
    organization: OrganizationSchema | None = None


class CaseStudySchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: str
    title: str
    organization_id: str
    summary: str | None = None
    industry: str | None = None
    updated_at: datetime | None = None
    organization: OrganizationSchema | None = None


class FacetBucketSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    name: str
    count: int


class FacetSetSchema(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    industries: list[FacetBucketSchema] = []
    regions: list[FacetBucketSchema] = []
    categories: list[FacetBucketSchema] = []
    company_sizes: list[FacetBucketSchema] = []


class QueryAnalysisSchema(BaseModel):
    """Query understanding only, without store access."""

    original_query: str
    processed_query: str
    intent: SearchIntent
    entities: list[ExtractedEntitySchema] = []
    filter: SearchFilterSchema
    confidence_score: float


class SmartSearchResultSchema(BaseModel):
    """Full smart search response."""

    original_query: str
    processed_query: str
    intent: SearchIntent
    entities: list[ExtractedEntitySchema] = []
    filter: SearchFilterSchema
    confidence_score: float
    organizations: list[OrganizationSchema] = []
    services: list[ServiceSchema] = []
    case_studies: list[CaseStudySchema] = []
    facets: FacetSetSchema
    suggestions: list[str] = []
    explanation: str = ""
    total_found: int = 0
    elapsed_ms: int = 0


class AdvancedSearchResultSchema(BaseModel):
    """Collections and facets for an explicit filter."""

    organizations: list[OrganizationSchema] = []
    services: list[ServiceSchema] = []
    case_studies: list[CaseStudySchema] = []
    facets: FacetSetSchema
    total_found: int = 0


class AutocompleteResponse(BaseModel):
    query: str
    suggestions: list[str] = []
