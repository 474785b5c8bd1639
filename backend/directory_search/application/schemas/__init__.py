from .search import (
    SmartSearchRequest,
    AdvancedSearchRequest,
    YearRangeSchema,
    ExtractedEntitySchema,
    SearchFilterSchema,
    OrganizationSchema,
    ServiceSchema,
    CaseStudySchema,
    FacetBucketSchema,
    FacetSetSchema,
    QueryAnalysisSchema,
    SmartSearchResultSchema,
    AdvancedSearchResultSchema,
    AutocompleteResponse,
)

__all__ = [
    "SmartSearchRequest",
    "AdvancedSearchRequest",
    "YearRangeSchema",
    "ExtractedEntitySchema",
    "SearchFilterSchema",
    "OrganizationSchema",
    "ServiceSchema",
    "CaseStudySchema",
    "FacetBucketSchema",
    "FacetSetSchema",
    "QueryAnalysisSchema",
    "SmartSearchResultSchema",
    "AdvancedSearchResultSchema",
    "AutocompleteResponse",
]
