from .directory import Organization, Service, CaseStudy
from .keyword_dictionary import KeywordDictionaries, KeywordTable
from .company_size import (
    COMPANY_SIZE_BUCKETS,
    SizeBucket,
    bucket_for_employee_count,
    get_size_bucket,
)
from .search import (
    ALL_COLLECTIONS,
    CollectionResult,
    EntityKind,
    ExtractedEntity,
    FacetBucket,
    FacetSet,
    FanOutResult,
    QueryAnalysis,
    SearchCollection,
    SearchFilter,
    SearchIntent,
    SmartSearchResult,
    SortBy,
    SortOrder,
    YearRange,
)

__all__ = [
    "Organization",
    "Service",
    "CaseStudy",
    "KeywordDictionaries",
    "KeywordTable",
    "COMPANY_SIZE_BUCKETS",
    "SizeBucket",
    "bucket_for_employee_count",
    "get_size_bucket",
    "ALL_COLLECTIONS",
    "CollectionResult",
    "EntityKind",
    "ExtractedEntity",
    "FacetBucket",
    "FacetSet",
    "FanOutResult",
    "QueryAnalysis",
    "SearchCollection",
    "SearchFilter",
    "SearchIntent",
    "SmartSearchResult",
    "SortBy",
    "SortOrder",
    "YearRange",
]
