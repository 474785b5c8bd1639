"""Domain entities for smart directory search: query understanding and results."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from .directory import CaseStudy, Organization, Service


class EntityKind(str, Enum):
    """Kinds of typed fragments the extractor recognises in a query."""

    INDUSTRY = "industry"
    LOCATION = "location"
    COMPANY_SIZE = "company_size"
    YEAR = "year"
    PRICE_CEILING = "price_ceiling"


class SearchIntent(str, Enum):
    """The single classified purpose of a search query."""

    FIND_ORGANIZATION = "find_organization"
    FIND_SERVICE = "find_service"
    FIND_CASE_STUDY = "find_case_study"
    COMPARE_SERVICES = "compare_services"
    INDUSTRY_ANALYSIS = "industry_analysis"
    LOCATION_SEARCH = "location_search"
    SIZE_BASED_SEARCH = "size_based_search"
    GENERAL_SEARCH = "general_search"


class SearchCollection(str, Enum):
    """Independent result collections of the directory."""

    ORGANIZATIONS = "organizations"
    SERVICES = "services"
    CASE_STUDIES = "case_studies"


ALL_COLLECTIONS: frozenset[SearchCollection] = frozenset(SearchCollection)


class SortBy(str, Enum):
    RELEVANCE = "relevance"
    NAME = "name"
    ESTABLISHED = "established"
    UPDATED = "updated"


class SortOrder(str, Enum):
    ASC = "asc"
    DESC = "desc"


@dataclass(frozen=True)
class ExtractedEntity:
    """A typed, confidence-scored fragment of meaning found in the query text."""

    kind: EntityKind
    value: str | int
    confidence: float
    matched_text: str


@dataclass(frozen=True)
class YearRange:
    """Inclusive founding-year window. Either bound may be absent."""

    min: int | None = None
    max: int | None = None


@dataclass(frozen=True)
class SearchFilter:
    """Normalized, collection-agnostic query contract read by every searcher."""

    free_text: str = ""
    target_collections: frozenset[SearchCollection] = ALL_COLLECTIONS
    industries: tuple[str, ...] = ()
    regions: tuple[str, ...] = ()
    categories: tuple[str, ...] = ()
    company_sizes: tuple[str, ...] = ()
    established_year_range: YearRange | None = None
    price_min: int | None = None
    price_ceiling: int | None = None
    has_awards: bool = False
    has_certifications: bool = False
    sort_by: SortBy = SortBy.RELEVANCE
    sort_order: SortOrder = SortOrder.DESC
    limit: int = 20
    offset: int = 0

    def targets(self, collection: SearchCollection) -> bool:
        return collection in self.target_collections

    def as_log_dict(self) -> dict[str, Any]:
        """Compact representation for diagnostic log lines."""
        return {
            "free_text": self.free_text,
            "collections": sorted(c.value for c in self.target_collections),
            "industries": list(self.industries),
            "regions": list(self.regions),
            "categories": list(self.categories),
            "company_sizes": list(self.company_sizes),
            "established_year_range": (
                (self.established_year_range.min, self.established_year_range.max)
                if self.established_year_range
                else None
            ),
            "price_min": self.price_min,
            "price_ceiling": self.price_ceiling,
            "has_awards": self.has_awards,
            "has_certifications": self.has_certifications,
            "sort": f"{self.sort_by.value}:{self.sort_order.value}",
            "limit": self.limit,
            "offset": self.offset,
        }


@dataclass
class CollectionResult:
    """One page of one collection. ``error`` is set when the branch degraded."""

    items: list[Any] = field(default_factory=list)
    total: int = 0
    error: str | None = None

    @classmethod
    def empty(cls, error: str | None = None) -> "CollectionResult":
        return cls(items=[], total=0, error=error)


@dataclass(frozen=True)
class FacetBucket:
    name: str
    count: int


@dataclass(frozen=True)
class FacetSet:
    """Value→count distributions over the published directory."""

    industries: tuple[FacetBucket, ...] = ()
    regions: tuple[FacetBucket, ...] = ()
    categories: tuple[FacetBucket, ...] = ()
    company_sizes: tuple[FacetBucket, ...] = ()


@dataclass
class FanOutResult:
    """Merged output of the concurrent collection searches and facet aggregation."""

    organizations: CollectionResult = field(default_factory=CollectionResult)
    services: CollectionResult = field(default_factory=CollectionResult)
    case_studies: CollectionResult = field(default_factory=CollectionResult)
    facets: FacetSet = field(default_factory=FacetSet)

    @property
    def total_found(self) -> int:
        return len(self.organizations.items) + len(self.services.items) + len(self.case_studies.items)


@dataclass(frozen=True)
class QueryAnalysis:
    """Everything the pipeline understood about a query before touching the store."""

    original_query: str
    normalized_query: str
    processed_query: str
    intent: SearchIntent
    entities: tuple[ExtractedEntity, ...]
    filter: SearchFilter
    confidence_score: float


@dataclass(frozen=True)
class SmartSearchResult:
    """Terminal aggregate of one smart search. Owned by the caller."""

    original_query: str
    processed_query: str
    intent: SearchIntent
    entities: tuple[ExtractedEntity, ...]
    filter: SearchFilter
    confidence_score: float
    organizations: tuple[Organization, ...]
    services: tuple[Service, ...]
    case_studies: tuple[CaseStudy, ...]
    facets: FacetSet
    suggestions: tuple[str, ...]
    explanation: str
    total_found: int
    elapsed_ms: int
