"""Abstract data store interface (port) for the published directory collections."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import date
from typing import Any

from directory_search.domain.entities import SearchCollection


@dataclass(frozen=True)
class RangeBound:
    """Inclusive numeric or date range. Either bound may be absent."""

    min: int | date | None = None
    max: int | date | None = None

    @property
    def is_open(self) -> bool:
        return self.min is None and self.max is None


@dataclass(frozen=True)
class CollectionQuery:
    """Store-level lookup against one collection, restricted to published rows.

    ``range_any_filters`` holds alternatives: a row matches when its field
    falls inside at least one of the listed ranges. ``non_null_columns``
    keeps only rows where each listed column is set.
    """

    text_match_columns: tuple[str, ...] = ()
    text_term: str = ""
    equals_filters: dict[str, list[Any]] = field(default_factory=dict)
    range_filters: dict[str, RangeBound] = field(default_factory=dict)
    range_any_filters: dict[str, list[RangeBound]] = field(default_factory=dict)
    non_null_columns: tuple[str, ...] = ()
    sort_column: str | None = None
    sort_descending: bool = True
    limit: int = 20
    offset: int = 0


@dataclass
class CollectionPage:
    """Raw store answer: the requested page plus the unpaginated match count."""

    items: list[Any] = field(default_factory=list)
    total: int = 0


@dataclass(frozen=True)
class FacetCount:
    value: Any
    count: int


class DirectoryStore(ABC):
    """Port for read-only directory lookups, implemented in the infrastructure layer.

    Every method must be safe to call concurrently with itself and the others.
    Failures are raised as ``DataStoreError``.
    """

    @abstractmethod
    async def query_published(
        self,
        collection: SearchCollection,
        query: CollectionQuery,
    ) -> CollectionPage:
        """Run a filtered, sorted, paginated lookup over published rows."""
        ...

    @abstractmethod
    async def aggregate_facet(
        self,
        collection: SearchCollection,
        field_name: str,
    ) -> list[FacetCount]:
        """Count published rows per distinct non-null value of ``field_name``."""
        ...

    @abstractmethod
    async def match_values(
        self,
        collection: SearchCollection,
        field_name: str,
        term: str,
        limit: int = 10,
    ) -> list[str]:
        """Distinct published values of ``field_name`` containing ``term`` (case-insensitive)."""
        ...
