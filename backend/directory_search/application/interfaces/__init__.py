from .directory_store import (
    CollectionPage,
    CollectionQuery,
    DirectoryStore,
    FacetCount,
    RangeBound,
)

__all__ = [
    "CollectionPage",
    "CollectionQuery",
    "DirectoryStore",
    "FacetCount",
    "RangeBound",
]
