from .directory_store import SQLAlchemyDirectoryStore

__all__ = [
    "SQLAlchemyDirectoryStore",
]
