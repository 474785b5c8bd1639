"""Domain-specific exceptions, framework-independent."""


class QueryValidationError(Exception):
    """Raised when a search query is rejected before any processing."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid search query: {reason}")


class DataStoreError(Exception):
    """Raised when the directory data store cannot serve a read.

    Store-agnostic. Wraps driver errors, timeouts and schema mismatches.
    """

    def __init__(self, collection: str, operation: str, message: str):
        self.collection = collection
        self.operation = operation
        self.message = message
        super().__init__(f"[{collection}] {operation} failed: {message}")
