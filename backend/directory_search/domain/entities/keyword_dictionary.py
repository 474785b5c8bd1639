"""Static keyword dictionaries used for entity extraction."""

from dataclasses import dataclass

KeywordTable = tuple[tuple[str, str], ...]


@dataclass(frozen=True)
class KeywordDictionaries:
    """Ordered keyword → canonical value tables.

    Tuples rather than dicts: iteration order decides the order in which
    entities are emitted, and the tables are never mutated after loading.
    """

    industries: KeywordTable = ()
    locations: KeywordTable = ()
    company_sizes: KeywordTable = ()
