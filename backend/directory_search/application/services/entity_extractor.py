"""Entity extraction from keyword dictionaries and numeric patterns over query text.

Plain substring and regex matching; there is no tokenizer and no model.
Entities are emitted in a fixed order (industry, location, company size,
year, price) and, within each dictionary, in dictionary order.
"""

import re
from collections.abc import Callable
from datetime import datetime

from directory_search.domain.entities import EntityKind, ExtractedEntity, KeywordDictionaries, KeywordTable

DICTIONARY_CONFIDENCE = 0.9
COMPANY_SIZE_CONFIDENCE = 0.8
YEAR_CONFIDENCE = 0.95
PRICE_CONFIDENCE = 0.8

MIN_YEAR = 1900
PRICE_UNIT = 10_000  # 万

_YEAR_PATTERN = re.compile(r"(\d{4})年?")
_PRICE_PATTERN = re.compile(r"(\d+)万円?")


def normalize_query(raw_query: str) -> str:
    """Lower-case and trim, the precondition every pipeline stage relies on."""
    return raw_query.lower().strip()


def _current_year() -> int:
    return datetime.now().year


class EntityExtractor:
    """Finds industry, location, company-size, year and price mentions."""

    def __init__(
        self,
        dictionaries: KeywordDictionaries,
        *,
        current_year: Callable[[], int] = _current_year,
    ):
        self._dictionaries = dictionaries
        self._current_year = current_year

    def extract(self, normalized_query: str) -> list[ExtractedEntity]:
        entities: list[ExtractedEntity] = []
        entities.extend(
            self._match_keywords(
                normalized_query, self._dictionaries.industries, EntityKind.INDUSTRY, DICTIONARY_CONFIDENCE
            )
        )
        entities.extend(
            self._match_keywords(
                normalized_query, self._dictionaries.locations, EntityKind.LOCATION, DICTIONARY_CONFIDENCE
            )
        )
        entities.extend(
            self._match_keywords(
                normalized_query,
                self._dictionaries.company_sizes,
                EntityKind.COMPANY_SIZE,
                COMPANY_SIZE_CONFIDENCE,
            )
        )
        entities.extend(self._match_years(normalized_query))
        entities.extend(self._match_prices(normalized_query))
        return entities

    @staticmethod
    def _match_keywords(
        query: str,
        table: KeywordTable,
        kind: EntityKind,
        confidence: float,
    ) -> list[ExtractedEntity]:
        # No de-duplication: two keywords mapping to one canonical value both
        # produce an entity, keeping the provenance of each match.
        return [
            ExtractedEntity(kind=kind, value=canonical, confidence=confidence, matched_text=keyword)
            for keyword, canonical in table
            if keyword in query
        ]

    def _match_years(self, query: str) -> list[ExtractedEntity]:
        latest = self._current_year()
        found: list[ExtractedEntity] = []
        for match in _YEAR_PATTERN.finditer(query):
            year = int(match.group(1))
            if MIN_YEAR <= year <= latest:
                found.append(
                    ExtractedEntity(
                        kind=EntityKind.YEAR,
                        value=year,
                        confidence=YEAR_CONFIDENCE,
                        matched_text=match.group(0),
                    )
                )
        return found

    @staticmethod
    def _match_prices(query: str) -> list[ExtractedEntity]:
        return [
            ExtractedEntity(
                kind=EntityKind.PRICE_CEILING,
                value=int(match.group(1)) * PRICE_UNIT,
                confidence=PRICE_CONFIDENCE,
                matched_text=match.group(0),
            )
            for match in _PRICE_PATTERN.finditer(query)
        ]
