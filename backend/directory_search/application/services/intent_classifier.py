"""Rule-based intent classification.

Rules are evaluated in priority order and the first match wins. Explicit
intent words come before entity-derived signals: "東京の企業の事例" is a
case-study search, not a location search.
"""

from dataclasses import dataclass

from directory_search.domain.entities import EntityKind, ExtractedEntity, SearchIntent


@dataclass(frozen=True)
class IntentRule:
    """Matches when any keyword occurs in the query or an entity of ``entity_kind`` exists."""

    intent: SearchIntent
    keywords: tuple[str, ...] = ()
    entity_kind: EntityKind | None = None

    def matches(self, normalized_query: str, entities: list[ExtractedEntity]) -> bool:
        if any(keyword in normalized_query for keyword in self.keywords):
            return True
        if self.entity_kind is not None:
            return any(entity.kind == self.entity_kind for entity in entities)
        return False


# Ordered by priority
DEFAULT_INTENT_RULES: tuple[IntentRule, ...] = (
    IntentRule(SearchIntent.COMPARE_SERVICES, keywords=("比較", "違い", "vs")),
    IntentRule(SearchIntent.INDUSTRY_ANALYSIS, keywords=("業界", "市場", "トレンド")),
    IntentRule(SearchIntent.FIND_CASE_STUDY, keywords=("事例", "導入", "成功例")),
    IntentRule(SearchIntent.FIND_SERVICE, keywords=("サービス", "ツール", "システム")),
    IntentRule(SearchIntent.LOCATION_SEARCH, entity_kind=EntityKind.LOCATION),
    IntentRule(SearchIntent.SIZE_BASED_SEARCH, entity_kind=EntityKind.COMPANY_SIZE),
    IntentRule(SearchIntent.FIND_ORGANIZATION, keywords=("企業", "会社", "法人")),
)


class IntentClassifier:
    """Assigns exactly one ``SearchIntent`` to a normalized query."""

    def __init__(self, rules: tuple[IntentRule, ...] = DEFAULT_INTENT_RULES):
        self._rules = rules

    def classify(self, normalized_query: str, entities: list[ExtractedEntity]) -> SearchIntent:
        for rule in self._rules:
            if rule.matches(normalized_query, entities):
                return rule.intent
        return SearchIntent.GENERAL_SEARCH
