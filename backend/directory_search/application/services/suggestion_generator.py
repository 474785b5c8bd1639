"""Follow-up query suggestions derived from intent, entities and raw tokens."""

from directory_search.domain.entities import EntityKind, ExtractedEntity, SearchIntent

MAX_SUGGESTIONS = 8

_INTENT_TEMPLATES: dict[SearchIntent, tuple[str, ...]] = {
    SearchIntent.FIND_ORGANIZATION: ("{query} サービス", "{query} 事例", "{query} 比較"),
    SearchIntent.FIND_SERVICE: ("{query} 企業", "{query} 導入事例", "{query} 料金"),
}

_ENTITY_TEMPLATES: dict[EntityKind, tuple[str, ...]] = {
    EntityKind.INDUSTRY: ("{value} 企業 一覧", "{value} サービス 比較", "{value} 市場 分析"),
    EntityKind.LOCATION: ("{value} IT企業", "{value} システム開発", "{value} スタートアップ"),
}

_TOKEN_TEMPLATES: tuple[str, ...] = ("{token} 比較", "{token} 導入", "{token} 評判")


class SuggestionGenerator:
    def __init__(self, max_suggestions: int = MAX_SUGGESTIONS):
        self._max_suggestions = max_suggestions

    def generate(
        self,
        original_query: str,
        intent: SearchIntent,
        entities: list[ExtractedEntity],
    ) -> list[str]:
        candidates: list[str] = []

        for template in _INTENT_TEMPLATES.get(intent, ()):
            candidates.append(template.format(query=original_query))

        for entity in entities:
            for template in _ENTITY_TEMPLATES.get(entity.kind, ()):
                candidates.append(template.format(value=entity.value))

        # split() also breaks on full-width spaces (U+3000)
        for token in original_query.split():
            if len(token) > 1:
                candidates.extend(template.format(token=token) for template in _TOKEN_TEMPLATES)

        seen: set[str] = set()
        unique: list[str] = []
        for candidate in candidates:
            if candidate not in seen:
                seen.add(candidate)
                unique.append(candidate)
        return unique[: self._max_suggestions]
