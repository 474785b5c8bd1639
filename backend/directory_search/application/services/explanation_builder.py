"""Human-readable explanation of what the query was understood to mean."""

from directory_search.domain.entities import EntityKind, ExtractedEntity, SearchIntent


def _values_of(entities: list[ExtractedEntity], kind: EntityKind) -> list[str]:
    return [str(e.value) for e in entities if e.kind == kind]


def describe_entity(entity: ExtractedEntity) -> str:
    if entity.kind == EntityKind.INDUSTRY:
        return f"業界: {entity.value}"
    if entity.kind == EntityKind.LOCATION:
        return f"地域: {entity.value}"
    if entity.kind == EntityKind.COMPANY_SIZE:
        return f"企業規模: {entity.value}"
    if entity.kind == EntityKind.YEAR:
        return f"年: {entity.value}"
    if entity.kind == EntityKind.PRICE_CEILING:
        return f"価格: {entity.value}円以下"
    return f"{entity.kind.value}: {entity.value}"


class ExplanationBuilder:
    """Renders the detected intent and entities as one Japanese sentence."""

    def build(
        self,
        original_query: str,
        intent: SearchIntent,
        entities: list[ExtractedEntity],
    ) -> str:
        if intent == SearchIntent.FIND_ORGANIZATION:
            explanation = f"\"{original_query}\"に関連する企業を検索しました。"
        elif intent == SearchIntent.FIND_SERVICE:
            explanation = f"\"{original_query}\"に関連するサービスを検索しました。"
        elif intent == SearchIntent.FIND_CASE_STUDY:
            explanation = f"\"{original_query}\"に関連する導入事例を検索しました。"
        elif intent == SearchIntent.LOCATION_SEARCH:
            locations = "、".join(_values_of(entities, EntityKind.LOCATION))
            explanation = f"{locations}エリアの企業・サービスを検索しました。"
        elif intent == SearchIntent.INDUSTRY_ANALYSIS:
            industries = "、".join(_values_of(entities, EntityKind.INDUSTRY))
            explanation = f"{industries}業界の分析結果を表示しています。"
        else:
            explanation = f"\"{original_query}\"の検索結果を表示しています。"

        if entities:
            detected = "、".join(describe_entity(e) for e in entities)
            explanation += f" 検出されたフィルター: {detected}"
        return explanation
