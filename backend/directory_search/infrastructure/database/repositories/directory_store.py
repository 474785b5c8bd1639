"""Concrete DirectoryStore backed by SQLAlchemy async sessions.

Each call opens its own short-lived session: an ``AsyncSession`` must not be
shared between concurrently running tasks, and the orchestrator fans out.
"""

import logging
from typing import Any

from sqlalchemy import and_, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker
from sqlalchemy.orm import InstrumentedAttribute, selectinload

from directory_search.application.interfaces import (
    CollectionPage,
    CollectionQuery,
    DirectoryStore,
    FacetCount,
    RangeBound,
)
from directory_search.domain.entities import CaseStudy, Organization, SearchCollection, Service
from directory_search.domain.exceptions import DataStoreError
from directory_search.infrastructure.database.models import (
    CaseStudyModel,
    OrganizationModel,
    ServiceModel,
)

logger = logging.getLogger(__name__)

# Connection failures from the async drivers surface as OSError, not SQLAlchemyError
_STORE_ERRORS = (SQLAlchemyError, OSError, TimeoutError)

_MODELS: dict[SearchCollection, type] = {
    SearchCollection.ORGANIZATIONS: OrganizationModel,
    SearchCollection.SERVICES: ServiceModel,
    SearchCollection.CASE_STUDIES: CaseStudyModel,
}


class SQLAlchemyDirectoryStore(DirectoryStore):
    """Implements the DirectoryStore port over the organizations/services/case_studies tables."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]):
        self._session_factory = session_factory

    async def query_published(
        self,
        collection: SearchCollection,
        query: CollectionQuery,
    ) -> CollectionPage:
        model = self._model(collection)
        conditions = self._conditions(collection, model, query)

        count_stmt = select(func.count()).select_from(model).where(*conditions)
        stmt = select(model).where(*conditions)
        if model is not OrganizationModel:
            stmt = stmt.options(selectinload(model.organization))
        if query.sort_column:
            sort_col = self._column(collection, model, query.sort_column)
            stmt = stmt.order_by(sort_col.desc() if query.sort_descending else sort_col.asc())
        stmt = stmt.offset(query.offset).limit(query.limit)

        try:
            async with self._session_factory() as session:
                total = (await session.execute(count_stmt)).scalar_one()
                rows = (await session.execute(stmt)).scalars().all()
        except _STORE_ERRORS as e:
            raise DataStoreError(collection.value, "query_published", str(e)) from e

        logger.debug(
            "query_published %s: total=%d returned=%d", collection.value, total, len(rows)
        )
        return CollectionPage(items=[self._to_entity(row) for row in rows], total=total)

    async def aggregate_facet(
        self,
        collection: SearchCollection,
        field_name: str,
    ) -> list[FacetCount]:
        model = self._model(collection)
        column = self._column(collection, model, field_name)
        stmt = (
            select(column, func.count())
            .where(model.published.is_(True), column.is_not(None))
            .group_by(column)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                rows = result.all()
        except _STORE_ERRORS as e:
            raise DataStoreError(collection.value, "aggregate_facet", str(e)) from e
        return [FacetCount(value=value, count=count) for value, count in rows]

    async def match_values(
        self,
        collection: SearchCollection,
        field_name: str,
        term: str,
        limit: int = 10,
    ) -> list[str]:
        model = self._model(collection)
        column = self._column(collection, model, field_name)
        stmt = (
            select(column)
            .where(
                model.published.is_(True),
                column.is_not(None),
                column.ilike(_like_pattern(term), escape="\\"),
            )
            .distinct()
            .limit(limit)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(stmt)
                values = result.scalars().all()
        except _STORE_ERRORS as e:
            raise DataStoreError(collection.value, "match_values", str(e)) from e
        return [str(v) for v in values]

    # ── Query building ───────────────────────────────────────────────

    def _conditions(self, collection: SearchCollection, model: type, query: CollectionQuery) -> list[Any]:
        conditions: list[Any] = [model.published.is_(True)]

        if query.text_term and query.text_match_columns:
            pattern = _like_pattern(query.text_term)
            conditions.append(
                or_(
                    *(
                        self._column(collection, model, c).ilike(pattern, escape="\\")
                        for c in query.text_match_columns
                    )
                )
            )

        for field_name, values in query.equals_filters.items():
            if values:
                conditions.append(self._column(collection, model, field_name).in_(values))

        for field_name, bound in query.range_filters.items():
            conditions.extend(self._range_clauses(self._column(collection, model, field_name), bound))

        for field_name, bounds in query.range_any_filters.items():
            column = self._column(collection, model, field_name)
            alternatives = []
            for bound in bounds:
                clauses = self._range_clauses(column, bound)
                if clauses:
                    alternatives.append(and_(*clauses))
            if alternatives:
                conditions.append(or_(*alternatives))

        for field_name in query.non_null_columns:
            conditions.append(self._column(collection, model, field_name).is_not(None))

        return conditions

    @staticmethod
    def _range_clauses(column: InstrumentedAttribute, bound: RangeBound) -> list[Any]:
        clauses: list[Any] = []
        if bound.min is not None:
            clauses.append(column >= bound.min)
        if bound.max is not None:
            clauses.append(column <= bound.max)
        return clauses

    @staticmethod
    def _model(collection: SearchCollection) -> type:
        model = _MODELS.get(collection)
        if model is None:
            raise DataStoreError(str(collection), "resolve_collection", "unknown collection")
        return model

    @staticmethod
    def _column(collection: SearchCollection, model: type, field_name: str) -> InstrumentedAttribute:
        if field_name not in model.__table__.columns:
            raise DataStoreError(collection.value, "resolve_column", f"unknown column '{field_name}'")
        return getattr(model, field_name)

    # ── Mapping ──────────────────────────────────────────────────────

    def _to_entity(self, model: Any) -> Organization | Service | CaseStudy:
        if isinstance(model, OrganizationModel):
            return self._to_organization(model)
        if isinstance(model, ServiceModel):
            return Service(
                id=model.id,
                name=model.name,
                organization_id=model.organization_id,
                description=model.description,
                category=model.category,
                price_min=model.price_min,
                price_max=model.price_max,
                updated_at=model.updated_at,
                organization=self._to_organization(model.organization) if model.organization else None,
            )
        return CaseStudy(
            id=model.id,
            title=model.title,
            organization_id=model.organization_id,
            summary=model.summary,
            industry=model.industry,
            updated_at=model.updated_at,
            organization=self._to_organization(model.organization) if model.organization else None,
        )

    @staticmethod
    def _to_organization(model: OrganizationModel) -> Organization:
        return Organization(
            id=model.id,
            name=model.name,
            description=model.description,
            industry=model.industry,
            address_region=model.address_region,
            employee_count=model.employee_count,
            established_at=model.established_at,
            url=model.url,
            awards=model.awards,
            certifications=model.certifications,
            updated_at=model.updated_at,
        )


def _like_pattern(term: str) -> str:
    """Substring LIKE pattern with the wildcard characters in ``term`` matched literally."""
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"
