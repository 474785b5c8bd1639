"""Integration tests for the SQLAlchemy directory store on a SQLite database."""

from datetime import date

import pytest
from sqlalchemy.ext.asyncio import create_async_engine

from directory_search.application.interfaces import CollectionQuery, RangeBound
from directory_search.domain.entities import Organization, SearchCollection
from directory_search.domain.exceptions import DataStoreError
from directory_search.infrastructure.database import (
    Base,
    CaseStudyModel,
    OrganizationModel,
    ServiceModel,
    create_session_factory,
)
from directory_search.infrastructure.database.repositories import SQLAlchemyDirectoryStore


async def _seeded_store(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'directory.db'}")
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session_factory = create_session_factory(engine)
    async with session_factory() as session:
        session.add_all(
            [
                OrganizationModel(
                    id="org-1",
                    name="東京AIラボ",
                    description="AIを活用する東京の企業",
                    industry="AI・人工知能",
                    address_region="東京都",
                    employee_count=8,
                    established_at=date(2016, 4, 1),
                    awards=["グッドデザイン賞"],
                    published=True,
                ),
                OrganizationModel(
                    id="org-2",
                    name="なにわWeb制作",
                    description="大阪のWeb開発会社 顧客満足度100%",
                    industry="Web開発",
                    address_region="大阪府",
                    employee_count=35,
                    established_at=date(2012, 10, 1),
                    published=True,
                ),
                OrganizationModel(
                    id="org-3",
                    name="下書きAI株式会社",
                    industry="AI・人工知能",
                    address_region="東京都",
                    employee_count=3,
                    published=False,
                ),
                ServiceModel(
                    id="svc-1",
                    organization_id="org-1",
                    name="AIチャットボット",
                    category="AI・人工知能",
                    price_max=500_000,
                    published=True,
                ),
                ServiceModel(
                    id="svc-2",
                    organization_id="org-2",
                    name="ホームページ制作",
                    category="Web開発",
                    price_max=2_000_000,
                    published=True,
                ),
                CaseStudyModel(
                    id="case-1",
                    organization_id="org-1",
                    title="小売業のAI需要予測導入",
                    industry="AI・人工知能",
                    published=True,
                ),
            ]
        )
        await session.commit()

    return engine, SQLAlchemyDirectoryStore(session_factory)


@pytest.mark.asyncio
async def test_query_published_filters_and_counts(tmp_path):
    engine, store = await _seeded_store(tmp_path)
    try:
        page = await store.query_published(
            SearchCollection.ORGANIZATIONS,
            CollectionQuery(
                text_match_columns=("name", "description", "industry"),
                text_term="ai",
                equals_filters={"address_region": ["東京都"]},
                range_filters={"established_at": RangeBound(min=date(2010, 1, 1), max=date(2020, 12, 31))},
            ),
        )
    finally:
        await engine.dispose()

    assert page.total == 1
    assert [o.id for o in page.items] == ["org-1"]
    assert isinstance(page.items[0], Organization)
    assert page.items[0].established_at == date(2016, 4, 1)


@pytest.mark.asyncio
async def test_query_published_any_range_sort_and_paging(tmp_path):
    engine, store = await _seeded_store(tmp_path)
    try:
        page = await store.query_published(
            SearchCollection.ORGANIZATIONS,
            CollectionQuery(
                range_any_filters={"employee_count": [RangeBound(max=10), RangeBound(min=11, max=50)]},
                sort_column="employee_count",
                sort_descending=True,
                limit=1,
            ),
        )
    finally:
        await engine.dispose()

    assert page.total == 2
    assert [o.id for o in page.items] == ["org-2"]


@pytest.mark.asyncio
async def test_services_carry_their_organization(tmp_path):
    engine, store = await _seeded_store(tmp_path)
    try:
        page = await store.query_published(
            SearchCollection.SERVICES,
            CollectionQuery(range_filters={"price_max": RangeBound(max=1_000_000)}),
        )
    finally:
        await engine.dispose()

    assert [s.id for s in page.items] == ["svc-1"]
    assert page.items[0].organization is not None
    assert page.items[0].organization.name == "東京AIラボ"


@pytest.mark.asyncio
async def test_aggregate_facet_counts_published_rows(tmp_path):
    engine, store = await _seeded_store(tmp_path)
    try:
        rows = await store.aggregate_facet(SearchCollection.ORGANIZATIONS, "industry")
    finally:
        await engine.dispose()

    assert {(r.value, r.count) for r in rows} == {("AI・人工知能", 1), ("Web開発", 1)}


@pytest.mark.asyncio
async def test_match_values_is_distinct_and_published_only(tmp_path):
    engine, store = await _seeded_store(tmp_path)
    try:
        names = await store.match_values(SearchCollection.ORGANIZATIONS, "name", "AI")
        industries = await store.match_values(SearchCollection.ORGANIZATIONS, "industry", "ai")
    finally:
        await engine.dispose()

    assert names == ["東京AIラボ"]
    assert industries == ["AI・人工知能"]


@pytest.mark.asyncio
async def test_unknown_column_raises_data_store_error(tmp_path):
    engine, store = await _seeded_store(tmp_path)
    try:
        with pytest.raises(DataStoreError):
            await store.aggregate_facet(SearchCollection.ORGANIZATIONS, "services")
    finally:
        await engine.dispose()


@pytest.mark.asyncio
async def test_missing_tables_surface_as_data_store_error(tmp_path):
    engine = create_async_engine(f"sqlite+aiosqlite:///{tmp_path / 'empty.db'}")
    store = SQLAlchemyDirectoryStore(create_session_factory(engine))
    try:
        with pytest.raises(DataStoreError) as excinfo:
            await store.query_published(SearchCollection.CASE_STUDIES, CollectionQuery())
    finally:
        await engine.dispose()

    assert excinfo.value.collection == "case_studies"
    assert excinfo.value.operation == "query_published"


@pytest.mark.asyncio
async def test_non_null_columns_keep_rows_with_awards(tmp_path):
    engine, store = await _seeded_store(tmp_path)
    try:
        awarded = await store.query_published(
            SearchCollection.ORGANIZATIONS, CollectionQuery(non_null_columns=("awards",))
        )
        certified = await store.query_published(
            SearchCollection.ORGANIZATIONS, CollectionQuery(non_null_columns=("certifications",))
        )
    finally:
        await engine.dispose()

    assert [o.id for o in awarded.items] == ["org-1"]
    assert awarded.items[0].awards == ["グッドデザイン賞"]
    assert certified.total == 0


@pytest.mark.asyncio
async def test_like_wildcards_in_terms_match_literally(tmp_path):
    engine, store = await _seeded_store(tmp_path)
    text_columns = ("name", "description")
    try:
        percent = await store.query_published(
            SearchCollection.ORGANIZATIONS, CollectionQuery(text_match_columns=text_columns, text_term="%")
        )
        literal = await store.query_published(
            SearchCollection.ORGANIZATIONS, CollectionQuery(text_match_columns=text_columns, text_term="100%")
        )
        underscore = await store.query_published(
            SearchCollection.ORGANIZATIONS, CollectionQuery(text_match_columns=text_columns, text_term="_")
        )
        names = await store.match_values(SearchCollection.ORGANIZATIONS, "name", "_")
        backslash = await store.match_values(SearchCollection.ORGANIZATIONS, "name", "\\")
    finally:
        await engine.dispose()

    assert [o.id for o in percent.items] == ["org-2"]
    assert [o.id for o in literal.items] == ["org-2"]
    assert underscore.total == 0
    assert names == []
    assert backslash == []
