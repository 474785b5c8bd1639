"""Unit tests for the per-collection searchers."""

from datetime import date

import pytest

from directory_search.application.interfaces import RangeBound
from directory_search.application.services.collection_searcher import (
    CaseStudySearcher,
    OrganizationSearcher,
    ServiceSearcher,
    build_default_searchers,
)
from directory_search.domain.entities import (
    SearchCollection,
    SearchFilter,
    SortBy,
    SortOrder,
    YearRange,
)
from tests.fakes.directory_store import InMemoryDirectoryStore, sample_store


# ── Query building ───────────────────────────────────────────────────


def test_organization_query_maps_all_filters():
    search_filter = SearchFilter(
        free_text=" 企業 ",
        industries=("AI・人工知能",),
        regions=("東京都", "大阪府"),
        company_sizes=("small", "enterprise"),
        established_year_range=YearRange(min=2010, max=2020),
        sort_by=SortBy.NAME,
        sort_order=SortOrder.ASC,
        limit=5,
        offset=10,
    )

    query = OrganizationSearcher(InMemoryDirectoryStore()).build_query(search_filter)

    assert query.text_match_columns == ("name", "description", "industry")
    assert query.text_term == "企業"
    assert query.equals_filters == {
        "industry": ["AI・人工知能"],
        "address_region": ["東京都", "大阪府"],
    }
    assert query.range_filters == {
        "established_at": RangeBound(min=date(2010, 1, 1), max=date(2020, 12, 31)),
    }
    assert query.range_any_filters == {
        "employee_count": [RangeBound(min=11, max=50), RangeBound(min=1001, max=None)],
    }
    assert query.sort_column == "name"
    assert query.sort_descending is False
    assert query.limit == 5
    assert query.offset == 10


def test_unknown_company_size_is_ignored():
    query = OrganizationSearcher(InMemoryDirectoryStore()).build_query(
        SearchFilter(company_sizes=("gigantic",))
    )
    assert query.range_any_filters == {}


def test_degenerate_year_bounds_are_dropped():
    searcher = OrganizationSearcher(InMemoryDirectoryStore())

    assert searcher.build_query(SearchFilter(established_year_range=YearRange(min=0, max=0))).range_filters == {}
    open_ended = searcher.build_query(SearchFilter(established_year_range=YearRange(min=2000)))
    assert open_ended.range_filters == {"established_at": RangeBound(min=date(2000, 1, 1), max=None)}


def test_relevance_keeps_store_order():
    query = OrganizationSearcher(InMemoryDirectoryStore()).build_query(SearchFilter())
    assert query.sort_column is None


def test_unsupported_sort_falls_back_to_updated_at():
    query = ServiceSearcher(InMemoryDirectoryStore()).build_query(SearchFilter(sort_by=SortBy.ESTABLISHED))
    assert query.sort_column == "updated_at"


def test_case_study_name_sort_uses_title():
    query = CaseStudySearcher(InMemoryDirectoryStore()).build_query(SearchFilter(sort_by=SortBy.NAME))
    assert query.sort_column == "title"


def test_service_price_ceiling_bounds_price_max():
    searcher = ServiceSearcher(InMemoryDirectoryStore())

    assert searcher.build_query(SearchFilter(price_ceiling=500_000)).range_filters == {
        "price_max": RangeBound(max=500_000)
    }
    assert searcher.build_query(SearchFilter(price_ceiling=0)).range_filters == {}


def test_service_price_floor_bounds_price_min():
    searcher = ServiceSearcher(InMemoryDirectoryStore())

    assert searcher.build_query(SearchFilter(price_min=300_000, price_ceiling=2_000_000)).range_filters == {
        "price_min": RangeBound(min=300_000),
        "price_max": RangeBound(max=2_000_000),
    }
    assert searcher.build_query(SearchFilter(price_min=0)).range_filters == {}


def test_award_and_certification_flags_require_the_columns():
    searcher = OrganizationSearcher(InMemoryDirectoryStore())

    assert searcher.build_query(SearchFilter()).non_null_columns == ()
    assert searcher.build_query(SearchFilter(has_awards=True)).non_null_columns == ("awards",)
    assert searcher.build_query(
        SearchFilter(has_awards=True, has_certifications=True)
    ).non_null_columns == ("awards", "certifications")


def test_award_flags_do_not_narrow_services():
    query = ServiceSearcher(InMemoryDirectoryStore()).build_query(SearchFilter(has_awards=True))
    assert query.non_null_columns == ()


def test_service_searcher_filters_on_categories_not_industries():
    query = ServiceSearcher(InMemoryDirectoryStore()).build_query(
        SearchFilter(industries=("Web開発",), categories=("クラウド",))
    )
    assert query.equals_filters == {"category": ["クラウド"]}


def test_case_study_searcher_filters_on_industries():
    query = CaseStudySearcher(InMemoryDirectoryStore()).build_query(SearchFilter(industries=("Web開発",)))
    assert query.equals_filters == {"industry": ["Web開発"]}


def test_build_default_searchers_covers_every_collection():
    searchers = build_default_searchers(InMemoryDirectoryStore())
    assert set(searchers) == set(SearchCollection)
    assert all(searchers[c].collection == c for c in SearchCollection)


# ── Searching ────────────────────────────────────────────────────────


@pytest.mark.asyncio
async def test_search_returns_only_published_matches():
    result = await OrganizationSearcher(sample_store()).search(
        SearchFilter(free_text="企業", industries=("AI・人工知能",), regions=("東京都",))
    )

    assert [o.id for o in result.items] == ["org-ai-tokyo"]
    assert result.total == 1
    assert result.error is None


@pytest.mark.asyncio
async def test_search_applies_size_buckets():
    result = await OrganizationSearcher(sample_store()).search(
        SearchFilter(company_sizes=("startup", "medium"), sort_by=SortBy.NAME, sort_order=SortOrder.ASC)
    )

    assert sorted(o.id for o in result.items) == ["org-ai-fukuoka", "org-ai-tokyo"]


@pytest.mark.asyncio
async def test_search_reports_total_beyond_page():
    result = await OrganizationSearcher(sample_store()).search(SearchFilter(limit=2))

    assert len(result.items) == 2
    assert result.total == 4


@pytest.mark.asyncio
async def test_price_ceiling_filters_services():
    result = await ServiceSearcher(sample_store()).search(SearchFilter(price_ceiling=1_000_000))
    assert [s.id for s in result.items] == ["svc-chatbot"]


@pytest.mark.asyncio
async def test_price_floor_filters_services():
    result = await ServiceSearcher(sample_store()).search(
        SearchFilter(price_min=300_000, sort_by=SortBy.NAME, sort_order=SortOrder.ASC)
    )
    assert sorted(s.id for s in result.items) == ["svc-homepage", "svc-migration"]


@pytest.mark.asyncio
async def test_has_awards_keeps_only_awarded_organizations():
    result = await OrganizationSearcher(sample_store()).search(SearchFilter(has_awards=True))
    assert [o.id for o in result.items] == ["org-ai-tokyo"]


@pytest.mark.asyncio
async def test_has_certifications_keeps_only_certified_organizations():
    result = await OrganizationSearcher(sample_store()).search(SearchFilter(has_certifications=True))
    assert [o.id for o in result.items] == ["org-cloud-tokyo"]


@pytest.mark.asyncio
async def test_store_failure_degrades_to_empty_result():
    store = sample_store(fail_collections={SearchCollection.SERVICES})

    result = await ServiceSearcher(store).search(SearchFilter())

    assert result.items == []
    assert result.total == 0
    assert "simulated outage" in result.error
