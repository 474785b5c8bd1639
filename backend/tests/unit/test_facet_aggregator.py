"""Unit tests for facet aggregation."""

import asyncio

import pytest

from directory_search.application.interfaces import FacetCount
from directory_search.application.services.facet_aggregator import FacetAggregator
from directory_search.domain.entities import FacetBucket, FacetSet, SearchCollection, SearchFilter
from tests.fakes.directory_store import InMemoryDirectoryStore, sample_store


class CannedFacetStore(InMemoryDirectoryStore):
    """Returns fixed facet rows per field, ignoring stored records."""

    def __init__(self, rows: dict[str, list[FacetCount]]):
        super().__init__()
        self._canned = rows

    async def aggregate_facet(self, collection, field_name):
        self.facet_calls.append((collection, field_name))
        return self._canned.get(field_name, [])


@pytest.mark.asyncio
async def test_aggregate_over_published_directory():
    facets = await FacetAggregator(sample_store()).aggregate()

    assert facets.industries == (
        FacetBucket("AI・人工知能", 2),
        FacetBucket("Web開発", 1),
        FacetBucket("クラウド", 1),
    )
    assert facets.regions == (
        FacetBucket("東京都", 2),
        FacetBucket("大阪府", 1),
        FacetBucket("福岡県", 1),
    )
    assert facets.categories == (
        FacetBucket("AI・人工知能", 1),
        FacetBucket("Web開発", 1),
        FacetBucket("クラウド", 1),
    )
    assert facets.company_sizes == (
        FacetBucket("enterprise", 1),
        FacetBucket("medium", 1),
        FacetBucket("small", 1),
        FacetBucket("startup", 1),
    )


@pytest.mark.asyncio
async def test_facets_ignore_the_current_filter():
    store = sample_store()
    narrowed = await FacetAggregator(store).aggregate(SearchFilter(free_text="zzz", regions=("北海道",)))
    unfiltered = await FacetAggregator(store).aggregate()

    assert narrowed == unfiltered


@pytest.mark.asyncio
async def test_industries_are_capped_at_twenty():
    rows = [FacetCount(value=f"industry-{i:02d}", count=i + 1) for i in range(25)]

    facets = await FacetAggregator(CannedFacetStore({"industry": rows})).aggregate()

    assert len(facets.industries) == 20
    assert facets.industries[0] == FacetBucket("industry-24", 25)


@pytest.mark.asyncio
async def test_regions_are_not_capped():
    rows = [FacetCount(value=f"region-{i:02d}", count=1) for i in range(30)]

    facets = await FacetAggregator(CannedFacetStore({"address_region": rows})).aggregate()

    assert len(facets.regions) == 30
    assert facets.regions[0].name == "region-00"


@pytest.mark.asyncio
async def test_size_buckets_merge_employee_counts_and_drop_empty():
    rows = [
        FacetCount(value=3, count=2),
        FacetCount(value=10, count=1),
        FacetCount(value=11, count=4),
        FacetCount(value=None, count=7),
    ]

    facets = await FacetAggregator(CannedFacetStore({"employee_count": rows})).aggregate()

    assert facets.company_sizes == (FacetBucket("small", 4), FacetBucket("startup", 3))


@pytest.mark.asyncio
async def test_blank_values_are_skipped():
    rows = [FacetCount(value="", count=3), FacetCount(value="Web開発", count=1)]

    facets = await FacetAggregator(CannedFacetStore({"industry": rows})).aggregate()

    assert facets.industries == (FacetBucket("Web開発", 1),)


@pytest.mark.asyncio
async def test_failing_facet_only_empties_itself():
    store = sample_store(fail_collections={SearchCollection.SERVICES})

    facets = await FacetAggregator(store).aggregate()

    assert facets.categories == ()
    assert facets.industries
    assert facets.regions
    assert facets.company_sizes


@pytest.mark.asyncio
async def test_empty_directory_gives_empty_facets():
    assert await FacetAggregator(InMemoryDirectoryStore()).aggregate() == FacetSet()


@pytest.mark.asyncio
async def test_slow_facet_is_cut_at_the_deadline():
    store = sample_store(delays={SearchCollection.SERVICES: 5.0})
    loop = asyncio.get_running_loop()
    started = loop.time()

    facets = await FacetAggregator(store).aggregate(timeout_seconds=0.1)

    assert loop.time() - started < 2.0
    assert facets.categories == ()
    assert facets.industries
    assert facets.regions
    assert facets.company_sizes


@pytest.mark.asyncio
async def test_fast_facets_ignore_the_deadline():
    facets = await FacetAggregator(sample_store()).aggregate(timeout_seconds=1.0)

    assert facets == await FacetAggregator(sample_store()).aggregate()
