"""Tests for fund list filtering, sorting and enrichment."""

import pytest

from mfdash.models.fund import Fund, ReturnSet
from mfdash.services.fund_list import FundListService


def make_fund(code, one_year=None, category="other", fund_house="Example Mutual Fund", nav="10"):
    return Fund(
        scheme_code=code,
        scheme_name=f"Fund {code}",
        nav=nav,
        date="17-Oct-2026",
        fund_house=fund_house,
        category=category,
        returns=ReturnSet(one_year=one_year) if one_year is not None else None,
    )


class StubFeed:
    def __init__(self, funds):
        self.funds = funds
        self.calls = 0

    async def get_fund_universe(self):
        self.calls += 1
        return list(self.funds)


class StubHistory:
    def __init__(self):
        self.seen = []

    async def get_fund_with_returns(self, fund):
        self.seen.append(fund.scheme_code)
        return fund.model_copy(update={"returns": ReturnSet(one_year=float(fund.scheme_code))})


UNIVERSE = [
    make_fund("1", one_year=4.0, category="equity", fund_house="Alpha Mutual Fund"),
    make_fund("2", one_year=-2.0, category="debt", fund_house="Beta Mutual Fund"),
    make_fund("3", category="large-cap equity", fund_house="alpha mutual fund"),
    make_fund("4", one_year=11.0, category="other", fund_house=""),
]


@pytest.fixture
def service():
    return FundListService(StubFeed(UNIVERSE))


@pytest.mark.asyncio
async def test_all_funds_sorted_by_returns(service):
    funds = await service.list_funds("all", "returns")
    assert [f.scheme_code for f in funds] == ["4", "1", "2", "3"]


@pytest.mark.asyncio
async def test_category_exact_and_substring(service):
    funds = await service.list_funds("Equity", "returns")
    assert [f.scheme_code for f in funds] == ["1", "3"]


@pytest.mark.asyncio
async def test_category_without_matches(service):
    assert await service.list_funds("hybrid", "returns") == []


@pytest.mark.asyncio
async def test_fund_house_case_insensitive(service):
    funds = await service.list_funds("all", "name", fund_house="ALPHA")
    assert [f.scheme_code for f in funds] == ["1", "3"]


@pytest.mark.asyncio
async def test_fund_house_all_is_no_filter(service):
    funds = await service.list_funds("all", "nav", fund_house="all")
    assert len(funds) == len(UNIVERSE)


@pytest.mark.asyncio
async def test_empty_universe():
    service = FundListService(StubFeed([]))
    assert await service.list_funds("all", "returns") == []


@pytest.mark.asyncio
async def test_enriches_only_first_funds_after_filtering():
    funds = [make_fund(str(code)) for code in range(10, 15)]
    history = StubHistory()
    service = FundListService(StubFeed(funds), history, enrich_limit=3)

    result = await service.list_funds("all", "returns")

    assert history.seen == ["10", "11", "12"]
    assert len(result) == 5
    assert [f.scheme_code for f in result[:3]] == ["12", "11", "10"]
    assert all(f.returns is None for f in result[3:])


@pytest.mark.asyncio
async def test_enrichment_disabled_with_zero_limit():
    history = StubHistory()
    service = FundListService(StubFeed(UNIVERSE), history, enrich_limit=0)
    await service.list_funds()
    assert history.seen == []


@pytest.mark.asyncio
async def test_fund_houses(service):
    houses = await service.get_fund_houses()
    assert houses == ["Alpha Mutual Fund", "Beta Mutual Fund", "alpha mutual fund"]


@pytest.mark.asyncio
async def test_find_fund(service):
    assert (await service.find_fund("2")).fund_house == "Beta Mutual Fund"
    assert await service.find_fund("404") is None
