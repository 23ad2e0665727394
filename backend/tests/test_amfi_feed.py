"""Tests for the AMFI feed service and its snapshot cache."""

import httpx
import pytest

from mfdash.services.amfi_feed import AmfiFeedService
from mfdash.services.cache import SnapshotCache

FEED_URL = "https://feed.test/NAVAll.txt"

FEED = """Open Ended Schemes(Equity Scheme - Large Cap Fund)
Example Mutual Fund;
100001;INF000A01011;-;Example Bluechip Fund - Regular Plan - Growth;45.6789;17-Oct-2026
100002;INF000A01029;-;Example Flexi Cap Fund - Regular Plan - Growth;21.5;17-Oct-2026
"""


class FakeClock:
    def __init__(self, now: float = 1_000_000.0):
        self.now = now

    def __call__(self) -> float:
        return self.now


class FakeFeed:
    """Mock upstream whose next response can be swapped between calls."""

    def __init__(self, body: str = FEED, status: int = 200):
        self.body = body
        self.status = status
        self.error: Exception | None = None
        self.requests: list[httpx.Request] = []

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        return httpx.Response(self.status, text=self.body)


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def upstream():
    return FakeFeed()


@pytest.fixture
def service(clock, upstream):
    return AmfiFeedService(
        url=FEED_URL,
        cache=SnapshotCache(ttl=900, clock=clock),
        transport=httpx.MockTransport(upstream.handler),
    )


@pytest.mark.asyncio
async def test_fetch_parses_feed(service, upstream):
    funds = await service.get_fund_universe()
    assert [f.scheme_code for f in funds] == ["100001", "100002"]
    assert all(f.fund_house == "Example Mutual Fund" for f in funds)
    assert len(upstream.requests) == 1
    assert str(upstream.requests[0].url) == FEED_URL


@pytest.mark.asyncio
async def test_fresh_snapshot_served_from_cache(service, upstream, clock):
    await service.get_fund_universe()
    clock.now += 899
    funds = await service.get_fund_universe()
    assert len(funds) == 2
    assert len(upstream.requests) == 1


@pytest.mark.asyncio
async def test_stale_snapshot_refetched(service, upstream, clock):
    await service.get_fund_universe()
    clock.now += 900
    upstream.body = FEED.splitlines()[0] + "\n300001;x;y;New Fund;9.9;18-Oct-2026\n"
    funds = await service.get_fund_universe()
    assert [f.scheme_code for f in funds] == ["300001"]
    assert len(upstream.requests) == 2


@pytest.mark.asyncio
async def test_server_error_returns_empty(service, upstream):
    upstream.status = 503
    result = await service.fetch_fund_universe()
    assert result.value == []
    assert not result.ok
    assert "503" in result.error


@pytest.mark.asyncio
async def test_timeout_returns_empty(service, upstream):
    upstream.error = httpx.ReadTimeout("timed out")
    assert await service.get_fund_universe() == []


@pytest.mark.asyncio
async def test_empty_body_returns_empty(service, upstream):
    upstream.body = "   \n"
    result = await service.fetch_fund_universe()
    assert result.value == []
    assert result.error == "empty response"


@pytest.mark.asyncio
async def test_failed_refresh_keeps_previous_snapshot(service, upstream, clock):
    first = await service.get_fund_universe()
    upstream.error = httpx.ConnectError("connection refused")

    result = await service.refresh()
    assert result.value == []
    assert service.cache.peek() == first

    # Still inside the window, so the next call is served from the old snapshot
    clock.now += 60
    assert await service.get_fund_universe() == first
    assert len(upstream.requests) == 2


@pytest.mark.asyncio
async def test_failed_fetch_after_expiry_reports_empty(service, upstream, clock):
    first = await service.get_fund_universe()
    clock.now += 1000
    upstream.status = 500
    assert await service.get_fund_universe() == []
    assert service.cache.peek() == first


@pytest.mark.asyncio
async def test_feed_with_no_valid_records_is_refetched(service, upstream):
    upstream.body = "Example Mutual Fund;\n"
    assert await service.get_fund_universe() == []
    assert await service.get_fund_universe() == []
    assert len(upstream.requests) == 2
