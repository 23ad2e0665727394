"""AMFI NAV feed client with a fixed-window snapshot cache."""

import logging
import time
from collections.abc import Callable

import httpx

from mfdash.config import AMFI_CACHE_TTL, AMFI_DATA_URL, AMFI_TIMEOUT, ENRICH_CATEGORIES
from mfdash.models.fund import Fund
from mfdash.services.amfi_parser import Categorizer, parse_feed
from mfdash.services.cache import SnapshotCache
from mfdash.services.categories import categorize
from mfdash.services.result import FetchResult

logger = logging.getLogger(__name__)


class AmfiFeedService:
    """Fetches and caches the whole fund universe from the AMFI feed."""

    def __init__(
        self,
        url: str = AMFI_DATA_URL,
        timeout: float = AMFI_TIMEOUT,
        cache: SnapshotCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        categorizer: Categorizer | None = None,
        clock: Callable[[], float] = time.time,
    ):
        self.url = url
        self.timeout = timeout
        self.cache = cache if cache is not None else SnapshotCache(AMFI_CACHE_TTL, clock)
        self._transport = transport
        self._categorizer = categorizer

    async def fetch_fund_universe(self) -> FetchResult[list[Fund]]:
        """Return the cached universe if fresh, otherwise download it."""
        cached = self.cache.get()
        if cached is not None:
            logger.debug(f"Using cached AMFI data with {len(cached)} funds")
            return FetchResult.success(cached)
        return await self.refresh()

    async def get_fund_universe(self) -> list[Fund]:
        """Fund universe, or an empty list when the feed is unavailable."""
        return (await self.fetch_fund_universe()).value

    async def refresh(self) -> FetchResult[list[Fund]]:
        """Download and parse the feed, replacing the cached snapshot on success.

        On failure the cached snapshot is left as it was and an empty list is
        returned.
        """
        logger.info(f"Fetching AMFI data from {self.url}")
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self._transport
            ) as client:
                resp = await client.get(self.url)
                resp.raise_for_status()
            body = resp.text
        except httpx.HTTPError as e:
            logger.error(f"Failed to fetch AMFI data: {e!r}")
            return FetchResult.failure([], f"fetch failed: {e!r}")

        if not body.strip():
            logger.error("Empty response from AMFI")
            return FetchResult.failure([], "empty response")

        result = parse_feed(body, categorize=self._categorizer)
        if result.dropped:
            logger.info(f"Skipped {result.dropped_total} AMFI records: {dict(result.dropped)}")
        logger.info(f"Parsed {len(result.funds)} funds from AMFI data")

        self.cache.set(result.funds)
        return FetchResult.success(result.funds)


# Global instance
amfi_feed_service = AmfiFeedService(categorizer=categorize if ENRICH_CATEGORIES else None)
