"""Filtered, sorted views over the fund universe."""

import asyncio
import logging

from mfdash.config import LIST_ENRICH_LIMIT
from mfdash.models.fund import Fund
from mfdash.services.amfi_feed import AmfiFeedService, amfi_feed_service
from mfdash.services.fund_history import FundHistoryService, fund_history_service
from mfdash.services.sorting import sort_funds

logger = logging.getLogger(__name__)

ALL = "all"


def filter_by_category(funds: list[Fund], category: str | None) -> list[Fund]:
    if not category or category == ALL:
        return funds
    wanted = category.lower()
    return [f for f in funds if f.category == wanted or wanted in f.category]


def filter_by_fund_house(funds: list[Fund], fund_house: str | None) -> list[Fund]:
    if not fund_house or fund_house == ALL:
        return funds
    wanted = fund_house.lower()
    return [f for f in funds if f.fund_house and wanted in f.fund_house.lower()]


class FundListService:
    """Lists funds from the feed, optionally with returns for the first few."""

    def __init__(
        self,
        feed: AmfiFeedService,
        history: FundHistoryService | None = None,
        enrich_limit: int = LIST_ENRICH_LIMIT,
    ):
        self.feed = feed
        self.history = history
        self.enrich_limit = enrich_limit

    async def _with_returns(self, funds: list[Fund]) -> list[Fund]:
        if self.history is None or self.enrich_limit <= 0:
            return funds
        head = funds[: self.enrich_limit]
        enriched = await asyncio.gather(
            *(self.history.get_fund_with_returns(f) for f in head)
        )
        logger.info(f"Attached returns to {len(enriched)} of {len(funds)} funds")
        return list(enriched) + funds[self.enrich_limit :]

    async def list_funds(
        self,
        category: str = ALL,
        sort_key: str = "returns",
        fund_house: str | None = None,
    ) -> list[Fund]:
        """Funds matching ``category`` and ``fund_house``, sorted by ``sort_key``.

        An empty list means there is nothing to show right now; it does not
        say whether the feed was reachable.
        """
        funds = await self.feed.get_fund_universe()
        if not funds:
            logger.warning("No funds data available from AMFI")
            return []

        funds = filter_by_category(funds, category)
        funds = filter_by_fund_house(funds, fund_house)
        funds = await self._with_returns(funds)
        return sort_funds(funds, sort_key)

    async def get_fund_houses(self) -> list[str]:
        funds = await self.feed.get_fund_universe()
        return sorted({f.fund_house for f in funds if f.fund_house})

    async def find_fund(self, scheme_code: str) -> Fund | None:
        funds = await self.feed.get_fund_universe()
        return next((f for f in funds if f.scheme_code == scheme_code), None)


# Global instance
fund_list_service = FundListService(amfi_feed_service, fund_history_service)
