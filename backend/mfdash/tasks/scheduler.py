"""Background refresh of the AMFI fund universe."""

import logging

from apscheduler.schedulers.asyncio import AsyncIOScheduler
from apscheduler.triggers.interval import IntervalTrigger

from mfdash.config import FEED_REFRESH_INTERVAL
from mfdash.services.amfi_feed import amfi_feed_service

logger = logging.getLogger(__name__)

scheduler = AsyncIOScheduler()


async def refresh_fund_universe():
    """Re-download the feed so page loads hit a warm cache."""
    result = await amfi_feed_service.refresh()
    if result.ok:
        logger.info(f"Refreshed fund universe: {len(result.value)} funds")
    else:
        logger.warning(f"Fund universe refresh failed, keeping previous snapshot: {result.error}")


def start_scheduler():
    """Start the background scheduler."""
    scheduler.add_job(
        refresh_fund_universe,
        trigger=IntervalTrigger(seconds=FEED_REFRESH_INTERVAL),
        id="refresh_fund_universe",
        replace_existing=True,
    )
    scheduler.start()
    logger.info(f"Scheduler started, refreshing fund universe every {FEED_REFRESH_INTERVAL}s")


def stop_scheduler():
    """Stop the background scheduler."""
    if scheduler.running:
        scheduler.shutdown()
        logger.info("Scheduler stopped")
