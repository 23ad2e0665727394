"""Fund list, returns and details API routes."""

from fastapi import APIRouter, Depends, HTTPException, Query

from mfdash.api.schemas import FundDetailsResponse, FundResponse, RefreshResponse
from mfdash.services.amfi_feed import AmfiFeedService, amfi_feed_service
from mfdash.services.fund_history import FundHistoryService, fund_history_service
from mfdash.services.fund_list import FundListService, fund_list_service
from mfdash.services.sorting import SORT_ORDERS

router = APIRouter(prefix="/api/funds", tags=["funds"])


def get_feed_service() -> AmfiFeedService:
    return amfi_feed_service


def get_history_service() -> FundHistoryService:
    return fund_history_service


def get_list_service() -> FundListService:
    return fund_list_service


# Static paths are declared before /{scheme_code}


@router.get("", response_model=list[FundResponse])
async def list_funds(
    category: str = "all",
    sort: str = Query("returns", description=f"One of {', '.join(SORT_ORDERS)}"),
    fund_house: str | None = None,
    service: FundListService = Depends(get_list_service),
):
    funds = await service.list_funds(category, sort, fund_house)
    return [f.model_dump() for f in funds]


@router.get("/houses", response_model=list[str])
async def list_fund_houses(service: FundListService = Depends(get_list_service)):
    return await service.get_fund_houses()


@router.post("/refresh", response_model=RefreshResponse)
async def refresh_funds(feed: AmfiFeedService = Depends(get_feed_service)):
    """Re-download the AMFI feed, ignoring the cache window."""
    result = await feed.refresh()
    return RefreshResponse(ok=result.ok, count=len(result.value), error=result.error)


@router.get("/{scheme_code}/returns", response_model=FundResponse)
async def get_fund_returns(
    scheme_code: str,
    service: FundListService = Depends(get_list_service),
    history: FundHistoryService = Depends(get_history_service),
):
    fund = await service.find_fund(scheme_code)
    if fund is None:
        raise HTTPException(status_code=404, detail="Fund not found")
    enriched = await history.get_fund_with_returns(fund)
    return enriched.model_dump()


@router.get("/{scheme_code}", response_model=FundDetailsResponse)
async def get_fund_details(
    scheme_code: str,
    history: FundHistoryService = Depends(get_history_service),
):
    details = await history.get_fund_details(scheme_code)
    if details is None:
        raise HTTPException(status_code=404, detail="Fund details unavailable")
    return details.model_dump()
