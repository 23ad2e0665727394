"""Per-fund NAV history from mfapi, with returns and fund details cached per scheme."""

import logging
import random
from typing import Any

import httpx

from mfdash.config import (
    MFAPI_BASE_URL,
    MFAPI_DETAILS_TIMEOUT,
    MFAPI_RETURNS_TIMEOUT,
    NAV_HISTORY_LIMIT,
)
from mfdash.models.fund import Fund, FundDetails, NavPoint
from mfdash.services.cache import KeyedCache
from mfdash.services.result import FetchResult
from mfdash.services.returns import compute_returns, synthetic_returns

logger = logging.getLogger(__name__)


class FundHistoryError(Exception):
    """The history endpoint returned nothing usable."""


class FundHistoryService:
    """Fetches scheme history and derives returns and details from it.

    Both caches live for the life of the service: returns are computed at
    most once per scheme, and a failed details lookup is not retried.
    """

    def __init__(
        self,
        base_url: str = MFAPI_BASE_URL,
        returns_timeout: float = MFAPI_RETURNS_TIMEOUT,
        details_timeout: float = MFAPI_DETAILS_TIMEOUT,
        returns_cache: KeyedCache | None = None,
        details_cache: KeyedCache | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
        rng: random.Random | None = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.returns_timeout = returns_timeout
        self.details_timeout = details_timeout
        self.returns_cache = returns_cache if returns_cache is not None else KeyedCache()
        self.details_cache = details_cache if details_cache is not None else KeyedCache()
        self._transport = transport
        self._rng = rng or random.Random()

    async def _get_history(self, scheme_code: str, timeout: float) -> dict[str, Any]:
        """GET ``<base>/<scheme_code>`` and return the decoded JSON object.

        Raises httpx.HTTPError, ValueError (bad JSON) or FundHistoryError.
        """
        async with httpx.AsyncClient(timeout=timeout, transport=self._transport) as client:
            resp = await client.get(f"{self.base_url}/{scheme_code}")
            resp.raise_for_status()
        payload = resp.json()
        if not isinstance(payload, dict):
            raise FundHistoryError("response is not a JSON object")
        return payload

    def _with_synthetic_returns(self, fund: Fund) -> Fund:
        return fund.model_copy(
            update={"returns": synthetic_returns(self._rng), "synthetic_returns": True}
        )

    async def fetch_fund_with_returns(self, fund: Fund) -> FetchResult[Fund]:
        """Attach trailing returns to ``fund``.

        When history is missing or unusable the fund gets placeholder
        returns (flagged by ``synthetic_returns``) and the result carries the
        reason. Either way the outcome is cached and never re-fetched.
        """
        code = fund.scheme_code
        cached = self.returns_cache.get(code)
        if cached is not None:
            return FetchResult.success(cached)

        error = None
        try:
            payload = await self._get_history(code, self.returns_timeout)
            history = payload.get("data")
            if not isinstance(history, list) or not history:
                raise FundHistoryError("no NAV history")
            returns = compute_returns(history)
            if returns is None:
                raise FundHistoryError("NAV history has no usable current NAV")
            enriched = fund.model_copy(update={"returns": returns, "synthetic_returns": False})
        except (httpx.HTTPError, ValueError, TypeError, FundHistoryError) as e:
            logger.warning(f"Using placeholder returns for fund {code}: {e!r}")
            error = str(e) or type(e).__name__
            enriched = self._with_synthetic_returns(fund)

        self.returns_cache.set(code, enriched)
        if error is not None:
            return FetchResult.failure(enriched, error)
        return FetchResult.success(enriched)

    async def get_fund_with_returns(self, fund: Fund) -> Fund:
        return (await self.fetch_fund_with_returns(fund)).value

    async def get_fund_details(self, scheme_code: str) -> FundDetails | None:
        """Full scheme details, or None if mfapi has none (cached as failed)."""
        if self.details_cache.is_failed(scheme_code):
            return None
        cached = self.details_cache.get(scheme_code)
        if cached is not None:
            return cached

        try:
            payload = await self._get_history(scheme_code, self.details_timeout)
            meta = payload.get("meta")
            if not isinstance(meta, dict) or not meta:
                raise FundHistoryError("no scheme metadata")
            data = payload.get("data")
            if not isinstance(data, list):
                data = []
            details = self._build_details(scheme_code, meta, data)
        except (httpx.HTTPError, ValueError, TypeError, FundHistoryError) as e:
            logger.error(f"Failed to fetch details for fund {scheme_code}: {e!r}")
            self.details_cache.mark_failed(scheme_code)
            return None

        self.details_cache.set(scheme_code, details)
        return details

    def _build_details(
        self, scheme_code: str, meta: dict[str, Any], data: list[dict[str, Any]]
    ) -> FundDetails:
        def field(key: str) -> str:
            value = meta.get(key)
            return str(value) if value not in (None, "") else "N/A"

        nav_history = []
        for item in data[:NAV_HISTORY_LIMIT]:
            try:
                nav_history.append(NavPoint(date=str(item["date"]), nav=float(item["nav"])))
            except (KeyError, TypeError, ValueError):
                continue

        latest = data[0] if data and isinstance(data[0], dict) else {}
        return FundDetails(
            scheme_code=scheme_code,
            scheme_name=str(meta.get("scheme_name") or "Unknown Fund"),
            nav=str(latest.get("nav", "0")),
            date=str(latest.get("date", "")),
            fund_house=str(meta.get("fund_house") or ""),
            returns=compute_returns(data),
            launch_date=field("scheme_launch_date"),
            scheme_type=field("scheme_type"),
            expense_ratio=field("scheme_expense_ratio"),
            aum=field("scheme_aum"),
            exit_load=field("scheme_load"),
            fund_manager=field("fund_manager"),
            benchmark=field("scheme_benchmark"),
            nav_history=nav_history,
        )


# Global instance
fund_history_service = FundHistoryService()
