"""Pydantic schemas for API responses."""

from pydantic import BaseModel


class ReturnsResponse(BaseModel):
    one_year: float | None = None
    three_year: float | None = None
    five_year: float | None = None


class FundResponse(BaseModel):
    scheme_code: str
    scheme_name: str
    nav: str
    date: str
    fund_house: str
    category: str
    risk_level: str | None = None
    returns: ReturnsResponse | None = None
    synthetic_returns: bool = False


class NavPointResponse(BaseModel):
    date: str
    nav: float


class FundDetailsResponse(FundResponse):
    launch_date: str
    scheme_type: str
    expense_ratio: str
    aum: str
    exit_load: str
    fund_manager: str
    benchmark: str
    nav_history: list[NavPointResponse]


class RefreshResponse(BaseModel):
    ok: bool
    count: int
    error: str | None = None
