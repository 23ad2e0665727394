"""Fund, return and fund-detail models."""

from pydantic import BaseModel, ConfigDict

OTHER_CATEGORY = "other"


class ReturnSet(BaseModel):
    """Trailing returns in percent.

    ``one_year`` is point-to-point; ``three_year`` and ``five_year`` are
    annualized (CAGR). ``None`` means no qualifying NAV sample.
    """

    model_config = ConfigDict(frozen=True)

    one_year: float | None = None
    three_year: float | None = None
    five_year: float | None = None


class Fund(BaseModel):
    """A regular-plan scheme from the NAV feed, optionally with returns."""

    model_config = ConfigDict(frozen=True)

    scheme_code: str
    scheme_name: str
    nav: str
    date: str
    fund_house: str = ""
    category: str = OTHER_CATEGORY
    risk_level: str | None = None
    returns: ReturnSet | None = None
    synthetic_returns: bool = False


class NavPoint(BaseModel):
    model_config = ConfigDict(frozen=True)

    date: str
    nav: float


class FundDetails(Fund):
    launch_date: str = "N/A"
    scheme_type: str = "N/A"
    expense_ratio: str = "N/A"
    aum: str = "N/A"
    exit_load: str = "N/A"
    fund_manager: str = "N/A"
    benchmark: str = "N/A"
    nav_history: list[NavPoint] = []
