"""Sort orders for fund lists."""

import locale
import math
from collections.abc import Callable, Iterable
from typing import Any

from mfdash.models.fund import Fund

# Missing 1-year returns rank last in both directions
MISSING_RETURN_DESC = -999.0
MISSING_RETURN_ASC = 999.0


def _one_year(fund: Fund, missing: float) -> float:
    if fund.returns is None or fund.returns.one_year is None:
        return missing
    return fund.returns.one_year


def _nav_value(fund: Fund) -> float:
    try:
        nav = float(fund.nav)
    except (TypeError, ValueError):
        return 0.0
    return nav if math.isfinite(nav) else 0.0


def _name_key(fund: Fund) -> Any:
    return locale.strxfrm(fund.scheme_name.casefold())


# sort key -> (key function, reverse)
SORT_ORDERS: dict[str, tuple[Callable[[Fund], Any], bool]] = {
    "returns": (lambda f: _one_year(f, MISSING_RETURN_DESC), True),
    "returns-asc": (lambda f: _one_year(f, MISSING_RETURN_ASC), False),
    "nav": (_nav_value, True),
    "nav-asc": (_nav_value, False),
    "name": (_name_key, False),
    "name-desc": (_name_key, True),
}


def sort_funds(funds: Iterable[Fund], key: str) -> list[Fund]:
    """Return a new list of ``funds`` in the order named by ``key``.

    Unknown keys keep the input order.
    """
    result = list(funds)
    order = SORT_ORDERS.get(key)
    if order is None:
        return result
    key_func, reverse = order
    result.sort(key=key_func, reverse=reverse)
    return result
