"""Trailing return calculation from NAV history.

    one_year   = (nav_now / nav_1y - 1) * 100
    three_year = ((nav_now / nav_3y) ** (1/3) - 1) * 100
    five_year  = ((nav_now / nav_5y) ** (1/5) - 1) * 100

nav_Ny is the newest sample dated at least N * 365 days before ``now``.
"""

import random
from collections.abc import Iterable, Mapping
from datetime import datetime
from typing import Any

import pandas as pd

from mfdash.models.fund import ReturnSet

# mfapi uses dd-mm-YYYY, the AMFI feed dd-Mon-YYYY
DATE_FORMATS = ("%d-%m-%Y", "%d-%b-%Y", "%Y-%m-%d", "%Y-%m-%d %H:%M:%S")

HORIZONS = {1: "one_year", 3: "three_year", 5: "five_year"}

# Placeholder ranges (percent) used when no history is available
SYNTHETIC_RANGES = {
    "one_year": (-5.0, 25.0),
    "three_year": (0.0, 40.0),
    "five_year": (5.0, 65.0),
}


def parse_nav_dates(values: pd.Series) -> pd.Series:
    """Parse date strings in any of DATE_FORMATS; unparseable values become NaT."""
    text = values.astype(str).str.strip()
    parsed = pd.to_datetime(text, format=DATE_FORMATS[0], errors="coerce")
    for fmt in DATE_FORMATS[1:]:
        parsed = parsed.fillna(pd.to_datetime(text, format=fmt, errors="coerce"))
    return parsed


def compute_returns(
    history: Iterable[Mapping[str, Any]], now: datetime | None = None
) -> ReturnSet | None:
    """Compute 1/3/5-year trailing returns from ``[{date, nav}, ...]``.

    The history may be in any order. Returns None when there is no usable
    current NAV; horizons without an old enough sample are left as None.
    """
    frame = pd.DataFrame(list(history), columns=["date", "nav"])
    if frame.empty:
        return None

    frame["date"] = parse_nav_dates(frame["date"])
    frame["nav"] = pd.to_numeric(frame["nav"], errors="coerce")
    frame = frame.dropna(subset=["date"])
    if frame.empty:
        return None

    frame = frame.sort_values("date", ascending=False, kind="stable").reset_index(drop=True)
    current_nav = frame.at[0, "nav"]
    if pd.isna(current_nav) or current_nav < 0:
        return None

    now = now or datetime.now()
    past = frame.iloc[1:]
    values: dict[str, float] = {}
    for years, name in HORIZONS.items():
        cutoff = pd.Timestamp(now) - pd.Timedelta(days=365 * years)
        eligible = past[past["date"] <= cutoff]
        if eligible.empty:
            continue
        historical_nav = eligible.iloc[0]["nav"]
        if pd.isna(historical_nav) or historical_nav <= 0:
            continue
        ratio = float(current_nav) / float(historical_nav)
        if years == 1:
            values[name] = (ratio - 1) * 100
        else:
            values[name] = (ratio ** (1 / years) - 1) * 100

    return ReturnSet(**values)


def synthetic_returns(rng: random.Random | None = None) -> ReturnSet:
    """Placeholder returns drawn uniformly from SYNTHETIC_RANGES."""
    rng = rng or random.Random()
    return ReturnSet(
        **{name: rng.uniform(low, high) for name, (low, high) in SYNTHETIC_RANGES.items()}
    )
