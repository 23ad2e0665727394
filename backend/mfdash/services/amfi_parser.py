"""Parser for the AMFI semicolon-delimited NAV feed.

The feed interleaves three kinds of lines:

    Open Ended Schemes(Equity Scheme - Large Cap Fund)      <- scheme type
    Example Mutual Fund;                                    <- fund house
    119551;INF209KA12Z1;INF209KA13Z9;Example Bluechip Fund - Regular Plan;98.1234;17-Oct-2026

Only record lines produce funds; header lines set the context the following
records inherit. Bad records are skipped and counted, never raised.
"""

import math
from collections import Counter
from collections.abc import Callable
from dataclasses import dataclass, field

from mfdash.models.fund import OTHER_CATEGORY, Fund

SCHEME_TYPE_MARKERS = ("Open End", "Close End")
NAV_UNAVAILABLE = {"N.A.", "N.A", "NA", "-"}
COLUMN_HEADER_PREFIX = "Scheme Code"

# Record field positions
CODE, NAME, NAV, DATE = 0, 3, 4, 5
MIN_FIELDS = 5

Categorizer = Callable[[str, str], tuple[str, str | None]]


@dataclass
class ParseResult:
    funds: list[Fund] = field(default_factory=list)
    dropped: Counter = field(default_factory=Counter)

    @property
    def dropped_total(self) -> int:
        return sum(self.dropped.values())


def _is_scheme_type(line: str) -> bool:
    return any(marker in line for marker in SCHEME_TYPE_MARKERS)


def _is_fund_house(line: str) -> bool:
    # Record lines also carry semicolons; headers are the short ones.
    return (
        ")" not in line
        and not _is_scheme_type(line)
        and len(line.split(";")) < MIN_FIELDS
    )


def _parse_nav(value: str) -> float | None:
    try:
        nav = float(value)
    except ValueError:
        return None
    if not math.isfinite(nav) or nav < 0:
        return None
    return nav


def _drop_reason(code: str, name: str, nav: str, date: str) -> str | None:
    if not name:
        return "empty_name"
    if "direct" in name.lower():
        return "direct_plan"
    if not code:
        return "empty_code"
    if not nav or nav in NAV_UNAVAILABLE:
        return "nav_unavailable"
    if not date:
        return "empty_date"
    if _parse_nav(nav) is None:
        return "nav_not_numeric"
    return None


def parse_feed(raw_text: str, categorize: Categorizer | None = None) -> ParseResult:
    """Parse raw feed text into regular-plan funds plus per-reason drop counts.

    Args:
        raw_text: The feed body.
        categorize: Optional ``(scheme_name, scheme_type) -> (category,
            risk_level)``. Without it every fund is ``"other"``.
    """
    result = ParseResult()
    seen_codes: set[str] = set()
    fund_house = ""
    scheme_type = ""

    for raw_line in raw_text.splitlines():
        line = raw_line.strip()
        if not line:
            continue

        if _is_scheme_type(line):
            scheme_type = line
            continue

        if line.startswith(COLUMN_HEADER_PREFIX):
            continue

        if _is_fund_house(line):
            fund_house = line.replace(";", "", 1).strip()
            continue

        parts = [p.strip() for p in line.split(";")]
        if len(parts) < MIN_FIELDS:
            result.dropped["malformed"] += 1
            continue

        code = parts[CODE]
        name = parts[NAME]
        nav = parts[NAV]
        date = parts[DATE] if len(parts) > DATE else ""

        reason = _drop_reason(code, name, nav, date)
        if reason is None and code in seen_codes:
            reason = "duplicate_code"
        if reason is not None:
            result.dropped[reason] += 1
            continue

        category, risk_level = OTHER_CATEGORY, None
        if categorize is not None:
            category, risk_level = categorize(name, scheme_type)

        seen_codes.add(code)
        result.funds.append(
            Fund(
                scheme_code=code,
                scheme_name=name,
                nav=nav,
                date=date,
                fund_house=fund_house,
                category=category,
                risk_level=risk_level,
            )
        )

    return result


def parse(raw_text: str) -> list[Fund]:
    """Parse raw feed text into funds, discarding the drop counts."""
    return parse_feed(raw_text).funds
