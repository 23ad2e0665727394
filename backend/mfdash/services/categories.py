"""Keyword-based fund categorisation.

Off by default (ENRICH_CATEGORIES); without it every fund stays "other".
"""

from mfdash.models.fund import OTHER_CATEGORY

# Checked in order: a name keyword or a scheme-type keyword decides the category
PRIMARY_RULES = (
    ("equity", ("equity", "share"), "equity"),
    ("debt", ("debt", "income", "bond"), "debt"),
)

# Name-only keywords, checked after PRIMARY_RULES
NAME_RULES = (
    ("hybrid", ("hybrid", "balanced")),
    ("index", ("index", "etf", "nifty", "sensex")),
    ("elss", ("elss", "tax", "saving")),
)

# Scheme-type fallbacks once no name keyword matched
TYPE_RULES = (("hybrid", "hybrid"),)

RISK_LEVELS = {
    "equity": "High",
    "elss": "High",
    "debt": "Low",
    "hybrid": "Moderate",
    "index": "Moderate",
}


def classify_fund(scheme_name: str, scheme_type: str = "") -> str:
    name = scheme_name.lower()
    kind = scheme_type.lower()

    for category, keywords, type_keyword in PRIMARY_RULES:
        if any(k in name for k in keywords) or type_keyword in kind:
            return category
    for category, keywords in NAME_RULES:
        if any(k in name for k in keywords):
            return category
    for category, keyword in TYPE_RULES:
        if keyword in kind:
            return category
    return OTHER_CATEGORY


def risk_level_for(category: str) -> str:
    return RISK_LEVELS.get(category, "Moderate")


def categorize(scheme_name: str, scheme_type: str = "") -> tuple[str, str]:
    """Return (category, risk_level) for a scheme."""
    category = classify_fund(scheme_name, scheme_type)
    return category, risk_level_for(category)
