"""Application configuration."""

import os

LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

# Upstream data sources
AMFI_DATA_URL = os.getenv("AMFI_DATA_URL", "https://www.amfiindia.com/spages/NAVAll.txt")
MFAPI_BASE_URL = os.getenv("MFAPI_BASE_URL", "https://api.mfapi.in/mf").rstrip("/")

# Request timeouts
AMFI_TIMEOUT = 30  # seconds
MFAPI_RETURNS_TIMEOUT = 10  # seconds
MFAPI_DETAILS_TIMEOUT = 15  # seconds

# Cache settings (in-memory, process lifetime)
AMFI_CACHE_TTL = 15 * 60  # seconds

# Fund list settings
LIST_ENRICH_LIMIT = int(os.getenv("LIST_ENRICH_LIMIT", "50"))
NAV_HISTORY_LIMIT = 365  # points kept on fund details
ENRICH_CATEGORIES = os.getenv("ENRICH_CATEGORIES", "0").lower() in ("1", "true", "yes")

# Background refresh
FEED_REFRESH_INTERVAL = 15 * 60  # seconds
ENABLE_SCHEDULER = os.getenv("ENABLE_SCHEDULER", "1").lower() in ("1", "true", "yes")
