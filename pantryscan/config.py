from datetime import timedelta
from pathlib import Path

BASE_DIR = Path(__file__).resolve().parent.parent
DB_PATH = BASE_DIR / "pantryscan.db"
CACHE_TTL_SECONDS = 6 * 60 * 60  # 6 hours

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) "
    "Chrome/131.0.0.0 Safari/537.36"
)
INVENTORY_ACCEPT = (
    "text/html,application/xhtml+xml,application/xml;q=0.9,image/webp,*/*;q=0.8"
)
REQUEST_TIMEOUT_SECONDS = 15

RETRY_MAX_ATTEMPTS = 3
RETRY_BASE_DELAY_SECONDS = 0.5
RETRY_STATUS_CODES = frozenset({429, *range(500, 600)})

DEFAULT_AISLE = "Ask store associate"
PLACEHOLDER_STORE_ID = "unknown"
PLACEHOLDER_AISLE = "unknown"
ALTERNATIVE_STORE_LIMIT = 3
STALE_PRICE_AGE = timedelta(hours=24)
