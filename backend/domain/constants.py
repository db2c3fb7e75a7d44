"""
Domain — 集中管理所有常數與政策參數。
避免散落在各模組中的 magic numbers / magic strings。
"""

import os as _os

# ---------------------------------------------------------------------------
# Supported Pairs (allow-list)
# ---------------------------------------------------------------------------
SUPPORTED_PAIRS: tuple[str, ...] = (
    "btc_jpy",
    "etc_jpy",
    "lsk_jpy",
    "mona_jpy",
    "plt_jpy",
    "fnct_jpy",
    "dai_jpy",
    "wbtc_jpy",
)

# ---------------------------------------------------------------------------
# Series Window
# ---------------------------------------------------------------------------
SERIES_WINDOW_DAYS = 31  # anchor date + 30 preceding days
# Local calendar date → reference instant (JST, UTC+9). Fixed policy, not configurable.
TIMEZONE_OFFSET_HOURS = 9
ANCHOR_FORMAT_SUFFIXES: tuple[str, ...] = (".png", ".svg")

# ---------------------------------------------------------------------------
# Cache Store
# ---------------------------------------------------------------------------
DATA_DIR = _os.getenv("DATA_DIR", "data")
CACHE_BATCH_SIZE = 10  # per-call multi-get ceiling of the store
CACHE_READ_POOL_SIZE = 4

# ---------------------------------------------------------------------------
# Remote Rate API (Coincheck)
# ---------------------------------------------------------------------------
COINCHECK_RATE_SEARCH_URL = "https://coincheck.com/exchange/rates/search"
COINCHECK_REQUEST_TIMEOUT: float | None = None  # no timeout on lookups
PACING_EVERY_N = 5  # pause after loop positions 4, 9, 14, ...
PACING_DELAY_SECONDS = 0.5

# ---------------------------------------------------------------------------
# Chart Appearance (Chart.js default palette)
# ---------------------------------------------------------------------------
CHART_LINE_COLOR = "rgb(54, 162, 235)"  # ChartColors.Blue
CHART_FILL_ALPHA = 0.5
CHART_BORDER_WIDTH = 1
CHART_BACKGROUND_COLOR = "#ffffff"
CHART_MAX_TICK_ROTATION = 0
CHART_WIDTH_PX = 768
CHART_HEIGHT_PX = 384
CHART_DPI = 100

MEDIA_TYPE_SVG = "image/svg+xml"
MEDIA_TYPE_PNG = "image/png"

# ---------------------------------------------------------------------------
# Inbound Rate Limit (slowapi)
# ---------------------------------------------------------------------------
CHART_RATE_LIMIT = "30/minute"

# ---------------------------------------------------------------------------
# Service Identity
# ---------------------------------------------------------------------------
SERVICE_NAME = "rate-chart"
