"""
Rate limiter instance — shared across all routes to avoid circular imports.
"""

from slowapi import Limiter
from slowapi.util import get_remote_address

from domain import constants

# Shared limiter instance used by main.py and route decorators.
# key_style="endpoint"：同一 client 對同一路由共用額度，不因 URL 路徑不同而分開計算
limiter = Limiter(key_func=get_remote_address, key_style="endpoint")


def chart_rate_limit() -> str:
    """Read at request time so init_settings() overrides take effect."""
    return constants.CHART_RATE_LIMIT
