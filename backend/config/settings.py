"""
Config — 從環境變數覆寫 domain 常數。
在應用程式啟動時呼叫一次 init_settings()。
時差 (TIMEZONE_OFFSET_HOURS) 與 allow-list 為固定政策，不開放覆寫。
"""

import os

from domain import constants
from logging_config import get_logger

logger = get_logger(__name__)


def init_settings() -> None:
    """Override domain constants from environment. Call once at startup."""
    pacing_delay = os.getenv("PACING_DELAY_SECONDS")
    if pacing_delay:
        try:
            constants.PACING_DELAY_SECONDS = max(0.0, float(pacing_delay))
        except ValueError:
            logger.warning("PACING_DELAY_SECONDS 格式錯誤，沿用預設值：%s", pacing_delay)

    chart_rate_limit = os.getenv("CHART_RATE_LIMIT")
    if chart_rate_limit:
        constants.CHART_RATE_LIMIT = chart_rate_limit
