"""
Infrastructure — Coincheck 匯率查詢 API 適配器。
GET /exchange/rates/search?pair={pair}&time={ISO-8601} → {"rate": "..."}（rate 可能缺少）。

不做重試也不設 timeout：任何網路錯誤或非 2xx 回應皆直接拋出 httpx.HTTPError，
由上層讓整個請求失敗。
"""

import httpx

from domain.constants import COINCHECK_RATE_SEARCH_URL, COINCHECK_REQUEST_TIMEOUT
from logging_config import get_logger

logger = get_logger(__name__)


class CoincheckRateSource:
    """RateSource implementation; holds one httpx.Client for the process lifetime."""

    def __init__(
        self,
        client: httpx.Client | None = None,
        url: str = COINCHECK_RATE_SEARCH_URL,
    ) -> None:
        self._client = client or httpx.Client(timeout=COINCHECK_REQUEST_TIMEOUT)
        self._url = url

    def fetch_rate(self, pair: str, timestamp: str) -> str | None:
        resp = self._client.get(self._url, params={"pair": pair, "time": timestamp})
        resp.raise_for_status()
        payload = resp.json()
        rate = payload.get("rate") if isinstance(payload, dict) else None
        logger.info("[api] pair=%s, time=%s, rate=%s", pair, timestamp, rate)
        return None if rate is None else str(rate)

    def close(self) -> None:
        self._client.close()
