"""
Application — 匯率序列解析 (RateSeriesResolver)。

快取優先：先以批次並行讀取 31 個 timestamp 的快取，
缺少的再依序（新 → 舊）向遠端 API 查詢，取得的 rate 寫回快取。
遠端沒有 rate 時僅在本次請求中記為 UNRESOLVED，不寫入快取，下次請求會再查一次。
"""

import contextvars
import time
from collections.abc import Callable
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import datetime

from domain import constants
from domain.constants import CACHE_BATCH_SIZE, CACHE_READ_POOL_SIZE, PACING_EVERY_N
from domain.enums import SampleStatus
from domain.protocols import RateSource, RateStore
from domain.rate_series import (
    RateSeries,
    SeriesEntry,
    build_candidate_timestamps,
    chunked,
)
from logging_config import get_logger

logger = get_logger(__name__)


class RateSeriesResolver:
    """Cache-first resolver for the trailing 31-day series of one pair."""

    def __init__(
        self,
        store: RateStore,
        source: RateSource,
        sleep: Callable[[float], None] = time.sleep,
        pacing_delay: float | None = None,
        batch_size: int = CACHE_BATCH_SIZE,
        max_workers: int = CACHE_READ_POOL_SIZE,
    ) -> None:
        self._store = store
        self._source = source
        self._sleep = sleep
        self._pacing_delay = (
            constants.PACING_DELAY_SECONDS if pacing_delay is None else pacing_delay
        )
        self._batch_size = batch_size
        self._max_workers = max_workers

    def resolve(self, pair: str, anchor: datetime) -> RateSeries:
        """
        取得 anchor 與前 30 日的匯率序列。

        Returns:
            timestamp → SeriesEntry，順序為新 → 舊（產生順序）。

        Raises:
            遠端查詢的任何錯誤（httpx.HTTPError 等）皆不攔截，直接中止整個請求。
        """
        timestamps = build_candidate_timestamps(anchor)
        resolved = self._load_cached(pair, timestamps)
        cached_count = len(resolved)
        self._fill_missing(pair, timestamps, resolved)

        series: RateSeries = {ts: resolved[ts] for ts in timestamps}
        unresolved = sum(
            1 for e in series.values() if e.status is SampleStatus.UNRESOLVED
        )
        logger.info(
            "序列解析完成：pair=%s, 快取 %d 筆, 遠端 %d 筆, 無資料 %d 筆",
            pair,
            cached_count,
            len(series) - cached_count - unresolved,
            unresolved,
        )
        return series

    # ------------------------------------------------------------------
    # 內部 Helpers
    # ------------------------------------------------------------------

    def _load_cached(self, pair: str, timestamps: list[str]) -> dict[str, SeriesEntry]:
        """每批 10 個 key，各批並行讀取後合併。"""
        batches = list(chunked(timestamps, self._batch_size))
        found: dict[str, str] = {}
        with ThreadPoolExecutor(
            max_workers=min(len(batches), self._max_workers)
        ) as pool:
            # worker 執行緒不繼承 contextvars；每批各自複製 context（保留 request id）
            futures = [
                pool.submit(
                    contextvars.copy_context().run, self._store.get_many, pair, batch
                )
                for batch in batches
            ]
            for future in as_completed(futures):
                found.update(future.result())

        logger.debug("[cache] pair=%s, 命中 %d/%d", pair, len(found), len(timestamps))
        return {
            ts: SeriesEntry(rate=found[ts], status=SampleStatus.CACHED)
            for ts in timestamps
            if ts in found
        }

    def _fill_missing(
        self, pair: str, timestamps: list[str], resolved: dict[str, SeriesEntry]
    ) -> None:
        """依序查詢遠端；loop index 每逢 4, 9, 14... 且有實際查詢時暫停一次。"""
        for i, ts in enumerate(timestamps):
            if ts in resolved:
                continue

            rate = self._source.fetch_rate(pair, ts)
            if rate is not None:
                self._store.set(pair, ts, rate)
                resolved[ts] = SeriesEntry(rate=rate, status=SampleStatus.FETCHED)
            else:
                resolved[ts] = SeriesEntry(rate=None, status=SampleStatus.UNRESOLVED)

            if i % PACING_EVERY_N == PACING_EVERY_N - 1:
                logger.debug(
                    "遠端查詢節流：index=%d, 暫停 %.2f 秒", i, self._pacing_delay
                )
                self._sleep(self._pacing_delay)
