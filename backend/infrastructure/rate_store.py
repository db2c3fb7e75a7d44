"""
Infrastructure — 匯率快取 (RateStore 實作)。
以 SQLModel 資料表作為持久化 key-value store，key 為 (pair, timestamp)，無 TTL。
每次呼叫各自開啟 Session，因此可由多個執行緒並行讀取。
"""

from sqlalchemy.engine import Engine
from sqlmodel import Session

from domain.entities import RateSample
from infrastructure.repositories import (
    count_rate_samples,
    find_rate_sample,
    find_rate_samples,
    save_rate_sample,
)
from logging_config import get_logger

logger = get_logger(__name__)


class SqlRateStore:
    """RateStore backed by the ratesample table."""

    def __init__(self, engine: Engine) -> None:
        self._engine = engine

    def get(self, pair: str, timestamp: str) -> str | None:
        with Session(self._engine) as session:
            sample = find_rate_sample(session, pair, timestamp)
            return sample.rate if sample else None

    def get_many(self, pair: str, timestamps: list[str]) -> dict[str, str]:
        with Session(self._engine) as session:
            samples = find_rate_samples(session, pair, timestamps)
            found = {s.timestamp: s.rate for s in samples}
        logger.debug(
            "快取批次讀取：pair=%s, 要求 %d 筆，命中 %d 筆",
            pair,
            len(timestamps),
            len(found),
        )
        return found

    def count(self) -> int:
        with Session(self._engine) as session:
            return count_rate_samples(session)

    def set(self, pair: str, timestamp: str, rate: str) -> None:
        with Session(self._engine) as session:
            save_rate_sample(
                session, RateSample(pair=pair, timestamp=timestamp, rate=rate)
            )
