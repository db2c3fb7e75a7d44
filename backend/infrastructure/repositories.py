"""
Infrastructure — Repository Pattern。
集中管理所有資料庫查詢，讓 Service 層不直接接觸 ORM 語法。
"""

from sqlmodel import Session, func, select

from domain.entities import RateSample

# ===========================================================================
# RateSample Repository
# ===========================================================================


def find_rate_sample(session: Session, pair: str, timestamp: str) -> RateSample | None:
    """根據 (pair, timestamp) 查詢單筆快取。"""
    return session.get(RateSample, (pair, timestamp))


def find_rate_samples(
    session: Session, pair: str, timestamps: list[str]
) -> list[RateSample]:
    """一次查詢多個 timestamp（缺少的 key 不會出現在結果中）。"""
    if not timestamps:
        return []
    statement = select(RateSample).where(
        RateSample.pair == pair,
        RateSample.timestamp.in_(timestamps),  # type: ignore[attr-defined]
    )
    return list(session.exec(statement).all())


def save_rate_sample(session: Session, sample: RateSample) -> RateSample:
    """新增或覆寫單筆快取（upsert）。"""
    merged = session.merge(sample)
    session.commit()
    return merged


def count_rate_samples(session: Session, pair: str | None = None) -> int:
    """計算快取筆數（可依 pair 篩選）。"""
    statement = select(func.count()).select_from(RateSample)
    if pair is not None:
        statement = statement.where(RateSample.pair == pair)
    return session.exec(statement).one()
