"""
Domain — 資料庫實體 (SQLModel Tables)。
"""

from sqlmodel import Field, SQLModel


class RateSample(SQLModel, table=True):
    """單日匯率快取（以 pair + timestamp 為複合主鍵，寫入後不再變動）。"""

    pair: str = Field(primary_key=True, description="交易對，例如 btc_jpy")
    timestamp: str = Field(
        primary_key=True, description="ISO-8601 instant，例如 2024-01-30T15:00:00.000Z"
    )
    rate: str = Field(description="匯率（十進位字串）")
