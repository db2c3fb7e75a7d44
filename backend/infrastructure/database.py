"""
Infrastructure — 資料庫連線 (engine) 管理。
使用 SQLite (透過 SQLModel / SQLAlchemy) 作為匯率快取的持久化 key-value store。
"""

import os

from sqlmodel import SQLModel, create_engine

from domain.constants import DATA_DIR
from logging_config import get_logger

logger = get_logger(__name__)

DATABASE_URL = os.getenv("DATABASE_URL", f"sqlite:///{DATA_DIR}/rates.db")

# SQLite 需要 check_same_thread=False 以支援多執行緒存取（批次讀取為並行）
connect_args = (
    {"check_same_thread": False} if DATABASE_URL.startswith("sqlite") else {}
)
engine = create_engine(DATABASE_URL, echo=False, connect_args=connect_args)

logger.info("資料庫連線位置：%s", DATABASE_URL)


def _ensure_sqlite_dir() -> None:
    """sqlite:///relative/path.db 的父目錄不存在時先建立。"""
    prefix = "sqlite:///"
    if not DATABASE_URL.startswith(prefix):
        return
    db_path = DATABASE_URL[len(prefix) :]
    parent = os.path.dirname(db_path)
    if db_path and parent:
        os.makedirs(parent, exist_ok=True)


def create_db_and_tables() -> None:
    """建立所有 SQLModel 定義的資料表（若不存在）。"""
    # 確保所有 Entity 已被 import，SQLModel metadata 才會完整
    import domain.entities  # noqa: F401

    _ensure_sqlite_dir()
    logger.info("建立資料表（若不存在）...")
    SQLModel.metadata.create_all(engine)
    logger.info("資料表就緒。")

