"""
Rate Chart — 集中式 Logging 設定
- 同時輸出至 console 與每日輪替的檔案 (TimedRotatingFileHandler)
- 所有模組透過 get_logger(__name__) 取得 logger
- LOG_LEVEL：log 等級（預設 INFO）
- LOG_FORMAT=json：改為單行 JSON 結構化輸出
- LOG_DIR / LOG_BACKUP_DAYS：檔案位置與保留天數；LOG_TO_FILE=false 可關閉檔案輸出
"""

import contextvars
import json
import logging
import os
import uuid
from logging.handlers import TimedRotatingFileHandler

LOG_DIR = os.getenv("LOG_DIR", "data/logs")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO").upper()
LOG_BACKUP_DAYS = int(os.getenv("LOG_BACKUP_DAYS", "3"))
_LOG_FORMAT_ENV = os.getenv("LOG_FORMAT", "text").lower()
_LOG_TO_FILE = os.getenv("LOG_TO_FILE", "true").lower() not in ("0", "false", "no")

_TEXT_FORMAT = "%(asctime)s | %(levelname)-8s | %(request_id)s | %(name)s | %(message)s"
LOG_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

REQUEST_ID_HEADER = "X-Request-ID"

# Per-request correlation id, set by the middleware registered in main.py
request_id_var: contextvars.ContextVar[str] = contextvars.ContextVar(
    "request_id", default="-"
)

_root_configured = False


def new_request_id(incoming: str | None = None) -> str:
    """沿用上游帶來的 X-Request-ID，否則產生 8 碼短 id。"""
    if incoming:
        return incoming[:64]
    return uuid.uuid4().hex[:8]


class _RequestIdFilter(logging.Filter):
    def filter(self, record: logging.LogRecord) -> bool:
        record.request_id = request_id_var.get()  # type: ignore[attr-defined]
        return True


class _JsonFormatter(logging.Formatter):
    """Single-line JSON for log aggregation (ELK / Loki)."""

    def format(self, record: logging.LogRecord) -> str:
        entry: dict = {
            "timestamp": self.formatTime(record, LOG_DATE_FORMAT),
            "level": record.levelname,
            "request_id": getattr(record, "request_id", "-"),
            "logger": record.name,
            "message": record.getMessage(),
        }
        if record.exc_info:
            entry["exc_info"] = self.formatException(record.exc_info)
        return json.dumps(entry, ensure_ascii=False)


def _make_formatter() -> logging.Formatter:
    if _LOG_FORMAT_ENV == "json":
        return _JsonFormatter()
    return logging.Formatter(_TEXT_FORMAT, datefmt=LOG_DATE_FORMAT)


def _make_file_handler(formatter: logging.Formatter) -> logging.Handler:
    os.makedirs(LOG_DIR, exist_ok=True)
    handler = TimedRotatingFileHandler(
        filename=os.path.join(LOG_DIR, "rate_chart.log"),
        when="midnight",
        backupCount=LOG_BACKUP_DAYS,
        encoding="utf-8",
        utc=True,
    )
    handler.suffix = "%Y-%m-%d"
    handler.setFormatter(formatter)
    return handler


def _configure_root_logger() -> None:
    """設定 root logger（僅執行一次）。"""
    global _root_configured
    if _root_configured:
        return

    root = logging.getLogger()
    root.setLevel(LOG_LEVEL)
    formatter = _make_formatter()

    console = logging.StreamHandler()
    console.setFormatter(formatter)
    handlers: list[logging.Handler] = [console]
    if _LOG_TO_FILE:
        handlers.append(_make_file_handler(formatter))

    # Filter on each handler so records from child loggers also get request_id
    for handler in handlers:
        handler.setLevel(LOG_LEVEL)
        handler.addFilter(_RequestIdFilter())
        root.addHandler(handler)

    # 降低第三方套件的 log 等級以減少雜訊
    for noisy in ("uvicorn.access", "httpx", "httpcore", "matplotlib"):
        logging.getLogger(noisy).setLevel(logging.WARNING)

    _root_configured = True


def get_logger(name: str) -> logging.Logger:
    """取得指定名稱的 logger，自動確保 root logger 已設定。"""
    _configure_root_logger()
    return logging.getLogger(name)
