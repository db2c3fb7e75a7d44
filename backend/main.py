"""
Rate Chart — FastAPI 應用程式進入點。
負責建立 App、註冊路由、管理生命週期（快取 store 與遠端 client 為 process-wide 單例）。
"""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from api.rate_limit import limiter
from api.routes.chart_routes import router as chart_router
from api.schemas.common import HealthResponse
from config.settings import init_settings
from domain.constants import SERVICE_NAME
from infrastructure.database import create_db_and_tables, engine
from infrastructure.external.coincheck import CoincheckRateSource
from infrastructure.rate_store import SqlRateStore
from logging_config import REQUEST_ID_HEADER, get_logger, new_request_id, request_id_var

# Load environment variables from .env file
load_dotenv()
init_settings()

logger = get_logger(__name__)


# ---------------------------------------------------------------------------
# Lifespan: 建立資料表與共用資源
# ---------------------------------------------------------------------------


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    logger.info("Rate Chart 後端啟動中 — 初始化快取資料庫...")
    create_db_and_tables()
    app.state.rate_store = SqlRateStore(engine)
    logger.info("快取中已有 %d 筆匯率。", app.state.rate_store.count())
    app.state.rate_source = CoincheckRateSource()
    logger.info("快取 store 與 Coincheck client 就緒，服務啟動完成。")

    yield

    logger.info("Rate Chart 後端關閉中...")
    app.state.rate_source.close()


# ---------------------------------------------------------------------------
# App Factory
# ---------------------------------------------------------------------------

app = FastAPI(
    title="Rate Chart API",
    description="31 日匯率折線圖（SVG / PNG）",
    version="1.0.0",
    lifespan=lifespan,
)

# Register rate limiter state and exception handler
app.state.limiter = limiter
app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)


@app.middleware("http")
async def request_id_middleware(request: Request, call_next):
    """為每個請求設定 correlation id，並回傳於 X-Request-ID header。"""
    request_id = new_request_id(request.headers.get(REQUEST_ID_HEADER))
    token = request_id_var.set(request_id)
    try:
        response = await call_next(request)
    finally:
        request_id_var.reset(token)
    response.headers[REQUEST_ID_HEADER] = request_id
    return response


# ---------------------------------------------------------------------------
# Health Check
# ---------------------------------------------------------------------------


@app.get("/health", response_model=HealthResponse, summary="Health check")
def health_check() -> dict:
    return {"status": "ok", "service": SERVICE_NAME}


# ---------------------------------------------------------------------------
# 註冊路由
# ---------------------------------------------------------------------------

app.include_router(chart_router)
