"""
API dependencies — 將 lifespan 建立的 process-wide 資源注入 application 層。
"""

from fastapi import Request

from application.rate_series_service import RateSeriesResolver


def get_rate_series_resolver(request: Request) -> RateSeriesResolver:
    """
    以 app.state 上的快取 store 與遠端 source 建立 resolver。

    store / source 皆在啟動時建立一次，於整個 process 生命週期共用。
    """
    state = request.app.state
    return RateSeriesResolver(store=state.rate_store, source=state.rate_source)
