"""
Application — 匯率圖表服務。
解析請求 → 取得序列 → 建立圖表描述 → 輸出 SVG 或 PNG。
"""

from dataclasses import dataclass

from application.rate_series_service import RateSeriesResolver
from domain.chart import build_rate_chart
from domain.enums import ChartFormat
from domain.rate_series import InvalidChartRequestError, parse_series_request
from infrastructure.chart_renderer import render_png, render_svg
from logging_config import get_logger

logger = get_logger(__name__)


@dataclass(frozen=True)
class RenderedChart:
    content: str | bytes
    media_type: str


def render_rate_chart(
    resolver: RateSeriesResolver, pair_token: str, date_token: str
) -> RenderedChart:
    """
    產生指定交易對、日期的 31 日匯率圖。

    Args:
        resolver: 已注入快取與遠端來源的 RateSeriesResolver。
        pair_token: 路徑中的交易對，例如 'btc_jpy'。
        date_token: 路徑中的日期，可帶 .svg / .png 副檔名。

    Raises:
        InvalidChartRequestError: 交易對不支援或日期無法解析（不會存取快取與遠端）。
    """
    try:
        request = parse_series_request(pair_token, date_token)
    except InvalidChartRequestError:
        logger.warning("[invalid params] pair=%s, date=%s", pair_token, date_token)
        raise

    logger.info(
        "[chart] pair=%s, anchor=%s, format=%s",
        request.pair,
        request.anchor.isoformat(),
        request.chart_format,
    )
    series = resolver.resolve(request.pair.value, request.anchor)
    config = build_rate_chart(request.pair.value, request.anchor, series)

    if request.chart_format is ChartFormat.SVG:
        return RenderedChart(render_svg(config), request.chart_format.media_type)
    return RenderedChart(render_png(config), request.chart_format.media_type)
