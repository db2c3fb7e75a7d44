"""
Rate Chart Routes
GET /{pair}/{date}[.svg|.png] — 31 日匯率折線圖。
"""

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status

from api.dependencies import get_rate_series_resolver
from api.rate_limit import chart_rate_limit, limiter
from application.chart_service import render_rate_chart
from application.rate_series_service import RateSeriesResolver
from domain.rate_series import InvalidChartRequestError

router = APIRouter(tags=["Chart"])


@router.get(
    "/{pair}/{date}",
    response_class=Response,
    summary="31-day exchange rate chart (SVG or PNG)",
    responses={
        200: {"content": {"image/svg+xml": {}, "image/png": {}}},
        404: {"description": "Unsupported pair or unparseable date"},
    },
)
@limiter.limit(chart_rate_limit)
def get_rate_chart(
    request: Request,
    pair: str,
    date: str,
    resolver: RateSeriesResolver = Depends(get_rate_series_resolver),
) -> Response:
    """
    Render the anchor date and the 30 preceding days for a supported pair.

    Args:
        pair: One of the supported pairs (e.g. 'btc_jpy').
        date: ISO date, optionally suffixed with '.svg' or '.png'.
              Only '.svg' yields SVG; everything else yields PNG.
    """
    try:
        chart = render_rate_chart(resolver, pair, date)
    except InvalidChartRequestError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    return Response(content=chart.content, media_type=chart.media_type)
