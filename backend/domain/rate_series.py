"""
Domain — 匯率序列的純函式（請求解析、時間戳產生、輸出整形）。
不依賴任何外部服務，方便單元測試。
"""

import math
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import TypeVar

from domain.constants import (
    ANCHOR_FORMAT_SUFFIXES,
    SERIES_WINDOW_DAYS,
    SUPPORTED_PAIRS,
    TIMEZONE_OFFSET_HOURS,
)
from domain.enums import ChartFormat, CurrencyPair, SampleStatus

T = TypeVar("T")

_OFFSET = timedelta(hours=TIMEZONE_OFFSET_HOURS)
_EARLIEST_ANCHOR = datetime.min.replace(tzinfo=UTC) + timedelta(
    days=SERIES_WINDOW_DAYS
)
# fromisoformat 無法解析時的備援格式（%m / %d 可不補零）
_FALLBACK_DATE_FORMATS = ("%Y/%m/%d", "%Y-%m-%d")


# ---------------------------------------------------------------------------
# Custom exceptions
# ---------------------------------------------------------------------------


class InvalidChartRequestError(Exception):
    """請求參數不合法（對外一律回應 not found）。"""


class UnsupportedPairError(InvalidChartRequestError):
    """交易對不在 allow-list 中。"""


class InvalidDateError(InvalidChartRequestError):
    """日期無法解析。"""


# ---------------------------------------------------------------------------
# Value objects
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SeriesRequest:
    pair: CurrencyPair
    anchor: datetime
    chart_format: ChartFormat


@dataclass(frozen=True)
class SeriesEntry:
    rate: str | None
    status: SampleStatus


# Ordered timestamp → entry, insertion order = generation order (most recent first).
RateSeries = dict[str, SeriesEntry]


# ---------------------------------------------------------------------------
# Request parsing
# ---------------------------------------------------------------------------


def parse_pair(token: str) -> CurrencyPair:
    if token not in SUPPORTED_PAIRS:
        raise UnsupportedPairError(token)
    return CurrencyPair(token)


def strip_format_suffix(token: str) -> tuple[str, ChartFormat]:
    """去除 .svg / .png 副檔名；只有 .svg 會輸出 SVG，其餘皆為 PNG。"""
    chart_format = ChartFormat.SVG if token.endswith(".svg") else ChartFormat.PNG
    for suffix in ANCHOR_FORMAT_SUFFIXES:
        if token.endswith(suffix):
            return token[: -len(suffix)], chart_format
    return token, chart_format


def parse_anchor(date_part: str) -> datetime:
    """
    將日期字串轉為參考時間點。

    接受 ISO-8601 日期或日期時間，另接受 2024/1/31、2024-1-31 兩種日期格式；
    其他自由格式（如 "Jan 31 2024"）一律視為無效。
    無時區資訊者視為 UTC，再減去固定的 9 小時時差（當地日曆日 → 參考 instant）。
    """
    try:
        parsed = _parse_date_token(date_part)
        if parsed.tzinfo is None:
            parsed = parsed.replace(tzinfo=UTC)
        anchor = parsed.astimezone(UTC) - _OFFSET
        if anchor < _EARLIEST_ANCHOR:
            raise ValueError("window starts before year 1")
    except (ValueError, OverflowError) as e:
        raise InvalidDateError(date_part) from e
    return anchor


def _parse_date_token(date_part: str) -> datetime:
    try:
        return datetime.fromisoformat(date_part)
    except ValueError:
        pass
    for fmt in _FALLBACK_DATE_FORMATS:
        try:
            return datetime.strptime(date_part, fmt)
        except ValueError:
            continue
    raise ValueError(f"unrecognized date: {date_part!r}")


def parse_series_request(pair_token: str, date_token: str) -> SeriesRequest:
    pair = parse_pair(pair_token)
    date_part, chart_format = strip_format_suffix(date_token)
    return SeriesRequest(
        pair=pair, anchor=parse_anchor(date_part), chart_format=chart_format
    )


# ---------------------------------------------------------------------------
# Timestamps
# ---------------------------------------------------------------------------


def to_timestamp(instant: datetime) -> str:
    """UTC, millisecond precision, trailing Z (e.g. 2024-01-30T15:00:00.000Z)."""
    iso = instant.astimezone(UTC).isoformat(timespec="milliseconds")
    return iso.replace("+00:00", "Z")


def build_candidate_timestamps(anchor: datetime) -> list[str]:
    """Anchor first, then each of the 30 preceding days."""
    return [
        to_timestamp(anchor - timedelta(days=i)) for i in range(SERIES_WINDOW_DAYS)
    ]


def chunked(items: Sequence[T], size: int) -> Iterator[list[T]]:
    for start in range(0, len(items), size):
        yield list(items[start : start + size])


# ---------------------------------------------------------------------------
# Output shaping
# ---------------------------------------------------------------------------


def local_date_of(timestamp: str) -> datetime:
    return datetime.fromisoformat(timestamp) + _OFFSET


def format_axis_label(timestamp: str) -> str:
    local = local_date_of(timestamp)
    return f"{local.month}/{local.day}"


def format_anchor_label(anchor: datetime) -> str:
    local = anchor + _OFFSET
    return f"{local.year}/{local.month}/{local.day}"


def coerce_rate(rate: str | None) -> float:
    """Unresolved or non-numeric rates become NaN (drawn as a gap)."""
    if rate is None:
        return math.nan
    try:
        return float(rate)
    except ValueError:
        return math.nan


def chronological(series: RateSeries) -> list[tuple[str, SeriesEntry]]:
    """Oldest → newest."""
    return list(reversed(series.items()))
