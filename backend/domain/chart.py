"""
Domain — 宣告式圖表描述（line chart）。
只描述「要畫什麼」，實際繪製交給 infrastructure.chart_renderer。
"""

from dataclasses import dataclass, field
from datetime import datetime

from domain.constants import (
    CHART_BACKGROUND_COLOR,
    CHART_BORDER_WIDTH,
    CHART_FILL_ALPHA,
    CHART_HEIGHT_PX,
    CHART_LINE_COLOR,
    CHART_MAX_TICK_ROTATION,
    CHART_WIDTH_PX,
)
from domain.rate_series import (
    RateSeries,
    chronological,
    coerce_rate,
    format_anchor_label,
    format_axis_label,
)


@dataclass(frozen=True)
class ChartDataset:
    label: str
    data: list[float]
    border_color: str = CHART_LINE_COLOR
    background_color: str = CHART_LINE_COLOR
    background_alpha: float = CHART_FILL_ALPHA
    border_width: float = CHART_BORDER_WIDTH


@dataclass(frozen=True)
class ChartConfig:
    labels: list[str]
    datasets: list[ChartDataset] = field(default_factory=list)
    type: str = "line"
    max_tick_rotation: int = CHART_MAX_TICK_ROTATION
    background_color: str = CHART_BACKGROUND_COLOR
    width: int = CHART_WIDTH_PX
    height: int = CHART_HEIGHT_PX


def parse_rgb(color: str) -> tuple[float, float, float]:
    """'rgb(54, 162, 235)' → (0.21, 0.64, 0.92)；'#rrggbb' 亦可。"""
    color = color.strip()
    if color.startswith("#") and len(color) == 7:
        channels = [int(color[i : i + 2], 16) for i in (1, 3, 5)]
    elif color.startswith("rgb(") and color.endswith(")"):
        channels = [int(part) for part in color[4:-1].split(",")]
    else:
        raise ValueError(f"Unsupported color: {color}")
    r, g, b = (c / 255 for c in channels)
    return r, g, b


def build_rate_chart(pair: str, anchor: datetime, series: RateSeries) -> ChartConfig:
    """
    將匯率序列轉為圖表描述。

    序列內部為新 → 舊，此處反轉為舊 → 新（由左至右）；
    標籤為 +9h 時區的 M/D，數值無法解析者為 NaN。
    """
    ordered = chronological(series)
    return ChartConfig(
        labels=[format_axis_label(timestamp) for timestamp, _ in ordered],
        datasets=[
            ChartDataset(
                label=f"{pair} ({format_anchor_label(anchor)})",
                data=[coerce_rate(entry.rate) for _, entry in ordered],
            )
        ],
    )
