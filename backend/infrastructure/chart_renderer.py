"""
Infrastructure — 圖表繪製 (matplotlib)。
將 domain.chart.ChartConfig 畫成 line chart，輸出 SVG（向量）或 PNG（點陣）。
使用物件導向的 Figure API，不經過 pyplot 的全域狀態，可在多個請求執行緒中同時呼叫。
"""

import io
import math

import matplotlib

matplotlib.use("Agg")
from matplotlib.figure import Figure  # noqa: E402

from domain.chart import ChartConfig, parse_rgb  # noqa: E402
from domain.constants import CHART_DPI  # noqa: E402
from logging_config import get_logger  # noqa: E402

logger = get_logger(__name__)

# 文字保留為 <text>（不轉成 path），SVG 內可直接搜尋標籤
matplotlib.rcParams["svg.fonttype"] = "none"

_MAX_VISIBLE_TICKS = 12


def _draw(config: ChartConfig) -> Figure:
    background = parse_rgb(config.background_color)
    fig = Figure(
        figsize=(config.width / CHART_DPI, config.height / CHART_DPI),
        dpi=CHART_DPI,
        facecolor=background,
    )
    ax = fig.add_subplot()
    ax.set_facecolor(background)

    x = list(range(len(config.labels)))
    for n, dataset in enumerate(config.datasets):
        fill = (*parse_rgb(dataset.background_color), dataset.background_alpha)
        (line,) = ax.plot(
            x,
            dataset.data,
            color=parse_rgb(dataset.border_color),
            linewidth=dataset.border_width,
            marker="o",
            markersize=3,
            markerfacecolor=fill,
            label=dataset.label,
        )
        line.set_gid(f"dataset-{n}")

    # Chart.js 的 autoSkip：標籤過多時等距抽樣
    step = max(1, math.ceil(len(x) / _MAX_VISIBLE_TICKS))
    ax.set_xticks(x[::step])
    ax.set_xticklabels(config.labels[::step], rotation=config.max_tick_rotation)
    ax.grid(True, color="#e5e5e5", linewidth=0.5)
    if config.datasets:
        ax.legend(loc="upper center", bbox_to_anchor=(0.5, 1.12), frameon=False)
    fig.tight_layout()
    return fig


def render_svg(config: ChartConfig) -> str:
    """ChartConfig → SVG markup."""
    fig = _draw(config)
    title = config.datasets[0].label if config.datasets else "chart"
    buf = io.BytesIO()
    fig.savefig(
        buf,
        format="svg",
        facecolor=fig.get_facecolor(),
        metadata={"Title": title, "Date": None},
    )
    logger.debug("SVG 繪製完成（%d bytes）。", buf.tell())
    return buf.getvalue().decode("utf-8")


def render_png(config: ChartConfig) -> bytes:
    """ChartConfig → PNG bytes（Agg 點陣化）。"""
    fig = _draw(config)
    buf = io.BytesIO()
    fig.savefig(buf, format="png", facecolor=fig.get_facecolor())
    logger.debug("PNG 繪製完成（%d bytes）。", buf.tell())
    return buf.getvalue()
