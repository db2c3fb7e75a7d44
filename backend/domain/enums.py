"""
Domain — 列舉定義。
"""

from enum import StrEnum

from domain.constants import MEDIA_TYPE_PNG, MEDIA_TYPE_SVG


class CurrencyPair(StrEnum):
    """Coincheck 支援的交易對（固定 allow-list）。"""

    BTC_JPY = "btc_jpy"
    ETC_JPY = "etc_jpy"
    LSK_JPY = "lsk_jpy"
    MONA_JPY = "mona_jpy"
    PLT_JPY = "plt_jpy"
    FNCT_JPY = "fnct_jpy"
    DAI_JPY = "dai_jpy"
    WBTC_JPY = "wbtc_jpy"


class ChartFormat(StrEnum):
    """輸出圖檔格式。"""

    SVG = "svg"
    PNG = "png"

    @property
    def media_type(self) -> str:
        return MEDIA_TYPE_SVG if self is ChartFormat.SVG else MEDIA_TYPE_PNG


class SampleStatus(StrEnum):
    """Series entry 的來源狀態。

    CACHED — 由快取讀出；FETCHED — 本次請求由遠端取得並已寫入快取；
    UNRESOLVED — 遠端有回應但沒有 rate，僅存在於本次請求的記憶體中。
    """

    CACHED = "CACHED"
    FETCHED = "FETCHED"
    UNRESOLVED = "UNRESOLVED"
