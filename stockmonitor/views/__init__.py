"""Dashboard views fed by the proxy endpoints."""
from .dashboard import Dashboard
from .notices import Notice, NoticeBoard, NoticeLevel
from .price_chart import ChartState, ChartStyle, PriceChartView
from .stock_table import Direction, SortOrder, StockTableView

__all__ = [
    "ChartState",
    "ChartStyle",
    "Dashboard",
    "Direction",
    "Notice",
    "NoticeBoard",
    "NoticeLevel",
    "PriceChartView",
    "SortOrder",
    "StockTableView",
]
