"""Top-level page: stock table above the chart of the selected symbol."""
from html import escape
from typing import Optional
from urllib.parse import quote_plus

from .price_chart import PriceChartView
from .stock_table import Direction, StockTableView

PAGE_TITLE = "Stock Monitor"
CHART_TITLE = "Stock price chart"

DIRECTION_LABELS = {
    Direction.ALL: "All",
    Direction.UP: "Rising",
    Direction.DOWN: "Falling",
}

PAGE_STYLE = """
body{font-family:system-ui,Segoe UI,Roboto,Arial,sans-serif;padding:16px;max-width:960px;margin:auto}
table{border-collapse:collapse;width:100%}
th,td{border:1px solid #e5e7eb;padding:10px;text-align:right}
th{background:#f8fafc;text-align:center}
td.t{text-align:left}
tr.row:hover{background:#f1f5f9;cursor:pointer}
.green{color:#0b875b;font-weight:600}
.red{color:#c0392b;font-weight:600}
.muted{color:#6b7280}
.controls{display:flex;gap:12px;margin-bottom:12px}
.controls a.active{font-weight:700}
.notice{padding:6px 10px;margin-bottom:6px;border-radius:4px}
.notice.warning{background:#fef3c7}
.notice.error{background:#fee2e2}
.chart-placeholder{text-align:center;padding:16px 0}
"""


class Dashboard:
    """Owns the selected symbol and wires the table's selection to the chart."""

    def __init__(self, table: StockTableView, chart: PriceChartView):
        self.table = table
        self.chart = chart
        self.selected_symbol: Optional[str] = None
        self.table.on_select = self.select

    async def select(self, symbol: Optional[str]) -> None:
        self.selected_symbol = symbol or None
        await self.chart.load(self.selected_symbol)

    def _controls_html(self) -> str:
        links = []
        for direction, label in DIRECTION_LABELS.items():
            css = ' class="active"' if direction is self.table.direction else ""
            links.append(
                f'<a{css} href="?direction={direction.value}&search={quote_plus(self.table.search)}">{label}</a>'
            )
        return (
            '<form class="controls" method="get">'
            f'<input name="search" placeholder="Search by symbol" value="{escape(self.table.search)}">'
            f'<input type="hidden" name="direction" value="{self.table.direction.value}">'
            f'{"".join(links)}'
            "</form>"
        )

    def _notices_html(self) -> str:
        return "".join(
            f'<div class="notice {n.level.value}">{escape(n.message)}</div>'
            for n in self.table.notices.notices
        )

    def _table_html(self) -> str:
        body = []
        for row in self.table.table_rows():
            body.append(
                f'<tr class="row" data-symbol="{escape(row["symbol"])}">'
                f'<td class="t"><a href="?symbol={quote_plus(row["symbol"])}">{escape(row["symbol"])}</a></td>'
                f'<td class="t">{escape(row["name"])}</td>'
                f'<td>{row["price"]}</td>'
                f'<td class="{row["tone"]}">{row["percent_change"]}</td></tr>'
            )
        if not body:
            body.append('<tr><td colspan="4" class="muted">No data</td></tr>')
        return (
            "<table><thead><tr>"
            '<th class="t">Symbol</th><th class="t">Name</th><th>Price ($)</th><th>Change (%)</th>'
            "</tr></thead><tbody>" + "".join(body) + "</tbody></table>"
        )

    def render_html(self) -> str:
        return (
            "<!DOCTYPE html>"
            f'<html><head><meta charset="utf-8"><title>{PAGE_TITLE}</title>'
            f"<style>{PAGE_STYLE}</style></head><body>"
            f"<h1>{PAGE_TITLE}</h1>"
            f"{self._notices_html()}{self._controls_html()}{self._table_html()}"
            f"<div><h2>{CHART_TITLE}</h2>{self.chart.render_html()}</div>"
            "</body></html>"
        )
