"""Dashboard page built from the views, served by the same app."""
from typing import Optional

import httpx
from fastapi import APIRouter, Query, Request
from fastapi.responses import HTMLResponse

from ..errors import ValidationError
from ..views import Dashboard, Direction, PriceChartView, SortOrder, StockTableView

router = APIRouter(tags=["Dashboard"])


@router.get("/dashboard", response_class=HTMLResponse)
async def dashboard_page(
    request: Request,
    symbol: Optional[str] = None,
    search: str = "",
    direction: str = Query("all", description="all, up or down"),
    sort: Optional[str] = Query(None, description="ascend or descend on percent change"),
):
    """Render the table and, when a symbol is given, its weekly chart."""
    if direction not in {d.value for d in Direction}:
        raise ValidationError(f"Unknown direction: {direction}")
    if sort and sort not in {s.value for s in SortOrder}:
        raise ValidationError(f"Unknown sort order: {sort}")

    settings = request.app.state.settings
    transport = httpx.ASGITransport(app=request.app)
    async with httpx.AsyncClient(transport=transport, base_url="http://stockmonitor") as client:
        table = StockTableView(client, symbols=settings.STOCK_SYMBOLS, refresh_interval=settings.REFRESH_INTERVAL)
        chart = PriceChartView(client, style=request.app.state.chart_style)
        page = Dashboard(table, chart)
        table.set_search(search)
        table.set_direction(direction)
        table.set_sort(sort)

        await table.fetch_stocks()
        if symbol:
            await table.select(symbol)

    return HTMLResponse(page.render_html())
