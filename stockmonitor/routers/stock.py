"""Stock API endpoints."""
from typing import Optional

import httpx
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse, Response

from ..config import Settings
from ..handlers import handle_get_quote, handle_get_timeline
from ..schemas import ErrorResponse

router = APIRouter(prefix="/api", tags=["Stock"])

ERROR_RESPONSES = {status: {"model": ErrorResponse} for status in (400, 429, 500)}


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_upstream_client(request: Request) -> httpx.AsyncClient:
    return request.app.state.upstream_client


@router.get("/stock-data", responses=ERROR_RESPONSES)
async def get_stock_data(
    symbol: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_upstream_client),
):
    """Current quote for one symbol - polled by the stock table."""
    quote = await handle_get_quote(symbol, settings, client)
    return JSONResponse(quote.to_payload())


@router.get("/stock-data-timeline", responses=ERROR_RESPONSES)
async def get_stock_data_timeline(
    symbol: Optional[str] = None,
    settings: Settings = Depends(get_settings),
    client: httpx.AsyncClient = Depends(get_upstream_client),
):
    """Last week of daily closes, passed through as the provider sent it."""
    body = await handle_get_timeline(symbol, settings, client)
    return Response(content=body, media_type="application/json")
