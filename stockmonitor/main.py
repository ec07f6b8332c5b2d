"""Stock Monitor - FastAPI application."""
import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .config import Settings
from .errors import SERVER_ERROR_MESSAGE, StockMonitorError
from .routers import dashboard_router, stock_router
from .views.price_chart import ChartStyle

logger = logging.getLogger(__name__)


def configure_logging(settings: Settings) -> None:
    logging.basicConfig(
        level=settings.LOG_LEVEL,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )


def create_app(settings: Optional[Settings] = None, transport: Optional[httpx.AsyncBaseTransport] = None) -> FastAPI:
    """Build the app around one Settings instance.

    ``transport`` replaces the network for the upstream client (used by tests).
    """
    settings = settings or Settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        app.state.upstream_client = httpx.AsyncClient(transport=transport, **settings.upstream_config)
        logger.info("Upstream provider: %s", settings.TWELVE_DATA_BASE_URL)
        if not settings.api_key_configured:
            logger.warning("TWELVE_DATA_API_KEY is not set; quote requests will fail with 500")
        try:
            yield
        finally:
            await app.state.upstream_client.aclose()

    app = FastAPI(
        title="Stock Monitor",
        description="Live quotes and weekly price charts proxied from Twelve Data",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.chart_style = ChartStyle()

    # Enable CORS for browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.CORS_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(StockMonitorError)
    async def stock_monitor_error_handler(request: Request, exc: StockMonitorError):
        return JSONResponse(exc.to_dict(), status_code=exc.status_code)

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s", request.url.path)
        return JSONResponse({"error": SERVER_ERROR_MESSAGE}, status_code=500)

    # Include routers
    app.include_router(stock_router)
    app.include_router(dashboard_router)

    @app.get("/health")
    def health():
        """Health check endpoint."""
        return {
            "status": "ok",
            "provider": settings.TWELVE_DATA_BASE_URL,
            "api_key_configured": settings.api_key_configured,
        }

    @app.get("/")
    def root():
        """Root endpoint with API info."""
        return {
            "name": "Stock Monitor",
            "version": "1.0.0",
            "endpoints": {
                "quote": "/api/stock-data?symbol={symbol}",
                "timeline": "/api/stock-data-timeline?symbol={symbol}",
                "dashboard": "/dashboard",
                "health": "/health",
            },
        }

    return app


def run() -> None:
    import uvicorn

    settings = Settings()
    configure_logging(settings)
    uvicorn.run(create_app(settings), host="0.0.0.0", port=8000)


if __name__ == "__main__":
    run()
