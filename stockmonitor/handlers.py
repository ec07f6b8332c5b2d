"""Twelve Data proxy handler implementations."""
import logging
from typing import Any, Dict, Optional

import httpx

from .config import Settings
from .errors import (
    SERVER_ERROR_MESSAGE,
    ConfigurationError,
    StockMonitorError,
    TransportError,
    UpstreamError,
    ValidationError,
)
from .schemas import Quote

logger = logging.getLogger(__name__)

TIMELINE_INTERVAL = "1day"
TIMELINE_OUTPUT_SIZE = 7


# --- Utilities ---
def _error_message(response: Optional[httpx.Response]) -> Optional[str]:
    """Return the ``message`` field of a JSON error body, if there is one."""
    if response is None:
        return None
    try:
        body = response.json()
    except ValueError:
        return None
    if isinstance(body, dict) and body.get("message"):
        return str(body["message"])
    return None


def normalize_transport_error(exc: Exception) -> StockMonitorError:
    """Map a failed upstream call to the error the proxy responds with."""
    if isinstance(exc, StockMonitorError):
        return exc
    if isinstance(exc, httpx.HTTPStatusError):
        # str(exc) carries the request URL, and with it the apikey
        status = exc.response.status_code
        message = _error_message(exc.response) or f"Request failed with status code {status}"
        return TransportError(message, status_code=status)
    if isinstance(exc, httpx.HTTPError):
        return TransportError(str(exc) or exc.__class__.__name__)
    return StockMonitorError(SERVER_ERROR_MESSAGE)


# --- Proxy Handlers ---
async def handle_get_quote(symbol: Optional[str], settings: Settings, client: httpx.AsyncClient) -> Quote:
    """Fetch and reshape one symbol's current quote."""
    if not symbol:
        raise ValidationError("Symbol parameter is required")
    if not settings.api_key_configured:
        raise ConfigurationError("API key is not configured")

    try:
        response = await client.get(
            "/quote", params={"symbol": symbol, "apikey": settings.TWELVE_DATA_API_KEY}
        )
        response.raise_for_status()
        data = response.json()
    except Exception as e:
        error = normalize_transport_error(e)
        logger.warning("Quote request for %s failed (%s): %s", symbol, error.status_code, error.message)
        raise error from e

    if isinstance(data, dict) and data.get("status") == "error":
        error = UpstreamError.from_payload(data)
        logger.warning("Provider rejected quote for %s: %s (code %s)", symbol, error.message, error.code)
        raise error

    if not isinstance(data, dict):
        raise StockMonitorError(SERVER_ERROR_MESSAGE)

    return Quote.from_provider(data)


async def handle_get_timeline(symbol: Optional[str], settings: Settings, client: httpx.AsyncClient) -> bytes:
    """Fetch a symbol's recent daily series and return the body untouched."""
    params: Dict[str, Any] = {
        "symbol": symbol or "",
        "interval": TIMELINE_INTERVAL,
        "outputsize": TIMELINE_OUTPUT_SIZE,
        "apikey": settings.TWELVE_DATA_API_KEY,
    }
    try:
        response = await client.get("/time_series", params=params)
        response.raise_for_status()
    except httpx.HTTPStatusError as e:
        message = _error_message(e.response)
        logger.warning("Timeline request for %s failed (%s)", symbol, e.response.status_code)
        if message:
            raise TransportError(message, status_code=e.response.status_code) from e
        raise TransportError(SERVER_ERROR_MESSAGE) from e
    except Exception as e:
        logger.warning("Timeline request for %s failed: %s", symbol, e)
        raise TransportError(SERVER_ERROR_MESSAGE) from e

    return response.content
