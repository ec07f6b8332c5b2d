"""Error types raised by the proxy handlers and the views."""
from typing import Any, Dict, Optional

SERVER_ERROR_MESSAGE = "Server error"


class StockMonitorError(Exception):
    """Base error carrying the HTTP status the proxy responds with.

    Attributes:
        message: Human-readable error description, sent as ``error``.
        status_code: HTTP status of the JSON error response.
        code: Optional upstream error code, sent as ``code`` when present.
    """

    status_code: int = 500

    def __init__(self, message: str, status_code: Optional[int] = None, code: Optional[Any] = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code
        self.code = code

    def to_dict(self) -> Dict[str, Any]:
        body: Dict[str, Any] = {"error": self.message}
        if self.code is not None:
            body["code"] = self.code
        return body


class ValidationError(StockMonitorError):
    """A required request parameter is missing."""

    status_code = 400


class ConfigurationError(StockMonitorError):
    """The provider credential is not configured."""

    status_code = 500


class UpstreamError(StockMonitorError):
    """The provider answered with a structured error payload."""

    status_code = 400

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "UpstreamError":
        """Build from a ``{"status": "error", "code": ..., "message": ...}`` body.

        429 is passed through; every other provider code becomes 400.
        """
        code = payload.get("code") or 500
        status = 429 if payload.get("code") == 429 else 400
        return cls(payload.get("message") or "API error", status_code=status, code=code)


class TransportError(StockMonitorError):
    """The upstream call failed at the network or HTTP level."""

    status_code = 500


class PartialDataError(StockMonitorError):
    """One symbol of a batch could not be loaded.

    Raised and caught inside the table view; never reaches a response.
    """

    def __init__(self, symbol: str, message: str):
        super().__init__(message)
        self.symbol = symbol
