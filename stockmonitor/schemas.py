"""Pydantic schemas for request/response validation."""
import math
import re
from typing import Any, Optional

from pydantic import BaseModel

_LEADING_FLOAT = re.compile(r"^[+-]?(?:Infinity|(?:\d+\.?\d*|\.\d+)(?:[eE][+-]?\d+)?)")


def parse_float(value: Any) -> float:
    """Parse a provider value the way the dashboard always has.

    Leading whitespace is skipped and the longest numeric prefix is used
    ("12.5abc" -> 12.5). Anything without a numeric prefix, including
    ``None``, becomes NaN.
    """
    if isinstance(value, bool):
        return math.nan
    if isinstance(value, (int, float)):
        return float(value)
    if value is None:
        return math.nan
    match = _LEADING_FLOAT.match(str(value).lstrip())
    if not match:
        return math.nan
    return float(match.group().replace("Infinity", "inf"))


def finite_or_none(value: float) -> Optional[float]:
    """NaN/inf are written to JSON as null."""
    return value if math.isfinite(value) else None


# --- Quote Schemas ---
class Quote(BaseModel):
    symbol: str
    name: str = ""
    price: float = 0.0
    percent_change: float = 0.0
    open: float = 0.0

    @classmethod
    def from_provider(cls, data: dict) -> "Quote":
        """Reshape a raw provider quote object."""
        return cls(
            symbol=data.get("symbol") or "",
            name=data.get("name") or "",
            price=parse_float(data.get("close")),
            percent_change=parse_float(data.get("percent_change")),
            open=parse_float(data.get("open")),
        )

    @classmethod
    def from_payload(cls, symbol: str, data: dict) -> "Quote":
        """Read a proxy response body back; null numbers become NaN."""
        return cls(
            symbol=symbol,
            name=data.get("name") or "",
            price=parse_float(data.get("price")),
            percent_change=parse_float(data.get("percent_change")),
            open=parse_float(data.get("open")),
        )

    @classmethod
    def placeholder(cls, symbol: str) -> "Quote":
        return cls(symbol=symbol)

    def to_payload(self) -> dict:
        return {
            "symbol": self.symbol,
            "name": self.name,
            "price": finite_or_none(self.price),
            "percent_change": finite_or_none(self.percent_change),
            "open": finite_or_none(self.open),
        }


# --- Error Schemas ---
class ErrorResponse(BaseModel):
    error: str
    code: Optional[Any] = None
