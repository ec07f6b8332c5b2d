"""Live, filterable table of quotes for a fixed roster of symbols."""
import asyncio
import inspect
import logging
import math
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

import httpx

from ..config import DEFAULT_SYMBOLS
from ..errors import PartialDataError
from ..schemas import Quote
from .notices import NoticeBoard

logger = logging.getLogger(__name__)

UNAVAILABLE = "—"


class Direction(str, Enum):
    ALL = "all"
    UP = "up"
    DOWN = "down"


class SortOrder(str, Enum):
    ASCEND = "ascend"
    DESCEND = "descend"


def filter_quotes(quotes: Sequence[Quote], search: str = "", direction: Direction = Direction.ALL) -> List[Quote]:
    """Apply the direction filter and the symbol search together.

    NaN prices compare false both ways, so such rows only survive ``all``.
    """
    direction = Direction(direction)
    needle = search.lower()
    result = []
    for quote in quotes:
        if direction is Direction.UP and not quote.price > quote.open:
            continue
        if direction is Direction.DOWN and not quote.price < quote.open:
            continue
        if needle not in quote.symbol.lower():
            continue
        result.append(quote)
    return result


def sort_quotes(quotes: Sequence[Quote], order: Optional[SortOrder]) -> List[Quote]:
    """Sort by percent change; ``None`` keeps roster order. NaN sorts last."""
    if order is None:
        return list(quotes)
    order = SortOrder(order)
    known = [q for q in quotes if not math.isnan(q.percent_change)]
    unknown = [q for q in quotes if math.isnan(q.percent_change)]
    known.sort(key=lambda q: q.percent_change, reverse=order is SortOrder.DESCEND)
    return known + unknown


def format_price(price: float) -> str:
    if not math.isfinite(price):
        return UNAVAILABLE
    return f"${price:.2f}"


def format_percent(percent: float) -> str:
    if not math.isfinite(percent):
        return UNAVAILABLE
    sign = "+" if percent >= 0 else ""
    return f"{sign}{percent:.2f}%"


def percent_tone(percent: float) -> str:
    """CSS tone for the change cell."""
    if not math.isfinite(percent):
        return "muted"
    return "green" if percent >= 0 else "red"


class StockTableView:
    """Polls the quote proxy for every roster symbol and keeps the latest cycle.

    Owns its roster, loading flag, filter and sort state. The only signal it
    emits is ``on_select(symbol)`` when a row is chosen.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        on_select: Optional[Callable[[str], Any]] = None,
        symbols: Sequence[str] = DEFAULT_SYMBOLS,
        refresh_interval: float = 60.0,
        notices: Optional[NoticeBoard] = None,
    ):
        self.client = client
        self.on_select = on_select
        self.symbols = list(symbols)
        self.refresh_interval = refresh_interval
        self.notices = notices if notices is not None else NoticeBoard()

        self.stocks: List[Quote] = []
        self.loading = True
        self.search = ""
        self.direction = Direction.ALL
        self.sort_order: Optional[SortOrder] = None
        self._task: Optional[asyncio.Task] = None

    # --- data ---
    async def _fetch_one(self, symbol: str) -> Quote:
        try:
            response = await self.client.get("/api/stock-data", params={"symbol": symbol})
            response.raise_for_status()
            return Quote.from_payload(symbol, response.json())
        except Exception as e:
            raise PartialDataError(symbol, str(e)) from e

    async def _fetch_or_placeholder(self, symbol: str) -> Quote:
        try:
            return await self._fetch_one(symbol)
        except PartialDataError as e:
            logger.error("Error fetching data for %s: %s", symbol, e.message)
            self.notices.warning(f"Could not load data for {symbol}")
            return Quote.placeholder(symbol)

    async def fetch_stocks(self) -> None:
        """Run one refresh cycle and replace the roster in one assignment."""
        self.loading = True
        # Notices describe the latest cycle only
        self.notices.clear()
        try:
            data = await asyncio.gather(*(self._fetch_or_placeholder(s) for s in self.symbols))
            self.stocks = list(data)
        except Exception:
            logger.exception("General fetching error")
            self.notices.error("An error occurred while loading data")
            self.stocks = []
        finally:
            self.loading = False

    async def _refresh_loop(self) -> None:
        while True:
            await self.fetch_stocks()
            await asyncio.sleep(self.refresh_interval)

    def start(self) -> asyncio.Task:
        """Fetch now and then every ``refresh_interval`` seconds."""
        if self._task is None or self._task.done():
            self._task = asyncio.create_task(self._refresh_loop())
        return self._task

    async def close(self) -> None:
        """Cancel the refresh loop. In-flight requests are dropped with it."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    # --- user input ---
    def set_search(self, text: str) -> None:
        self.search = text or ""

    def set_direction(self, direction: str) -> None:
        self.direction = Direction(direction)

    def set_sort(self, order: Optional[str]) -> None:
        self.sort_order = SortOrder(order) if order else None

    async def select(self, symbol: str) -> None:
        """Row click."""
        if self.on_select is None:
            return
        result = self.on_select(symbol)
        if inspect.isawaitable(result):
            await result

    # --- rendering ---
    @property
    def rows(self) -> List[Quote]:
        return sort_quotes(filter_quotes(self.stocks, self.search, self.direction), self.sort_order)

    def table_rows(self) -> List[dict]:
        """Display-ready cells for each visible row."""
        return [
            {
                "key": q.symbol,
                "symbol": q.symbol,
                "name": q.name,
                "price": format_price(q.price),
                "percent_change": format_percent(q.percent_change),
                "tone": percent_tone(q.percent_change),
            }
            for q in self.rows
        ]
