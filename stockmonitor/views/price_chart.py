"""Weekly price line chart for the selected symbol."""
import logging
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from typing import Any, Callable, List, Optional, Sequence

import httpx
import plotly.graph_objects as go

from ..schemas import parse_float

logger = logging.getLogger(__name__)

CHART_POINTS = 7

PLACEHOLDER_NO_SELECTION = "Choose a stock to display the chart"
PLACEHOLDER_LOADING = "Loading chart..."
PLACEHOLDER_NO_DATA = "No data to display"


class ChartState(str, Enum):
    NO_SELECTION = "no_selection"
    LOADING = "loading"
    RENDERED = "rendered"
    EMPTY = "empty"


@dataclass(frozen=True)
class ChartStyle:
    """Chart look, built once at startup and passed to every chart view."""

    line_color: str = "#4f46e5"
    fill_color: str = "rgba(79, 70, 229, 0.2)"
    smoothing: float = 0.3
    point_size: int = 6
    max_ticks: int = CHART_POINTS
    currency: str = "USD"
    currency_symbol: str = "$"
    height: int = 360


@dataclass(frozen=True)
class ChartPoint:
    label: str
    value: float


def format_date_label(value: str) -> str:
    """Short weekday + day + month label, e.g. ``Mon, 13 Jan``."""
    try:
        parsed = datetime.fromisoformat(value)
    except (TypeError, ValueError):
        return str(value)
    return parsed.strftime("%a, %d %b")


def build_series(values: Sequence[dict], limit: int = CHART_POINTS) -> List[ChartPoint]:
    """Provider order is newest first; keep the latest ``limit`` and go oldest first."""
    latest = list(values[:limit])
    latest.reverse()
    return [ChartPoint(label=format_date_label(item.get("datetime")), value=parse_float(item.get("close"))) for item in latest]


class PriceChartView:
    """Loads the timeline of one symbol and turns it into a plotly figure.

    Responses for a symbol that is no longer the latest request are dropped.
    Transport failures never surface to the user; pass ``on_error`` to observe
    them.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        style: Optional[ChartStyle] = None,
        on_error: Optional[Callable[[str, Exception], Any]] = None,
    ):
        self.client = client
        self.style = style or ChartStyle()
        self.on_error = on_error

        self.symbol: Optional[str] = None
        self.series: Optional[List[ChartPoint]] = None
        self.is_loading = False
        self._generation = 0

    @property
    def state(self) -> ChartState:
        if not self.symbol:
            return ChartState.NO_SELECTION
        if self.is_loading:
            return ChartState.LOADING
        if self.series is None:
            return ChartState.EMPTY
        return ChartState.RENDERED

    @property
    def placeholder(self) -> Optional[str]:
        return {
            ChartState.NO_SELECTION: PLACEHOLDER_NO_SELECTION,
            ChartState.LOADING: PLACEHOLDER_LOADING,
            ChartState.EMPTY: PLACEHOLDER_NO_DATA,
        }.get(self.state)

    def _is_current(self, generation: int, symbol: str) -> bool:
        return generation == self._generation and symbol == self.symbol

    async def load(self, symbol: Optional[str]) -> None:
        """Switch to ``symbol`` and fetch its timeline."""
        self._generation += 1
        generation = self._generation
        self.symbol = symbol or None
        self.series = None
        if not symbol:
            self.is_loading = False
            return

        self.is_loading = True
        try:
            response = await self.client.get("/api/stock-data-timeline", params={"symbol": symbol})
            response.raise_for_status()
            payload = response.json()
            if not self._is_current(generation, symbol):
                logger.debug("Dropping stale timeline for %s", symbol)
                return
            values = payload.get("values") if isinstance(payload, dict) else None
            # An empty list still renders (as an empty chart); only a missing field is "no data"
            if isinstance(values, list):
                self.series = build_series(values)
        except Exception as e:
            if not self._is_current(generation, symbol):
                return
            logger.error("Error loading chart for %s: %s", symbol, e)
            if self.on_error is not None:
                self.on_error(symbol, e)
        finally:
            if self._is_current(generation, symbol):
                self.is_loading = False

    def figure(self) -> Optional[go.Figure]:
        """Line chart of the loaded series, or ``None`` when there is nothing to draw."""
        if self.state is not ChartState.RENDERED:
            return None
        style = self.style
        fig = go.Figure(
            go.Scatter(
                x=[p.label for p in self.series],
                y=[p.value for p in self.series],
                name=f"Price ({self.symbol})",
                mode="lines+markers",
                line=dict(color=style.line_color, shape="spline", smoothing=style.smoothing),
                marker=dict(size=style.point_size, color=style.fill_color, line=dict(color=style.line_color, width=1)),
                hovertemplate=f"%{{y}} {style.currency}<extra></extra>",
            )
        )
        fig.update_layout(
            title=f"Weekly price change ({self.symbol})",
            height=style.height,
            showlegend=True,
            legend=dict(orientation="h", yanchor="bottom", y=1.02),
            margin=dict(l=40, r=20, t=60, b=40),
        )
        fig.update_xaxes(nticks=style.max_ticks)
        fig.update_yaxes(
            title_text=f"Price, {style.currency}",
            ticksuffix=f" {style.currency_symbol}",
            rangemode="normal",
        )
        return fig

    def render_html(self) -> str:
        fig = self.figure()
        if fig is None:
            return f'<div class="chart-placeholder">{self.placeholder}</div>'
        return fig.to_html(full_html=False, include_plotlyjs="cdn")
