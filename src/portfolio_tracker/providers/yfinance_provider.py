"""Yahoo Finance market data provider via yfinance."""

import logging
import math
from typing import Any, Optional

from portfolio_tracker.core.exceptions import FetchError
from portfolio_tracker.domain.models import HistoryPoint, PriceSnapshot, normalize_symbol

logger = logging.getLogger(__name__)


# Lazy import so tests can patch before import
def _get_yf():
    import yfinance as yf
    return yf


def _clean_float(value: Any) -> Optional[float]:
    """Convert to float; None, NaN and non-numeric values become None."""
    if value is None:
        return None
    try:
        result = float(value)
    except (TypeError, ValueError):
        return None
    if math.isnan(result) or math.isinf(result):
        return None
    return result


def _history_points(hist) -> list[HistoryPoint]:
    """Build an ascending history series from a yfinance history DataFrame."""
    if hist is None or hist.empty or "Close" not in hist.columns:
        return []
    points = []
    for idx, close in hist["Close"].items():
        timestamp = int(idx.timestamp()) if hasattr(idx, "timestamp") else int(idx)
        points.append(HistoryPoint(timestamp=timestamp, close=_clean_float(close)))
    points.sort(key=lambda p: p.timestamp)
    return points


class YFinanceMarketDataProvider:
    """
    Fetches one month of daily bars plus chart metadata for a symbol.

    Current price and previous close come from the chart metadata
    (regularMarketPrice, chartPreviousClose), the same response that carries
    the daily closes, so one upstream request serves all three.
    """

    def __init__(self, period: str = "1mo", interval: str = "1d"):
        self._period = period
        self._interval = interval

    def get_price_data(self, symbol: str) -> PriceSnapshot:
        """Fetch a PriceSnapshot for symbol; raises FetchError on any failure."""
        sym = normalize_symbol(symbol)
        if not sym:
            raise FetchError(symbol, "empty symbol")

        yf = _get_yf()
        try:
            ticker = yf.Ticker(sym)
            hist = ticker.history(
                period=self._period,
                interval=self._interval,
                auto_adjust=False,
            )
            meta = ticker.history_metadata
        except FetchError:
            raise
        except Exception as e:
            raise FetchError(sym, str(e) or e.__class__.__name__) from e

        if not isinstance(meta, dict):
            raise FetchError(sym, "response missing chart metadata")

        current_price = _clean_float(meta.get("regularMarketPrice"))
        previous_close = _clean_float(meta.get("chartPreviousClose"))
        if previous_close is None:
            previous_close = _clean_float(meta.get("previousClose"))

        if current_price is None:
            raise FetchError(sym, "response missing regularMarketPrice")
        if previous_close is None:
            raise FetchError(sym, "response missing chartPreviousClose")
        if current_price <= 0:
            raise FetchError(sym, f"non-positive price {current_price}")

        history = _history_points(hist)
        logger.debug("Fetched %s: price=%s prev_close=%s bars=%d", sym, current_price, previous_close, len(history))

        return PriceSnapshot(
            symbol=sym,
            current_price=current_price,
            previous_close=previous_close,
            history=history,
        )
