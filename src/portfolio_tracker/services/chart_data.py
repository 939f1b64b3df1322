"""Chart-ready history: null filtering and date labels."""

from typing import Iterable, Optional

import pytz

from portfolio_tracker.core.timezone import from_epoch_eastern
from portfolio_tracker.domain.models import HistoryPoint
from portfolio_tracker.domain.views import ChartPoint

CHART_TITLE_SUFFIX = "30 Day Trend"


def chart_title(symbol: str) -> str:
    return f"{symbol} - {CHART_TITLE_SUFFIX}"


def chart_points(
    history: Optional[Iterable[HistoryPoint]],
    tz: Optional[pytz.BaseTzInfo] = None,
) -> list[ChartPoint]:
    """
    Drop points with no close and label the rest as M/D.

    Upstream series occasionally contain null closes (halted or partial
    days); charts must never plot those as zero.
    """
    points = []
    for point in history or []:
        if point.close is None:
            continue
        day = from_epoch_eastern(point.timestamp, tz)
        points.append(
            ChartPoint(
                timestamp=point.timestamp,
                label=f"{day.month}/{day.day}",
                close=point.close,
            )
        )
    return points
