"""Timezone utilities for US/Eastern market time."""

from datetime import date, datetime
from typing import Optional

import pytz

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def today_eastern() -> date:
    """Return today's date in US/Eastern timezone."""
    return now_eastern().date()


def from_epoch_eastern(timestamp: int, tz: Optional[pytz.BaseTzInfo] = None) -> datetime:
    """Convert epoch seconds to an aware datetime (US/Eastern unless tz is given)."""
    return datetime.fromtimestamp(timestamp, tz or EASTERN_TZ)
