"""Enumerations for domain models."""

from enum import Enum


class PlClass(str, Enum):
    """Profit/loss classification used by display collaborators."""

    POSITIVE = "positive"
    NEGATIVE = "negative"
    NEUTRAL = "neutral"  # No usable price yet


class ProviderKind(str, Enum):
    """Market data provider implementations selectable from settings."""

    YFINANCE = "yfinance"
    STUB = "stub"
