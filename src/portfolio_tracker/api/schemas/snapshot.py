"""Pydantic schemas for snapshot endpoints."""

from typing import Optional

from pydantic import BaseModel


class SnapshotPreviewResponse(BaseModel):
    """Response schema for a restore preview (used for the confirm prompt)."""

    count: int
    message: str


class ImportSummaryResponse(BaseModel):
    """Response schema for a restore."""

    imported_count: int
    symbols: list[str]
    refresh_scheduled: bool
    message: Optional[str] = None
