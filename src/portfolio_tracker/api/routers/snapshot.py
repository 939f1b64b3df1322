"""Snapshot endpoints: JSON backup download and restore."""

from fastapi import APIRouter, BackgroundTasks, Depends, File, UploadFile
from fastapi.responses import Response

from portfolio_tracker.api.deps import (
    get_orchestrator,
    get_snapshot_exporter,
    get_snapshot_importer,
    get_store,
)
from portfolio_tracker.api.schemas import ImportSummaryResponse, SnapshotPreviewResponse
from portfolio_tracker.services import FetchOrchestrator, PortfolioStore
from portfolio_tracker.snapshot import SnapshotExporter, SnapshotImporter, default_filename

router = APIRouter(prefix="/snapshot", tags=["snapshot"])


def _read_upload(file: UploadFile) -> bytes:
    # An empty body is left to the parser, which reports it as malformed.
    return file.file.read()


@router.get("/export")
def export_snapshot(
    store: PortfolioStore = Depends(get_store),
    exporter: SnapshotExporter = Depends(get_snapshot_exporter),
) -> Response:
    """Download the holdings as a pretty-printed JSON array; 400 NO_DATA when empty."""
    return Response(
        content=exporter.export_bytes(store.positions()),
        media_type="application/json",
        headers={"Content-Disposition": f'attachment; filename="{default_filename()}"'},
    )


@router.post("/preview", response_model=SnapshotPreviewResponse)
def preview_snapshot(
    file: UploadFile = File(...),
    importer: SnapshotImporter = Depends(get_snapshot_importer),
) -> SnapshotPreviewResponse:
    """Validate a snapshot and report how many holdings it would restore."""
    count = importer.preview(_read_upload(file))
    return SnapshotPreviewResponse(
        count=count,
        message=f"This will replace all current holdings with {count} position(s).",
    )


@router.post("/import", response_model=ImportSummaryResponse)
def import_snapshot(
    background_tasks: BackgroundTasks,
    file: UploadFile = File(...),
    importer: SnapshotImporter = Depends(get_snapshot_importer),
    orchestrator: FetchOrchestrator = Depends(get_orchestrator),
) -> ImportSummaryResponse:
    """
    Replace all holdings with the uploaded snapshot.

    A malformed file leaves the holdings untouched. Prices for the restored
    symbols are fetched after the response is sent.
    """
    summary = importer.restore(_read_upload(file), refresh=False)
    if summary.symbols:
        background_tasks.add_task(orchestrator.fetch_all, summary.symbols)

    return ImportSummaryResponse(
        imported_count=summary.imported_count,
        symbols=summary.symbols,
        refresh_scheduled=bool(summary.symbols),
        message=f"Successfully imported {summary.imported_count} position(s).",
    )
