"""Dependency injection for FastAPI."""

from fastapi import Depends

from portfolio_tracker.app_context import AppContext, get_app_context
from portfolio_tracker.config.settings import Settings
from portfolio_tracker.services import FetchOrchestrator, PortfolioStore
from portfolio_tracker.snapshot import SnapshotExporter, SnapshotImporter


def get_context() -> AppContext:
    """Provide the process-wide AppContext (overridden in tests)."""
    return get_app_context()


def get_app_settings(context: AppContext = Depends(get_context)) -> Settings:
    """Provide the Settings the context was initialized with."""
    return context.settings


def get_store(context: AppContext = Depends(get_context)) -> PortfolioStore:
    """Provide PortfolioStore instance."""
    return context.store


def get_orchestrator(context: AppContext = Depends(get_context)) -> FetchOrchestrator:
    """Provide FetchOrchestrator instance."""
    return context.orchestrator


def get_snapshot_importer(context: AppContext = Depends(get_context)) -> SnapshotImporter:
    """Provide SnapshotImporter instance."""
    return context.snapshot_importer


def get_snapshot_exporter(context: AppContext = Depends(get_context)) -> SnapshotExporter:
    """Provide SnapshotExporter instance."""
    return context.snapshot_exporter
