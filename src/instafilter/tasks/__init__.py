"""Background worker helpers."""

from .export_worker import ExportResult, ExportService, ExportSignals, ExportWorker

__all__ = ["ExportResult", "ExportService", "ExportSignals", "ExportWorker"]
