"""Wire user actions to the filter engine and the export service."""

from __future__ import annotations

from pathlib import Path
from typing import Optional

from PIL import Image
from PySide6.QtCore import QObject, QThreadPool, Signal

from .config import Settings
from .core.catalog import (
    DEFAULT_BUTTON_LABEL,
    FilterVariant,
    descriptor_for,
    iter_descriptors,
    parse_variant,
)
from .core.engine import FilterEngine
from .core.filter_backend import FilterBackend, PillowFilterBackend
from .core.rendering import RenderContext, RenderingPipeline, create_render_context
from .errors import ImageLoadError
from .io.image_io import load_image
from .tasks.export_worker import ExportResult, ExportService
from .utils.logging import get_logger

logger = get_logger()

NO_IMAGE_TITLE = "No image"
NO_IMAGE_MESSAGE = "Please select an image first"
LOAD_FAILED_TITLE = "Could not open image"


class AppState(QObject):
    """Translate UI events into :class:`FilterEngine` calls."""

    previewChanged = Signal(object)
    """Emitted with the rendered bitmap, or ``None`` when there is no output."""

    filterLabelChanged = Signal(str)
    noticeRequested = Signal(str, str)
    """Emitted with ``(title, message)`` for a dismissible user notice."""

    exportSucceeded = Signal(str)
    exportFailed = Signal(str)

    def __init__(
        self,
        engine: FilterEngine,
        exporter: ExportService,
        *,
        context: Optional[RenderContext] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)
        self._engine = engine
        self._exporter = exporter
        self._context = context
        self._filter_label = DEFAULT_BUTTON_LABEL
        self._last_export: ExportResult | None = None

        self._exporter.succeeded.connect(self._handle_export_succeeded)
        self._exporter.failed.connect(self._handle_export_failed)

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        *,
        backend: FilterBackend | None = None,
        context: RenderContext | None = None,
        pool: QThreadPool | None = None,
        parent: Optional[QObject] = None,
    ) -> "AppState":
        """Build the engine, render context and exporter described by *settings*."""

        render_context = context if context is not None else create_render_context()
        engine = FilterEngine(
            backend if backend is not None else PillowFilterBackend(),
            RenderingPipeline(render_context),
            variant=settings.default_variant(),
            intensity=settings.default_intensity(),
        )
        exporter = ExportService(
            settings.export_directory(),
            settings.export_format(),
            pool=pool,
        )
        return cls(engine, exporter, context=render_context, parent=parent)

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def engine(self) -> FilterEngine:
        return self._engine

    @property
    def filter_label(self) -> str:
        return self._filter_label

    @property
    def last_export(self) -> ExportResult | None:
        return self._last_export

    @staticmethod
    def available_filters() -> list[tuple[str, str]]:
        """Return ``(identifier, display name)`` pairs in menu order."""

        return [(d.variant.identifier, d.display_name) for d in iter_descriptors()]

    # ------------------------------------------------------------------
    # User actions
    # ------------------------------------------------------------------
    def load_image(self, path: Path) -> bool:
        """Open *path* and make it the engine's input image."""

        try:
            image = load_image(path)
        except ImageLoadError as exc:
            logger.warning("%s", exc)
            self.noticeRequested.emit(LOAD_FAILED_TITLE, str(exc))
            return False
        self.set_image(image)
        return True

    def set_image(self, image: Image.Image | None) -> None:
        self.previewChanged.emit(self._engine.set_image(image))

    def choose_filter(self, variant: FilterVariant | str) -> None:
        selected = parse_variant(variant)
        result = self._engine.select_filter(selected)
        self._filter_label = descriptor_for(selected).button_label
        self.filterLabelChanged.emit(self._filter_label)
        if self._engine.image is not None:
            self.previewChanged.emit(result)

    def set_intensity(self, value: float) -> None:
        result = self._engine.set_intensity(value)
        if self._engine.image is not None:
            self.previewChanged.emit(result)

    def save(self) -> bool:
        """Export the current output, or ask the user to pick an image first.

        Returns ``True`` when an export was queued.  The outcome arrives later
        through ``exportSucceeded`` or ``exportFailed``.
        """

        output = self._engine.rendered_output
        if output is None:
            self.noticeRequested.emit(NO_IMAGE_TITLE, NO_IMAGE_MESSAGE)
            return False
        self._exporter.export(output)
        return True

    def shutdown(self) -> None:
        """Release the render context created for this state."""

        if self._context is not None:
            self._context.dispose()

    # ------------------------------------------------------------------
    # Export callbacks
    # ------------------------------------------------------------------
    def _handle_export_succeeded(self, path: str) -> None:
        logger.info("Success! Saved %s", path)
        self._last_export = ExportResult(path=Path(path))
        self.exportSucceeded.emit(path)

    def _handle_export_failed(self, reason: str) -> None:
        logger.error("Oops: %s", reason)
        self._last_export = ExportResult(reason=reason)
        self.exportFailed.emit(reason)


__all__ = ["AppState", "LOAD_FAILED_TITLE", "NO_IMAGE_MESSAGE", "NO_IMAGE_TITLE"]
