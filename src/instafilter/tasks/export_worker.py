"""Write rendered bitmaps to disk on a :class:`QThreadPool` worker."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from PIL import Image
from PySide6.QtCore import QObject, QRunnable, QThreadPool, Signal

from ..errors import ExportError
from ..io.image_io import save_image

LOGGER = logging.getLogger(__name__)

_EXTENSIONS = {
    "PNG": "png",
    "JPEG": "jpg",
    "TIFF": "tiff",
    "WEBP": "webp",
    "BMP": "bmp",
}


@dataclass(frozen=True)
class ExportResult:
    """Outcome of a single export: a written path or a failure reason."""

    path: Optional[Path] = None
    reason: Optional[str] = None

    @property
    def ok(self) -> bool:
        return self.reason is None


class ExportSignals(QObject):
    """Signals emitted by :class:`ExportWorker`."""

    succeeded = Signal(str)
    """Emitted with the written path when the export completes."""

    failed = Signal(str)
    """Emitted with a human readable reason when the export fails."""

    finished = Signal()
    """Emitted after exactly one of ``succeeded`` or ``failed``."""

    def __init__(self, parent: QObject | None = None) -> None:
        super().__init__(parent)


class ExportWorker(QRunnable):
    """Persist a finished bitmap without blocking the caller."""

    def __init__(
        self,
        image: Image.Image,
        destination: Path,
        *,
        image_format: str | None = None,
    ) -> None:
        super().__init__()
        self.setAutoDelete(True)
        # Detached copy so the engine may replace its output while we write.
        self._image = image.copy()
        self._destination = destination
        self._format = image_format
        self.signals = ExportSignals()

    @property
    def destination(self) -> Path:
        return self._destination

    def run(self) -> None:  # type: ignore[override]
        """Write the bitmap and report the outcome exactly once."""

        try:
            path = save_image(self._image, self._destination, image_format=self._format)
        except ExportError as exc:
            LOGGER.error("Export to %s failed: %s", self._destination, exc)
            self.signals.failed.emit(str(exc))
        except Exception as exc:  # pragma: no cover - keeps the single outcome guarantee
            LOGGER.exception("Unexpected export failure for %s", self._destination)
            self.signals.failed.emit(str(exc) or exc.__class__.__name__)
        else:
            LOGGER.info("Exported %s", path)
            self.signals.succeeded.emit(str(path))
        finally:
            self.signals.finished.emit()


class ExportService(QObject):
    """Schedule :class:`ExportWorker` jobs and relay their outcome."""

    succeeded = Signal(str)
    failed = Signal(str)

    def __init__(
        self,
        directory: Path,
        image_format: str = "PNG",
        *,
        pool: QThreadPool | None = None,
        parent: QObject | None = None,
    ) -> None:
        super().__init__(parent)
        self._directory = Path(directory)
        self._format = image_format.upper()
        self._pool = pool if pool is not None else QThreadPool.globalInstance()
        self._pending: set[ExportWorker] = set()

    @property
    def directory(self) -> Path:
        return self._directory

    @property
    def image_format(self) -> str:
        return self._format

    def build_destination(self, now: datetime | None = None) -> Path:
        """Return a timestamped file path inside the export directory."""

        stamp = (now or datetime.now()).strftime("%Y%m%dT%H%M%S%f")
        extension = _EXTENSIONS.get(self._format, self._format.lower())
        return self._directory / f"instafilter-{stamp}.{extension}"

    def export(self, image: Image.Image, destination: Path | None = None) -> ExportWorker:
        """Queue *image* for writing and return the scheduled worker."""

        target = destination if destination is not None else self.build_destination()
        worker = ExportWorker(image, target, image_format=self._format)
        worker.signals.succeeded.connect(self.succeeded)
        worker.signals.failed.connect(self.failed)
        worker.signals.finished.connect(lambda job=worker: self._pending.discard(job))
        self._pending.add(worker)
        LOGGER.debug("Queued export to %s", target)
        self._pool.start(worker)
        return worker


__all__ = ["ExportResult", "ExportService", "ExportSignals", "ExportWorker"]
