"""Materialise lazy filter outputs into concrete bitmaps."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod

from PIL import Image

from .filter_backend import Extent, FilteredImage

_LOGGER = logging.getLogger(__name__)


class RenderContext(ABC):
    """Process-wide resource that evaluates :class:`FilteredImage` recipes.

    A context is created once at startup, handed explicitly to every
    :class:`RenderingPipeline` that needs it and released with
    :meth:`dispose`.  It holds no per-call mutable state, so renders never
    need to lock it.
    """

    tier_name: str = "unknown"
    """Human readable tier label (e.g. ``"CPU"``)."""

    def __init__(self) -> None:
        self._disposed = False

    @property
    def disposed(self) -> bool:
        return self._disposed

    def render(self, output: FilteredImage, extent: Extent) -> Image.Image:
        """Evaluate *output* and return the pixels inside *extent*."""

        if self._disposed:
            raise RuntimeError("Render context has already been disposed")
        return self._render(output, extent)

    @abstractmethod
    def _render(self, output: FilteredImage, extent: Extent) -> Image.Image:
        """Backend specific evaluation hook."""

    def dispose(self) -> None:
        """Release resources associated with the context."""

        if not self._disposed:
            _LOGGER.debug("Disposing %s render context", self.tier_name)
        self._disposed = True

    def __enter__(self) -> "RenderContext":
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.dispose()


class CpuRenderContext(RenderContext):
    """Evaluate kernels on the CPU with Pillow."""

    tier_name = "CPU"

    def __init__(self, mode: str = "RGB") -> None:
        super().__init__()
        self._mode = mode

    @property
    def mode(self) -> str:
        return self._mode

    def _render(self, output: FilteredImage, extent: Extent) -> Image.Image:
        source = output.source
        if source.mode != self._mode:
            source = source.convert(self._mode)
        result = output.kernel(source, output.parameters)
        if result.mode != self._mode:
            result = result.convert(self._mode)
        if extent == Extent.of(result):
            return result
        return result.crop(extent.box)


def create_render_context() -> RenderContext:
    """Return the render context used for the lifetime of the process."""

    context = CpuRenderContext()
    _LOGGER.info("Using %s render context", context.tier_name)
    return context


class RenderingPipeline:
    """Convert backend outputs into concrete, displayable bitmaps."""

    def __init__(self, context: RenderContext) -> None:
        self._context = context

    @property
    def context(self) -> RenderContext:
        return self._context

    def materialize(
        self,
        output: FilteredImage,
        extent: Extent | None = None,
    ) -> Image.Image | None:
        """Return the bitmap for *output* sized to *extent*, or ``None``.

        *extent* defaults to the output's natural bounding region.  An empty
        region or a processing failure inside the kernel yields ``None``, the
        same recoverable no-output condition the backend reports.
        """

        region = output.extent if extent is None else extent
        if region.is_empty:
            _LOGGER.debug("Skipping %s render for empty extent", output.variant.identifier)
            return None
        try:
            return self._context.render(output, region)
        except (ValueError, OSError, MemoryError) as exc:
            _LOGGER.warning("Failed to materialise %s output: %s", output.variant.identifier, exc)
            return None


__all__ = [
    "CpuRenderContext",
    "RenderContext",
    "RenderingPipeline",
    "create_render_context",
]
