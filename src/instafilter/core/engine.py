"""Stateful engine re-rendering the current image whenever an input changes."""

from __future__ import annotations

import logging
from enum import Enum, auto

from PIL import Image

from .catalog import FilterVariant, ParameterName, descriptor_for, parse_variant
from .filter_backend import FilterBackend
from .parameter_mapper import clamp_intensity, map_intensity
from .rendering import RenderingPipeline

_LOGGER = logging.getLogger(__name__)

DEFAULT_VARIANT = FilterVariant.SEPIA_TONE
DEFAULT_INTENSITY = 0.5


class EngineState(Enum):
    """Lifecycle of :class:`FilterEngine`."""

    EMPTY = auto()
    """No input image has been supplied."""

    CONFIGURED = auto()
    """Inputs are set but no render has succeeded for them yet."""

    RENDERED = auto()
    """The last render for the current inputs succeeded."""


class FilterEngine:
    """Own the current image, filter and intensity and keep the output in sync.

    Every mutation runs synchronously: the stale output is dropped first, the
    parameter assignment is recomputed from scratch and the backend is asked
    for a new output before the call returns.  ``rendered_output`` therefore
    only ever reflects the most recently committed ``(image, filter,
    intensity)`` triple.
    """

    def __init__(
        self,
        backend: FilterBackend,
        pipeline: RenderingPipeline,
        *,
        variant: FilterVariant | str = DEFAULT_VARIANT,
        intensity: float = DEFAULT_INTENSITY,
    ) -> None:
        self._backend = backend
        self._pipeline = pipeline
        self._variant = parse_variant(variant)
        self._intensity = clamp_intensity(intensity)
        self._image: Image.Image | None = None
        self._parameters: dict[ParameterName, float] = {}
        self._rendered: Image.Image | None = None
        self._state = EngineState.EMPTY

    # ------------------------------------------------------------------
    # Read-only state
    # ------------------------------------------------------------------
    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def variant(self) -> FilterVariant:
        return self._variant

    @property
    def intensity(self) -> float:
        return self._intensity

    @property
    def image(self) -> Image.Image | None:
        return self._image

    @property
    def parameters(self) -> dict[ParameterName, float]:
        """Return a copy of the assignment used by the latest render attempt."""

        return dict(self._parameters)

    @property
    def rendered_output(self) -> Image.Image | None:
        """Return the bitmap for the current inputs, or ``None`` when absent."""

        return self._rendered

    # ------------------------------------------------------------------
    # Mutations
    # ------------------------------------------------------------------
    def set_image(self, image: Image.Image | None) -> Image.Image | None:
        """Replace the input image and re-render.

        Passing ``None`` clears the image and returns the engine to
        :attr:`EngineState.EMPTY`.
        """

        self._rendered = None
        if image is None:
            self._image = None
            self._parameters = {}
            self._state = EngineState.EMPTY
            return None

        # Detach from the caller so later edits to their bitmap cannot leak
        # into a render.
        self._image = image.copy()
        self._state = EngineState.CONFIGURED
        return self._re_render()

    def select_filter(self, variant: FilterVariant | str) -> Image.Image | None:
        """Switch to *variant*, keeping the current image."""

        self._variant = parse_variant(variant)
        return self._refresh()

    def set_intensity(self, value: float) -> Image.Image | None:
        """Store the clamped *value* and re-render when an image is present."""

        self._intensity = clamp_intensity(value)
        return self._refresh()

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------
    def _refresh(self) -> Image.Image | None:
        if self._image is None:
            return None
        self._rendered = None
        self._state = EngineState.CONFIGURED
        return self._re_render()

    def _re_render(self) -> Image.Image | None:
        assert self._image is not None
        descriptor = descriptor_for(self._variant)
        self._parameters = map_intensity(self._intensity, descriptor)
        _LOGGER.debug(
            "Rendering %s with %s",
            self._variant.identifier,
            {name.value: value for name, value in self._parameters.items()},
        )

        output = self._backend.apply(self._variant, self._image, dict(self._parameters))
        if output is None:
            _LOGGER.info("%s produced no output for the current image", self._variant.identifier)
            return None

        bitmap = self._pipeline.materialize(output)
        if bitmap is None:
            return None

        self._rendered = bitmap
        self._state = EngineState.RENDERED
        return bitmap


__all__ = ["DEFAULT_INTENSITY", "DEFAULT_VARIANT", "EngineState", "FilterEngine"]
