"""Filter backends producing lazy, not yet materialised filter outputs."""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from PIL import Image

from .catalog import FilterVariant, ParameterName
from .filter_kernels import KERNELS, Kernel

_LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class Extent:
    """Axis aligned pixel region ``(x, y, width, height)``."""

    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width <= 0 or self.height <= 0

    @property
    def box(self) -> tuple[int, int, int, int]:
        """Return the region as a Pillow ``(left, upper, right, lower)`` box."""

        return (self.x, self.y, self.x + self.width, self.y + self.height)

    @classmethod
    def of(cls, image: Image.Image) -> "Extent":
        width, height = image.size
        return cls(0, 0, width, height)


@dataclass(frozen=True)
class FilteredImage:
    """Recipe describing a filter applied to a source image.

    No pixels are computed when the handle is created.  A
    :class:`~instafilter.core.rendering.RenderContext` evaluates the kernel
    when the output is materialised.
    """

    source: Image.Image
    variant: FilterVariant
    parameters: Mapping[ParameterName, float]
    kernel: Kernel
    extent: Extent


class FilterBackend(ABC):
    """Abstract backend turning a source image and parameters into an output."""

    name: str = "unknown"
    """Human readable backend label used in log messages."""

    @abstractmethod
    def apply(
        self,
        variant: FilterVariant,
        image: Image.Image,
        parameters: Mapping[ParameterName, float],
    ) -> FilteredImage | None:
        """Return the lazy output for *variant*, or ``None`` when there is none.

        ``None`` signals the recoverable no-output condition, for example when
        the filter rejects the input geometry.
        """


class PillowFilterBackend(FilterBackend):
    """Backend delegating the pixel work to Pillow and numpy kernels."""

    name = "Pillow"

    def __init__(self, kernels: Mapping[FilterVariant, Kernel] | None = None) -> None:
        self._kernels = dict(KERNELS if kernels is None else kernels)

    def apply(
        self,
        variant: FilterVariant,
        image: Image.Image,
        parameters: Mapping[ParameterName, float],
    ) -> FilteredImage | None:
        extent = Extent.of(image)
        if extent.is_empty:
            _LOGGER.info(
                "%s rejected input geometry %dx%d",
                variant.identifier,
                extent.width,
                extent.height,
            )
            return None

        kernel = self._kernels.get(variant)
        if kernel is None:
            _LOGGER.info("%s backend has no kernel for %s", self.name, variant.identifier)
            return None

        return FilteredImage(
            source=image,
            variant=variant,
            parameters=MappingProxyType(dict(parameters)),
            kernel=kernel,
            extent=extent,
        )


__all__ = ["Extent", "FilterBackend", "FilteredImage", "PillowFilterBackend"]
