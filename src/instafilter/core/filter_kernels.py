"""Pixel kernels used by the bundled Pillow filter backend.

Every kernel receives an RGB :class:`PIL.Image.Image` together with the
parameter assignment computed for the active filter and returns a new RGB
image of the same size.  Missing parameters fall back to zero, which leaves
the image unchanged for the geometry driven filters.
"""

from __future__ import annotations

from typing import Callable, Mapping

import numpy as np
from PIL import Image, ImageFilter

from .catalog import FilterVariant, ParameterName

Kernel = Callable[[Image.Image, Mapping[ParameterName, float]], Image.Image]

# Fixed seed so crystal cells are stable across renders of the same input.
_CRYSTALLIZE_SEED = 0x1F2E
EDGE_GAIN = 10.0
UNSHARP_MAX_PERCENT = 200.0

_SEPIA_MATRIX = np.array(
    [
        [0.393, 0.769, 0.189],
        [0.349, 0.686, 0.168],
        [0.272, 0.534, 0.131],
    ],
    dtype=np.float32,
)


def _param(parameters: Mapping[ParameterName, float], name: ParameterName) -> float:
    return float(parameters.get(name, 0.0))


def crystallize(image: Image.Image, parameters: Mapping[ParameterName, float]) -> Image.Image:
    """Replace the image with Voronoi cells whose size follows ``Radius``."""

    cell = int(round(_param(parameters, ParameterName.RADIUS)))
    if cell < 1:
        return image.copy()

    pixels = np.asarray(image, dtype=np.uint8)
    height, width = pixels.shape[:2]
    rows = height // cell + 1
    cols = width // cell + 1

    # One jittered seed per grid cell.  The nearest seed for any pixel is
    # guaranteed to live in the pixel's own cell or one of its eight neighbours.
    rng = np.random.default_rng(_CRYSTALLIZE_SEED)
    jitter = rng.random((rows, cols, 2))
    seed_y = (np.arange(rows)[:, None] + jitter[..., 0]) * cell
    seed_x = (np.arange(cols)[None, :] + jitter[..., 1]) * cell

    ys, xs = np.mgrid[0:height, 0:width]
    cell_y = ys // cell
    cell_x = xs // cell

    best = np.full((height, width), np.inf)
    best_row = np.zeros((height, width), dtype=np.intp)
    best_col = np.zeros((height, width), dtype=np.intp)
    for dy in (-1, 0, 1):
        for dx in (-1, 0, 1):
            row = np.clip(cell_y + dy, 0, rows - 1)
            col = np.clip(cell_x + dx, 0, cols - 1)
            distance = (seed_y[row, col] - ys) ** 2 + (seed_x[row, col] - xs) ** 2
            closer = distance < best
            best = np.where(closer, distance, best)
            best_row = np.where(closer, row, best_row)
            best_col = np.where(closer, col, best_col)

    sample_y = np.clip(seed_y.astype(np.intp), 0, height - 1)
    sample_x = np.clip(seed_x.astype(np.intp), 0, width - 1)
    palette = pixels[sample_y, sample_x]
    return Image.fromarray(np.ascontiguousarray(palette[best_row, best_col]))


def edges(image: Image.Image, parameters: Mapping[ParameterName, float]) -> Image.Image:
    """Highlight edges, amplifying the response by ``Intensity``."""

    gain = _param(parameters, ParameterName.INTENSITY) * EDGE_GAIN
    detected = image.filter(ImageFilter.FIND_EDGES)
    lut = [min(255, int(round(value * gain))) for value in range(256)]
    return detected.point(lut * 3)


def gaussian_blur(image: Image.Image, parameters: Mapping[ParameterName, float]) -> Image.Image:
    radius = _param(parameters, ParameterName.RADIUS)
    if radius <= 0.0:
        return image.copy()
    return image.filter(ImageFilter.GaussianBlur(radius))


def pixellate(image: Image.Image, parameters: Mapping[ParameterName, float]) -> Image.Image:
    """Average square blocks whose edge length follows ``Scale``."""

    cell = int(round(_param(parameters, ParameterName.SCALE)))
    if cell <= 1:
        return image.copy()
    width, height = image.size
    reduced = image.reduce(cell)
    enlarged = reduced.resize(
        (reduced.width * cell, reduced.height * cell),
        Image.Resampling.NEAREST,
    )
    return enlarged.crop((0, 0, width, height))


def sepia_tone(image: Image.Image, parameters: Mapping[ParameterName, float]) -> Image.Image:
    """Blend the classic sepia matrix over the image by ``Intensity``."""

    strength = _param(parameters, ParameterName.INTENSITY)
    pixels = np.asarray(image, dtype=np.float32)
    toned = np.clip(pixels @ _SEPIA_MATRIX.T, 0.0, 255.0)
    blended = strength * toned + (1.0 - strength) * pixels
    return Image.fromarray(np.clip(np.rint(blended), 0, 255).astype(np.uint8))


def unsharp_mask(image: Image.Image, parameters: Mapping[ParameterName, float]) -> Image.Image:
    radius = _param(parameters, ParameterName.RADIUS)
    intensity = _param(parameters, ParameterName.INTENSITY)
    percent = int(round(intensity * UNSHARP_MAX_PERCENT))
    if radius <= 0.0 or percent <= 0:
        return image.copy()
    return image.filter(ImageFilter.UnsharpMask(radius=radius, percent=percent, threshold=0))


def vignette(image: Image.Image, parameters: Mapping[ParameterName, float]) -> Image.Image:
    """Darken the borders.

    ``Intensity`` controls how dark the corners get while ``Radius`` widens
    the darkened band towards the centre.
    """

    strength = _param(parameters, ParameterName.INTENSITY)
    if strength <= 0.0:
        return image.copy()
    radius = _param(parameters, ParameterName.RADIUS)

    width, height = image.size
    y, x = np.ogrid[:height, :width]
    distance = np.sqrt((x - (width - 1) / 2.0) ** 2 + (y - (height - 1) / 2.0) ** 2)
    normalised = distance / max(float(distance.max()), 1e-6)
    exponent = 2.0 / (1.0 + radius / 100.0)
    mask = (1.0 - strength * normalised**exponent)[..., None]

    pixels = np.asarray(image, dtype=np.float32)
    shaded = np.clip(pixels * mask, 0.0, 255.0).astype(np.uint8)
    return Image.fromarray(shaded)


KERNELS: Mapping[FilterVariant, Kernel] = {
    FilterVariant.CRYSTALLIZE: crystallize,
    FilterVariant.EDGES: edges,
    FilterVariant.GAUSSIAN_BLUR: gaussian_blur,
    FilterVariant.PIXELLATE: pixellate,
    FilterVariant.SEPIA_TONE: sepia_tone,
    FilterVariant.UNSHARP_MASK: unsharp_mask,
    FilterVariant.VIGNETTE: vignette,
}


__all__ = ["KERNELS", "Kernel"]
