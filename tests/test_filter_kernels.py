from __future__ import annotations

import numpy as np
import pytest
from PIL import Image

from instafilter.core.catalog import FilterVariant, ParameterName
from instafilter.core.filter_kernels import KERNELS, pixellate, sepia_tone, vignette


@pytest.mark.parametrize("variant", list(FilterVariant))
def test_kernels_preserve_size_and_mode(gradient: Image.Image, variant: FilterVariant) -> None:
    parameters = {
        ParameterName.INTENSITY: 0.6,
        ParameterName.RADIUS: 7.0,
        ParameterName.SCALE: 4.0,
    }
    result = KERNELS[variant](gradient, parameters)

    assert result.size == gradient.size
    assert result.mode == "RGB"


@pytest.mark.parametrize(
    "variant",
    [FilterVariant.CRYSTALLIZE, FilterVariant.GAUSSIAN_BLUR, FilterVariant.PIXELLATE],
)
def test_geometry_kernels_are_identity_below_one_pixel(gradient: Image.Image, variant: FilterVariant) -> None:
    result = KERNELS[variant](gradient, {ParameterName.RADIUS: 0.0, ParameterName.SCALE: 0.0})
    assert result.tobytes() == gradient.tobytes()


def test_sepia_full_strength_on_white() -> None:
    white = Image.new("RGB", (2, 2), (255, 255, 255))
    pixel = sepia_tone(white, {ParameterName.INTENSITY: 1.0}).getpixel((0, 0))
    # Red and green saturate, blue follows the third matrix row.
    assert pixel == (255, 255, 239)


def test_sepia_zero_strength_is_identity(gradient: Image.Image) -> None:
    result = sepia_tone(gradient, {ParameterName.INTENSITY: 0.0})
    assert result.tobytes() == gradient.tobytes()


def test_pixellate_produces_uniform_blocks(gradient: Image.Image) -> None:
    result = np.asarray(pixellate(gradient, {ParameterName.SCALE: 5.0}))
    block = result[0:5, 0:5].reshape(-1, 3)
    assert (block == block[0]).all()


def test_vignette_darkens_corners_not_centre() -> None:
    grey = Image.new("RGB", (41, 41), (200, 200, 200))
    result = vignette(grey, {ParameterName.INTENSITY: 1.0, ParameterName.RADIUS: 0.0})
    assert result.getpixel((20, 20)) == (200, 200, 200)
    assert result.getpixel((0, 0))[0] < 20


def test_crystallize_is_deterministic(gradient: Image.Image) -> None:
    kernel = KERNELS[FilterVariant.CRYSTALLIZE]
    first = kernel(gradient, {ParameterName.RADIUS: 6.0})
    second = kernel(gradient, {ParameterName.RADIUS: 6.0})
    assert first.tobytes() == second.tobytes()
    assert first.tobytes() != gradient.tobytes()
