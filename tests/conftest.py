import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

ROOT = Path(__file__).resolve().parents[1]
SRC = ROOT / "src"

# Allow running the suite from a checkout without installing the package.
if str(SRC) not in sys.path:
    sys.path.insert(0, str(SRC))


def make_gradient(width: int = 40, height: int = 30) -> Image.Image:
    """Return a deterministic RGB test card with distinct pixels."""

    y, x = np.mgrid[0:height, 0:width]
    pixels = np.stack(
        [
            (x * 255 // max(width - 1, 1)),
            (y * 255 // max(height - 1, 1)),
            ((x + y) * 7) % 256,
        ],
        axis=-1,
    ).astype(np.uint8)
    return Image.fromarray(pixels)


@pytest.fixture
def gradient() -> Image.Image:
    return make_gradient()


@pytest.fixture
def other_gradient() -> Image.Image:
    return make_gradient(24, 16).transpose(Image.Transpose.FLIP_LEFT_RIGHT)
