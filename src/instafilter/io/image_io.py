"""Load input bitmaps and persist rendered results with Pillow."""

from __future__ import annotations

import logging
from pathlib import Path

from PIL import Image, ImageOps

from ..errors import ExportError, ImageLoadError

_LOGGER = logging.getLogger(__name__)

# Formats without an alpha channel need an RGB buffer before Pillow will encode them.
_OPAQUE_FORMATS = {"JPEG", "BMP"}


def load_image(path: Path) -> Image.Image:
    """Return the image stored at *path* with its EXIF orientation applied."""

    try:
        with Image.open(path) as handle:
            image = ImageOps.exif_transpose(handle)
            image.load()
    except (OSError, ValueError, Image.DecompressionBombError) as exc:
        raise ImageLoadError(f"Could not read image {path}: {exc}") from exc
    _LOGGER.debug("Loaded %s (%dx%d, %s)", path, image.width, image.height, image.mode)
    return image


def save_image(image: Image.Image, destination: Path, *, image_format: str | None = None) -> Path:
    """Write *image* into *destination* and return the written path.

    The format is inferred from the suffix when *image_format* is omitted.
    Any failure is reported as :class:`ExportError` with a readable reason.
    """

    fmt = image_format.upper() if image_format else None
    to_write = image
    if fmt in _OPAQUE_FORMATS and image.mode not in ("RGB", "L"):
        to_write = image.convert("RGB")
    try:
        destination.parent.mkdir(parents=True, exist_ok=True)
        to_write.save(destination, format=fmt)
    except (OSError, ValueError, KeyError) as exc:
        raise ExportError(f"Could not write {destination}: {exc}") from exc
    return destination


__all__ = ["load_image", "save_image"]
