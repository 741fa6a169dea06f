from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from instafilter.errors import ExportError, ImageLoadError
from instafilter.io.image_io import load_image, save_image


def test_save_and_load(tmp_path: Path, gradient: Image.Image) -> None:
    target = tmp_path / "nested" / "out.png"
    written = save_image(gradient, target)

    assert written == target
    loaded = load_image(target)
    assert loaded.size == gradient.size
    assert loaded.convert("RGB").tobytes() == gradient.tobytes()


def test_save_jpeg_converts_alpha(tmp_path: Path) -> None:
    rgba = Image.new("RGBA", (8, 8), (255, 0, 0, 100))
    target = save_image(rgba, tmp_path / "out.jpg", image_format="jpeg")
    with Image.open(target) as handle:
        assert handle.format == "JPEG"
        assert handle.mode == "RGB"


def test_save_unknown_extension_raises_export_error(tmp_path: Path, gradient: Image.Image) -> None:
    with pytest.raises(ExportError):
        save_image(gradient, tmp_path / "out.notaformat")


def test_load_missing_file(tmp_path: Path) -> None:
    with pytest.raises(ImageLoadError):
        load_image(tmp_path / "missing.png")


def test_load_garbage_file(tmp_path: Path) -> None:
    bogus = tmp_path / "bogus.png"
    bogus.write_bytes(b"not an image")
    with pytest.raises(ImageLoadError):
        load_image(bogus)
