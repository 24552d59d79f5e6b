"""Unit tests for snapshotsdiff/imaging/raster.py and the RasterImage model."""

from __future__ import annotations

from pathlib import Path

import pytest
from PIL import Image

from snapshotsdiff.exceptions import DecodeError, EncodeError, InputError
from snapshotsdiff.imaging.raster import from_image, load_png, save_png
from snapshotsdiff.models.domain import RasterImage


@pytest.mark.unit
class TestRasterImage:
    def test_buffer_length_checked(self) -> None:
        with pytest.raises(InputError, match="expected 16"):
            RasterImage(width=2, height=2, pixels=b"\x00" * 15)

    def test_dimensions_must_be_positive(self) -> None:
        with pytest.raises(InputError):
            RasterImage(width=0, height=2, pixels=b"")

    def test_pixel_lookup_is_row_major(self) -> None:
        pixels = bytes(range(16))
        image = RasterImage(width=2, height=2, pixels=pixels)
        assert image.pixel(0, 0) == (0, 1, 2, 3)
        assert image.pixel(1, 0) == (4, 5, 6, 7)
        assert image.pixel(0, 1) == (8, 9, 10, 11)

    def test_is_immutable(self) -> None:
        image = RasterImage(width=1, height=1, pixels=b"\x01\x02\x03\x04")
        with pytest.raises(AttributeError):
            image.width = 5  # type: ignore[misc]


@pytest.mark.unit
class TestPngCodec:
    def test_rgb_input_gains_opaque_alpha(self, tmp_path: Path) -> None:
        path = tmp_path / "rgb.png"
        Image.new("RGB", (3, 1), color=(10, 20, 30)).save(path)
        raster = load_png(path)
        assert raster.size == (3, 1)
        assert raster.pixel(2, 0) == (10, 20, 30, 255)

    def test_translucent_pixels_are_not_premultiplied(self, tmp_path: Path) -> None:
        path = tmp_path / "alpha.png"
        Image.new("RGBA", (1, 1), color=(200, 100, 50, 128)).save(path)
        assert load_png(path).pixel(0, 0) == (200, 100, 50, 128)

    def test_save_then_load(self, tmp_path: Path) -> None:
        raster = from_image(Image.new("RGBA", (2, 3), color=(1, 2, 3, 4)))
        path = save_png(raster, tmp_path / "out.png")
        assert load_png(path) == raster

    def test_load_rejects_non_image(self, tmp_path: Path) -> None:
        path = tmp_path / "notes.png"
        path.write_text("hello")
        with pytest.raises(DecodeError) as exc_info:
            load_png(path)
        assert exc_info.value.path == str(path)

    def test_save_into_missing_directory(self, tmp_path: Path) -> None:
        raster = from_image(Image.new("RGBA", (1, 1)))
        with pytest.raises(EncodeError, match="Failed to save PNG"):
            save_png(raster, tmp_path / "missing" / "out.png")

    def test_oversized_image_is_decode_error(
        self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch
    ) -> None:
        path = tmp_path / "huge.png"
        Image.new("RGBA", (10, 10)).save(path)
        monkeypatch.setattr(Image, "MAX_IMAGE_PIXELS", 10)
        with pytest.raises(DecodeError, match="huge.png"):
            load_png(path)
