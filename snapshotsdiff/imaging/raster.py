"""PNG decoding and encoding between files and RasterImage buffers."""

from __future__ import annotations

from pathlib import Path

import structlog
from PIL import Image

from snapshotsdiff.exceptions import DecodeError, EncodeError, InputError
from snapshotsdiff.models.domain import RasterImage

logger = structlog.get_logger(__name__)


def from_image(image: Image.Image) -> RasterImage:
    """Convert a Pillow image to straight-alpha RGBA."""
    rgba = image if image.mode == "RGBA" else image.convert("RGBA")
    width, height = rgba.size
    return RasterImage(width=width, height=height, pixels=rgba.tobytes())


def to_image(raster: RasterImage) -> Image.Image:
    return Image.frombytes("RGBA", raster.size, raster.pixels)


def load_png(path: Path | str) -> RasterImage:
    """Decode an image file into a RasterImage."""
    path = Path(path)
    try:
        with Image.open(path) as img:
            img.load()
            raster = from_image(img)
    except (OSError, ValueError, Image.DecompressionBombError, InputError) as exc:
        logger.warning("image_decode_failed", path=str(path), error=str(exc))
        raise DecodeError(path) from exc
    logger.debug("image_loaded", path=str(path), width=raster.width, height=raster.height)
    return raster


def save_png(raster: RasterImage, path: Path | str) -> Path:
    """Encode a RasterImage as PNG at ``path``."""
    path = Path(path)
    try:
        to_image(raster).save(path, format="PNG")
    except (OSError, ValueError) as exc:
        logger.warning("image_encode_failed", path=str(path), error=str(exc))
        raise EncodeError(path) from exc
    return path
