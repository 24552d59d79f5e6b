"""Pixel diff engine rendering a highlight raster with numpy."""

from __future__ import annotations

from pathlib import Path

import numpy as np
import structlog

from snapshotsdiff.config.settings import DEFAULT_THRESHOLD
from snapshotsdiff.exceptions import ConfigError, SizeMismatchError
from snapshotsdiff.imaging.raster import load_png, save_png
from snapshotsdiff.models.domain import CHANNELS, DiffResult, RasterImage

logger = structlog.get_logger(__name__)

# Matching pixels: dim gray, translucent
SAME_PIXEL = (100, 100, 100, 100)


def _as_array(image: RasterImage) -> np.ndarray:
    return np.frombuffer(image.pixels, dtype=np.uint8).reshape(-1, CHANNELS)


class PixelDiffEngine:
    """Compares two rasters using squared Euclidean distance over RGBA.

    A pixel is different when ``dr² + dg² + db² + da²`` exceeds the
    threshold. Different pixels take the second image's color doubled and
    clamped at full opacity; matching pixels become ``SAME_PIXEL``.
    """

    def __init__(self, threshold: int = DEFAULT_THRESHOLD) -> None:
        if threshold < 0:
            msg = f"Threshold must be non-negative, got {threshold}"
            raise ConfigError(msg)
        self._threshold = threshold

    @property
    def threshold(self) -> int:
        return self._threshold

    def diff(self, image_a: RasterImage, image_b: RasterImage) -> DiffResult:
        """Compare two in-memory rasters and render the diff raster."""
        if image_a.size != image_b.size:
            logger.warning("size_mismatch", image_a=image_a.size, image_b=image_b.size)
            raise SizeMismatchError(image_a.size, image_b.size)

        a = _as_array(image_a).astype(np.int32)
        b = _as_array(image_b).astype(np.int32)
        distance_squared = ((a - b) ** 2).sum(axis=1)
        different = distance_squared > self._threshold

        result = np.empty_like(a, dtype=np.uint8)
        result[:] = SAME_PIXEL
        boosted = np.minimum(b[different, :3] * 2, 255).astype(np.uint8)
        result[different, :3] = boosted
        result[different, 3] = 255

        diff_count = int(different.sum())
        total_pixels = image_a.width * image_a.height
        return DiffResult(
            image=RasterImage(
                width=image_a.width,
                height=image_a.height,
                pixels=result.tobytes(),
            ),
            different_pixels=diff_count,
            total_pixels=total_pixels,
            threshold=self._threshold,
        )

    def compare(
        self,
        image_a: Path | str,
        image_b: Path | str,
        output_path: Path | str,
    ) -> DiffResult:
        """Diff two PNG files and write the rendered diff to ``output_path``."""
        raster_a = load_png(image_a)
        raster_b = load_png(image_b)
        result = self.diff(raster_a, raster_b)
        result.output_path = save_png(result.image, output_path)

        logger.info(
            "visual_diff_complete",
            diff_pct=f"{result.diff_percentage:.4%}",
            threshold=self._threshold,
            changed_pixels=result.different_pixels,
            total_pixels=result.total_pixels,
            output=str(result.output_path),
        )
        return result
