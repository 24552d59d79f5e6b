"""In-memory data contracts for a diff run (never persisted)."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from snapshotsdiff.exceptions import InputError

if TYPE_CHECKING:
    from pathlib import Path

CHANNELS = 4  # R, G, B, A


@dataclass(frozen=True)
class RasterImage:
    """Decoded 8-bit RGBA bitmap, row-major, top row first."""

    width: int
    height: int
    pixels: bytes = field(repr=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            msg = f"Invalid raster dimensions: {self.width}x{self.height}"
            raise InputError(msg)
        expected = self.width * self.height * CHANNELS
        if len(self.pixels) != expected:
            msg = f"Raster buffer has {len(self.pixels)} bytes, expected {expected}"
            raise InputError(msg)

    @property
    def size(self) -> tuple[int, int]:
        return (self.width, self.height)

    def pixel(self, x: int, y: int) -> tuple[int, int, int, int]:
        """Return the RGBA value at a coordinate."""
        index = (y * self.width + x) * CHANNELS
        r, g, b, a = self.pixels[index : index + CHANNELS]
        return (r, g, b, a)


@dataclass
class DiffResult:
    """Result of comparing two rasters."""

    image: RasterImage
    different_pixels: int
    total_pixels: int
    threshold: int
    output_path: Path | None = None

    @property
    def matches(self) -> bool:
        return self.different_pixels == 0

    @property
    def diff_percentage(self) -> float:
        return self.different_pixels / self.total_pixels if self.total_pixels else 0.0


@dataclass
class SnapshotPairing:
    """One failed snapshot and the reference it was matched to, if any."""

    failed_path: Path
    test_name: str
    snapshot_name: str
    reference_path: Path | None = None
    bundle_dir: Path | None = None

    @property
    def is_matched(self) -> bool:
        return self.reference_path is not None


@dataclass
class BatchSummary:
    """Counters accumulated over one batch run."""

    output_dir: Path | None = None
    total: int = 0
    processed: int = 0
    unmatched: int = 0
    diff_failed: int = 0
    elapsed_seconds: float = 0.0

    @property
    def failed(self) -> int:
        return self.unmatched + self.diff_failed

    def record_processed(self) -> None:
        self.processed += 1

    def record_unmatched(self) -> None:
        self.unmatched += 1

    def record_diff_failed(self) -> None:
        self.diff_failed += 1

    def lines(self) -> list[str]:
        """Printable summary block."""
        result = [
            "--- Summary ---",
            f"Processed: {self.processed}",
            f"Failed: {self.failed}",
        ]
        if self.processed > 0 and self.output_dir is not None:
            result.append(f"Output: {self.output_dir}")
        return result
