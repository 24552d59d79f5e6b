"""Exception hierarchy for snapshotsdiff."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from pathlib import Path


class SnapshotsDiffError(Exception):
    """Base exception for all snapshotsdiff errors."""


class InputError(SnapshotsDiffError):
    """Raised when an input image cannot be used for comparison."""


class DecodeError(InputError):
    """Raised when a file cannot be decoded as a raster image."""

    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"Failed to load image: {self.path}")


class SizeMismatchError(InputError):
    """Raised when two compared images differ in width or height."""

    def __init__(self, size_a: tuple[int, int], size_b: tuple[int, int]) -> None:
        self.size_a = size_a
        self.size_b = size_b
        super().__init__(
            f"Image size mismatch: {size_a[0]}x{size_a[1]} vs {size_b[0]}x{size_b[1]}"
        )


class EncodeError(SnapshotsDiffError):
    """Raised when a diff raster cannot be written as PNG."""

    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"Failed to save PNG: {self.path}")


class StorageError(SnapshotsDiffError):
    """Raised when directory creation, removal or copying fails."""


class ArgumentError(SnapshotsDiffError):
    """Raised when the command line has an unsupported shape."""


class NoMatchFoundError(SnapshotsDiffError):
    """Raised when a failed snapshot has no plausible reference image."""

    def __init__(self, path: Path | str) -> None:
        self.path = str(path)
        super().__init__(f"Reference not found for {self.path}")


class ConfigError(SnapshotsDiffError):
    """Raised when configuration is invalid."""
