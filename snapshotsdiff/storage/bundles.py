"""Output directory management for diff bundles.

Every bundle is ``<output>/<test>/<snapshot>/`` holding ``reference.png``,
``failed.png`` and ``diff.png``. Directories are always wiped and recreated
so stale artifacts from earlier runs never mix with fresh ones.
"""

from __future__ import annotations

import shutil
from dataclasses import dataclass
from pathlib import Path

import structlog

from snapshotsdiff.exceptions import StorageError
from snapshotsdiff.utils.sanitize import safe_component

logger = structlog.get_logger(__name__)

REFERENCE_FILE = "reference.png"
FAILED_FILE = "failed.png"
DIFF_FILE = "diff.png"


@dataclass(frozen=True)
class BundlePaths:
    root: Path
    reference: Path
    failed: Path
    diff: Path


def bundle_files(root: Path) -> BundlePaths:
    """The three file paths inside a bundle directory."""
    return BundlePaths(
        root=root,
        reference=root / REFERENCE_FILE,
        failed=root / FAILED_FILE,
        diff=root / DIFF_FILE,
    )


def bundle_paths(output_dir: Path, test_name: str, snapshot_name: str) -> BundlePaths:
    """Build the sanitized bundle layout for one pairing."""
    return bundle_files(output_dir / safe_component(test_name) / safe_component(snapshot_name))


def recreate_directory(path: Path) -> Path:
    """Remove whatever is at ``path`` and create an empty directory there."""
    try:
        if path.is_dir() and not path.is_symlink():
            shutil.rmtree(path)
        elif path.exists() or path.is_symlink():
            path.unlink()
        path.mkdir(parents=True)
    except OSError as exc:
        msg = f"Cannot create output directory {path}: {exc}"
        raise StorageError(msg) from exc
    logger.debug("directory_recreated", path=str(path))
    return path


def copy_into_bundle(source: Path, destination: Path) -> Path:
    """Copy one input image into a bundle."""
    try:
        shutil.copyfile(source, destination)
    except OSError as exc:
        msg = f"Cannot copy {source} to {destination}: {exc}"
        raise StorageError(msg) from exc
    return destination
