"""Batch pairing of failed snapshots with references and diff bundle output."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from snapshotsdiff.config.settings import SNAPSHOT_MARKER
from snapshotsdiff.exceptions import InputError, NoMatchFoundError, SnapshotsDiffError
from snapshotsdiff.matcher.reference import PNG_SUFFIX, ReferenceIndex
from snapshotsdiff.models.domain import BatchSummary, SnapshotPairing
from snapshotsdiff.reporter.diff import PixelDiffEngine
from snapshotsdiff.storage.bundles import (
    bundle_files,
    bundle_paths,
    copy_into_bundle,
    recreate_directory,
)
from snapshotsdiff.types import PairingOutcome
from snapshotsdiff.utils.timing import timed

if TYPE_CHECKING:
    from collections.abc import Callable

    from snapshotsdiff.models.domain import DiffResult

logger = structlog.get_logger(__name__)


class SnapshotBatchMatcher:
    """Pairs failed snapshots with references and writes diff bundles.

    Single-threaded: pairings are processed one at a time in sorted path
    order, and an error in one pairing never stops the rest of the batch.
    """

    def __init__(
        self,
        failures_dir: Path | str,
        references_dir: Path | str,
        output_dir: Path | str,
        engine: PixelDiffEngine | None = None,
        marker: str = SNAPSHOT_MARKER,
        echo: Callable[[str], None] = print,
    ) -> None:
        self._failures_dir = Path(failures_dir)
        self._references_dir = Path(references_dir)
        self._output_dir = Path(output_dir)
        self._engine = engine or PixelDiffEngine()
        self._marker = marker
        self._echo = echo

    @property
    def output_dir(self) -> Path:
        return self._output_dir

    def discover_failures(self) -> list[Path]:
        """All PNG files under the failures directory, in sorted order."""
        return sorted(
            p for p in self._failures_dir.rglob(f"*{PNG_SUFFIX}") if p.is_file()
        )

    def pair(self, failed_path: Path, index: ReferenceIndex) -> SnapshotPairing:
        """Match one failure against the reference index."""
        pairing = SnapshotPairing(
            failed_path=failed_path,
            test_name=failed_path.parent.name,
            snapshot_name=failed_path.stem,
            reference_path=index.find(failed_path.name),
        )
        if pairing.is_matched:
            pairing.bundle_dir = bundle_paths(
                self._output_dir, pairing.test_name, pairing.snapshot_name
            ).root
        return pairing

    def process_all(self) -> BatchSummary:
        """Run the full batch and return its summary.

        Raises InputError when the failures directory is missing and
        StorageError when the output directory cannot be recreated. Errors
        for individual pairings are counted, not raised.
        """
        self._echo("Processing snapshots...")
        self._echo(f"  Artifacts: {self._failures_dir}")
        self._echo(f"  Output: {self._output_dir}")
        self._echo(f"  Tests: {self._references_dir}")

        if not self._failures_dir.is_dir():
            msg = f"Artifacts not found at {self._failures_dir}"
            raise InputError(msg)

        summary = BatchSummary(output_dir=self._output_dir)
        with timed("process_all") as elapsed:
            recreate_directory(self._output_dir)
            logger.info("output_dir_recreated", path=str(self._output_dir))

            index = ReferenceIndex.build(self._references_dir, self._marker)
            failures = self.discover_failures()
            summary.total = len(failures)

            for failed_path in failures:
                outcome = self._process_one(failed_path, index)
                if outcome is PairingOutcome.PROCESSED:
                    summary.record_processed()
                elif outcome is PairingOutcome.UNMATCHED:
                    summary.record_unmatched()
                else:
                    summary.record_diff_failed()
        summary.elapsed_seconds = elapsed["elapsed"]

        logger.info(
            "batch_complete",
            total=summary.total,
            processed=summary.processed,
            unmatched=summary.unmatched,
            diff_failed=summary.diff_failed,
            elapsed_seconds=round(summary.elapsed_seconds, 3),
        )
        return summary

    def _process_one(self, failed_path: Path, index: ReferenceIndex) -> PairingOutcome:
        relative = failed_path.relative_to(self._failures_dir)
        self._echo(f"\nProcessing: {relative}")

        pairing = self.pair(failed_path, index)
        if not pairing.is_matched:
            error = NoMatchFoundError(relative)
            logger.warning("reference_not_found", file=str(relative), error=str(error))
            self._echo("  Warning: Reference not found")
            return PairingOutcome.UNMATCHED

        self._echo(f"  Reference: {pairing.reference_path}")
        try:
            self.write_bundle(pairing)
        except (SnapshotsDiffError, OSError) as exc:
            logger.warning("pairing_failed", file=str(relative), error=str(exc))
            self._echo(f"  Error: {exc}")
            return PairingOutcome.DIFF_FAILED

        self._echo("  Done")
        return PairingOutcome.PROCESSED

    def write_bundle(self, pairing: SnapshotPairing) -> DiffResult:
        """Recreate the pairing's bundle directory and fill it with the three images."""
        if pairing.reference_path is None or pairing.bundle_dir is None:
            raise NoMatchFoundError(pairing.failed_path)

        paths = bundle_files(recreate_directory(pairing.bundle_dir))
        copy_into_bundle(pairing.failed_path, paths.failed)
        copy_into_bundle(pairing.reference_path, paths.reference)
        result = self._engine.compare(paths.reference, paths.failed, paths.diff)

        logger.info(
            "bundle_written",
            bundle=str(paths.root),
            changed_pixels=result.different_pixels,
        )
        return result

    def compare_two(
        self,
        image_a: Path | str,
        image_b: Path | str,
        output_path: Path | str,
    ) -> DiffResult:
        """Diff two explicit images without discovery or matching."""
        return compare_two(image_a, image_b, output_path, engine=self._engine)


def compare_two(
    image_a: Path | str,
    image_b: Path | str,
    output_path: Path | str,
    engine: PixelDiffEngine | None = None,
) -> DiffResult:
    """Two-image mode: every error propagates to the caller."""
    return (engine or PixelDiffEngine()).compare(image_a, image_b, output_path)
