"""snapshotsdiff entrypoint."""

from __future__ import annotations

import sys

import structlog

from snapshotsdiff.cli.args import USAGE, Invocation, parse_args
from snapshotsdiff.config.logging import setup_logging
from snapshotsdiff.config.settings import Settings, get_settings
from snapshotsdiff.exceptions import ArgumentError, ConfigError, SnapshotsDiffError
from snapshotsdiff.matcher.processor import SnapshotBatchMatcher, compare_two
from snapshotsdiff.reporter.diff import PixelDiffEngine
from snapshotsdiff.types import RunMode

logger = structlog.get_logger(__name__)


def _run_batch(invocation: Invocation, settings: Settings) -> int:
    matcher = SnapshotBatchMatcher(
        failures_dir=invocation.artifacts or settings.artifacts_dir,
        references_dir=invocation.tests or settings.tests_dir,
        output_dir=invocation.output or settings.output_dir,
        engine=PixelDiffEngine(settings.threshold),
        marker=settings.snapshot_marker,
    )
    try:
        summary = matcher.process_all()
    except SnapshotsDiffError as exc:
        logger.error("batch_aborted", error=str(exc))
        print(f"Error: {exc}")
        return 1

    print()
    for line in summary.lines():
        print(line)
    return 0


def _run_pair(invocation: Invocation, settings: Settings) -> int:
    try:
        compare_two(
            invocation.image_a,
            invocation.image_b,
            invocation.output,
            engine=PixelDiffEngine(settings.threshold),
        )
    except SnapshotsDiffError as exc:
        logger.error("compare_failed", error=str(exc))
        print(f"Error: {exc}")
        return 1
    print(f"Diff created: {invocation.output}")
    return 0


def main(argv: list[str] | None = None) -> int:
    """Run the tool and return the process exit status."""
    try:
        settings = get_settings()
    except ConfigError as exc:
        print(f"Error: {exc}")
        return 1
    setup_logging(log_level=settings.log_level, json_output=settings.json_logs)
    args = sys.argv[1:] if argv is None else argv

    try:
        invocation = parse_args(
            args,
            default_artifacts=settings.artifacts_dir,
            default_output=settings.output_dir,
            default_tests=settings.tests_dir,
        )
    except ArgumentError as exc:
        print(f"Error: {exc}\n")
        print(USAGE)
        return 1

    if invocation.mode is RunMode.HELP:
        print(USAGE)
        return 0
    if invocation.mode is RunMode.COMPARE_TWO:
        return _run_pair(invocation, settings)
    return _run_batch(invocation, settings)


def cli() -> None:
    """CLI entrypoint."""
    sys.exit(main())


if __name__ == "__main__":
    cli()
