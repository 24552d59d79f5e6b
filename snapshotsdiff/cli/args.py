"""Command line shape detection for the snapshotsdiff tool."""

from __future__ import annotations

from dataclasses import dataclass

from snapshotsdiff.exceptions import ArgumentError
from snapshotsdiff.types import RunMode

USAGE = """\
snapshotsdiff - Create visual diffs between snapshot images

USAGE:
    snapshotsdiff                                                       Compare all (default paths)
    snapshotsdiff --artifacts <path> --output <path> --tests <path>     Compare all (custom paths)
    snapshotsdiff <image-a> <image-b> <output-path>                     Compare two images

OPTIONS:
    --artifacts <path>    Path to snapshot artifacts (failed snapshots)
    --output <path>       Output directory for diffs
    --tests <path>        Path to snapshot tests (reference images in __Snapshots__ folders)
    --help, -h            Show this help

EXAMPLES:
    snapshotsdiff
    snapshotsdiff --artifacts ./SnapshotArtifacts --output ./SnapshotDiffs --tests ./AppSnapshotTests
    snapshotsdiff before.png after.png diff.png

OUTPUT:
    For batch mode, creates for each failed snapshot:
      <output>/<test>/<snapshot>/
        reference.png   (expected)
        failed.png      (actual)
        diff.png        (visual diff)

    Diff visualization:
      - Different pixels: highlighted (boosted color)
      - Same pixels: dimmed gray with transparency

    Color comparison uses squared Euclidean distance in RGBA space:
      distance^2 = (r1-r2)^2 + (g1-g2)^2 + (b1-b2)^2 + (a1-a2)^2
      Default threshold: 1600 (about a perceptual distance of 40)
"""

_FLAGS = {"--artifacts": "artifacts", "--output": "output", "--tests": "tests"}


@dataclass(frozen=True)
class Invocation:
    mode: RunMode
    artifacts: str | None = None
    output: str | None = None
    tests: str | None = None
    image_a: str | None = None
    image_b: str | None = None


def parse_args(
    args: list[str],
    default_artifacts: str = "../SnapshotArtifacts",
    default_output: str = "../SnapshotDiffs",
    default_tests: str = "../AppSnapshotTests",
) -> Invocation:
    """Map raw arguments (without the program name) to an Invocation."""
    if not args:
        return Invocation(
            mode=RunMode.COMPARE_ALL,
            artifacts=default_artifacts,
            output=default_output,
            tests=default_tests,
        )

    if "--help" in args or "-h" in args:
        return Invocation(mode=RunMode.HELP)

    if len(args) == 3 and not any(arg.startswith("-") for arg in args):
        return Invocation(
            mode=RunMode.COMPARE_TWO,
            image_a=args[0],
            image_b=args[1],
            output=args[2],
        )

    values: dict[str, str] = {}
    i = 0
    while i < len(args):
        arg = args[i]
        key = _FLAGS.get(arg)
        if key is None:
            msg = f"Unknown argument: {arg}"
            raise ArgumentError(msg)
        if i + 1 >= len(args) or args[i + 1].startswith("-"):
            msg = f"Missing value for {arg}"
            raise ArgumentError(msg)
        if key in values:
            msg = f"Duplicate argument: {arg}"
            raise ArgumentError(msg)
        values[key] = args[i + 1]
        i += 2

    missing = [flag for flag, key in _FLAGS.items() if key not in values]
    if missing:
        msg = "Missing required arguments. Need --artifacts, --output, and --tests"
        raise ArgumentError(msg)

    return Invocation(mode=RunMode.COMPARE_ALL, **values)
