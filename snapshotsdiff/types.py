"""Enums for snapshotsdiff."""

from enum import StrEnum


class RunMode(StrEnum):
    COMPARE_ALL = "compare_all"
    COMPARE_TWO = "compare_two"
    HELP = "help"


class PairingOutcome(StrEnum):
    PROCESSED = "processed"
    UNMATCHED = "unmatched"
    DIFF_FAILED = "diff_failed"
