"""Unit tests for snapshotsdiff/utils/timing.py."""

from __future__ import annotations

import time

import pytest

from snapshotsdiff.utils.timing import timed


@pytest.mark.unit
class TestTimedContextManager:
    def test_elapsed_starts_at_zero_inside_block(self) -> None:
        with timed("test_operation") as t:
            in_block_value = t["elapsed"]
        assert in_block_value == 0.0

    def test_elapsed_is_positive_after_block(self) -> None:
        with timed("some_work") as t:
            time.sleep(0.01)
        assert t["elapsed"] > 0.0

    def test_elapsed_recorded_when_block_raises(self) -> None:
        with pytest.raises(RuntimeError), timed("failing") as t:
            time.sleep(0.01)
            raise RuntimeError("boom")
        assert t["elapsed"] > 0.0
