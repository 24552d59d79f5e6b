"""Shared test fixtures."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest
from PIL import Image

from snapshotsdiff.config.settings import get_settings

MakePng = Callable[..., Path]


@pytest.fixture()
def make_png() -> MakePng:
    """Write a solid-color RGBA PNG and return its path."""

    def _make(
        path: Path,
        color: tuple[int, ...] = (0, 0, 0, 255),
        size: tuple[int, int] = (2, 2),
    ) -> Path:
        path.parent.mkdir(parents=True, exist_ok=True)
        Image.new("RGBA", size, color=color).save(path)
        return path

    return _make


@pytest.fixture(autouse=True)
def _fresh_settings():
    """Settings are cached per process; reset around every test."""
    get_settings.cache_clear()
    yield
    get_settings.cache_clear()
