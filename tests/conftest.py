"""Shared fixtures for Photo Album tests."""

import os
from datetime import datetime
from pathlib import Path

import pytest


def write_image(path: Path, when: datetime | None = None) -> str:
    """Create a placeholder image file, optionally with a set mtime."""
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"\x89PNG\r\n\x1a\n" + b"\x00" * 32)
    if when is not None:
        ts = when.timestamp()
        os.utime(path, (ts, ts))
    return str(path)


@pytest.fixture
def make_image(tmp_path):
    """Factory: make_image("a.jpg", datetime(...)) -> file path string."""
    def _make(name: str, when: datetime | None = None) -> str:
        return write_image(tmp_path / "images" / name, when)
    return _make
