"""Pytest configuration and fixtures."""

from __future__ import annotations

import io
import sys
from pathlib import Path

import pytest


@pytest.fixture
def text_file(tmp_path: Path) -> Path:
    """Return path to a small UTF-8 text file."""
    path = tmp_path / "name.txt"
    path.write_text("Fred\n", encoding="utf-8")
    return path


@pytest.fixture
def fake_stdin(monkeypatch: pytest.MonkeyPatch) -> io.TextIOWrapper:
    """Replace sys.stdin with a stream containing known bytes."""
    stream = io.TextIOWrapper(io.BytesIO(b"Bob from stdin\n"), encoding="utf-8")
    monkeypatch.setattr(sys, "stdin", stream)
    return stream
