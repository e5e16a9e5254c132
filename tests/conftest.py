"""
Pytest configuration and shared fixtures.

This file is automatically loaded by pytest and provides
common fixtures and helpers for all test files.
"""
from __future__ import annotations
from typing import List, Tuple
import pytest
from pathlib import Path


class RecordingNotifier:
    """Notifier double that remembers every call in order."""

    def __init__(self) -> None:
        self.calls: List[Tuple[str, str]] = []

    def started(self, path: str) -> None:
        self.calls.append(("started", path))

    def waiting(self, path: str) -> None:
        self.calls.append(("waiting", path))

    def restarting(self, path: str) -> None:
        self.calls.append(("restarting", path))

    def close(self) -> None:
        self.calls.append(("close", ""))

    def names(self) -> List[str]:
        return [name for name, _ in self.calls]


@pytest.fixture
def notifier():
    """Return a fresh recording notifier."""
    return RecordingNotifier()


@pytest.fixture
def log_path(tmp_path) -> Path:
    """Return a path inside tmp_path where a log file may be created."""
    return tmp_path / "app.log"


@pytest.fixture
def chunks():
    """Collects decoded text forwarded by the engine."""
    return []
