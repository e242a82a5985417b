"""Pytest configuration for repository test runs."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import Callable, Mapping

import pytest


def pytest_sessionstart() -> None:
    """Add src directory to sys.path for test imports."""
    project_root = Path(__file__).resolve().parent.parent
    src_path = project_root / "src"
    if str(src_path) not in sys.path:
        sys.path.insert(0, str(src_path))


class FakeHistoryStore:
    """In-memory history store that records every call."""

    def __init__(self, hashes: Mapping[str, Mapping[str, str]]) -> None:
        self.hashes = {key: dict(fields) for key, fields in hashes.items()}
        self.hkeys_calls: list[str] = []
        self.hget_calls: list[tuple[str, str]] = []

    def hkeys(self, key: str) -> list[str]:
        self.hkeys_calls.append(key)
        return list(self.hashes.get(key, {}))

    def hget(self, key: str, field: str) -> str | None:
        self.hget_calls.append((key, field))
        return self.hashes.get(key, {}).get(field)


@pytest.fixture
def fake_store() -> Callable[[Mapping[str, Mapping[str, str]]], FakeHistoryStore]:
    """Return a factory for in-memory history stores."""
    return FakeHistoryStore
