"""Shared pytest fixtures for jsendkit tests."""

from __future__ import annotations

import os
from typing import Iterator

import pytest

from jsendkit.config import get_settings
from jsendkit.logging import clear_context


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Drop JSENDKIT_* environment variables and the cached settings per test."""
    for name in list(os.environ):
        if name.startswith("JSENDKIT_"):
            monkeypatch.delenv(name, raising=False)
    get_settings.cache_clear()
    clear_context()
    yield
    get_settings.cache_clear()
    clear_context()
