"""Shared fixtures for all chartplan tests."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest
import structlog


@pytest.fixture(autouse=True)
def _isolated_environment(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Clear CHARTPLAN_* variables and undo any structlog configuration a test applied."""
    for var in list(os.environ):
        if var.startswith("CHARTPLAN_"):
            monkeypatch.delenv(var)
    yield
    structlog.reset_defaults()
