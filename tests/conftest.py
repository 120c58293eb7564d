"""Shared pytest fixtures for test modules."""

import os

import pytest


@pytest.fixture(autouse=True)
def _isolate_config(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep FDA__* settings from the developer's shell out of the tests."""
    for key in list(os.environ):
        if key.startswith("FDA__"):
            monkeypatch.delenv(key)
