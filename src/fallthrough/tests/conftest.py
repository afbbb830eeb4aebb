"""Shared fixtures: isolated settings and captured log output."""

from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from fallthrough.foundation.config import clear_settings_cache
from fallthrough.runtime.observability import CollectingRenderer, configure_logging


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    """Each test starts from default settings, whatever the outer environment holds."""
    for key in list(os.environ):
        if key.startswith("FALLTHROUGH_"):
            monkeypatch.delenv(key)
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def logs() -> Iterator[CollectingRenderer]:
    renderer = CollectingRenderer()
    configure_logging(level="DEBUG", renderer=renderer)
    yield renderer
    configure_logging(format="none")


@pytest.fixture
def tracing(logs: CollectingRenderer) -> CollectingRenderer:
    """Branch tracing switched on, with its output captured."""
    configure_logging(level="DEBUG", renderer=logs, trace_branches=True)
    return logs
