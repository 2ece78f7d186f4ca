"""
Shared fixtures.

- every test runs in an empty temporary working directory so no ``.env`` or
  ``journal.json`` of the developer is picked up
- ``JOURNAL_*`` variables of the environment are removed for each test
"""

from __future__ import annotations

import os
from collections.abc import Callable, Iterator
from typing import Any

import pytest

from daybook.config import Settings, clear_settings_cache
from daybook.journal.injection import Injector, InMemoryDocumentStore
from daybook.journal.template_system import TemplateEngine

HOME_DIR = "/home/tester"


@pytest.fixture(autouse=True)
def _test_env(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Isolated settings environment for every test."""
    for key in list(os.environ):
        if key.upper().startswith("JOURNAL_"):
            monkeypatch.delenv(key)
    monkeypatch.chdir(tmp_path)

    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def make_engine() -> Callable[..., TemplateEngine]:
    """TemplateEngine over settings built from keyword arguments."""

    def factory(**settings_values: Any) -> TemplateEngine:
        settings = Settings(**settings_values)
        return TemplateEngine(settings_provider=lambda: settings, home_dir=HOME_DIR)

    return factory


@pytest.fixture
def engine(make_engine) -> TemplateEngine:
    return make_engine(base="/journal")


@pytest.fixture
def store() -> InMemoryDocumentStore:
    return InMemoryDocumentStore()


@pytest.fixture
def injector(store: InMemoryDocumentStore) -> Injector:
    return Injector(store)
