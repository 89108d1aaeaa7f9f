"""
Shared test fixtures and utilities for famsearch tests.

This module provides a controllable clock, scripted source adapters that count
their calls, a small household record set and a ready-to-use engine.
"""

from __future__ import annotations

import threading
import time
from collections.abc import Iterable
from datetime import datetime, timedelta
from typing import Any

import pytest

from famsearch import (
    Category,
    Document,
    EntityKind,
    FamilySearch,
    FilterSet,
    Folder,
    Member,
    SearchConfig,
    StaticSessionProvider,
    UserIdentity,
)
from famsearch.sources import CategorySource, DocumentSource, FolderSource, MemberSource
from famsearch.sources.base import SourceAdapter
from famsearch.utils.logging_config import LogLevel, configure_logging

NOW = datetime(2024, 6, 1, 12, 0, 0)
USER_ID = 7


class FakeClock:
    """Manually advanced time source, in seconds."""

    def __init__(self, start: float = 1_700_000_000.0) -> None:
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


class ScriptedSource(SourceAdapter[Any]):
    """Source returning fixed items; counts calls and can be slow or broken."""

    def __init__(
        self,
        kind: EntityKind,
        items: Iterable[Any] = (),
        delay: float = 0.0,
        error: Exception | None = None,
    ) -> None:
        super().__init__()
        self.kind = kind
        self.items = list(items)
        self.delay = delay
        self.error = error
        self.calls = 0
        self.seen: list[tuple[str, FilterSet]] = []
        self._lock = threading.Lock()

    def _search(self, query: str, filters: FilterSet) -> list[Any]:
        with self._lock:
            self.calls += 1
            self.seen.append((query, filters))
        if self.delay:
            time.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return list(self.items)


@pytest.fixture(autouse=True)
def quiet_logging():
    """Keep test output free of engine logs."""
    configure_logging(level=LogLevel.CRITICAL, enable_console=False)
    yield
    configure_logging(level=LogLevel.CRITICAL, enable_console=False)


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def now() -> datetime:
    return NOW


@pytest.fixture
def make_source() -> type[ScriptedSource]:
    return ScriptedSource


@pytest.fixture
def session() -> StaticSessionProvider:
    return StaticSessionProvider(UserIdentity(USER_ID, "Alex"))


@pytest.fixture
def documents() -> list[Document]:
    return [
        Document(1, "invoice-march.pdf", "pdf", 20_480, NOW - timedelta(days=2), 1, 7),
        Document(2, "Invoice-april.pdf", "pdf", 4_096, NOW - timedelta(days=40), 1, 8),
        Document(3, "tax-return-2023.pdf", "pdf", 1_500_000, NOW - timedelta(days=100), 1, 7),
        Document(4, "holiday.jpg", "jpg", 3_000_000, None, 3, 8),
        Document(5, "old-invoice.txt", "txt", 100, NOW - timedelta(days=400), 2, 7, archived=True),
    ]


@pytest.fixture
def folders() -> list[Folder]:
    return [
        Folder(1, "Invoices", NOW - timedelta(days=10), member_id=7, category_id=2),
        Folder(2, "Invoices archive", NOW - timedelta(days=500), category_id=2, archived=True),
        Folder(3, "Photos", NOW - timedelta(days=5), member_id=8, category_id=3),
    ]


@pytest.fixture
def categories() -> list[Category]:
    return [
        Category(2, "Finance", "Invoices and taxes"),
        Category(3, "Photos", "Holiday pictures"),
    ]


@pytest.fixture
def members() -> list[Member]:
    return [
        Member(7, "Alex", "alex@example.org", family_id=1, is_parent=True, is_admin=True),
        Member(8, "Sam", "sam@example.org", family_id=1),
    ]


@pytest.fixture
def sources(documents, folders, categories, members) -> dict[str, Any]:
    return {
        "documents": DocumentSource(documents),
        "folders": FolderSource(folders),
        "categories": CategorySource(categories),
        "members": MemberSource(members),
    }


@pytest.fixture
def engine(session, sources, clock):
    """Engine over the sample records with a fake clock."""
    search_engine = FamilySearch(session, **sources, clock=clock)
    yield search_engine
    search_engine.close()


@pytest.fixture
def scripted_engine(session, clock):
    """Factory building an engine over ScriptedSources."""
    created: list[FamilySearch] = []

    def build(
        documents: ScriptedSource | None = None,
        folders: ScriptedSource | None = None,
        categories: ScriptedSource | None = None,
        members: ScriptedSource | None = None,
        config: SearchConfig | None = None,
    ) -> FamilySearch:
        search_engine = FamilySearch(
            session,
            documents if documents is not None else ScriptedSource(EntityKind.DOCUMENTS),
            folders if folders is not None else ScriptedSource(EntityKind.FOLDERS),
            categories if categories is not None else ScriptedSource(EntityKind.CATEGORIES),
            members if members is not None else ScriptedSource(EntityKind.MEMBERS),
            config=config,
            clock=clock,
        )
        created.append(search_engine)
        return search_engine

    yield build
    for search_engine in created:
        search_engine.close()


def pytest_configure(config):
    """Configure pytest with custom markers."""
    config.addinivalue_line("markers", "unit: Unit tests")
    config.addinivalue_line("markers", "integration: Integration tests")
    config.addinivalue_line("markers", "cache: Result cache tests")
    config.addinivalue_line("markers", "cli: Command line tests")
