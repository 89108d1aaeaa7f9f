"""
In-memory source adapters.

Each adapter holds a list of records of one kind and matches the normalized
query as a case-insensitive substring of the record's name-like fields. The
wildcard query ``*`` matches every record. Filter predicates from
``famsearch.sources.filters`` are applied after text matching.

The document and folder sources also answer name-prefix suggestion requests
for autocomplete.
"""

from __future__ import annotations

import threading
from abc import abstractmethod
from collections.abc import Iterable
from typing import TypeVar

from ..core.types import (
    WILDCARD,
    Category,
    Document,
    EntityKind,
    FilterSet,
    Folder,
    Member,
    Suggestion,
    SuggestionType,
)
from ..utils.error_handling import ErrorCollector
from .base import SourceAdapter
from .filters import category_passes, document_passes, folder_passes, member_passes

T = TypeVar("T")


class InMemorySource(SourceAdapter[T]):
    """Source adapter backed by an in-process record list."""

    def __init__(
        self, records: Iterable[T] = (), error_collector: ErrorCollector | None = None
    ) -> None:
        super().__init__(error_collector)
        self._records: list[T] = list(records)
        self._lock = threading.Lock()

    @property
    def records(self) -> list[T]:
        with self._lock:
            return list(self._records)

    def add(self, record: T) -> None:
        with self._lock:
            self._records.append(record)

    def __len__(self) -> int:
        with self._lock:
            return len(self._records)

    def _search(self, query: str, filters: FilterSet) -> list[T]:
        matches: list[T] = []
        for record in self.records:
            if self._matches_text(record, query) and self._passes(record, filters):
                matches.append(record)
        return matches

    def _matches_text(self, record: T, query: str) -> bool:
        if query == WILDCARD:
            return True
        return any(field and query in field.lower() for field in self._text_fields(record))

    @abstractmethod
    def _text_fields(self, record: T) -> Iterable[str | None]:
        pass

    @abstractmethod
    def _passes(self, record: T, filters: FilterSet) -> bool:
        pass


def _prefix_suggestions(
    names: Iterable[str], prefix: str, limit: int, suggestion_type: SuggestionType
) -> list[Suggestion]:
    """Name-prefix suggestions scored by how much of the name the prefix covers."""
    if limit <= 0 or not prefix:
        return []

    seen: set[str] = set()
    suggestions: list[Suggestion] = []
    for name in names:
        if name in seen or not name.lower().startswith(prefix):
            continue
        seen.add(name)
        suggestions.append(Suggestion(name, suggestion_type, len(prefix) / len(name)))

    suggestions.sort(key=lambda s: s.score, reverse=True)
    return suggestions[:limit]


class DocumentSource(InMemorySource[Document]):
    kind = EntityKind.DOCUMENTS

    def _text_fields(self, record: Document) -> Iterable[str | None]:
        return (record.name, record.type)

    def _passes(self, record: Document, filters: FilterSet) -> bool:
        return document_passes(record, filters)

    def suggest(self, prefix: str, limit: int) -> list[Suggestion]:
        names = (d.name for d in self.records if not d.archived)
        return _prefix_suggestions(names, prefix, limit, SuggestionType.FILE_NAME)


class FolderSource(InMemorySource[Folder]):
    kind = EntityKind.FOLDERS

    def _text_fields(self, record: Folder) -> Iterable[str | None]:
        return (record.name,)

    def _passes(self, record: Folder, filters: FilterSet) -> bool:
        return folder_passes(record, filters)

    def suggest(self, prefix: str, limit: int) -> list[Suggestion]:
        names = (f.name for f in self.records if not f.archived)
        return _prefix_suggestions(names, prefix, limit, SuggestionType.FOLDER_NAME)


class CategorySource(InMemorySource[Category]):
    kind = EntityKind.CATEGORIES

    def _text_fields(self, record: Category) -> Iterable[str | None]:
        return (record.label, record.description)

    def _passes(self, record: Category, filters: FilterSet) -> bool:
        return category_passes(record, filters)


class MemberSource(InMemorySource[Member]):
    kind = EntityKind.MEMBERS

    def _text_fields(self, record: Member) -> Iterable[str | None]:
        return (record.first_name, record.email)

    def _passes(self, record: Member, filters: FilterSet) -> bool:
        return member_passes(record, filters)
