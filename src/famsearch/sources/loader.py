"""
Record loader.

Reads a JSON file holding ``documents``, ``folders``, ``categories`` and
``members`` arrays and builds the four in-memory source adapters. Dates are
ISO-8601 strings; missing arrays yield empty sources.

Example file:
    {
      "documents": [{"id": 1, "name": "invoice-2024.pdf", "type": "pdf",
                     "size": 20480, "created_at": "2024-03-01T10:00:00"}],
      "folders": [{"id": 1, "name": "Invoices", "category_id": 2}],
      "categories": [{"id": 2, "label": "Finance"}],
      "members": [{"id": 7, "first_name": "Alex", "email": "alex@example.org"}]
    }
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any

import orjson

from ..core.types import Category, Document, Folder, Member
from ..utils.error_handling import ConfigurationError, ErrorCollector
from .memory import CategorySource, DocumentSource, FolderSource, MemberSource


@dataclass(slots=True)
class LoadedSources:
    documents: DocumentSource
    folders: FolderSource
    categories: CategorySource
    members: MemberSource


def _date(value: str | None) -> datetime | None:
    return datetime.fromisoformat(value) if value else None


def _document(raw: dict[str, Any]) -> Document:
    return Document(
        id=int(raw["id"]),
        name=str(raw["name"]),
        type=raw.get("type"),
        size=int(raw.get("size", 0)),
        created_at=_date(raw.get("created_at")),
        folder_id=raw.get("folder_id"),
        member_id=raw.get("member_id"),
        archived=bool(raw.get("archived", False)),
    )


def _folder(raw: dict[str, Any]) -> Folder:
    return Folder(
        id=int(raw["id"]),
        name=str(raw["name"]),
        created_at=_date(raw.get("created_at")),
        parent_id=raw.get("parent_id"),
        member_id=raw.get("member_id"),
        category_id=raw.get("category_id"),
        archived=bool(raw.get("archived", False)),
    )


def _category(raw: dict[str, Any]) -> Category:
    return Category(
        id=int(raw["id"]), label=str(raw["label"]), description=raw.get("description", "")
    )


def _member(raw: dict[str, Any]) -> Member:
    return Member(
        id=int(raw["id"]),
        first_name=str(raw["first_name"]),
        email=raw.get("email", ""),
        family_id=raw.get("family_id"),
        is_parent=bool(raw.get("is_parent", False)),
        is_admin=bool(raw.get("is_admin", False)),
    )


def parse_records(payload: dict[str, Any], error_collector: ErrorCollector | None = None) -> LoadedSources:
    """Build the four sources from an already decoded payload."""
    try:
        return LoadedSources(
            documents=DocumentSource(
                (_document(r) for r in payload.get("documents", [])), error_collector
            ),
            folders=FolderSource((_folder(r) for r in payload.get("folders", [])), error_collector),
            categories=CategorySource(
                (_category(r) for r in payload.get("categories", [])), error_collector
            ),
            members=MemberSource((_member(r) for r in payload.get("members", [])), error_collector),
        )
    except (KeyError, TypeError, ValueError) as e:
        raise ConfigurationError(f"Invalid record data: {e}", context={"error": repr(e)}) from e


def load_sources(path: str | Path, error_collector: ErrorCollector | None = None) -> LoadedSources:
    """
    Load the four in-memory sources from a JSON records file.

    Raises:
        ConfigurationError: If the file cannot be read or holds malformed records
    """
    file_path = Path(path)
    try:
        payload = orjson.loads(file_path.read_bytes())
    except (OSError, orjson.JSONDecodeError) as e:
        raise ConfigurationError(
            f"Cannot read records from {file_path}: {e}", context={"path": str(file_path)}
        ) from e

    if not isinstance(payload, dict):
        raise ConfigurationError(
            "Records file must hold a JSON object", context={"path": str(file_path)}
        )
    return parse_records(payload, error_collector)
