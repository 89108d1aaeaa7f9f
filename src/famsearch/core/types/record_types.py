"""
Record types returned by the source adapters.

Each adapter is backed by an external data store holding one kind of household
record. The engine only reads these records; it never creates or mutates them.

Key Types:
    Document: A stored file (the only kind the ranking pipeline reorders)
    Folder: A container grouping documents under a category
    Category: A classification label for folders
    Member: A household member account
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True, slots=True)
class Document:
    """
    A stored document.

    Attributes:
        id: Store identifier
        name: File name as shown to the user
        type: File type label (for example ``"pdf"``), may be missing
        size: Size in bytes
        created_at: Creation timestamp, may be missing
        folder_id: Owning folder
        member_id: Member who uploaded the document
        archived: Whether the document was archived
    """

    id: int
    name: str
    type: str | None = None
    size: int = 0
    created_at: datetime | None = None
    folder_id: int | None = None
    member_id: int | None = None
    archived: bool = False


@dataclass(frozen=True, slots=True)
class Folder:
    """A folder grouping documents."""

    id: int
    name: str
    created_at: datetime | None = None
    parent_id: int | None = None
    member_id: int | None = None
    category_id: int | None = None
    archived: bool = False


@dataclass(frozen=True, slots=True)
class Category:
    id: int
    label: str
    description: str = ""


@dataclass(frozen=True, slots=True)
class Member:
    id: int
    first_name: str
    email: str = ""
    family_id: int | None = None
    is_parent: bool = False
    is_admin: bool = False
