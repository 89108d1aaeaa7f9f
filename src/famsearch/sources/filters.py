"""
Per-kind filter predicates.

Each predicate answers whether one record passes a FilterSet. Constraints
that do not concern a record kind are ignored for that kind. Allow-lists and
bounds left unset never exclude anything.
"""

from __future__ import annotations

from datetime import datetime

from ..core.types import Category, Document, FilterSet, Folder, Member


def _within_dates(created_at: datetime | None, filters: FilterSet) -> bool:
    # records without a creation date pass date bounds
    if created_at is None:
        return True
    if filters.date_from is not None and created_at < filters.date_from:
        return False
    if filters.date_to is not None and created_at > filters.date_to:
        return False
    return True


def _allowed(value: object, allow_list: tuple[object, ...] | None) -> bool:
    return allow_list is None or value in allow_list


def document_passes(document: Document, filters: FilterSet) -> bool:
    if document.archived and not filters.include_archived:
        return False
    if not _allowed(document.type, filters.document_types):
        return False
    if filters.min_size is not None and document.size < filters.min_size:
        return False
    if filters.max_size is not None and document.size > filters.max_size:
        return False
    if not _allowed(document.member_id, filters.member_ids):
        return False
    return _within_dates(document.created_at, filters)


def folder_passes(folder: Folder, filters: FilterSet) -> bool:
    if folder.archived and not filters.include_archived:
        return False
    if not _allowed(folder.category_id, filters.category_ids):
        return False
    if not _allowed(folder.member_id, filters.member_ids):
        return False
    return _within_dates(folder.created_at, filters)


def category_passes(category: Category, filters: FilterSet) -> bool:
    return _allowed(category.id, filters.category_ids)


def member_passes(member: Member, filters: FilterSet) -> bool:
    return _allowed(member.id, filters.member_ids)
