"""Tests for famsearch.sources.filters module."""

from __future__ import annotations

from datetime import datetime

import pytest

from famsearch.core.types import Category, Document, FilterSet, Folder, Member
from famsearch.sources.filters import (
    category_passes,
    document_passes,
    folder_passes,
    member_passes,
)

DOC = Document(1, "invoice.pdf", "pdf", 2_000, datetime(2024, 3, 1), folder_id=1, member_id=7)


@pytest.mark.parametrize(
    "filters, expected",
    [
        (FilterSet(), True),
        (FilterSet(document_types=["pdf", "txt"]), True),
        (FilterSet(document_types=["jpg"]), False),
        (FilterSet(min_size=2_000, max_size=2_000), True),
        (FilterSet(min_size=2_001), False),
        (FilterSet(max_size=1_999), False),
        (FilterSet(member_ids=[7]), True),
        (FilterSet(member_ids=[8]), False),
        (FilterSet(date_from=datetime(2024, 3, 1), date_to=datetime(2024, 3, 1)), True),
        (FilterSet(date_from=datetime(2024, 3, 2)), False),
        (FilterSet(date_to=datetime(2024, 2, 28)), False),
        # categories do not concern documents
        (FilterSet(category_ids=[99]), True),
    ],
)
def test_document_passes(filters, expected):
    assert document_passes(DOC, filters) is expected


def test_archived_records_need_opt_in():
    archived_doc = Document(1, "old.pdf", archived=True)
    archived_folder = Folder(1, "Old", archived=True)

    assert not document_passes(archived_doc, FilterSet())
    assert not folder_passes(archived_folder, FilterSet())
    assert document_passes(archived_doc, FilterSet(include_archived=True))
    assert folder_passes(archived_folder, FilterSet(include_archived=True))


def test_undated_records_pass_date_bounds():
    bounds = FilterSet(date_from=datetime(2024, 1, 1), date_to=datetime(2024, 12, 31))
    assert document_passes(Document(1, "x"), bounds)
    assert folder_passes(Folder(1, "x"), bounds)


def test_folder_category_and_member_lists():
    folder = Folder(1, "Invoices", category_id=2, member_id=7)
    assert folder_passes(folder, FilterSet(category_ids=[2]))
    assert not folder_passes(folder, FilterSet(category_ids=[3]))
    assert not folder_passes(folder, FilterSet(member_ids=[8]))
    assert not folder_passes(Folder(2, "Loose"), FilterSet(category_ids=[2]))


def test_category_and_member_predicates():
    assert category_passes(Category(2, "Finance"), FilterSet(category_ids=[2]))
    assert not category_passes(Category(3, "Photos"), FilterSet(category_ids=[2]))
    assert category_passes(Category(3, "Photos"), FilterSet(document_types=["pdf"]))

    assert member_passes(Member(7, "Alex"), FilterSet(member_ids=[7]))
    assert not member_passes(Member(8, "Sam"), FilterSet(member_ids=[7]))
