"""
Search sources for famsearch.

- base: the SourceAdapter contract (soft-failure on any internal fault)
- filters: per-kind FilterSet predicates
- memory: in-memory adapters for documents, folders, categories and members
- loader: JSON records file loader
"""

from .base import SourceAdapter
from .filters import category_passes, document_passes, folder_passes, member_passes
from .loader import LoadedSources, load_sources, parse_records
from .memory import CategorySource, DocumentSource, FolderSource, InMemorySource, MemberSource

__all__ = [
    "SourceAdapter",
    "InMemorySource",
    "DocumentSource",
    "FolderSource",
    "CategorySource",
    "MemberSource",
    "LoadedSources",
    "load_sources",
    "parse_records",
    "document_passes",
    "folder_passes",
    "category_passes",
    "member_passes",
]
