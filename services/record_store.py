"""
services.record_store - Abstract interface the import engine writes through.

The engine never touches ORM sessions directly; it receives a
RecordStore and calls these operations one at a time.
"""

from __future__ import annotations

import abc
from contextlib import contextmanager
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator, Optional

if TYPE_CHECKING:
    from db.models import BlogPost, Category
    from import_engine.file_meta import FileMetadata
    from import_engine.row_processor import RecordPayload


@dataclass(frozen=True)
class AssetHandle:
    """Opaque reference to a stored upload."""
    id: int
    name: str
    url: str
    mime: str = ""
    size: int = 0


class RecordStore(abc.ABC):

    @abc.abstractmethod
    def find_category_by_name(self, name: str) -> Optional["Category"]:
        """Exact-match lookup.  None when absent."""

    @abc.abstractmethod
    def create_category(self, name: str, slug: str) -> "Category":
        """Raises StoreWriteError on failure."""

    @abc.abstractmethod
    def create_record(self, payload: "RecordPayload") -> "BlogPost":
        """Raises StoreWriteError on failure."""

    @abc.abstractmethod
    def upload_asset(
        self,
        data: bytes,
        metadata: "FileMetadata",
        file_info: dict,
    ) -> list[AssetHandle]:
        """Store one file.  Raises UploadError if it is rejected."""

    @contextmanager
    def row_scope(self) -> Iterator[None]:
        """Unit of work for one CSV row.  Default: no isolation."""
        yield
