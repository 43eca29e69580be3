"""
services.sql_record_store - RecordStore backed by a SQLAlchemy session.

Session lifetime is the caller's responsibility (open before, close
after).  Each CSV row runs inside row_scope(), which commits on success
and rolls back on failure, so a failed row never leaves a half-created
category or asset row behind.  Image files first written during a
rolled-back row are deleted from ASSETS_DIR as well.
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

import config
from db.models import Asset, BlogPost, Category
from import_engine.errors import StoreWriteError, UploadError
from import_engine.file_meta import FileMetadata
from import_engine.row_processor import RecordPayload
from services.asset_storage import content_hash, save_asset
from services.record_store import AssetHandle, RecordStore

logger = logging.getLogger(__name__)


def _handle(asset: Asset) -> AssetHandle:
    return AssetHandle(id=asset.id, name=asset.name, url=asset.url,
                       mime=asset.mime or "", size=asset.size)


class SqlRecordStore(RecordStore):

    def __init__(
        self,
        session: Session,
        *,
        assets_dir: Path | None = None,
        max_upload_bytes: int | None = None,
        allowed_mime_prefixes: tuple[str, ...] | None = None,
    ):
        self.session = session
        self.assets_dir = Path(assets_dir or config.ASSETS_DIR)
        self.max_upload_bytes = (config.MAX_UPLOAD_BYTES
                                 if max_upload_bytes is None else max_upload_bytes)
        self.allowed_mime_prefixes = (config.ALLOWED_UPLOAD_MIME_PREFIXES
                                      if allowed_mime_prefixes is None
                                      else allowed_mime_prefixes)
        self._row_files: list[Path] = []   # files written in the open row_scope

    # ── Transactions ───────────────────────────────────────────────────

    @contextmanager
    def row_scope(self) -> Iterator[None]:
        self._row_files = []
        try:
            yield
            self.session.commit()
        except SQLAlchemyError as exc:
            self._rollback()
            raise StoreWriteError(f"Commit failed: {exc}") from exc
        except Exception:
            self._rollback()
            raise
        finally:
            self._row_files = []

    def _rollback(self) -> None:
        self.session.rollback()
        for path in self._row_files:
            try:
                path.unlink(missing_ok=True)
            except OSError as exc:
                logger.warning("Could not remove orphaned asset %s: %s", path, exc)

    # ── Categories ─────────────────────────────────────────────────────

    def find_category_by_name(self, name: str) -> Optional[Category]:
        return self.session.execute(
            select(Category).where(Category.name == name)
        ).scalar_one_or_none()

    def create_category(self, name: str, slug: str) -> Category:
        category = Category(name=name, slug=slug)
        try:
            self.session.add(category)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise StoreWriteError(f"Could not create category {name!r}: {exc}") from exc
        logger.debug("Created category %r (id=%s)", name, category.id)
        return category

    # ── Records ────────────────────────────────────────────────────────

    def create_record(self, payload: RecordPayload) -> BlogPost:
        post = BlogPost(
            title=payload.title,
            slug=payload.slug,
            excerpt=payload.excerpt,
            content=payload.content,
            publish_at=payload.publish_at,
            category_id=payload.category,
            featured_image_id=payload.featured_image.id if payload.featured_image else None,
        )
        try:
            self.session.add(post)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise StoreWriteError(f"Could not create blog post: {exc}") from exc
        return post

    # ── Assets ─────────────────────────────────────────────────────────

    def upload_asset(
        self,
        data: bytes,
        metadata: FileMetadata,
        file_info: dict,
    ) -> list[AssetHandle]:
        if len(data) > self.max_upload_bytes:
            raise UploadError(
                f"{metadata.name}: {len(data)} bytes exceeds limit of "
                f"{self.max_upload_bytes}"
            )
        if not metadata.mime.startswith(self.allowed_mime_prefixes):
            raise UploadError(
                f"{metadata.name}: unsupported type {metadata.mime or 'unknown'!r}"
            )

        sha256 = content_hash(data)
        existing = self.session.execute(
            select(Asset).where(Asset.sha256 == sha256)
        ).scalars().first()
        if existing:
            return [_handle(existing)]

        try:
            rel, created = save_asset(self.assets_dir, data, metadata.name, sha256)
        except OSError as exc:
            raise UploadError(f"{metadata.name}: could not store file: {exc}") from exc
        if created:
            self._row_files.append(self.assets_dir / rel)

        asset = Asset(
            name=file_info.get("name") or metadata.name,
            original_name=metadata.name,
            caption=file_info.get("caption", ""),
            alternative_text=file_info.get("alternative_text", ""),
            mime=metadata.mime,
            size=len(data),
            sha256=sha256,
            storage_path=rel.as_posix(),
        )
        try:
            self.session.add(asset)
            self.session.flush()
        except SQLAlchemyError as exc:
            raise UploadError(f"{metadata.name}: {exc}") from exc
        return [_handle(asset)]
