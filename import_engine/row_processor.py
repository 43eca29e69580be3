"""
import_engine.row_processor - Transform one CSV row into a RecordPayload.

Single-responsibility: given a dict-row, either return a payload ready
for RecordStore.create_record, or raise RowError (propagated from the
category resolver or the asset uploader).  Every other column is
best-effort with permissive defaults.  Title, excerpt and content are
copied untouched; the other columns are stripped before use.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Optional

from import_engine.errors import MalformedRowError
from import_engine.field_map import (
    COL_CATEGORY, COL_FEATURED_IMAGE, COL_PUBLISH_AT, COL_SLUG, COL_TITLE,
    TEXT_FIELDS,
)
from import_engine.slugs import generate_slug

if TYPE_CHECKING:
    from import_engine.asset_uploader import AssetUploader
    from import_engine.category_resolver import CategoryResolver
    from services.record_store import AssetHandle

logger = logging.getLogger(__name__)


@dataclass
class RecordPayload:
    title: str
    slug: str
    excerpt: str
    content: str
    publish_at: datetime
    category: Optional[int] = None
    featured_image: Optional["AssetHandle"] = None


def parse_publish_at(raw: str) -> datetime:
    """
    ISO-8601 → aware datetime (naive values are taken as UTC).
    Raises MalformedRowError when the string cannot be parsed.
    """
    text = raw.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        value = datetime.fromisoformat(text)
    except ValueError as exc:
        raise MalformedRowError(f"Unparseable publishAt {raw!r}") from exc
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def _raw(row: dict, col: str) -> str:
    return row.get(col) or ""


def _cell(row: dict, col: str) -> str:
    return _raw(row, col).strip()


class RowProcessor:

    def __init__(
        self,
        categories: "CategoryResolver",
        uploader: "AssetUploader",
        clock=None,
    ):
        self.categories = categories
        self.uploader = uploader
        self._now = clock or (lambda: datetime.now(timezone.utc))

    def process(self, row: dict) -> RecordPayload:
        title = _raw(row, COL_TITLE)

        payload = RecordPayload(
            title=title,
            slug=_cell(row, COL_SLUG) or generate_slug(title),
            excerpt="",
            content="",
            publish_at=self._publish_at(row, title),
        )
        for csv_col, attr in TEXT_FIELDS.items():
            setattr(payload, attr, _raw(row, csv_col))

        category = _cell(row, COL_CATEGORY)
        if category:
            payload.category = self.categories.resolve(category)

        image = _cell(row, COL_FEATURED_IMAGE)
        if image:
            payload.featured_image = self.uploader.upload_if_exists(image)

        return payload

    # ── Private helpers ────────────────────────────────────────────────

    def _publish_at(self, row: dict, title: str) -> datetime:
        raw = _cell(row, COL_PUBLISH_AT)
        if not raw:
            return self._now()
        try:
            return parse_publish_at(raw)
        except MalformedRowError as exc:
            logger.warning("%s for %r, using current time", exc, title)
            return self._now()
