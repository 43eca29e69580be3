"""
import_engine.category_resolver - Category name → id (find or create).

Not safe against two concurrent imports creating the same unseen name;
the unique constraint on categories.name turns the loser's insert into a
StoreWriteError for that row.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from import_engine.slugs import generate_slug

if TYPE_CHECKING:
    from services.record_store import RecordStore

logger = logging.getLogger(__name__)


class CategoryResolver:

    def __init__(self, store: "RecordStore"):
        self.store = store

    def resolve(self, name: str) -> int:
        category = self.store.find_category_by_name(name)
        if category is None:
            category = self.store.create_category(name, generate_slug(name))
            logger.info("Created category: %s", name)
        return category.id
