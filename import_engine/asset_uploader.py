"""
import_engine.asset_uploader - Push a file from the uploads dir into the store.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Optional

import config
from import_engine.file_meta import read_file_metadata, resolve_upload_path

if TYPE_CHECKING:
    from services.record_store import AssetHandle, RecordStore

logger = logging.getLogger(__name__)


class AssetUploader:

    def __init__(self, store: "RecordStore", uploads_dir: str | Path | None = None):
        self.store = store
        self.uploads_dir = Path(uploads_dir or config.UPLOADS_DIR)

    def upload_if_exists(self, file_name: str) -> Optional["AssetHandle"]:
        """
        Upload uploads_dir/file_name and return its handle, or None when
        the file is not on disk.  UploadError from the store propagates.
        """
        if not resolve_upload_path(file_name, self.uploads_dir).is_file():
            logger.info("Image %s not found in %s, skipping", file_name, self.uploads_dir)
            return None

        meta = read_file_metadata(file_name, self.uploads_dir)
        data = meta.path.read_bytes()
        handles = self.store.upload_asset(data, meta, self.file_info(file_name))
        return handles[0] if handles else None

    @staticmethod
    def file_info(name: str) -> dict:
        return {
            "name": name,
            "caption": name,
            "alternative_text": f"An image uploaded to {config.APP_NAME} called {name}",
        }
