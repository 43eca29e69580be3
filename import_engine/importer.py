"""
import_engine.importer - Top-level orchestrator.

Coordinates csv_parser → row_processor → RecordStore.create_record and
produces a structured ImportReport.  Rows are handled strictly in file
order, one store call at a time; a failing row is recorded and the run
moves on to the next one.  Only a failure while reading/parsing the CSV
itself escapes this module.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from import_engine.asset_uploader import AssetUploader
from import_engine.category_resolver import CategoryResolver
from import_engine.csv_parser import read_rows
from import_engine.errors import RowError
from import_engine.field_map import COL_TITLE
from import_engine.report import ImportReport
from import_engine.row_processor import RowProcessor

if TYPE_CHECKING:
    from services.record_store import RecordStore

logger = logging.getLogger(__name__)


def run_import(
    file_content: str | bytes,
    store: "RecordStore",
    *,
    uploads_dir: str | Path | None = None,
    encoding: str = "utf-8",
    delimiter: str = ",",
) -> ImportReport:
    """
    Import a CSV blob of blog posts through store.

    Parameters
    ----------
    file_content : raw CSV (bytes or str)
    store        : RecordStore every category/asset/post is written to
    uploads_dir  : where featuredImage file names are looked up

    Returns
    -------
    ImportReport with per-row created/error details
    """
    report = ImportReport()
    rows = read_rows(file_content, encoding=encoding, delimiter=delimiter)
    if rows is None:
        report.add_error(0, "CSV has no header row or is empty")
        logger.error("CSV has no header row or is empty")
        return report

    processor = RowProcessor(
        CategoryResolver(store),
        AssetUploader(store, uploads_dir),
    )

    for row_idx, row in enumerate(rows, start=2):   # row 1 = header
        report.total_rows += 1
        title = (row.get(COL_TITLE) or "").strip()
        try:
            with store.row_scope():
                payload = processor.process(row)
                record = store.create_record(payload)
        except RowError as exc:
            report.add_error(row_idx, str(exc), title)
            logger.error("Error creating blog post %s: %s", title, exc)
        except Exception as exc:
            report.add_error(row_idx, f"Unexpected: {exc}", title)
            logger.exception("Error creating blog post %s", title)
        else:
            report.add_created(row_idx, getattr(record, "id", None), title)
            logger.info("Created blog post: %s", title)

    return report


def import_file(
    csv_path: str | Path,
    store: "RecordStore",
    *,
    uploads_dir: str | Path | None = None,
    encoding: str = "utf-8",
    delimiter: str = ",",
) -> ImportReport:
    """Read csv_path and hand it to run_import.  OSError propagates."""
    content = Path(csv_path).read_bytes()
    return run_import(content, store, uploads_dir=uploads_dir,
                      encoding=encoding, delimiter=delimiter)
