#!/usr/bin/env python3
"""
CMS Import - command-line CSV import
====================================

    cms-import posts.csv [--uploads-dir data/uploads] [--db URL]

Brings up the database, imports every row, commits, tears down.
Exit code is 0 once the run completes, even if some rows failed,
unless --fail-on-error is given.  Setup/read failures exit 1.
"""

from __future__ import annotations

import argparse
import logging
import sys

import config
from db import init_db, get_session, dispose_db
from import_engine import import_file
from services.sql_record_store import SqlRecordStore

logger = logging.getLogger("cms_import")


class _MaxLevelFilter(logging.Filter):
    def __init__(self, max_level: int):
        super().__init__()
        self.max_level = max_level

    def filter(self, record: logging.LogRecord) -> bool:
        return record.levelno <= self.max_level


def setup_logging(verbose: bool = False) -> None:
    """INFO and below → stdout, WARNING and above → stderr."""
    root = logging.getLogger()
    root.handlers = []
    root.setLevel(logging.DEBUG if verbose else logging.INFO)

    fmt = logging.Formatter("%(message)s")

    out = logging.StreamHandler(sys.stdout)
    out.setLevel(logging.DEBUG)
    out.addFilter(_MaxLevelFilter(logging.INFO))
    out.setFormatter(fmt)

    err = logging.StreamHandler(sys.stderr)
    err.setLevel(logging.WARNING)
    err.setFormatter(fmt)

    root.addHandler(out)
    root.addHandler(err)

    # SQLAlchemy logs its own engine chatter at INFO when echo is on
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="cms-import",
        description="Import blog posts from a CSV file",
    )
    parser.add_argument("csv_path", help="Path to the CSV file")
    parser.add_argument(
        "--uploads-dir",
        default=str(config.UPLOADS_DIR),
        help=f"Directory featuredImage names are resolved in (default: {config.UPLOADS_DIR})",
    )
    parser.add_argument(
        "--db",
        default=config.DB_URL,
        help="SQLAlchemy database URL (default: config.DB_URL)",
    )
    parser.add_argument(
        "--encoding",
        default="utf-8",
        help="File encoding (default: utf-8)",
    )
    parser.add_argument(
        "--delimiter",
        default=",",
        help="CSV delimiter character (default: ,)",
    )
    parser.add_argument(
        "--fail-on-error",
        action="store_true",
        help="Exit 1 if any row failed to import",
    )
    parser.add_argument("-v", "--verbose", action="store_true")
    return parser


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    try:
        args = parser.parse_args(argv)
    except SystemExit as exc:
        # --help exits 0; anything else (e.g. missing csv_path) is a setup failure
        return 0 if exc.code == 0 else 1

    setup_logging(args.verbose)

    try:
        init_db(args.db)
    except Exception as exc:
        logger.error("CSV import failed: could not open database: %s", exc)
        return 1

    session = get_session()
    try:
        store = SqlRecordStore(session)
        report = import_file(
            args.csv_path, store,
            uploads_dir=args.uploads_dir,
            encoding=args.encoding,
            delimiter=args.delimiter,
        )
        session.commit()
    except Exception as exc:
        session.rollback()
        logger.error("CSV import failed: %s", exc)
        return 1
    finally:
        session.close()
        dispose_db()

    logger.info("CSV import completed successfully")
    logger.info("  %d imported, %d failed / %d rows",
                report.imported, report.skipped, report.total_rows)
    if report.errors:
        logger.warning("  Failed rows:")
        for err in report.errors:
            logger.warning("    Row %s (%s): %s", err["row"], err["title"], err["reason"])

    if args.fail_on_error and report.errors:
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
