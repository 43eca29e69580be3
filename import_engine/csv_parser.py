"""
import_engine.csv_parser - Low-level CSV reading and cleaning.

Responsibilities:
  • BOM removal (UTF-8 / UTF-8-SIG)
  • Header whitespace stripping
  • Loading every row into memory as a list of dicts
"""

from __future__ import annotations

import csv
import io
import sys
from typing import Optional

# No per-field cap (default is 128 KiB); sys.maxsize overflows a C long on Windows
csv.field_size_limit(min(sys.maxsize, 2**31 - 1))


def prepare_reader(
    raw: str | bytes,
    *,
    encoding: str = "utf-8",
    delimiter: str = ",",
) -> Optional[csv.DictReader]:
    """
    Accept raw file content (bytes or str), clean it,
    and return a DictReader.  Returns None if content is empty.
    """
    text = _decode(raw, encoding)
    if not text or not text.strip():
        return None

    reader = csv.DictReader(io.StringIO(text), delimiter=delimiter)
    if reader.fieldnames is None:
        return None

    # Strip whitespace from every header
    reader.fieldnames = [h.strip() for h in reader.fieldnames]
    return reader


def read_rows(
    raw: str | bytes,
    *,
    encoding: str = "utf-8",
    delimiter: str = ",",
) -> Optional[list[dict]]:
    """Parse the whole source up front.  None means no header / empty."""
    reader = prepare_reader(raw, encoding=encoding, delimiter=delimiter)
    if reader is None:
        return None
    return list(reader)


def _decode(raw: str | bytes, encoding: str) -> str:
    if isinstance(raw, bytes):
        # Strip UTF-8 BOM
        if raw.startswith(b"\xef\xbb\xbf"):
            raw = raw[3:]
        return raw.decode(encoding, errors="replace")
    if raw.startswith("\ufeff"):
        return raw[1:]
    return raw
