"""
import_engine.report - Structured result of a CSV import run.
"""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass
class ImportReport:
    total_rows: int = 0
    imported: int = 0
    skipped: int = 0
    errors: list[dict] = field(default_factory=list)    # [{row, title, reason}]
    created: list[dict] = field(default_factory=list)   # [{row, id, title}]

    def add_created(self, row: int, record_id, title: str):
        self.created.append({"row": row, "id": record_id, "title": title})
        self.imported += 1

    def add_error(self, row: int, reason: str, title: str = ""):
        self.errors.append({"row": row, "title": title, "reason": reason})
        self.skipped += 1

    @property
    def ok(self) -> bool:
        return not self.errors

    def to_dict(self) -> dict:
        return {
            "total_rows": self.total_rows,
            "imported": self.imported,
            "skipped": self.skipped,
            "errors": self.errors,
            "created": self.created,
        }
