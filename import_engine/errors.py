"""
import_engine.errors - Exception taxonomy for the import run.

A missing asset file is not listed here: it surfaces as the builtin
FileNotFoundError and the uploader turns it into "no asset".
"""


class ImportEngineError(Exception):
    """Base class for every error raised by the import engine or store."""


class RowError(ImportEngineError):
    """Raised when a row cannot be imported."""


class MalformedRowError(RowError):
    """A column value could not be parsed (e.g. publishAt)."""


class UploadError(RowError):
    """The record store refused an asset upload."""


class StoreWriteError(RowError):
    """Creating a record or category in the store failed."""
