"""
import_engine.file_meta - On-disk metadata for files in the uploads dir.
"""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass
from pathlib import Path

from import_engine.errors import UploadError


@dataclass(frozen=True)
class FileMetadata:
    path: Path          # absolute
    name: str           # original file name as given in the CSV
    size: int
    mime: str           # "" when the extension is unknown


def resolve_upload_path(file_name: str, uploads_dir: str | Path) -> Path:
    """
    Join file_name onto uploads_dir and resolve it.
    Raises UploadError if the result escapes uploads_dir.
    """
    base = Path(uploads_dir).resolve()
    path = (base / file_name).resolve()
    if path != base and base not in path.parents:
        raise UploadError(f"File {file_name!r} is outside the uploads directory")
    return path


def read_file_metadata(file_name: str, uploads_dir: str | Path) -> FileMetadata:
    """Return path/size/MIME for file_name.  Raises FileNotFoundError if absent."""
    path = resolve_upload_path(file_name, uploads_dir)
    if not path.is_file():
        raise FileNotFoundError(f"File not found: {path}")

    mime, _ = mimetypes.guess_type(path.name)
    return FileMetadata(
        path=path,
        name=file_name,
        size=path.stat().st_size,
        mime=mime or "",
    )
