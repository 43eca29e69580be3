"""
services.asset_storage - Write accepted uploads under config.ASSETS_DIR.

Files are content-addressed: <sha256[:2]>/<sha256><ext>, so importing
the same image twice reuses one file on disk.
"""

from __future__ import annotations

import hashlib
from pathlib import Path


def safe(s: str) -> str:
    """Make a string safe for use in filenames by replacing spaces and invalid characters."""
    return "".join(c if c.isalnum() or c in "._- " else "_" for c in s).replace(" ", "_")


def content_hash(data: bytes) -> str:
    return hashlib.sha256(data).hexdigest()


def storage_relpath(sha256: str, original_name: str) -> Path:
    """Return a deterministic path for an asset, relative to the assets dir."""
    ext = Path(safe(original_name)).suffix.lower()
    return Path(sha256[:2]) / f"{sha256}{ext}"


def save_asset(
    assets_dir: Path,
    data: bytes,
    original_name: str,
    sha256: str | None = None,
) -> tuple[Path, bool]:
    """
    Write data under assets_dir (once per content hash).
    Returns (relative path, whether the file was newly written).
    """
    rel = storage_relpath(sha256 or content_hash(data), original_name)
    target = Path(assets_dir) / rel
    if target.exists():
        return rel, False
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_bytes(data)
    return rel, True
