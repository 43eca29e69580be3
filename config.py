"""
CMS Import - Centralised configuration.

All tunables live here.  Every other module imports from config
instead of reading os.environ directly.
"""

from __future__ import annotations
import os
from pathlib import Path


# ── Identity ───────────────────────────────────────────────────────────
APP_NAME = os.environ.get("CMSIMPORT_APP_NAME", "CMS Import")

# ── Paths ──────────────────────────────────────────────────────────────
BASE_DIR    = Path(__file__).resolve().parent
# Source images referenced by the CSV "featuredImage" column
UPLOADS_DIR = Path(os.environ.get("CMSIMPORT_UPLOADS_DIR", Path("data") / "uploads"))
# Where accepted uploads are stored (content-addressed)
ASSETS_DIR  = Path(os.environ.get("CMSIMPORT_ASSETS_DIR", BASE_DIR / "assets")).resolve()

# ── Uploads ────────────────────────────────────────────────────────────
MAX_UPLOAD_BYTES = int(os.environ.get("CMSIMPORT_MAX_UPLOAD_BYTES", str(10 * 1024 * 1024)))
ALLOWED_UPLOAD_MIME_PREFIXES = tuple(
    p.strip()
    for p in os.environ.get("CMSIMPORT_ALLOWED_MIME", "image/").split(",")
    if p.strip()
)

# ── Database ───────────────────────────────────────────────────────────
DB_URL = os.environ.get("CMSIMPORT_DB", f"sqlite:///{BASE_DIR / 'cms.sqlite'}")

# ── Server ─────────────────────────────────────────────────────────────
HOST   = os.environ.get("CMSIMPORT_HOST", "0.0.0.0")
PORT   = int(os.environ.get("CMSIMPORT_PORT", "5000"))
DEBUG  = os.environ.get("CMSIMPORT_DEBUG", "0") == "1"
SECRET = os.environ.get("CMSIMPORT_SECRET", "cmsimport-dev-key-change-in-prod")

# ── Pagination ─────────────────────────────────────────────────────────
API_MAX_LIMIT     = 1000
API_DEFAULT_LIMIT = 100
