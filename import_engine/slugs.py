"""
import_engine.slugs - Title → URL-safe slug.
"""

from __future__ import annotations

import re

_NON_ALNUM = re.compile(r"[^a-z0-9]+")


def generate_slug(title: str | None) -> str:
    """
    Lowercase, collapse every non [a-z0-9] run into one '-', strip
    leading/trailing '-'.  Never fails; empty input gives "".
    """
    if not title:
        return ""
    return _NON_ALNUM.sub("-", title.lower()).strip("-")
