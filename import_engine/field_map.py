"""
import_engine.field_map - CSV column names recognised by the importer.

Any other column is ignored.
"""

COL_TITLE          = "title"
COL_SLUG           = "slug"
COL_EXCERPT        = "excerpt"
COL_CONTENT        = "content"
COL_PUBLISH_AT     = "publishAt"
COL_CATEGORY       = "category"
COL_FEATURED_IMAGE = "featuredImage"

# Copied verbatim onto the payload: CSV column → payload attribute
TEXT_FIELDS: dict[str, str] = {
    COL_TITLE:   "title",
    COL_EXCERPT: "excerpt",
    COL_CONTENT: "content",
}

KNOWN_COLUMNS = frozenset({
    COL_TITLE, COL_SLUG, COL_EXCERPT, COL_CONTENT,
    COL_PUBLISH_AT, COL_CATEGORY, COL_FEATURED_IMAGE,
})
