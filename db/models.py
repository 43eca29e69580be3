"""
db.models - SQLAlchemy ORM declarations.

Tables
------
categories  - one row per unique category name; posts reference it.
assets      - binary uploads (images).  The file itself lives under
              config.ASSETS_DIR; the row keeps metadata + storage path.
blog_posts  - the imported content records.
"""

from __future__ import annotations

from datetime import datetime, timezone

from sqlalchemy import (
    Column, String, Integer, DateTime, Text, ForeignKey,
)
from sqlalchemy.orm import DeclarativeBase, relationship


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


class Base(DeclarativeBase):
    pass


class Category(Base):
    __tablename__ = "categories"

    id   = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), unique=True, nullable=False, index=True)
    slug = Column(String(200), nullable=False, default="")

    created_at = Column(DateTime(timezone=True), default=_utcnow)

    posts = relationship("BlogPost", back_populates="category")

    def to_dict(self) -> dict:
        return {"id": self.id, "name": self.name, "slug": self.slug or ""}


class Asset(Base):
    __tablename__ = "assets"

    id               = Column(Integer, primary_key=True, autoincrement=True)
    name             = Column(String(300), nullable=False)
    original_name    = Column(String(300), nullable=False)
    caption          = Column(Text, default="")
    alternative_text = Column(Text, default="")
    mime             = Column(String(100), default="")
    size             = Column(Integer, nullable=False, default=0)
    sha256           = Column(String(64), nullable=False, index=True)
    storage_path     = Column(String(500), nullable=False)         # relative to ASSETS_DIR

    created_at = Column(DateTime(timezone=True), default=_utcnow)

    @property
    def url(self) -> str:
        return f"/uploads/{self.storage_path}"

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "caption": self.caption or "",
            "alternativeText": self.alternative_text or "",
            "mime": self.mime or "",
            "size": self.size,
            "url": self.url,
        }


class BlogPost(Base):
    __tablename__ = "blog_posts"

    id      = Column(Integer, primary_key=True, autoincrement=True)
    title   = Column(String(500), nullable=False, default="")
    slug    = Column(String(500), nullable=False, default="", index=True)
    excerpt = Column(Text, default="")
    content = Column(Text, default="")

    publish_at = Column(DateTime(timezone=True), nullable=False, default=_utcnow)

    # ── Relations ──────────────────────────────────────────────────────
    category_id = Column(Integer,
                         ForeignKey("categories.id", ondelete="SET NULL"),
                         nullable=True, index=True)
    featured_image_id = Column(Integer,
                               ForeignKey("assets.id", ondelete="SET NULL"),
                               nullable=True)

    created_at = Column(DateTime(timezone=True), default=_utcnow)

    category = relationship("Category", back_populates="posts", lazy="joined")
    featured_image = relationship("Asset", lazy="joined")

    # ── Serialisation ──────────────────────────────────────────────────
    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "title": self.title or "",
            "slug": self.slug or "",
            "excerpt": self.excerpt or "",
            "content": self.content or "",
            "publishAt": self.publish_at.isoformat() if self.publish_at else "",
            "category": self.category.to_dict() if self.category else None,
            "featuredImage": self.featured_image.to_dict() if self.featured_image else None,
            "created_at": self.created_at.isoformat() if self.created_at else "",
        }
