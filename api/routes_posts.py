"""
api.routes_posts - Read-only listings of imported posts and categories.
"""

from flask import request, jsonify
from sqlalchemy import func, select

from api import api_bp
from db import get_session, BlogPost, Category
import config


@api_bp.route("/posts")
def list_posts():
    """
    GET /api/v1/posts?category=<slug>&limit=100&offset=0

    Newest publishAt first.
    """
    category = request.args.get("category", "").strip()
    try:
        limit  = min(int(request.args.get("limit", config.API_DEFAULT_LIMIT)),
                     config.API_MAX_LIMIT)
        offset = int(request.args.get("offset", 0))
    except ValueError:
        return jsonify({"error": "limit/offset must be integers"}), 400

    session = get_session()
    try:
        stmt = select(BlogPost)
        count_stmt = select(func.count(BlogPost.id)).select_from(BlogPost)
        if category:
            stmt = stmt.join(Category).where(Category.slug == category)
            count_stmt = count_stmt.join(Category).where(Category.slug == category)

        total = session.execute(count_stmt).scalar_one()
        posts = session.execute(
            stmt.order_by(BlogPost.publish_at.desc(), BlogPost.id)
                .limit(limit).offset(offset)
        ).unique().scalars().all()

        return jsonify({
            "total": total,
            "offset": offset,
            "limit": limit,
            "posts": [p.to_dict() for p in posts],
        })
    finally:
        session.close()


@api_bp.route("/posts/<int:post_id>")
def get_post(post_id: int):
    """GET /api/v1/posts/{id}"""
    session = get_session()
    try:
        post = session.get(BlogPost, post_id)
        if not post:
            return jsonify({"error": "not found"}), 404
        return jsonify(post.to_dict())
    finally:
        session.close()


@api_bp.route("/categories")
def list_categories():
    """GET /api/v1/categories (alphabetical)"""
    session = get_session()
    try:
        cats = session.execute(
            select(Category).order_by(Category.name)
        ).scalars().all()
        return jsonify({"categories": [c.to_dict() for c in cats]})
    finally:
        session.close()
