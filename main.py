#!/usr/bin/env python3
"""
CMS Import - content backend web application
============================================

Single-command run:  python main.py

Serves the imported posts/categories over /api/v1, accepts CSV uploads
at /api/v1/import and serves stored images under /uploads.  For batch
imports from the shell use cli.py (the cms-import script).

See config.py for all environment-variable tunables.
"""

from __future__ import annotations

from pathlib import Path

from flask import Flask, jsonify

import config
from db import init_db, get_session, BlogPost, Category
from api import api_bp
from api.assets import assets_bp


def create_app(
    db_url: str | None = None,
    *,
    uploads_dir: str | Path | None = None,
    assets_dir: str | Path | None = None,
) -> Flask:
    """Flask application factory."""

    app = Flask(__name__)
    app.secret_key = config.SECRET
    app.config["UPLOADS_DIR"] = Path(uploads_dir or config.UPLOADS_DIR)
    app.config["ASSETS_DIR"] = Path(assets_dir or config.ASSETS_DIR).resolve()

    # ── Initialise database ─────────────────────────────────────────
    db_url = db_url or config.DB_URL
    init_db(db_url)
    app.logger.info("Database: %s", db_url)

    # ── Register blueprints ─────────────────────────────────────────
    app.register_blueprint(api_bp)
    app.register_blueprint(assets_bp)

    @app.route("/health")
    def health():
        return jsonify({"ok": True})

    return app


def _print_stats():
    session = get_session()
    try:
        posts = session.query(BlogPost).count()
        cats = session.query(Category).count()
    finally:
        session.close()
    print(f"\n  Database has {posts} posts in {cats} categories.")


def main():
    print("=" * 56)
    print(f"  {config.APP_NAME}")
    print("=" * 56)

    app = create_app()
    _print_stats()

    print(f"\n  http://{config.HOST}:{config.PORT}")
    print(f"  Import: POST http://{config.HOST}:{config.PORT}/api/v1/import")
    print("=" * 56)

    app.run(host=config.HOST, port=config.PORT, debug=config.DEBUG)


if __name__ == "__main__":
    main()
