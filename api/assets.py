"""
api.assets - Serve stored upload files.

Only files under config.ASSETS_DIR are served.  Path traversal (../)
is blocked by resolving to an absolute path and checking ancestry.
"""

from flask import Blueprint, abort, current_app, send_from_directory

assets_bp = Blueprint("assets", __name__)


@assets_bp.route("/uploads/<path:filename>")
def serve_asset(filename: str):
    assets_dir = current_app.config["ASSETS_DIR"].resolve()
    safe_path = (assets_dir / filename).resolve()

    # Must stay inside ASSETS_DIR
    if assets_dir not in safe_path.parents:
        abort(403)
    if not safe_path.is_file():
        abort(404)

    return send_from_directory(assets_dir, safe_path.relative_to(assets_dir).as_posix())
