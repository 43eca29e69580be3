"""
api.routes_import - /api/v1/import endpoint.

Accepts CSV via multipart file upload or raw request body.
"""

import csv

from flask import current_app, request, jsonify

from api import api_bp
from db import get_session
from import_engine import run_import
from services.sql_record_store import SqlRecordStore


@api_bp.route("/import", methods=["POST"])
def api_import_csv():
    """
    POST /api/v1/import?delimiter=,

    Multipart: field name 'csv_file'
    Or: raw CSV as request body (Content-Type: text/csv).
    """
    delimiter = request.args.get("delimiter", ",")[:1] or ","

    if request.content_type and "multipart" in request.content_type:
        f = request.files.get("csv_file")
        if not f:
            return jsonify({"error": "no csv_file in upload"}), 400
        content = f.read()
    else:
        content = request.get_data()

    if not content:
        return jsonify({"error": "empty body"}), 400

    session = get_session()
    try:
        store = SqlRecordStore(session,
                               assets_dir=current_app.config["ASSETS_DIR"])
        report = run_import(content, store,
                            uploads_dir=current_app.config["UPLOADS_DIR"],
                            delimiter=delimiter)
        return jsonify(report.to_dict())
    except csv.Error as exc:
        session.rollback()
        return jsonify({"error": f"malformed CSV: {exc}"}), 400
    finally:
        session.close()
