"""
api.errors - JSON error handlers for the API blueprint.

Blueprint handlers only fire for errors raised inside /api/v1 views;
routing errors (unknown URL, wrong method) keep Flask's app defaults.
Row-level import failures never reach here: they land in ImportReport.
"""

from flask import jsonify

from api import api_bp


@api_bp.errorhandler(404)
def api_not_found(_e):
    return jsonify({"error": "not found"}), 404


@api_bp.errorhandler(400)
def api_bad_request(_e):
    return jsonify({"error": "bad request"}), 400


@api_bp.errorhandler(500)
def api_server_error(_e):
    return jsonify({"error": "internal server error"}), 500
